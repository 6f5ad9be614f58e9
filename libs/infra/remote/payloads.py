"""Wire payload models for the remote alert service."""

from pydantic import BaseModel, ConfigDict, Field


class FileDataRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_id: int = Field(alias="fileId")
    sas_url: str = Field(alias="sasUrl")
    alert: str
    timestamp: str


class FileDataPage(BaseModel):
    data: list[FileDataRow]


class CounterRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    row_key: str = Field(alias="rowKey")
    count: int


class CounterPage(BaseModel):
    data: list[CounterRow]

"""Feed gateway entrypoint."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from services.feed_gateway.dependencies import get_feed_session, get_settings
from services.feed_gateway.presentation.http.routes import router

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    get_feed_session().start()
    try:
        yield
    finally:
        get_feed_session().close()


app = FastAPI(title="Alert Feed", lifespan=lifespan)
app.include_router(router)

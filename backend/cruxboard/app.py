import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette import status
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from cruxboard.config import config, environment
from cruxboard.database import database
from cruxboard.logic.standings.exceptions import FactSourceUnavailable
from cruxboard.routes import reports
from cruxboard.routes.models import SuccessResponse
from cruxboard.utils.alembic import alembic_run_migrations
from cruxboard.utils.logging import logger


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    logger.info(f"Starting cruxboard in {environment.value} mode")
    await database.connect()
    if config.auto_run_migrations:
        await asyncio.to_thread(alembic_run_migrations)

    yield

    await database.disconnect()


app = FastAPI(title="Cruxboard API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FactSourceUnavailable)
async def fact_source_unavailable_handler(
    request: Request, exc: FactSourceUnavailable
) -> JSONResponse:
    logger.error(f"Fact source unavailable while serving {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Fact source unavailable"},
    )


@app.get(f"{config.api_prefix}/health", response_model=SuccessResponse)
async def get_health() -> SuccessResponse:
    return SuccessResponse()


app.include_router(reports.router, tags=["reports"])

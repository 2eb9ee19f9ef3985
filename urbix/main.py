from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from urbix.api.deps import get_report_store, get_user_directory
from urbix.api.v1.router import api_router
from urbix.core.config import settings
from urbix.core.logging import configure_logging
from urbix.core.providers import get_provider_registry
from urbix.db.init_db import init_db
from urbix.services.auth_service import ensure_bootstrap_admin

configure_logging(settings.LOG_LEVEL, json_output=settings.LOG_JSON)


@asynccontextmanager
async def lifespan(_: FastAPI):
    get_provider_registry()
    init_db()
    ensure_bootstrap_admin(get_user_directory())
    store = get_report_store()
    logger.info('app.started', env=settings.ENV, reports=len(store.list()))
    yield

app = FastAPI(title=settings.PROJECT_NAME, debug=settings.DEBUG, lifespan=lifespan)

allow_origins = settings.CORS_ORIGINS
allow_credentials = '*' not in allow_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=allow_credentials,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.include_router(api_router)

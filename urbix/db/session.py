from sqlalchemy.engine import Engine
from sqlmodel import create_engine

from urbix.core.config import settings


def build_engine(url: str) -> Engine:
    if url.startswith('sqlite'):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


engine = build_engine(settings.DATABASE_URL)

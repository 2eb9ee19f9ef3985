from sqlmodel import SQLModel

from urbix.db.session import engine
from urbix.models import collection  # noqa: F401


def init_db(drop_all: bool = False) -> None:
    if drop_all:
        SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)

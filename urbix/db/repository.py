"""Full-collection persistence for reports and users.

Each collection is serialized to a JSON document and replaced wholesale on
every save; there are no partial updates. ``load_*`` returns ``None`` when the
collection has never been saved and raises ``PersistenceCorruption`` when the
stored document cannot be decoded.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.engine import Engine
from sqlmodel import Session

from urbix.core.errors import PersistenceCorruption
from urbix.models.collection import StoredCollection
from urbix.models.report import Report
from urbix.models.user import User

REPORTS_COLLECTION = 'reports'
USERS_COLLECTION = 'users'

_report_list = TypeAdapter(list[Report])
_user_list = TypeAdapter(list[User])

T = TypeVar('T')


class ReportRepository(Protocol):
    def load_reports(self) -> Optional[list[Report]]: ...

    def save_reports(self, reports: Sequence[Report]) -> None: ...


class UserRepository(Protocol):
    def load_users(self) -> Optional[list[User]]: ...

    def save_users(self, users: Sequence[User]) -> None: ...


def dump_collection(adapter: TypeAdapter, items: Sequence) -> str:
    return adapter.dump_json(list(items)).decode('utf-8')


def parse_collection(adapter: TypeAdapter[list[T]], name: str, payload: str) -> list[T]:
    try:
        return adapter.validate_json(payload)
    except ValidationError as exc:
        raise PersistenceCorruption(name, f'{exc.error_count()} validation error(s)') from exc


class _TextCollectionRepository:
    """Shared encode/decode; subclasses only move text in and out of storage."""

    def _read(self, name: str) -> Optional[str]:
        raise NotImplementedError

    def _write(self, name: str, payload: str) -> None:
        raise NotImplementedError

    def load_reports(self) -> Optional[list[Report]]:
        payload = self._read(REPORTS_COLLECTION)
        if payload is None:
            return None
        return parse_collection(_report_list, REPORTS_COLLECTION, payload)

    def save_reports(self, reports: Sequence[Report]) -> None:
        self._write(REPORTS_COLLECTION, dump_collection(_report_list, reports))

    def load_users(self) -> Optional[list[User]]:
        payload = self._read(USERS_COLLECTION)
        if payload is None:
            return None
        return parse_collection(_user_list, USERS_COLLECTION, payload)

    def save_users(self, users: Sequence[User]) -> None:
        self._write(USERS_COLLECTION, dump_collection(_user_list, users))


class SqlCollectionRepository(_TextCollectionRepository):
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _read(self, name: str) -> Optional[str]:
        with Session(self._engine) as session:
            record = session.get(StoredCollection, name)
            return record.payload if record else None

    def _write(self, name: str, payload: str) -> None:
        with Session(self._engine) as session:
            record = session.get(StoredCollection, name)
            if record is None:
                record = StoredCollection(name=name, payload=payload)
            else:
                record.payload = payload
            session.add(record)
            session.commit()


class MemoryCollectionRepository(_TextCollectionRepository):
    def __init__(self, documents: Optional[dict[str, str]] = None) -> None:
        self.documents: dict[str, str] = documents if documents is not None else {}

    def _read(self, name: str) -> Optional[str]:
        return self.documents.get(name)

    def _write(self, name: str, payload: str) -> None:
        self.documents[name] = payload

class UrbixError(Exception):
    """Base class for domain errors surfaced to API callers."""


class ReportNotFound(UrbixError):
    def __init__(self, report_id: str) -> None:
        super().__init__(f'Report not found: {report_id}')
        self.report_id = report_id


class TerminalStateViolation(UrbixError):
    """A resolved or dismissed report cannot go back to an active status."""

    def __init__(self, report_id: str, current: str, requested: str, reason: str) -> None:
        super().__init__(f'Report {report_id} is {reason}; cannot move from {current} to {requested}')
        self.report_id = report_id
        self.current = current
        self.requested = requested
        self.reason = reason


class DuplicateUsername(UrbixError):
    def __init__(self, username: str) -> None:
        super().__init__(f'Username already taken: {username}')
        self.username = username


class InvalidCredentials(UrbixError):
    def __init__(self) -> None:
        super().__init__('Wrong username or password')


class AnalysisFailure(UrbixError):
    """Raised inside the AI client only; callers get a fallback or None instead."""


class PersistenceCorruption(UrbixError):
    def __init__(self, collection: str, detail: str) -> None:
        super().__init__(f'Stored collection {collection!r} is malformed: {detail}')
        self.collection = collection
        self.detail = detail

"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.engine import Connection
from sqlalchemy.orm import Session

from justask.core.extensions import db
from justask.repositories import AnswerRepository, QuestionRepository, UserRepository
from justask.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.questions = QuestionRepository(session=self.session)
        self.answers = AnswerRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    The same session is shared across all repositories for a consistent transaction.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # No-op: the session is lazily started on the first statement.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work bound to the current thread's concrete Session.

    This UoW:
    - Owns a fresh transaction when none is active, and rolls it back on exit.
    - Attaches to an already running transaction otherwise (leaving it open).
    - Blocks ORM flushes of new/dirty/deleted objects while active.
    - Blocks raw DML/DDL on the Connection it reads through.
    - Disallows ``commit()``.

    Guards are installed on this UoW's own ``Session`` and ``Connection``
    objects, never on the ``scoped_session`` registry, so other threads and
    their sessions are unaffected.

    Build any DTOs inside the ``with`` block: rollback expires loaded objects.
    """

    _WRITE_PREFIXES = (
        "insert",
        "update",
        "delete",
        "replace",
        "alter",
        "drop",
        "create",
    )

    def __init__(self) -> None:
        super().__init__(session=db.session())
        self._owns_txn = False
        self._conn: Connection | None = None
        self._listeners_installed = False

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        self._owns_txn = not self.session.in_transaction()
        if self._owns_txn:
            self.session.begin()
        self._conn = self.session.connection()
        self._install_listeners()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self._remove_listeners()
        finally:
            self._conn = None
            if self._owns_txn:
                self._owns_txn = False
                self.session.rollback()

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ----------------------------- Guards & Listeners --------------------------

    def _install_listeners(self) -> None:
        if self._listeners_installed:
            return

        def _before_flush(session, flush_context, instances):
            if session.new or session.dirty or session.deleted:
                raise RuntimeError(
                    "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
                )

        def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            first_token = statement.lstrip().split(None, 1)[0].lower() if statement else ""
            if first_token.startswith(self._WRITE_PREFIXES):
                raise RuntimeError(
                    f"Read-only UnitOfWork: SQL statement blocked: {first_token.upper()}"
                )

        event.listen(self.session, "before_flush", _before_flush)
        event.listen(self._conn, "before_cursor_execute", _before_cursor_execute)
        self._ro_before_flush = _before_flush
        self._ro_before_cursor_execute = _before_cursor_execute
        self._listeners_installed = True

    def _remove_listeners(self) -> None:
        if not self._listeners_installed:
            return
        self._listeners_installed = False
        event.remove(self.session, "before_flush", self._ro_before_flush)
        event.remove(self._conn, "before_cursor_execute", self._ro_before_cursor_execute)

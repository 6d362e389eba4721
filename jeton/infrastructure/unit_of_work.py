# jeton/infrastructure/unit_of_work.py
#
# Transaction scope for mutating equity operations.
#
# Design decisions:
#   - The unit of work wraps the same DuckDB connection the repositories were
#     built with, so every repository call made inside the `with` block joins
#     the transaction without being handed a new cursor.
#   - Commit happens only when the block exits cleanly. Any exception,
#     including domain errors raised mid-block, triggers ROLLBACK and is
#     re-raised unchanged; no partial write is ever visible.
#   - Not re-entrant: nesting would silently turn the inner scope into a no-op,
#     so it raises RuntimeError instead.
from __future__ import annotations

from types import TracebackType

import duckdb


class DuckDBUnitOfWork:
    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn
        self._active = False

    def __enter__(self) -> DuckDBUnitOfWork:
        if self._active:
            raise RuntimeError("Unit of work already active")
        self._conn.begin()
        self._active = True
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._active = False
        if exc_type is None:
            self._conn.commit()
        else:
            self._conn.rollback()

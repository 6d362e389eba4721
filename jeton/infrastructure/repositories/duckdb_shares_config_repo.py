from __future__ import annotations

from decimal import Decimal

import duckdb

from jeton.domain.equity.entities import SharesConfig, SharesConfigPatch

_COLUMNS = (
    "id, authorized_shares, issued_shares, par_value, class_type, status, "
    "description, created_at, updated_at"
)


class DuckDBSharesConfigRepo:
    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn

    def get(self) -> SharesConfig | None:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM shares_config ORDER BY id LIMIT 1"  # noqa: S608
        ).fetchone()
        if row is None:
            return None
        return self._hydrate(row)

    def create(self, authorized_shares: int, par_value: Decimal, description: str) -> SharesConfig:
        row = self._conn.execute(
            f"""INSERT INTO shares_config (authorized_shares, par_value, description)
                VALUES (?, ?, ?)
                RETURNING {_COLUMNS}""",  # noqa: S608
            [authorized_shares, par_value, description],
        ).fetchone()
        if row is None:
            raise RuntimeError("INSERT ... RETURNING shares_config returned no row")
        return self._hydrate(row)

    def update(self, patch: SharesConfigPatch) -> SharesConfig:
        """Absent fields (None) keep their stored value through COALESCE."""
        self._conn.execute(
            """UPDATE shares_config
               SET authorized_shares = COALESCE(CAST(? AS BIGINT), authorized_shares),
                   class_type = COALESCE(CAST(? AS VARCHAR), class_type),
                   par_value = COALESCE(CAST(? AS DECIMAL(18, 4)), par_value),
                   updated_at = current_timestamp
               WHERE id = (SELECT min(id) FROM shares_config)""",
            [patch.authorized_shares, patch.class_type, patch.par_value],
        )
        updated = self.get()
        if updated is None:
            raise RuntimeError("shares_config row disappeared during update")
        return updated

    def adjust_issued(self, delta: int) -> None:
        """issued_shares += delta. The table CHECK rejects going past authorized or below 0."""
        self._conn.execute(
            """UPDATE shares_config
               SET issued_shares = issued_shares + ?, updated_at = current_timestamp
               WHERE id = (SELECT min(id) FROM shares_config)""",
            [delta],
        )

    def _hydrate(self, row: tuple) -> SharesConfig:  # type: ignore[type-arg]
        """Columns: id(0), authorized_shares(1), issued_shares(2), par_value(3),
        class_type(4), status(5), description(6), created_at(7), updated_at(8)"""
        return SharesConfig(
            id=int(row[0]),
            authorized_shares=int(row[1]),
            issued_shares=int(row[2]),
            par_value=Decimal(str(row[3])) if row[3] is not None else Decimal("0"),
            class_type=str(row[4]),
            status=str(row[5]),
            description=str(row[6]) if row[6] else None,
            created_at=row[7],
            updated_at=row[8],
        )

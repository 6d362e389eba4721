import duckdb
from fastapi import APIRouter, Depends

from jeton.interfaces.api.dependencies import get_db

router = APIRouter()


@router.get("/health")
def health(
    conn: duckdb.DuckDBPyConnection = Depends(get_db),  # noqa: B008
) -> dict[str, str]:
    conn.execute("SELECT 1").fetchone()
    return {"status": "ok"}

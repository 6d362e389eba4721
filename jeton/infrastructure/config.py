from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    duckdb_path: str
    valuation_cache_ttl_seconds: float
    default_authorized_shares: int
    default_par_value: Decimal
    cors_origins: tuple[str, ...]
    debug: bool


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    origins = os.environ.get("API_CORS_ORIGINS", "http://localhost:3000")
    return Settings(
        duckdb_path=os.environ.get("DUCKDB_PATH", ":memory:"),
        valuation_cache_ttl_seconds=float(os.environ.get("VALUATION_CACHE_TTL_SECONDS", "5")),
        default_authorized_shares=int(os.environ.get("DEFAULT_AUTHORIZED_SHARES", "1000000")),
        default_par_value=Decimal(os.environ.get("DEFAULT_PAR_VALUE", "1.00")),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        debug=os.environ.get("API_DEBUG", "false").lower() == "true",
    )

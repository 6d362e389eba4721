# jeton/infrastructure/log.py
#
# Server logger with elapsed time.
#
# Design decisions:
#   - Single log() function used by the request middleware and the startup
#     hook instead of per-module loggers.
#   - Elapsed process time prefixes every line so slow requests stand out
#     when reading the server output.
#   - Extra keyword fields are appended as key=value pairs in call order,
#     which keeps lines greppable (status=500, ms=1204).
#   - Plain stdout with flush for immediate visibility under any process
#     supervisor that captures stdout.
from __future__ import annotations

import sys
import time

_start = time.monotonic()


def log(message: str, **fields: object) -> None:
    """Write a timestamped log line to stdout."""
    elapsed = time.monotonic() - _start
    minutes, seconds = divmod(int(elapsed), 60)
    suffix = "".join(f" {key}={value}" for key, value in fields.items())
    sys.stdout.write(f"[jeton {minutes:02d}:{seconds:02d}] {message}{suffix}\n")
    sys.stdout.flush()

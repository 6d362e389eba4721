from __future__ import annotations

from typing import Protocol

from .entities import ValuationInputs


class ValuationSourceRepository(Protocol):
    def load_inputs(self) -> ValuationInputs: ...

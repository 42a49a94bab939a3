from __future__ import annotations

from typing import Protocol


class PlanTracePort(Protocol):
    def record(self, event: str, **fields: object) -> None:
        ...


class NullPlanTrace:
    def record(self, event: str, **fields: object) -> None:
        _ = (event, fields)

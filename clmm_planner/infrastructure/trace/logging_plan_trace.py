from __future__ import annotations

import logging

from clmm_planner.application.ports.plan_trace_port import PlanTracePort


class LoggingPlanTrace(PlanTracePort):
    def __init__(self, logger: logging.Logger | None = None, *, level: int = logging.INFO):
        self._logger = logger or logging.getLogger("clmm_planner.trace")
        self._level = level

    def record(self, event: str, **fields: object) -> None:
        if not self._logger.isEnabledFor(self._level):
            return
        rendered = " ".join(f"{key}={value}" for key, value in fields.items())
        self._logger.log(self._level, "plan_trace: %s %s", event, rendered)

from __future__ import annotations

from typing import Protocol

from clmm_planner.application.dto.submission import SubmissionReceipt
from clmm_planner.domain.entities.operation_plan import OperationPlan


class TransactionSubmitterPort(Protocol):
    def submit(self, *, plan: OperationPlan, owner: str) -> SubmissionReceipt:
        ...

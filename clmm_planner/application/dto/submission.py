from __future__ import annotations

from dataclasses import dataclass

from clmm_planner.domain.entities.operation_plan import OperationPlan


@dataclass(frozen=True)
class SubmissionReceipt:
    success: bool
    digest: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class SubmitOperationPlanInput:
    plan: OperationPlan
    owner: str

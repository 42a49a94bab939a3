from __future__ import annotations

from clmm_planner.application.dto.submission import SubmissionReceipt, SubmitOperationPlanInput
from clmm_planner.application.ports.plan_trace_port import NullPlanTrace, PlanTracePort
from clmm_planner.application.ports.transaction_submitter_port import TransactionSubmitterPort
from clmm_planner.domain.exceptions import PlanInputError, SubmissionFailedError


class SubmitOperationPlanUseCase:
    def __init__(self, *, submitter: TransactionSubmitterPort, trace: PlanTracePort | None = None):
        self._submitter = submitter
        self._trace = trace or NullPlanTrace()

    def execute(self, command: SubmitOperationPlanInput) -> SubmissionReceipt:
        if not command.plan.operations:
            raise PlanInputError("Operation plan is empty.")
        if command.plan.owner != command.owner:
            raise PlanInputError("Operation plan was built for a different owner.")

        receipt = self._submitter.submit(plan=command.plan, owner=command.owner)
        self._trace.record(
            "plan_submitted",
            pool_id=command.plan.pool_id,
            operations=len(command.plan.operations),
            success=receipt.success,
            digest=receipt.digest,
        )
        if not receipt.success:
            raise SubmissionFailedError(receipt.error or "Submission failed.")
        return receipt

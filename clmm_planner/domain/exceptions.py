from __future__ import annotations


class DomainError(Exception):
    """Base for planner domain errors."""


class PoolNotFoundError(DomainError):
    """Requested pool does not exist."""


class PoolReadError(DomainError):
    """Pool state could not be read from the ledger."""


class PoolUnavailableError(DomainError):
    """Pool is paused."""


class InvalidPriceError(DomainError):
    """Price input is not positive."""


class InvalidRangeError(DomainError):
    """No valid aligned, non-degenerate tick range exists."""


class UnsupportedAssetError(DomainError):
    """Asset is not one of the pool's two assets."""


class RejectedAmountError(DomainError):
    """Leg amount falls below the protocol minimum."""


class InsufficientBalanceError(DomainError):
    """Reported balance is lower than the amount the plan requires."""


class PlanInputError(DomainError):
    """Invalid planning parameters."""


class SubmissionFailedError(DomainError):
    """Submitter rejected or aborted the operation plan."""

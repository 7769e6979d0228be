from __future__ import annotations


class MealPlanError(RuntimeError):
    """Base class for client-side meal planning errors."""


class MissingContext(MealPlanError):
    """An operation needs an owning identifier that is not known yet."""


class MissingPlanContext(MissingContext):
    """No loaded shopping list bound to a plan id."""


class TransientWriteFailure(MealPlanError):
    """A write to the server failed; local state was reverted and the call may be retried."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

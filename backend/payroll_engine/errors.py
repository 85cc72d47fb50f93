"""Error taxonomy shared by the payroll services.

Every error carries the HTTP status the router answers with, so the web
layer can translate them without a lookup table.
"""


class PayrollError(Exception):
    status_code = 500


class ValidationError(PayrollError):
    """Required identifying input is missing or out of range."""

    status_code = 400


class NotFoundError(PayrollError):
    status_code = 404


class PreconditionError(PayrollError):
    """The employee exists but cannot be paid yet (no salary structure)."""

    status_code = 400


class InvalidPeriodError(PayrollError):
    status_code = 422


class StoreError(PayrollError):
    status_code = 500


class PayrollRunError(PayrollError):
    """A bulk run stopped part-way; ``completed`` holds what was persisted."""

    status_code = 500

    def __init__(self, message: str, completed: list | None = None):
        super().__init__(message)
        self.completed = completed or []

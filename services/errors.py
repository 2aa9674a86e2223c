"""
Planner Errors

Every failure in target derivation, allocation, persistence or retrieval is
raised as one of these. Each carries the HTTP status the route layer maps it to.
"""


class PlannerError(Exception):
    """Base class for caller-visible planning failures."""
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(PlannerError):
    """Raised when targets, profile fields or the plan date are missing or invalid."""
    status_code = 400

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field


class CatalogGapError(PlannerError):
    """Raised when a meal slot has no candidate recipes."""
    status_code = 400

    def __init__(self, meal_type):
        super().__init__(f'No recipes configured for {meal_type}')
        self.meal_type = meal_type


class PersistenceError(PlannerError):
    """Raised when the plan write fails and was rolled back."""
    status_code = 500


class NotFoundError(PlannerError):
    """Raised when no plan exists for the requested user and date."""
    status_code = 404

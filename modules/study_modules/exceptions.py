"""
Study modules exceptions.
"""

from shared.exceptions import NotFoundError, ValidationError


class StudyModuleNotFoundError(NotFoundError):
    """
    Raised when a module does not exist or belongs to another user.

    The two cases are indistinguishable to the caller.
    """

    def __init__(self, module_id: str):
        super().__init__(
            "Module",
            module_id,
            details={"module_id": module_id},
        )


class InvalidCursorError(ValidationError):
    """Raised when a pagination cursor does not resolve to one of the caller's modules."""

    def __init__(self, cursor: str):
        super().__init__(
            f"Invalid cursor: {cursor}",
            fields={"cursor": "does not reference one of your modules"},
        )

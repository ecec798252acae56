"""Symbol lookup exceptions."""

from .base import SigwardenError


class ClassNotFoundError(SigwardenError):
    """Raised by a symbol provider when a class is not part of its universe."""

    def __init__(self, class_name: str):
        super().__init__(f"Class '{class_name}' not found on classpath")
        self.class_name = class_name

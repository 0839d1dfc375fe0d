class PromotionError(Exception):
    """Base class for promotion errors; ``message`` is shown to API clients."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message

class PromotionValidationError(PromotionError):
    """A field value breaks a validation or business rule."""

class PromotionConflictError(PromotionError):
    """Another promotion already uses the requested name."""

class PromotionNotFoundError(PromotionError):
    """No promotion exists with the requested id."""

class PromotionStorageError(PromotionError):
    """The database rejected or failed an operation."""

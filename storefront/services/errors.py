# storefront/services/errors.py


class NotFoundError(ValueError):
    """Requested record does not exist (or is not visible to the caller)."""

class SessionNotFoundError(LookupError):
    """Raised when no live session or stored snapshot exists for a session id."""
    pass


class InvalidSelectionError(ValueError):
    """Raised when an action receives a value outside its enum (size tier, coupon type)."""
    pass

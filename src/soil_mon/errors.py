class NoDataError(ValueError):
    """Raised when no candidate scene is available for analysis."""


class InvalidInputError(ValueError):
    """Raised by the input validators when a caller-supplied value is out of range."""

"""Exception types raised by mprimgen."""


class ConfigurationError(ValueError):
    """Raised when a mobility profile or generation config is unusable."""

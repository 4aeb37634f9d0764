"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Configuration error."""

    pass


class LoggerInitError(UtilError):
    """Raised when logging or observability cannot be initialised at startup."""

    code = "LOGGER_INIT_FAILED"

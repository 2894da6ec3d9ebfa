"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Provider configuration is unusable, e.g. missing client credentials."""

    pass

"""Errors raised by the ALNS engine before a search starts."""


class ALNSError(Exception):
    """Base class for ALNS engine errors."""


class ConfigurationError(ALNSError, ValueError):
    """An ALNSConfig parameter is out of its allowed range."""


class PreconditionError(ALNSError, ValueError):
    """The runner cannot start, e.g. an operator pool is empty."""

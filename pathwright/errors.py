"""Exceptions raised by pathwright.

Only a request that cannot be constructed aborts the pipeline; every other
anomaly is reported as a warning on the result.
"""


class PathwrightError(Exception):
    """Base class for pathwright errors."""


class InvalidRequestError(PathwrightError):
    """The caller's input could not be turned into a DesignRequest."""


class ConfigError(PathwrightError):
    """A configuration file or value could not be loaded."""

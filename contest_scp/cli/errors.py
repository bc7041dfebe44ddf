"""Custom exceptions for the command line."""


class CliError(Exception):
    """Base exception for all command-line errors."""

    pass


class ConfigurationError(CliError):
    """
    Raised when the command-line configuration is invalid.

    This can happen when:
    - No contest directory is given
    - The start time is missing or malformed
    - The duration is missing or not positive
    - A numeric option is out of range
    """

    pass


class ManifestError(ConfigurationError):
    """
    Raised when a contest manifest cannot be used.

    This can happen when:
    - The manifest file does not exist
    - A line has the wrong number of fields
    - A YAML manifest is not a list of contests
    - An entry lacks a directory, start or duration
    """

    def __init__(self, message: str, path: str | None = None, line: int | None = None):
        super().__init__(message)
        self.path = path
        self.line = line

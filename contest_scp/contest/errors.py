"""Custom exceptions for contest processing."""


class ContestError(Exception):
    """Base exception for contest processing errors."""

    pass


class ContestDirectoryError(ContestError):
    """
    Raised when a contest's log directory cannot be used.

    This can happen when:
    - The directory does not exist
    - The path names a file rather than a directory
    - The directory cannot be listed
    """

    def __init__(self, message: str, directory: str | None = None):
        super().__init__(message)
        self.directory = directory


class NoValidLogsError(ContestError):
    """
    Raised when no log in a contest directory yields a usable QSO.

    This can happen when:
    - The directory is empty
    - No file contains "QSO:" lines
    - Every QSO line is malformed
    """

    def __init__(self, message: str, directory: str | None = None):
        super().__init__(message)
        self.directory = directory

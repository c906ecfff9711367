"""Exceptions raised while collecting content and creating gists."""

from pathlib import Path
from typing import Optional


class GistError(Exception):
    """Base class for all gistkit errors."""


class SelectionError(GistError, ValueError):
    """No usable selection source was given (editor, file, or file list)."""


class UnreadableFileError(GistError):
    """A file inside the selection could not be read or decoded.

    Not raised: the collector skips such files, and `CollectionReport` keeps
    one of these per skipped file so callers can list or log them.
    """

    def __init__(self, path: Path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"Couldn't read the contents of the file {path}: {cause}")


class EmptyGistError(GistError):
    """Collection produced nothing to upload."""

    def __init__(self, message: str = "Can't create empty gist"):
        super().__init__(message)


class AuthenticationRequiredError(GistError):
    """A non-anonymous gist was requested but no GitHub token is available."""

    def __init__(self, message: str = "You have to login to GitHub to create non-anonymous Gists."):
        super().__init__(message)


class GistCreationError(GistError):
    """The Gist API call failed or returned an unusable response."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.details = details
        super().__init__(message)

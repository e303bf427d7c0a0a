from typing import Optional


class RepoPromptError(Exception):
    """Base error; ``str(exc)`` is the message shown to the caller."""


class InvalidUrlError(RepoPromptError):
    def __init__(self, message: str = "Invalid GitHub URL"):
        super().__init__(message)


class MissingParameterError(RepoPromptError):
    def __init__(self, message: str = "Repository URL is required"):
        super().__init__(message)


class UpstreamApiError(RepoPromptError):
    """A GitHub API call failed (non-2xx, network error or unusable payload)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

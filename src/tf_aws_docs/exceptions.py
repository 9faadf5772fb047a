class DocsServerError(Exception):
    """Base exception for the documentation server."""


class ConfigurationError(DocsServerError):
    """Raised when configuration is missing or invalid."""


class GitHubAPIError(DocsServerError):
    """Raised when a GitHub API call fails or returns an unexpected payload."""


class DocumentNotFoundError(DocsServerError):
    """Raised when a documentation file cannot be read from its store."""

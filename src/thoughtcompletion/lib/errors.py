"""Custom exception hierarchy for ThoughtCompletion configuration and operations."""


class ThoughtCompletionError(Exception):
    """Base exception for all ThoughtCompletion errors.

    All ThoughtCompletion-specific exceptions inherit from this class, enabling
    centralized exception handling at the CLI and service boundaries.
    """

    pass


class ConfigError(ThoughtCompletionError):
    """Exception raised for configuration errors.

    Raised when settings loading, environment substitution or validation
    fails. Includes the offending field so users can locate the problem.

    Attributes:
        field: The configuration field that caused the error
        message: Human-readable error message describing the issue
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize ConfigError with field and message.

        Args:
            field: Configuration field name where error occurred
            message: Descriptive error message
        """
        self.field = field
        self.message = message
        super().__init__(f"Configuration error in '{field}': {message}")


class FileNotFoundError(ThoughtCompletionError):
    """Exception raised when a settings file or document is not found.

    Attributes:
        path: Path to the file that was not found
        message: Human-readable error message
    """

    def __init__(self, path: str, message: str) -> None:
        """Initialize FileNotFoundError with path and message.

        Args:
            path: Path to the file that was not found
            message: Descriptive error message, optionally with suggestions
        """
        self.path = path
        self.message = message
        super().__init__(f"File not found: {path}\n{message}")


class ProviderError(ThoughtCompletionError):
    """Base exception for completion provider failures.

    Catch this to handle any provider-related failure without needing to know
    the specific subtype.
    """

    pass


class ProviderConnectionError(ProviderError):
    """Error raised when a provider endpoint is unreachable or times out.

    Attributes:
        endpoint: The base URL that failed
        original_error: The underlying transport exception, if any
    """

    def __init__(self, endpoint: str, original_error: Exception | None = None) -> None:
        """Initialize ProviderConnectionError with endpoint and optional cause.

        Args:
            endpoint: The provider base URL that failed to connect
            original_error: The underlying exception that caused the failure
        """
        self.endpoint = endpoint
        self.original_error = original_error
        message = (
            f"Failed to connect to completion provider at {endpoint}.\n"
            f"Check the base URL in your settings and that the server is running."
        )
        if original_error:
            message += f"\nOriginal error: {original_error}"
        super().__init__(message)


class ProviderAPIError(ProviderError):
    """Error raised when a provider answers with an error.

    Covers non-2xx HTTP responses and 2xx bodies that carry an ``error`` field.

    Attributes:
        url: Request URL
        status_code: HTTP status code of the response
        detail: Error detail reported by the provider, if any
    """

    def __init__(self, url: str, status_code: int, detail: str | None = None) -> None:
        """Create an API error with request context.

        Args:
            url: The URL that was requested
            status_code: HTTP status code returned
            detail: Optional provider error message
        """
        self.url = url
        self.status_code = status_code
        self.detail = detail
        message = f"Provider API error {status_code} from {url}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class UnknownProviderError(ProviderError):
    """Raised when settings name a provider type that is not supported."""

    def __init__(self, provider: str) -> None:
        """Create the error for an unsupported provider type."""
        self.provider = provider
        super().__init__(
            f"Unknown provider type: {provider}. Supported: openai, ollama"
        )

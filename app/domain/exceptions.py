from __future__ import annotations


class AnalysisError(Exception):
    """Base for failures that map to a JSON `{"error": ...}` response.

    `message` is caller-facing; never put upstream internals or stack details in it.
    """

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MissingRequiredFieldsError(AnalysisError):
    """Raised when storyTopic, dataNeeded or timeframe is absent or empty."""

    status_code = 400

    def __init__(self) -> None:
        super().__init__("Missing required fields")


class InvalidPayloadError(AnalysisError):
    """Raised when a present field has an unusable type."""

    status_code = 400


class LLMNotConfiguredError(AnalysisError):
    status_code = 500

    def __init__(self) -> None:
        super().__init__("OpenAI API key not configured")


class UpstreamAPIError(AnalysisError):
    """The LLM provider answered with a non-success status; the status is forwarded."""

    def __init__(self, *, status_code: int, upstream_message: str | None):
        super().__init__(
            f"OpenAI API error: {upstream_message or 'Unknown error'}",
            status_code=status_code,
        )


class AnalysisGenerationError(AnalysisError):
    status_code = 500

    def __init__(self) -> None:
        super().__init__("Failed to generate analysis. Please try again.")

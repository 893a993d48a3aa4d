"""Exception hierarchy for contact onboarding."""


class OnboardingError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(OnboardingError):
    """Raised when required configuration is missing or malformed."""


class SessionError(OnboardingError):
    """Raised when the browser session cannot be started or is not running."""


class ElementNotFoundError(OnboardingError):
    """Raised when an expected element does not appear within its wait."""

    def __init__(self, selector: str, timeout_ms: int | None = None) -> None:
        self.selector = selector
        self.timeout_ms = timeout_ms
        if timeout_ms is None:
            message = f"element not found: {selector}"
        else:
            message = f"element not found within {timeout_ms}ms: {selector}"
        super().__init__(message)


class InteractionError(OnboardingError):
    """Raised when a click, keystroke or read on the page fails."""

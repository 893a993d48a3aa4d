"""Bulk WhatsApp contact lookup and group onboarding."""

from .config import OnboardingConfig, load_config
from .errors import (
    ConfigurationError,
    ElementNotFoundError,
    InteractionError,
    OnboardingError,
    SessionError,
)
from .models import UNKNOWN_NAME, Identifier, LookupResult, NameSource
from .pipeline import ContactOnboardingPipeline

__all__ = [
    "ContactOnboardingPipeline",
    "OnboardingConfig",
    "load_config",
    "Identifier",
    "LookupResult",
    "NameSource",
    "UNKNOWN_NAME",
    "OnboardingError",
    "ConfigurationError",
    "SessionError",
    "ElementNotFoundError",
    "InteractionError",
]

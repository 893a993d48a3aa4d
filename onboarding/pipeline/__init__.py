from .capabilities import GroupEnroller, NameResolver, PresenceProbe
from .pipeline import ContactOnboardingPipeline

__all__ = [
    "ContactOnboardingPipeline",
    "PresenceProbe",
    "NameResolver",
    "GroupEnroller",
]

from .enroller import WhatsAppGroupEnroller
from .presence import WhatsAppPresenceProbe
from .resolver import WhatsAppNameResolver
from .selectors import DEFAULT_SELECTORS, load_selectors
from .session import WHATSAPP_URL, WhatsAppSession

__all__ = [
    "WhatsAppSession",
    "WhatsAppPresenceProbe",
    "WhatsAppNameResolver",
    "WhatsAppGroupEnroller",
    "DEFAULT_SELECTORS",
    "load_selectors",
    "WHATSAPP_URL",
]

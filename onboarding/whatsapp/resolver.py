"""Name resolution for the currently open WhatsApp conversation."""

import logging
from typing import Iterable

from onboarding.errors import OnboardingError
from onboarding.models import (
    DEFAULT_NAME_LOOKUP_ORDER,
    UNKNOWN_NAME,
    Identifier,
    NameSource,
)
from onboarding.utils.logging_config import setup_logger
from onboarding.whatsapp.session import WhatsAppSession

WAIT_TIMEOUT = 5000  # ms


class WhatsAppNameResolver:
    """
    Reads a contact's display name, trying each source once, in order.

    Sources:
    - HEADER: the name label in the conversation header
    - CONTACT_INFO: the name in the "Contact info" panel, reached through the
      conversation menu; the panel is dismissed afterwards

    A source that times out, faults, or yields blank text hands over to the
    next one. When every source fails the result is UNKNOWN_NAME.
    """

    def __init__(
        self,
        session: WhatsAppSession,
        order: Iterable[NameSource] = DEFAULT_NAME_LOOKUP_ORDER,
        timeout_ms: int = WAIT_TIMEOUT,
    ) -> None:
        self.session = session
        self.order: tuple[NameSource, ...] = tuple(order)
        self.timeout_ms = timeout_ms
        self.logger: logging.Logger = setup_logger("resolver")

    def resolve(self, identifier: Identifier) -> str:
        for source in self.order:
            if source is NameSource.HEADER:
                name = self._from_header(identifier)
            else:
                name = self._from_contact_info(identifier)
            if name:
                return name

        self.logger.warning("Could not resolve a name for %s, using %r", identifier, UNKNOWN_NAME)
        return UNKNOWN_NAME

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    def _from_header(self, identifier: Identifier) -> str | None:
        try:
            label = self.session.wait_for_element(
                self.session.selectors["header_name"], self.timeout_ms
            )
            name = self.session.get_text(label)
        except OnboardingError as exc:
            self.logger.warning(
                "Username not found in chat header for %s: %s", identifier, exc
            )
            return None

        if not name:
            self.logger.warning("Chat header name for %s is empty", identifier)
            return None

        self.logger.info("Username found in chat header: %s", name)
        return name

    def _from_contact_info(self, identifier: Identifier) -> str | None:
        selectors = self.session.selectors
        name: str | None = None
        opened = False
        try:
            menu = self.session.wait_for_element(selectors["chat_menu"], self.timeout_ms)
            self.session.click(menu)
            opened = True
            item = self.session.wait_for_element(
                selectors["contact_info_item"], self.timeout_ms
            )
            self.session.click(item)
            label = self.session.wait_for_element(
                selectors["profile_name"], self.timeout_ms
            )
            name = self.session.get_text(label)
        except OnboardingError as exc:
            self.logger.warning(
                "Could not retrieve username from Contact Info for %s: %s", identifier, exc
            )
        finally:
            # Escape with nothing open would close the conversation itself
            if opened:
                self._dismiss_panel()

        if not name:
            return None

        self.logger.info("Extracted username from Contact Info: %s", name)
        return name

    def _dismiss_panel(self) -> None:
        try:
            self.session.press("Escape")
        except OnboardingError as exc:
            self.logger.debug("resolver: could not dismiss contact info panel: %s", exc)

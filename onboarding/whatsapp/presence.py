"""Presence check: does a phone number open a WhatsApp conversation?"""

import logging

from onboarding.errors import ElementNotFoundError, OnboardingError
from onboarding.models import Identifier
from onboarding.utils.logging_config import setup_logger
from onboarding.whatsapp.session import WhatsAppSession

WAIT_TIMEOUT = 5000  # ms


class WhatsAppPresenceProbe:
    """Searches the chat list for a number and waits for its conversation to open."""

    def __init__(self, session: WhatsAppSession, timeout_ms: int = WAIT_TIMEOUT) -> None:
        self.session = session
        self.timeout_ms = timeout_ms
        self.logger: logging.Logger = setup_logger("presence")

    def is_present(self, identifier: Identifier) -> bool:
        selectors = self.session.selectors

        # Close whatever conversation is open so its composer can't be
        # mistaken for this number's.
        try:
            self.session.press("Escape")
        except OnboardingError as exc:
            self.logger.debug("presence: could not reset view: %s", exc)

        try:
            search_box = self.session.wait_for_element(
                selectors["search_box"], self.timeout_ms
            )
            self.session.click(search_box)
            self.session.send_keys(search_box, identifier.raw, submit=True)
        except OnboardingError as exc:
            self.logger.error("Error checking number %s: %s", identifier, exc)
            return False

        try:
            self.session.wait_for_element(selectors["chat_input"], self.timeout_ms)
        except ElementNotFoundError:
            self.logger.warning("Number %s not found on WhatsApp.", identifier)
            return False
        except OnboardingError as exc:
            self.logger.error("Error checking number %s: %s", identifier, exc)
            return False

        self.logger.info("Number %s is found on WhatsApp.", identifier)
        return True

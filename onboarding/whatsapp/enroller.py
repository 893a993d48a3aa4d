"""Group enrollment: add a contact to a WhatsApp group through the group info panel."""

import logging

from onboarding.errors import OnboardingError
from onboarding.models import Identifier
from onboarding.utils.env_helpers import is_dry_run
from onboarding.utils.logging_config import setup_logger
from onboarding.whatsapp.selectors import selector_for
from onboarding.whatsapp.session import WhatsAppSession

WAIT_TIMEOUT = 5000  # ms


class WhatsAppGroupEnroller:
    """
    Adds participants to a group via the WhatsApp Web UI.

    Flow:
    1. Search the group in the chat list and open it
    2. Open the group info panel from the conversation header
    3. "Add participant" → type the number → confirm → "Add"
    4. Escape out of the panels (best-effort)

    Never raises; any fault is logged as a warning and reported as False.
    """

    def __init__(
        self,
        session: WhatsAppSession,
        timeout_ms: int = WAIT_TIMEOUT,
        dry_run: bool | None = None,
    ) -> None:
        self.session = session
        self.timeout_ms = timeout_ms
        self.is_dry_run: bool = dry_run if dry_run is not None else is_dry_run()
        self.logger: logging.Logger = setup_logger("enroller")

    def enroll(self, group_name: str, identifier: Identifier) -> bool:
        if self.is_dry_run:
            self.logger.info("[DRY RUN] would add %s to group %s", identifier, group_name)
            return False

        try:
            self._open_group(group_name)
            self._add_participant(identifier)
        except OnboardingError as exc:
            self.logger.warning(
                "Failed to add %s to group %s: %s", identifier, group_name, exc
            )
            return False
        finally:
            self._dismiss_panels()

        self.logger.info("Added %s to group %s.", identifier, group_name)
        return True

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _wait_and_click(self, key: str) -> None:
        element = self.session.wait_for_element(self.session.selectors[key], self.timeout_ms)
        self.session.click(element)

    def _open_group(self, group_name: str) -> None:
        search_box = self.session.wait_for_element(
            self.session.selectors["search_box"], self.timeout_ms
        )
        self.session.click(search_box)
        self.session.send_keys(search_box, group_name, submit=True)
        # The previous contact's chat may still be open: wait for the header
        # titled with the group name, then click it to open group info
        header = self.session.wait_for_element(
            selector_for(self.session.selectors, "group_header", group_name),
            self.timeout_ms,
        )
        self.session.click(header)

    def _add_participant(self, identifier: Identifier) -> None:
        self._wait_and_click("add_participant")
        picker = self.session.wait_for_element(
            self.session.selectors["participant_search"], self.timeout_ms
        )
        self.session.send_keys(picker, identifier.raw, submit=True)
        self._wait_and_click("confirm_participants")
        self._wait_and_click("confirm_add")

    def _dismiss_panels(self) -> None:
        try:
            self.session.press("Escape", "Escape")
        except OnboardingError as exc:
            self.logger.debug("enroller: could not dismiss group panels: %s", exc)

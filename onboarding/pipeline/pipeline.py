"""Contact onboarding pipeline: presence check, name resolution, group enrollment."""

import json
import logging
from typing import Callable, Iterable

from onboarding.models import UNKNOWN_NAME, Identifier, LookupResult
from onboarding.pipeline.capabilities import GroupEnroller, NameResolver, PresenceProbe
from onboarding.utils.logging_config import setup_logger


class ContactOnboardingPipeline:
    """
    Runs each identifier through the three onboarding stages, in input order.

    Stages:
    1. PresenceProbe.is_present — gate for everything else
    2. NameResolver.resolve     — only for present identifiers
    3. GroupEnroller.enroll     — only for present identifiers

    Exactly one LookupResult is produced per identifier. A stage that raises
    is treated as its negative outcome so the loop always reaches the next
    identifier.
    """

    def __init__(
        self,
        probe: PresenceProbe,
        resolver: NameResolver,
        enroller: GroupEnroller,
        group_name: str,
        pause: Callable[[], None] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Parameters
        ----------
        probe, resolver, enroller:
            Stage implementations.
        group_name:
            Group that present identifiers are added to.
        pause:
            Called between identifiers (not before the first one).
        """
        self.probe = probe
        self.resolver = resolver
        self.enroller = enroller
        self.group_name = group_name
        self.pause = pause
        self.logger: logging.Logger = logger or setup_logger("pipeline")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, identifiers: Iterable[Identifier | str]) -> list[LookupResult]:
        """Process every identifier and return the results in input order."""
        results: list[LookupResult] = []

        for index, item in enumerate(identifiers):
            identifier = item if isinstance(item, Identifier) else Identifier(item)
            if index and self.pause is not None:
                self.pause()
            results.append(self.process(identifier))

        self.logger.info(
            "Final Results: %s", json.dumps([r.to_dict() for r in results], ensure_ascii=False)
        )
        return results

    def process(self, identifier: Identifier) -> LookupResult:
        """Run the stages for a single identifier."""
        result = LookupResult(phone=identifier.raw)

        result.present = self._check_presence(identifier)
        if not result.present:
            return result

        result.name = self._resolve_name(identifier)
        result.enrolled = self._enroll(identifier)
        return result

    # ------------------------------------------------------------------
    # Stage wrappers
    # ------------------------------------------------------------------

    def _check_presence(self, identifier: Identifier) -> bool:
        try:
            return bool(self.probe.is_present(identifier))
        except Exception as exc:  # noqa: BLE001
            self.logger.error(
                "pipeline: presence check raised for %s: %s", identifier, exc, exc_info=True
            )
            return False

    def _resolve_name(self, identifier: Identifier) -> str:
        try:
            name = self.resolver.resolve(identifier)
        except Exception as exc:  # noqa: BLE001
            self.logger.error(
                "pipeline: name resolution raised for %s: %s", identifier, exc, exc_info=True
            )
            return UNKNOWN_NAME
        return name or UNKNOWN_NAME

    def _enroll(self, identifier: Identifier) -> bool:
        try:
            return bool(self.enroller.enroll(self.group_name, identifier))
        except Exception as exc:  # noqa: BLE001
            self.logger.error(
                "pipeline: enrollment raised for %s: %s", identifier, exc, exc_info=True
            )
            return False

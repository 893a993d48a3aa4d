"""Stage interfaces the onboarding pipeline is written against.

Implementations own all page details (selectors, waits, key presses). The
pipeline only sees these three calls.
"""

from typing import Protocol

from onboarding.models import Identifier


class PresenceProbe(Protocol):
    def is_present(self, identifier: Identifier) -> bool:
        """
        Return True if the identifier exists on the remote service.

        On success the session is left inside the identifier's conversation.
        Must not raise.
        """


class NameResolver(Protocol):
    def resolve(self, identifier: Identifier) -> str:
        """Return a display name, or UNKNOWN_NAME. Must not raise."""


class GroupEnroller(Protocol):
    def enroll(self, group_name: str, identifier: Identifier) -> bool:
        """Add the identifier to the named group. Return True on success."""

"""Shared pytest fixtures for onboarding tests."""

import os

# Keep test runs from writing automation.log into the working tree. Must be
# set before any onboarding module creates its logger.
os.environ["LOG_FILE"] = ""

import pytest  # noqa: E402

from onboarding.errors import ElementNotFoundError, InteractionError  # noqa: E402
from onboarding.whatsapp.selectors import DEFAULT_SELECTORS  # noqa: E402


class FakeElement:
    """Stand-in for a page element; carries the text it should read as."""

    def __init__(self, key: str, text: str = "") -> None:
        self.key = key
        self.text = text

    def __repr__(self) -> str:
        return f"FakeElement({self.key!r})"


class FakeSession:
    """
    In-memory WhatsAppSession double.

    ``visible`` maps selector keys to the text their element reads as; any key
    not in it times out with ElementNotFoundError. Keys in ``broken`` appear
    but raise InteractionError when clicked, typed into, or read. Every call
    is recorded in ``actions`` as a tuple.
    """

    def __init__(
        self,
        visible: dict[str, str] | None = None,
        broken: set[str] | None = None,
    ) -> None:
        self.selectors: dict[str, str] = dict(DEFAULT_SELECTORS)
        self.visible: dict[str, str] = dict(visible or {})
        self.broken: set[str] = set(broken or ())
        self.press_fails = False
        self.actions: list[tuple] = []

    def _key_for(self, selector: str) -> str:
        for key, value in self.selectors.items():
            if value == selector:
                return key
        # Filled templates map to "key[name]", e.g. "group_header[Friends]"
        for key, value in self.selectors.items():
            if "{name}" not in value:
                continue
            prefix, suffix = value.split("{name}", 1)
            if selector.startswith(prefix) and selector.endswith(suffix):
                quoted = selector[len(prefix):len(selector) - len(suffix)]
                name = quoted[1:-1].replace('\\"', '"').replace("\\\\", "\\")
                return f"{key}[{name}]"
        return selector

    def _check(self, element: FakeElement, action: str) -> None:
        if element.key in self.broken:
            raise InteractionError(f"{action} {element.key} failed: element is detached")

    def wait_for_element(self, selector: str, timeout_ms: int) -> FakeElement:
        key = self._key_for(selector)
        self.actions.append(("wait", key, timeout_ms))
        if key not in self.visible:
            raise ElementNotFoundError(selector, timeout_ms)
        return FakeElement(key, self.visible[key])

    def find_element(self, selector: str) -> FakeElement:
        key = self._key_for(selector)
        self.actions.append(("find", key))
        if key not in self.visible:
            raise ElementNotFoundError(selector)
        return FakeElement(key, self.visible[key])

    def click(self, element: FakeElement) -> None:
        self.actions.append(("click", element.key))
        self._check(element, "click")

    def send_keys(self, element: FakeElement, text: str, submit: bool = False) -> None:
        self.actions.append(("type", element.key, text, submit))
        self._check(element, "type")

    def get_text(self, element: FakeElement) -> str:
        self.actions.append(("read", element.key))
        self._check(element, "read")
        return element.text.strip()

    def press(self, *keys: str) -> None:
        self.actions.append(("press", *keys))
        if self.press_fails:
            raise InteractionError("press failed: page crashed")

    def sleep(self, ms: int) -> None:
        self.actions.append(("sleep", ms))

    # Helpers for assertions
    def clicked(self) -> list[str]:
        return [a[1] for a in self.actions if a[0] == "click"]

    def waited(self) -> list[str]:
        return [a[1] for a in self.actions if a[0] == "wait"]

    def typed(self) -> list[tuple]:
        return [a[1:] for a in self.actions if a[0] == "type"]


@pytest.fixture
def fake_session_factory():
    """Build FakeSession instances with a given set of visible elements."""
    return FakeSession


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every onboarding-related env var for the duration of a test."""
    for key in (
        "WHATSAPP_GROUP_NAME",
        "PHONE_NUMBERS",
        "WHATSAPP_SESSION_PATH",
        "WHATSAPP_HEADLESS",
        "WAIT_TIMEOUT_MS",
        "LOGIN_TIMEOUT_MS",
        "INTER_CONTACT_DELAY_MS",
        "NAME_LOOKUP_ORDER",
        "WHATSAPP_SELECTORS_OVERRIDE",
        "DRY_RUN",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch

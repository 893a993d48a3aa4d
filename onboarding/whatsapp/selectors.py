"""WhatsApp Web selectors.

WhatsApp Web class names change without notice, so selectors are data: the
defaults below can be replaced per key from a JSON or YAML file named by the
WHATSAPP_SELECTORS_OVERRIDE env var. Selectors starting with "//" are XPath.
A "{name}" placeholder is filled in per lookup with a quoted CSS string
(see selector_for).
"""

import json
from pathlib import Path

import yaml

from onboarding.utils.logging_config import setup_logger

logger = setup_logger("selectors")

DEFAULT_SELECTORS: dict[str, str] = {
    # Chat list / login
    "search_box": "div[aria-label='Search']",
    "qr_code": '[data-testid="qrcode"]',
    # Open conversation
    "chat_input": "footer div[role='textbox']",
    "group_header": "#main header span[title={name}]",
    "header_name": "#main header span[dir='auto']",
    "chat_menu": "#main header button[aria-label='Menu']",
    "contact_info_item": "div[aria-label='Contact info']",
    "profile_name": "span.selectable-text.copyable-text",
    # Group management
    "add_participant": "//span[contains(text(), 'Add participant')]",
    "participant_search": "div[role='dialog'] div[contenteditable='true']",
    "confirm_participants": "div[role='dialog'] [aria-label='Confirm']",
    "confirm_add": "//div[@role='dialog']//span[text()='Add']",
}


def css_string(value: str) -> str:
    """Quote ``value`` as a CSS string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def selector_for(selectors: dict[str, str], key: str, name: str) -> str:
    """Fill the {name} placeholder of a selector template, e.g. group_header."""
    return selectors[key].replace("{name}", css_string(name))


def load_selectors(override_path: str | Path | None = None) -> dict[str, str]:
    """
    Return the selector table, with overrides merged over the defaults.

    Unknown keys and non-string values in the override file are ignored. A
    missing or unparseable file logs a warning and leaves the defaults in
    place.
    """
    selectors = dict(DEFAULT_SELECTORS)
    if not override_path:
        return selectors

    path = Path(override_path)
    if not path.exists():
        logger.warning("selectors: override file %s not found, using defaults", path)
        return selectors

    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() in (".yaml", ".yml"):
            overrides = yaml.safe_load(text)
        else:
            overrides = json.loads(text)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        logger.warning("selectors: failed to load overrides from %s: %s", path, exc)
        return selectors

    if not isinstance(overrides, dict):
        logger.warning("selectors: override file %s is not a mapping, ignoring", path)
        return selectors

    for key, value in overrides.items():
        if key not in DEFAULT_SELECTORS:
            logger.warning("selectors: ignoring unknown selector key %r", key)
            continue
        if not isinstance(value, str) or not value.strip():
            logger.warning("selectors: ignoring empty or non-string selector for %r", key)
            continue
        selectors[key] = value

    logger.info("selectors: loaded selector overrides from %s", path)
    return selectors

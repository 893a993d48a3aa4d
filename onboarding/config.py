"""Startup configuration for the contact onboarding tool.

Every setting is read from the environment (``.env`` is loaded by the CLI),
validated once, and frozen into an ``OnboardingConfig``. All problems are
collected and reported together so a bad ``.env`` can be fixed in one pass.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from onboarding.errors import ConfigurationError
from onboarding.models import DEFAULT_NAME_LOOKUP_ORDER, Identifier, NameSource
from onboarding.utils.env_helpers import parse_bool, split_csv
from onboarding.utils.logging_config import setup_logger

logger = setup_logger("config")

DEFAULT_SESSION_PATH = "./sessions/whatsapp"
WAIT_TIMEOUT_MS = 5000
LOGIN_TIMEOUT_MS = 150000
INTER_CONTACT_DELAY_MS = 1000


@dataclass(frozen=True)
class OnboardingConfig:
    """Validated settings for one onboarding run."""

    group_name: str
    phone_numbers: list[str]
    session_path: Path = Path(DEFAULT_SESSION_PATH)
    headless: bool = False
    wait_timeout_ms: int = WAIT_TIMEOUT_MS
    login_timeout_ms: int = LOGIN_TIMEOUT_MS
    inter_contact_delay_ms: int = INTER_CONTACT_DELAY_MS
    name_lookup_order: tuple[NameSource, ...] = field(
        default_factory=lambda: DEFAULT_NAME_LOOKUP_ORDER
    )
    selectors_override: Path | None = None
    dry_run: bool = False

    @property
    def identifiers(self) -> list[Identifier]:
        return [Identifier(raw) for raw in self.phone_numbers]


def parse_name_lookup_order(raw: str) -> tuple[NameSource, ...]:
    """Parse "header,contact_info" into NameSource values. Raise ValueError."""
    names = [part.strip().lower() for part in raw.split(",") if part.strip()]
    if not names:
        raise ValueError("at least one name source is required")
    valid = {source.value: source for source in NameSource}
    order: list[NameSource] = []
    for name in names:
        if name not in valid:
            raise ValueError(
                f"unknown name source {name!r} (expected one of {sorted(valid)})"
            )
        if valid[name] in order:
            raise ValueError(f"name source {name!r} listed more than once")
        order.append(valid[name])
    return tuple(order)


def _int_setting(
    env: Mapping[str, str],
    key: str,
    default: int,
    errors: list[str],
    minimum: int = 1,
) -> int:
    raw = env.get(key, "")
    if not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        errors.append(f"{key} must be an integer, got {raw!r}")
        return default
    if value < minimum:
        errors.append(f"{key} must be >= {minimum}, got {value}")
        return default
    return value


def _bool_setting(
    env: Mapping[str, str], key: str, default: bool, errors: list[str]
) -> bool:
    raw = env.get(key, "")
    if not raw.strip():
        return default
    try:
        return parse_bool(raw)
    except ValueError as exc:
        errors.append(f"{key}: {exc}")
        return default


def load_config(
    env: Mapping[str, str] | None = None,
    group_name: str | None = None,
    phone_numbers: str | None = None,
    require_targets: bool = True,
) -> OnboardingConfig:
    """
    Build an OnboardingConfig from environment variables.

    ``group_name`` and ``phone_numbers`` (comma-separated) take precedence
    over WHATSAPP_GROUP_NAME and PHONE_NUMBERS when given. With
    ``require_targets=False`` (browser setup) both may be absent.

    Raises ConfigurationError listing every missing or malformed setting.
    """
    if env is None:
        env = os.environ

    errors: list[str] = []

    group = group_name if group_name is not None else env.get("WHATSAPP_GROUP_NAME", "")
    if require_targets and not group.strip():
        errors.append("WHATSAPP_GROUP_NAME is not set")

    numbers_raw = phone_numbers if phone_numbers is not None else env.get("PHONE_NUMBERS", "")
    numbers: list[str] = []
    if not numbers_raw.strip():
        if require_targets:
            errors.append("PHONE_NUMBERS is not set")
    else:
        numbers = split_csv(numbers_raw)

    try:
        order = parse_name_lookup_order(
            env.get("NAME_LOOKUP_ORDER", "") or "header,contact_info"
        )
    except ValueError as exc:
        errors.append(f"NAME_LOOKUP_ORDER: {exc}")
        order = DEFAULT_NAME_LOOKUP_ORDER

    wait_timeout_ms = _int_setting(env, "WAIT_TIMEOUT_MS", WAIT_TIMEOUT_MS, errors)
    login_timeout_ms = _int_setting(env, "LOGIN_TIMEOUT_MS", LOGIN_TIMEOUT_MS, errors)
    delay_ms = _int_setting(
        env, "INTER_CONTACT_DELAY_MS", INTER_CONTACT_DELAY_MS, errors, minimum=0
    )
    headless = _bool_setting(env, "WHATSAPP_HEADLESS", False, errors)
    dry_run = _bool_setting(env, "DRY_RUN", False, errors)

    if errors:
        raise ConfigurationError("Invalid configuration: " + "; ".join(errors))

    # Malformed entries are passed through, only flagged
    for raw in numbers:
        if not Identifier(raw).is_well_formed:
            logger.warning("config: phone number entry %r does not look like a number", raw)

    override = env.get("WHATSAPP_SELECTORS_OVERRIDE", "").strip()

    return OnboardingConfig(
        group_name=group,
        phone_numbers=numbers,
        session_path=Path(env.get("WHATSAPP_SESSION_PATH") or DEFAULT_SESSION_PATH),
        headless=headless,
        wait_timeout_ms=wait_timeout_ms,
        login_timeout_ms=login_timeout_ms,
        inter_contact_delay_ms=delay_ms,
        name_lookup_order=order,
        selectors_override=Path(override) if override else None,
        dry_run=dry_run,
    )

"""Command line driver: look up phone numbers on WhatsApp Web and add them to a group."""

import argparse
import logging
import sys

from dotenv import load_dotenv

from onboarding.config import OnboardingConfig, load_config
from onboarding.errors import ConfigurationError, SessionError
from onboarding.models import LookupResult
from onboarding.pipeline import ContactOnboardingPipeline
from onboarding.utils.logging_config import configure_logging, setup_logger
from onboarding.whatsapp import (
    WhatsAppGroupEnroller,
    WhatsAppNameResolver,
    WhatsAppPresenceProbe,
    WhatsAppSession,
    load_selectors,
)

EXIT_OK = 0
EXIT_SESSION_ERROR = 1
EXIT_CONFIG_ERROR = 2


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Check phone numbers on WhatsApp Web and add them to a group",
    )
    parser.add_argument(
        "--group", default=None, help="Group name (default: WHATSAPP_GROUP_NAME env)"
    )
    parser.add_argument(
        "--numbers",
        default=None,
        help="Comma-separated phone numbers (default: PHONE_NUMBERS env)",
    )
    parser.add_argument(
        "--headless",
        default=None,
        choices=["true", "false"],
        help="Run browser headless (default: WHATSAPP_HEADLESS env, or false)",
    )
    parser.add_argument(
        "--keep-open",
        action="store_true",
        help="Leave the browser open after the run until Enter is pressed",
    )
    parser.add_argument(
        "--setup",
        action="store_true",
        help="Open a visible browser for QR code login, then exit",
    )
    parser.add_argument(
        "--log-level", default=None, help="Logging level (e.g. DEBUG, INFO, WARNING)"
    )
    return parser


def build_session(config: OnboardingConfig, headless: bool | None = None) -> WhatsAppSession:
    return WhatsAppSession(
        session_path=config.session_path,
        headless=config.headless if headless is None else headless,
        selectors=load_selectors(config.selectors_override),
        login_timeout_ms=config.login_timeout_ms,
    )


def run_onboarding(config: OnboardingConfig, session: WhatsAppSession) -> list[LookupResult]:
    """Wire the WhatsApp stages to a started session and process every number."""
    pipeline = ContactOnboardingPipeline(
        probe=WhatsAppPresenceProbe(session, timeout_ms=config.wait_timeout_ms),
        resolver=WhatsAppNameResolver(
            session, order=config.name_lookup_order, timeout_ms=config.wait_timeout_ms
        ),
        enroller=WhatsAppGroupEnroller(
            session, timeout_ms=config.wait_timeout_ms, dry_run=config.dry_run
        ),
        group_name=config.group_name,
        pause=lambda: session.sleep(config.inter_contact_delay_ms),
    )
    return pipeline.run(config.identifiers)


def _wait_for_enter(prompt: str, logger: logging.Logger) -> None:
    try:
        input(prompt)
    except EOFError:
        logger.warning("stdin is not interactive, not waiting for Enter")


def main(argv: list[str] | None = None) -> int:
    load_dotenv(override=True)
    args = build_parser().parse_args(argv)
    # Loggers created at import time predate .env and --log-level
    configure_logging(args.log_level)
    logger = setup_logger("onboarding")

    try:
        config = load_config(
            group_name=args.group,
            phone_numbers=args.numbers,
            require_targets=not args.setup,
        )
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return EXIT_CONFIG_ERROR

    if args.setup:
        session = build_session(config, headless=False)
        try:
            session.start()
            _wait_for_enter("Logged in. Press Enter to save the session and exit. ", logger)
        except SessionError as exc:
            logger.error("%s", exc)
            return EXIT_SESSION_ERROR
        finally:
            session.close()
        return EXIT_OK

    headless = None if args.headless is None else args.headless == "true"
    session = build_session(config, headless=headless)
    try:
        session.start()
    except SessionError as exc:
        logger.error("%s", exc)
        return EXIT_SESSION_ERROR

    try:
        results = run_onboarding(config, session)
        found = sum(1 for r in results if r.present)
        enrolled = sum(1 for r in results if r.enrolled)
        logger.info(
            "Processed %d number(s): %d found, %d added to %s",
            len(results),
            found,
            enrolled,
            config.group_name,
        )
        if args.keep_open:
            _wait_for_enter("Run complete. Press Enter to close the browser. ", logger)
    finally:
        session.close()

    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())

"""WhatsApp Web browser session backed by Playwright.

The session is the only place that talks to Playwright. Every Playwright
exception is translated at this boundary:

- playwright TimeoutError -> ElementNotFoundError
- any other playwright Error -> InteractionError

so the pipeline stages only ever handle OnboardingError subclasses.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from onboarding.errors import (
    ElementNotFoundError,
    InteractionError,
    OnboardingError,
    SessionError,
)
from onboarding.utils.logging_config import setup_logger
from onboarding.whatsapp.selectors import DEFAULT_SELECTORS

WHATSAPP_URL = "https://web.whatsapp.com"
LOGIN_TIMEOUT = 150000  # ms to wait for the chat list (covers a QR scan)


class WhatsAppSession:
    """
    A persistent Chromium context pointed at WhatsApp Web.

    The browser is launched by ``start()`` and released only by ``close()``;
    nothing closes it implicitly, so callers decide whether the window stays
    open after a run.
    """

    def __init__(
        self,
        session_path: str | Path = "./sessions/whatsapp",
        headless: bool = False,
        selectors: dict[str, str] | None = None,
        login_timeout_ms: int = LOGIN_TIMEOUT,
    ) -> None:
        self.session_path: Path = Path(session_path)
        self.headless: bool = headless
        self.selectors: dict[str, str] = selectors or dict(DEFAULT_SELECTORS)
        self.login_timeout_ms: int = login_timeout_ms
        self.logger: logging.Logger = setup_logger("session")

        # Browser state — lazy; NOT initialised in constructor
        self._playwright = None
        self._browser = None
        self._page = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_alive(self) -> bool:
        if self._page is None:
            return False
        try:
            return not self._page.is_closed()
        except PlaywrightError:
            return False

    @property
    def page(self) -> Any:
        if not self.is_alive:
            raise SessionError("browser session is not running")
        return self._page

    def start(self) -> None:
        """
        Launch the browser and wait until WhatsApp Web is usable.

        1. Launch a persistent context at session_path (keeps the login)
        2. Navigate to https://web.whatsapp.com
        3. Wait up to login_timeout_ms for the chat search box or the QR code
        4. QR code shown: raise SessionError when headless, otherwise keep
           waiting for the search box while the user scans it
        5. On any failure → close everything, raise SessionError
        """
        if self.is_alive:
            return

        self.session_path.mkdir(parents=True, exist_ok=True)

        try:
            from playwright.sync_api import sync_playwright  # noqa: PLC0415

            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch_persistent_context(
                user_data_dir=str(self.session_path),
                headless=self.headless,
                viewport={"width": 1280, "height": 720},
                user_agent=(
                    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
                    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
                ),
            )
            pages = self._browser.pages
            self._page = pages[0] if pages else self._browser.new_page()
        except PlaywrightError as exc:
            self.close()
            raise SessionError(f"failed to launch browser: {exc}") from exc

        try:
            self.open(WHATSAPP_URL)
            self.logger.info("Opened WhatsApp Web. Scan the QR code if prompted.")
            self.wait_for_element(
                f'{self.selectors["search_box"]}, {self.selectors["qr_code"]}',
                self.login_timeout_ms,
            )
            if self._qr_code_shown():
                if self.headless:
                    raise SessionError(
                        "QR scan required. Run with --headless false to authenticate."
                    )
                self.logger.info("Waiting for the QR code to be scanned...")
                self.wait_for_element(self.selectors["search_box"], self.login_timeout_ms)
        except SessionError:
            self.close()
            raise
        except OnboardingError as exc:
            self.close()
            raise SessionError(
                "WhatsApp Web did not finish loading. "
                "Scan the QR code (run with headless disabled) and check your network."
            ) from exc

        self.logger.info("WhatsApp Web loaded, chat list is ready")

    def close(self) -> None:
        """Close browser context gracefully. Login state is persisted to disk."""
        if self._browser is not None:
            try:
                self._browser.close()
                self.logger.info("browser closed")
            except Exception as exc:
                self.logger.warning("error closing browser: %s", exc)
        self._browser = None
        self._page = None

        if self._playwright is not None:
            try:
                self._playwright.stop()
            except Exception as exc:
                self.logger.warning("error stopping playwright: %s", exc)
            self._playwright = None

    # ------------------------------------------------------------------
    # Page capabilities
    # ------------------------------------------------------------------

    def open(self, url: str) -> None:
        with self._playwright_errors("open", url):
            self.page.goto(url, wait_until="domcontentloaded")

    def wait_for_element(self, selector: str, timeout_ms: int) -> Any:
        """Return the first visible match, or raise ElementNotFoundError."""
        with self._playwright_errors("wait", selector, timeout_ms):
            element = self.page.wait_for_selector(
                selector, timeout=timeout_ms, state="visible"
            )
        if element is None:
            raise ElementNotFoundError(selector, timeout_ms)
        return element

    def find_element(self, selector: str) -> Any:
        """Return the first current match without waiting."""
        with self._playwright_errors("find", selector):
            element = self.page.query_selector(selector)
        if element is None:
            raise ElementNotFoundError(selector)
        return element

    def click(self, element: Any) -> None:
        with self._playwright_errors("click"):
            element.click()

    def send_keys(self, element: Any, text: str, submit: bool = False) -> None:
        """Replace the element's text with ``text``; press Enter if ``submit``."""
        with self._playwright_errors("type"):
            element.fill(text)
            if submit:
                element.press("Enter")

    def get_text(self, element: Any) -> str:
        with self._playwright_errors("read"):
            return (element.inner_text() or "").strip()

    def press(self, *keys: str) -> None:
        """Press keys in order on the page (e.g. press("Escape"))."""
        with self._playwright_errors("press"):
            for key in keys:
                self.page.keyboard.press(key)

    def sleep(self, ms: int) -> None:
        if ms <= 0:
            return
        with self._playwright_errors("sleep"):
            self.page.wait_for_timeout(ms)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _qr_code_shown(self) -> bool:
        try:
            self.find_element(self.selectors["qr_code"])
        except ElementNotFoundError:
            return False
        return True

    @contextmanager
    def _playwright_errors(
        self,
        action: str,
        target: str | None = None,
        timeout_ms: int | None = None,
    ) -> Iterator[None]:
        try:
            yield
        except PlaywrightTimeoutError as exc:
            raise ElementNotFoundError(target or action, timeout_ms) from exc
        except PlaywrightError as exc:
            detail = f" {target}" if target else ""
            raise InteractionError(f"{action}{detail} failed: {exc}") from exc

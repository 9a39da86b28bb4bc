"""Page fetchers backed by plain HTTP or a headless Chrome session."""

from __future__ import annotations

from typing import Callable, Optional

import requests
from bs4 import BeautifulSoup
from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from kurs_lark.exceptions import FetchError
from kurs_lark.ingestion.models import SourceConfig
from kurs_lark.ingestion.strategy import PageFetcher
from kurs_lark.utils.logger import get_logger

LOGGER = get_logger(__name__)

PAGE_LOAD_TIMEOUT = 30
SELECTOR_TIMEOUT = 15
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/130.0.0.0 Safari/537.36"
)


class RequestsPageFetcher:
    """Fetch pages with ``requests`` and parse them with BeautifulSoup."""

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        timeout: int = PAGE_LOAD_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", user_agent)
        self.session.headers.setdefault(
            "Accept", "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
        )
        self.session.headers.setdefault("Accept-Language", "id-ID,id;q=0.9,en;q=0.8")

    def fetch(self, config: SourceConfig) -> BeautifulSoup:
        LOGGER.info("Fetching %s rates from %s", config.name, config.url)
        try:
            response = self.session.get(config.url, timeout=self.timeout)
            self._raise_with_context(response, config)
        except requests.RequestException as exc:
            raise FetchError(config.name, f"Failed to fetch {config.url}: {exc}") from exc

        soup = BeautifulSoup(response.text, "html.parser")
        if not soup.select(config.selector):
            raise FetchError(
                config.name, f"No elements matching {config.selector!r} found on {config.url}"
            )
        return soup

    @staticmethod
    def _raise_with_context(response: requests.Response, config: SourceConfig) -> None:
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = response.status_code
            hint = ""
            if status in {403, 429}:
                hint = " The bank may be blocking automated requests; try the selenium fetcher."
            raise FetchError(
                config.name, f"{config.url} responded with HTTP {status}.{hint}"
            ) from exc


def _default_chrome(headless: bool) -> webdriver.Chrome:
    options = Options()
    if headless:
        options.add_argument("--headless=new")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-setuid-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--disable-gpu")
    options.add_argument("--no-zygote")
    options.add_argument("--disable-blink-features=AutomationControlled")
    options.add_experimental_option("excludeSwitches", ["enable-automation"])
    return webdriver.Chrome(options=options)


class SeleniumPageFetcher:
    """Render pages in headless Chrome before parsing them.

    Each call starts and quits its own driver so concurrent sources never share
    a browser session.
    """

    def __init__(
        self,
        *,
        headless: bool = True,
        page_load_timeout: int = PAGE_LOAD_TIMEOUT,
        selector_timeout: int = SELECTOR_TIMEOUT,
        driver_factory: Callable[[], webdriver.Chrome] | None = None,
    ) -> None:
        self.headless = headless
        self.page_load_timeout = page_load_timeout
        self.selector_timeout = selector_timeout
        self._driver_factory = driver_factory or (lambda: _default_chrome(self.headless))

    def fetch(self, config: SourceConfig) -> BeautifulSoup:
        LOGGER.info("Starting %s scraper (selenium) for %s", config.name, config.url)
        try:
            driver = self._driver_factory()
        except WebDriverException as exc:
            raise FetchError(config.name, f"Unable to start Chrome: {exc.msg or exc}") from exc
        try:
            driver.set_page_load_timeout(self.page_load_timeout)
            try:
                driver.get(config.url)
            except TimeoutException as exc:
                raise FetchError(
                    config.name,
                    f"Page load of {config.url} exceeded {self.page_load_timeout}s",
                ) from exc
            WebDriverWait(driver, self.selector_timeout).until(
                EC.presence_of_element_located((By.CSS_SELECTOR, config.selector))
            )
            return BeautifulSoup(driver.page_source, "html.parser")
        except TimeoutException as exc:
            raise FetchError(
                config.name, f"Timed out waiting for {config.selector!r} on {config.url}"
            ) from exc
        except WebDriverException as exc:
            raise FetchError(config.name, f"Browser error on {config.url}: {exc.msg or exc}") from exc
        finally:
            driver.quit()


def build_fetcher(kind: str, **kwargs) -> PageFetcher:
    """Return the fetcher registered under ``kind`` (``requests`` or ``selenium``)."""

    if kind == "requests":
        return RequestsPageFetcher(**kwargs)
    if kind == "selenium":
        return SeleniumPageFetcher(**kwargs)
    raise ValueError(f"Unsupported fetcher: {kind}")


__all__ = [
    "RequestsPageFetcher",
    "SeleniumPageFetcher",
    "build_fetcher",
    "PAGE_LOAD_TIMEOUT",
    "SELECTOR_TIMEOUT",
]

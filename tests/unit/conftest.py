"""
Fakes of the Playwright objects the toolset touches.

They model just enough DOM behavior (visibility, values, select-all + delete,
navigation on click) to exercise the tools without launching a browser.
"""

import asyncio
from collections import defaultdict
from pathlib import Path
from typing import Optional

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from browser_toolset.browser import session as session_module
from browser_toolset.browser.session import BrowserConfig, BrowserSession
from browser_toolset.tools import interactions


class FakeElement:
    """
    An input-like element. ``max_length`` mimics a field that truncates input.

    A click on an element with ``navigates_to`` issues the document request at
    once and commits ``commit_after_ms`` later (None: never commits).
    ``click_delay_ms`` stands for time spent waiting for actionability.
    """

    def __init__(
        self,
        value: str = "",
        max_length: Optional[int] = None,
        navigates_to: Optional[str] = None,
        commit_after_ms: Optional[int] = 0,
        click_delay_ms: int = 0,
        reject_click: Optional[str] = None,
        editable: bool = True,
    ):
        self.value = value
        self.max_length = max_length
        self.navigates_to = navigates_to
        self.commit_after_ms = commit_after_ms
        self.click_delay_ms = click_delay_ms
        self.reject_click = reject_click
        self.editable = editable
        self.selected = False
        self.page: Optional["FakePage"] = None
        self.calls: list[str] = []

    @property
    def first(self) -> "FakeElement":
        return self

    async def scroll_into_view_if_needed(self, timeout=None):
        self.calls.append("scroll")

    async def click(self, click_count: int = 1, timeout=None):
        self.calls.append(f"click:{click_count}")
        if self.click_delay_ms:
            await asyncio.sleep(self.click_delay_ms / 1000)
        if self.reject_click:
            raise PlaywrightError(self.reject_click)
        self.page.focused = self
        self.selected = click_count >= 3
        if self.navigates_to:
            self.page.start_navigation(self.navigates_to, self.commit_after_ms)

    async def fill(self, text: str, timeout=None):
        self.calls.append("fill")
        if not self.editable:
            raise PlaywrightError("Element is not an <input>, <textarea> or <select> element")
        self.value = text if self.max_length is None else text[: self.max_length]

    async def input_value(self, timeout=None) -> str:
        if not self.editable:
            raise PlaywrightError("Not an input element")
        return self.value


class FakeKeyboard:
    def __init__(self, page: "FakePage"):
        self.page = page
        self.pressed: list[str] = []

    async def press(self, key: str):
        self.pressed.append(key)
        element = self.page.focused
        if key == "Backspace" and element is not None and element.selected:
            element.value = ""
            element.selected = False


class FakeRequest:
    def __init__(self, url: str, frame, navigation: bool = True):
        self.url = url
        self.frame = frame
        self.navigation = navigation

    def is_navigation_request(self) -> bool:
        return self.navigation


class FakeResponse:
    def __init__(self, status: int = 200):
        self.status = status


class FakePage:
    def __init__(self, elements: Optional[dict[str, FakeElement]] = None):
        self.elements = elements or {}
        for element in self.elements.values():
            element.page = self
        self.url = "about:blank"
        self.page_title = ""
        self.main_frame = object()
        self.keyboard = FakeKeyboard(self)
        self.focused: Optional[FakeElement] = None
        self.listeners: dict[str, list] = defaultdict(list)
        self.goto_error: Optional[Exception] = None
        self.screenshot_error: Optional[Exception] = None
        self.screenshots: list[bool] = []
        self.load_states: list[str] = []
        self.navigation_timeout = None

    def add(self, selector: str, **kwargs) -> FakeElement:
        element = FakeElement(**kwargs)
        element.page = self
        self.elements[selector] = element
        return element

    def on(self, event: str, handler):
        self.listeners[event].append(handler)

    def remove_listener(self, event: str, handler):
        self.listeners[event].remove(handler)

    def emit(self, event: str, payload):
        for handler in list(self.listeners[event]):
            handler(payload)

    def start_navigation(self, url: str, commit_after_ms: Optional[int] = 0):
        self.emit("request", FakeRequest(url, self.main_frame))
        if commit_after_ms is None:
            return
        if commit_after_ms == 0:
            self.commit(url)
        else:
            asyncio.get_running_loop().call_later(commit_after_ms / 1000, self.commit, url)

    def commit(self, url: str):
        self.url = url
        self.emit("framenavigated", self.main_frame)

    def set_default_navigation_timeout(self, timeout):
        self.navigation_timeout = timeout

    async def wait_for_selector(self, selector: str, state: str = "visible", timeout=None):
        if selector not in self.elements:
            raise PlaywrightTimeoutError(
                f'Timeout {timeout}ms exceeded waiting for locator("{selector}") to be {state}'
            )

    def locator(self, selector: str) -> FakeElement:
        return self.elements[selector]

    async def wait_for_load_state(self, state: str = "load", timeout=None):
        self.load_states.append(state)

    async def goto(self, url: str, wait_until: str = "load", timeout=None):
        if self.goto_error is not None:
            raise self.goto_error
        self.url = url
        return FakeResponse(200)

    async def title(self) -> str:
        return self.page_title

    async def screenshot(self, full_page: bool = False) -> bytes:
        if self.screenshot_error is not None:
            raise self.screenshot_error
        self.screenshots.append(full_page)
        return b"\x89PNG fake"


class FakeBrowser:
    def __init__(self, page: FakePage):
        self.page = page
        self.closed = False
        self.close_error: Optional[Exception] = None

    async def new_page(self, viewport=None):
        return self.page

    async def close(self):
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


class FakeChromium:
    def __init__(self, page: FakePage):
        self.page = page
        self.launches: list[dict] = []
        self.browsers: list[FakeBrowser] = []
        self.launch_error: Optional[Exception] = None

    async def launch(self, **options):
        self.launches.append(options)
        if self.launch_error is not None:
            raise self.launch_error
        browser = FakeBrowser(self.page)
        self.browsers.append(browser)
        return browser


class FakePlaywright:
    def __init__(self, page: FakePage):
        self.chromium = FakeChromium(page)
        self.stopped = 0

    async def stop(self):
        self.stopped += 1


class _PlaywrightStarter:
    def __init__(self, playwright: FakePlaywright):
        self.playwright = playwright

    async def start(self) -> FakePlaywright:
        return self.playwright


def _fake_expect(locator: FakeElement):
    class _Assertions:
        async def to_have_value(self, expected: str, timeout=None):
            if locator.value != expected:
                raise AssertionError(
                    f"Locator expected to have Value '{expected}'\nActual value: {locator.value}"
                )

    return _Assertions()


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def fake_playwright(monkeypatch, fake_page) -> FakePlaywright:
    playwright = FakePlaywright(fake_page)
    monkeypatch.setattr(session_module, "async_playwright", lambda: _PlaywrightStarter(playwright))
    monkeypatch.setattr(interactions, "expect", _fake_expect)
    return playwright


@pytest.fixture
def config(tmp_path) -> BrowserConfig:
    return BrowserConfig(
        headless=True,
        channel=None,
        navigation_grace_ms=50,
        screenshot_dir=tmp_path,
    )


@pytest.fixture
def session(config, fake_playwright) -> BrowserSession:
    return BrowserSession(config)

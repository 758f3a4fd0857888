"""
Integration Tests

Drive headless Chromium through the tool façade against local pages:
- Signup happy path (open, navigate, click, fill x5, submit, screenshot)
- Missing element with a short timeout
- Field that truncates its input
- Clicks that do and do not navigate, and one whose server answers slowly
"""

import asyncio
import time

import pytest
import pytest_asyncio

from browser_toolset.browser import BrowserConfig, BrowserSession
from browser_toolset.errors import ElementNotFoundError, NoSessionError, ValidationError
from browser_toolset.tools import invoke_tool

pytestmark = pytest.mark.integration


HOME_PAGE = """<!doctype html>
<html><head><title>UI Vault</title></head>
<body>
  <nav><a href="signup.html">Sign Up</a></nav>
  <h1>Components</h1>
</body></html>
"""

SIGNUP_PAGE = """<!doctype html>
<html><head><title>Sign Up</title></head>
<body>
  <form action="done.html" method="get">
    <input id="firstName" name="firstName">
    <input id="lastName" name="lastName" value="prefilled">
    <input type="email" name="email">
    <input id="password" name="password" type="password">
    <input id="confirmPassword" name="confirmPassword" type="password">
    <button type="submit">Create Account</button>
  </form>
  <button id="noop" type="button" onclick="this.textContent = 'Clicked'">Toggle</button>
</body></html>
"""

DONE_PAGE = """<!doctype html>
<html><head><title>Welcome</title></head>
<body><h1>Account created</h1></body></html>
"""

TRUNCATING_PAGE = """<!doctype html>
<html><head><title>Truncating</title></head>
<body>
  <input id="password" oninput="this.value = this.value.slice(0, 4)">
</body></html>
"""

SLOW_LINK_PAGE = """<!doctype html>
<html><head><title>Checkout</title></head>
<body><a href="/slow">Place order</a></body></html>
"""


@pytest.fixture
def site(tmp_path):
    """Write the test pages and return the site directory."""
    root = tmp_path / "site"
    root.mkdir()
    (root / "index.html").write_text(HOME_PAGE)
    (root / "signup.html").write_text(SIGNUP_PAGE)
    (root / "done.html").write_text(DONE_PAGE)
    (root / "truncating.html").write_text(TRUNCATING_PAGE)
    return root


@pytest_asyncio.fixture
async def session(tmp_path):
    config = BrowserConfig(
        headless=True,
        channel=None,
        screenshot_dir=tmp_path / "shots",
    )
    async with BrowserSession(config) as session:
        yield session


@pytest.mark.asyncio
async def test_signup_happy_path(session, site, tmp_path):
    opened = await invoke_tool(session, "open_browser")
    assert opened.success

    page_result = await invoke_tool(session, "open_url", {"url": (site / "index.html").as_uri()})
    assert page_result.data["title"] == "UI Vault"

    clicked = await invoke_tool(session, "click_selector", {"selector": 'text="Sign Up"'})
    assert clicked.data["navigated"] is True
    assert clicked.data["url"].endswith("signup.html")

    fields = {
        "#firstName": "Sinu",
        "#lastName": "Biswal",
        'input[type="email"]': "sinu@example.com",
        "#password": "123456",
        "#confirmPassword": "123456",
    }
    for selector, text in fields.items():
        filled = await invoke_tool(session, "fill_input", {"selector": selector, "text": text})
        assert filled.data["actualValue"] == text

    submitted = await invoke_tool(
        session, "click_selector", {"selector": 'button:has-text("Create Account")'}
    )
    assert submitted.data["navigated"] is True
    assert "done.html" in submitted.data["url"]
    assert "lastName=Biswal" in submitted.data["url"]

    shot = await invoke_tool(session, "take_screenshot")
    artifact = tmp_path / "shots" / shot.data["savedAs"]
    assert artifact.exists()
    assert artifact.stat().st_size > 0


@pytest.mark.asyncio
async def test_missing_element_fails_within_timeout(session):
    await invoke_tool(session, "open_browser")
    await invoke_tool(session, "open_url", {"url": "about:blank"})

    start = time.monotonic()
    with pytest.raises(ElementNotFoundError) as exc_info:
        await invoke_tool(
            session, "click_selector", {"selector": "#does-not-exist", "timeoutMs": 500}
        )
    elapsed = time.monotonic() - start

    assert exc_info.value.selector == "#does-not-exist"
    assert 0.4 <= elapsed < 2.0


@pytest.mark.asyncio
async def test_truncating_field_fails_validation(session, site):
    await invoke_tool(session, "open_browser")
    await invoke_tool(session, "open_url", {"url": (site / "truncating.html").as_uri()})

    with pytest.raises(ValidationError) as exc_info:
        await invoke_tool(session, "fill_input", {"selector": "#password", "text": "abc123"})

    assert exc_info.value.expected == "abc123"
    assert exc_info.value.actual == "abc1"


@pytest.mark.asyncio
async def test_click_without_navigation_returns(session, site):
    await invoke_tool(session, "open_browser")
    await invoke_tool(session, "open_url", {"url": (site / "signup.html").as_uri()})

    result = await invoke_tool(session, "click_selector", {"selector": "#noop"})

    assert result.data["navigated"] is False
    assert await session.page.text_content("#noop") == "Clicked"


@pytest.mark.asyncio
async def test_open_browser_twice_keeps_one_page(session):
    await invoke_tool(session, "open_browser")
    page = session.page

    again = await invoke_tool(session, "open_browser")

    assert again.data["already_open"] is True
    assert session.page is page


@pytest.mark.asyncio
async def test_screenshot_before_open_browser(session):
    with pytest.raises(NoSessionError):
        await invoke_tool(session, "take_screenshot")


@pytest.mark.asyncio
async def test_click_waits_for_slow_server_response(session):
    await invoke_tool(session, "open_browser")

    async def serve(route):
        if route.request.url.endswith("/slow"):
            await asyncio.sleep(2)
            await route.fulfill(content_type="text/html", body=DONE_PAGE)
        else:
            await route.fulfill(content_type="text/html", body=SLOW_LINK_PAGE)

    await session.page.route("http://shop.test/**", serve)
    await invoke_tool(session, "open_url", {"url": "http://shop.test/"})

    result = await invoke_tool(session, "click_selector", {"selector": 'text="Place order"'})

    assert result.data["navigated"] is True
    assert result.data["url"] == "http://shop.test/slow"
    assert await session.page.title() == "Welcome"

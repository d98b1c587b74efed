"""Unit tests for the browser pool with a fake Playwright driver."""

import asyncio
from contextlib import asynccontextmanager

import pytest
from playwright.async_api import Error as PlaywrightError

from dossier.contexts.rendering import BrowserPool, RenderEngineError, get_browser_pool
from dossier.utils import load_settings


class FakeBrowser:
    def __init__(self, driver):
        self.driver = driver
        self.closed = False

    async def close(self):
        self.closed = True
        self.driver.closed += 1


class FakeChromium:
    def __init__(self, driver):
        self.driver = driver

    async def launch(self, **options):
        self.driver.launch_options.append(options)
        if self.driver.fail_launch:
            raise PlaywrightError("Executable doesn't exist")
        browser = FakeBrowser(self.driver)
        self.driver.browsers.append(browser)
        return browser


class FakeDriver:
    """Replaces async_playwright(); counts launches and closes."""

    def __init__(self, fail_launch=False, fail_start=False):
        self.fail_launch = fail_launch
        self.fail_start = fail_start
        self.launch_options = []
        self.browsers = []
        self.closed = 0
        self.chromium = FakeChromium(self)

    @asynccontextmanager
    async def __call__(self):
        if self.fail_start:
            raise PlaywrightError("Playwright driver failed to start")
        yield self


@pytest.fixture
def driver(monkeypatch):
    fake = FakeDriver()
    monkeypatch.setattr("dossier.contexts.rendering.browser_pool.async_playwright", fake)
    return fake


@pytest.mark.unit
def test_fresh_instance_per_use(driver):
    pool = BrowserPool(max_instances=2)

    async def use_twice():
        async with pool.instance() as first:
            pass
        async with pool.instance() as second:
            pass
        return first, second

    first, second = asyncio.run(use_twice())

    assert first is not second
    assert first.closed and second.closed
    assert pool.active == 0


@pytest.mark.unit
def test_instance_closed_on_failure(driver):
    pool = BrowserPool()

    async def fail_inside():
        async with pool.instance():
            raise RuntimeError("render failed")

    with pytest.raises(RuntimeError):
        asyncio.run(fail_inside())

    assert driver.closed == 1
    assert pool.active == 0


@pytest.mark.unit
def test_concurrent_instances_bounded(driver):
    pool = BrowserPool(max_instances=2)
    peak = 0

    async def render():
        nonlocal peak
        async with pool.instance():
            peak = max(peak, pool.active)
            await asyncio.sleep(0.01)

    async def render_many():
        await asyncio.gather(*(render() for _ in range(5)))

    asyncio.run(render_many())

    assert peak == 2
    assert len(driver.browsers) == driver.closed == 5


@pytest.mark.unit
def test_launch_failure_wrapped(monkeypatch):
    monkeypatch.setattr(
        "dossier.contexts.rendering.browser_pool.async_playwright", FakeDriver(fail_launch=True)
    )
    pool = BrowserPool()

    async def launch():
        async with pool.instance():
            pass

    with pytest.raises(RenderEngineError) as exc_info:
        asyncio.run(launch())

    assert exc_info.value.stage == "launch"
    assert pool.active == 0


@pytest.mark.unit
def test_driver_start_failure_wrapped(monkeypatch):
    driver = FakeDriver(fail_start=True)
    monkeypatch.setattr("dossier.contexts.rendering.browser_pool.async_playwright", driver)
    pool = BrowserPool()

    async def launch():
        async with pool.instance():
            pass

    with pytest.raises(RenderEngineError) as exc_info:
        asyncio.run(launch())

    assert exc_info.value.stage == "launch"
    assert exc_info.value.kind == "engine"
    assert driver.launch_options == []


@pytest.mark.unit
def test_launch_options_from_settings(driver):
    settings = load_settings(
        overrides={"engine": {"executable_path": "/opt/chrome", "launch_timeout_ms": 1234}}
    )
    pool = BrowserPool.from_settings(settings)

    async def launch():
        async with pool.instance():
            pass

    asyncio.run(launch())

    options = driver.launch_options[0]
    assert options["executable_path"] == "/opt/chrome"
    assert options["timeout"] == 1234
    assert "--no-sandbox" in options["args"]


@pytest.mark.unit
def test_shared_pool_per_loop():
    settings = load_settings()

    async def pools():
        return get_browser_pool(settings), get_browser_pool(settings)

    first, second = asyncio.run(pools())
    assert first is second


@pytest.mark.unit
def test_invalid_pool_size():
    with pytest.raises(ValueError):
        BrowserPool(max_instances=0)

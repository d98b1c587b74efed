"""
Browser engine lifecycle.

Every render gets a fresh Chromium instance that is closed when the render
finishes, fails or is cancelled. A semaphore caps how many instances run at
once; requests beyond the cap wait for a free slot.
"""

import asyncio
import weakref
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional, Tuple

from omegaconf import OmegaConf
from playwright.async_api import Browser, async_playwright
from playwright.async_api import Error as PlaywrightError

from dossier.contexts.rendering.exceptions import RenderEngineError
from dossier.contexts.rendering.logger import _log_debug


class BrowserPool:
    """
    Bounded source of short-lived Chromium instances.

    Usage:
        pool = BrowserPool(max_instances=2)
        async with pool.instance() as browser:
            page = await browser.new_page()
    """

    def __init__(
        self,
        max_instances: int = 4,
        executable_path: Optional[str] = None,
        args: Optional[List[str]] = None,
        launch_timeout_ms: int = 30000,
    ):
        if max_instances < 1:
            raise ValueError(f"max_instances must be at least 1, got {max_instances}")
        self.max_instances = max_instances
        self.executable_path = executable_path
        self.args = list(args or [])
        self.launch_timeout_ms = launch_timeout_ms
        self.active = 0
        self._semaphore = asyncio.Semaphore(max_instances)

    @classmethod
    def from_settings(cls, settings) -> "BrowserPool":
        engine = settings.engine
        return cls(
            max_instances=engine.max_instances,
            executable_path=engine.executable_path,
            args=OmegaConf.to_container(engine.args),
            launch_timeout_ms=engine.launch_timeout_ms,
        )

    @asynccontextmanager
    async def instance(self) -> AsyncIterator[Browser]:
        """
        Launch a browser for the duration of the block.

        Raises:
            RenderEngineError: stage "launch" if the driver or Chromium cannot start
        """
        async with self._semaphore, AsyncExitStack() as stack:
            try:
                playwright = await stack.enter_async_context(async_playwright())
                browser = await playwright.chromium.launch(
                    headless=True,
                    args=self.args,
                    executable_path=self.executable_path,
                    timeout=self.launch_timeout_ms,
                )
            except (PlaywrightError, OSError) as e:
                raise RenderEngineError(
                    "Failed to launch browser", stage="launch", original_error=e
                ) from e

            self.active += 1
            _log_debug(f"Browser launched ({self.active}/{self.max_instances} active)")
            try:
                yield browser
            finally:
                self.active -= 1
                await browser.close()
                _log_debug("Browser closed")


# One pool per event loop and engine configuration
_POOLS: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, Dict[Tuple, BrowserPool]]" = (
    weakref.WeakKeyDictionary()
)


def get_browser_pool(settings) -> BrowserPool:
    """Shared pool for the running event loop, created on first use."""
    engine = settings.engine
    key = (
        engine.max_instances,
        engine.executable_path,
        tuple(engine.args),
        engine.launch_timeout_ms,
    )
    pools = _POOLS.setdefault(asyncio.get_running_loop(), {})
    if key not in pools:
        pools[key] = BrowserPool.from_settings(settings)
    return pools[key]

"""
Page-Fit Rendering

Converts a markup document into a paginated PDF with a headless browser and
reports how well it fits the requested page count.

Two measurements per render:
  - content height: scroll height of the document root, measured at the
    printable width before pagination
  - actual pages: structural page count of the produced PDF (ground truth)

    fill_ratio = min(1, content_height / (usable_height_per_page × target_pages))

where usable_height_per_page is the page height minus the top and bottom
margins for the target page count. Heights are CSS pixels (96 per inch);
margins are points (72 per inch).
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Optional, Tuple, TypeVar

from playwright.async_api import Error as PlaywrightError

from dossier.contexts.layout.resolver import PageMargins, base_page_margins, coerce_target_pages
from dossier.contexts.rendering.browser_pool import BrowserPool, get_browser_pool
from dossier.contexts.rendering.exceptions import RenderEngineError
from dossier.contexts.rendering.logger import _log_debug
from dossier.utils.pdf_processing import page_count
from dossier.utils.settings import load_settings

T = TypeVar("T")

POINTS_PER_INCH = 72

# Physical page sizes in inches; other formats use page.width_in / page.height_in
PAGE_SIZES_IN = {
    "letter": (8.5, 11.0),
    "legal": (8.5, 14.0),
    "a4": (8.27, 11.69),
}

MEASURE_SCRIPT = """
(selector) => {
    const root = document.querySelector(selector) || document.body;
    return Math.max(root.scrollHeight, root.getBoundingClientRect().height);
}
"""


@dataclass
class DocumentRender:
    """
    Result of one page-fit render.

    Attributes:
        artifact: PDF bytes
        actual_pages: Page count of the produced PDF
        fill_ratio: Content height over usable height across the target pages, in [0, 1]
        content_height_px: Measured content height in CSS pixels
    """

    artifact: bytes
    actual_pages: int
    fill_ratio: float
    content_height_px: float


def page_dimensions_in(settings) -> Tuple[float, float]:
    """Page (width, height) in inches for the configured format."""
    size = PAGE_SIZES_IN.get(str(settings.page.format).lower())
    if size is not None:
        return size
    return float(settings.page.width_in), float(settings.page.height_in)


def _points_to_px(points: float, px_per_in: float) -> float:
    return points * px_per_in / POINTS_PER_INCH


def usable_height_px(margins: PageMargins, settings=None) -> float:
    """Printable height of one page in CSS pixels."""
    settings = settings or load_settings()
    px_per_in = settings.page.css_px_per_in
    _, height_in = page_dimensions_in(settings)
    return height_in * px_per_in - _points_to_px(margins.top + margins.bottom, px_per_in)


def usable_width_px(margins: PageMargins, settings=None) -> float:
    """Printable width of one page in CSS pixels."""
    settings = settings or load_settings()
    px_per_in = settings.page.css_px_per_in
    width_in, _ = page_dimensions_in(settings)
    return width_in * px_per_in - _points_to_px(margins.left + margins.right, px_per_in)


def compute_fill_ratio(
    content_height_px: float,
    target_pages,
    margins: Optional[PageMargins] = None,
    settings=None,
) -> float:
    """
    Fraction of the usable area across the target pages that the content fills, clamped to [0, 1].

    Args:
        content_height_px: Measured content height
        target_pages: 1, 2 or 3
        margins: Page margins used for the render (base margins for the
                 target page count if omitted)
        settings: Loaded settings (packaged defaults if omitted)

    Example:
        >>> compute_fill_ratio(0, 1)
        0.0
    """
    pages = coerce_target_pages(target_pages)
    margins = margins or base_page_margins(pages)
    usable = usable_height_px(margins, settings)
    if usable <= 0:
        raise ValueError(f"Page margins {margins.to_css()} leave no usable height")
    return max(0.0, min(1.0, content_height_px / (usable * pages)))


def count_pages(artifact: bytes) -> int:
    """
    Structural page count of a PDF artifact.

    Raises:
        RenderEngineError: stage "paginate" if the artifact is not a readable PDF
    """
    pages = page_count(artifact)
    if pages is None:
        raise RenderEngineError("Rendered artifact is not a readable PDF", stage="paginate")
    return pages


def load_selector(markup: str, root_selector: str) -> str:
    """
    Selector to wait for after loading markup.

    Templated documents carry the root element; caller-supplied HTML may not,
    in which case the body is waited for instead.
    """
    if root_selector.startswith("#"):
        element_id = root_selector[1:]
        if f'id="{element_id}"' not in markup and f"id='{element_id}'" not in markup:
            return "body"
    return root_selector


async def _stage(stage: str, awaitable: Awaitable[T]) -> T:
    try:
        return await awaitable
    except PlaywrightError as e:
        raise RenderEngineError(f"Browser failed during {stage}", stage=stage, original_error=e) from e


async def _render(
    markup: str,
    pages: int,
    margins: PageMargins,
    settings,
    pool: BrowserPool,
) -> DocumentRender:
    engine = settings.engine
    async with pool.instance() as browser:
        page = await _stage("load", browser.new_page())
        await _stage(
            "load",
            page.set_viewport_size(
                {
                    "width": int(round(usable_width_px(margins, settings))),
                    "height": int(round(usable_height_px(margins, settings))),
                }
            ),
        )
        await _stage("load", page.emulate_media(media="print"))
        await _stage(
            "load",
            page.set_content(markup, timeout=engine.content_timeout_ms, wait_until="load"),
        )
        await _stage(
            "load",
            page.wait_for_selector(
                load_selector(markup, engine.root_selector), timeout=engine.selector_timeout_ms
            ),
        )

        content_height = float(
            await _stage("measure", page.evaluate(MEASURE_SCRIPT, engine.root_selector))
        )

        artifact = await _stage(
            "paginate",
            page.pdf(
                format=settings.page.format,
                print_background=True,
                margin=margins.to_pdf_options(),
                prefer_css_page_size=True,
            ),
        )

    actual_pages = count_pages(artifact)
    fill_ratio = compute_fill_ratio(content_height, pages, margins, settings)
    _log_debug(
        f"Rendered {actual_pages} page(s) for target {pages}: "
        f"content {content_height:.0f}px, fill {fill_ratio:.2f}"
    )
    return DocumentRender(
        artifact=artifact,
        actual_pages=actual_pages,
        fill_ratio=fill_ratio,
        content_height_px=content_height,
    )


async def render_to_document(
    markup: str,
    target_pages=1,
    margins: Optional[PageMargins] = None,
    settings=None,
    pool: Optional[BrowserPool] = None,
) -> DocumentRender:
    """
    Render markup to a PDF and measure its fit against the target page count.

    The browser instance is closed on every exit path, including timeout and
    cancellation. The whole render is bounded by engine.render_timeout_s.

    Args:
        markup: Self-contained HTML document
        target_pages: 1, 2 or 3
        margins: Page margins (base margins for the target page count if omitted)
        settings: Loaded settings (packaged defaults if omitted)
        pool: Browser pool (shared per-loop pool if omitted)

    Returns:
        DocumentRender

    Raises:
        RenderEngineError: On launch, load, measure, paginate failure or timeout
        ValueError: If target_pages is unsupported
    """
    pages = coerce_target_pages(target_pages)
    settings = settings or load_settings()
    margins = margins or base_page_margins(pages)
    pool = pool or get_browser_pool(settings)

    try:
        return await asyncio.wait_for(
            _render(markup, pages, margins, settings, pool),
            timeout=settings.engine.render_timeout_s,
        )
    except asyncio.TimeoutError as e:
        raise RenderEngineError(
            f"Render exceeded {settings.engine.render_timeout_s}s", stage="timeout", original_error=e
        ) from e


def render_to_document_sync(
    markup: str,
    target_pages=1,
    margins: Optional[PageMargins] = None,
    settings=None,
) -> DocumentRender:
    """Blocking wrapper around render_to_document() for scripts and tests."""
    return asyncio.run(render_to_document(markup, target_pages, margins, settings))

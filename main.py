"""
Entrypoint: load config, init logging, then run the announcement preview or a
scroll sample against a page on disk.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

import structlog
from dotenv import load_dotenv
from lxml import html as lxml_html

from common.config import Config, PreviewSettings, ScrollSettings
from common.dom import MissingElementError
from common.log import configure_logging
from preview.fetcher import HTTPFetcher
from preview.pipeline import AnnouncementPreview
from scrollfx.controller import ScrollTransformController
from scrollfx.events import ScrollEventStream
from scrollfx.viewport import Viewport

logger = structlog.get_logger(__name__)


def _read_page(path: Path):
    return lxml_html.parse(str(path))


def _write_page(tree, out: Path) -> None:
    out.write_text(lxml_html.tostring(tree, encoding="unicode"), encoding="utf-8")


async def run_preview(config: Config, page: Path, out: Path, budget: int = None) -> int:
    """Mount the announcement preview into page and write the result to out."""
    settings = config.preview_settings()
    if budget is not None:
        settings = PreviewSettings(**{**settings.model_dump(), "budget": budget})
    fetcher_settings = config.fetcher_settings()

    tree = _read_page(page)

    async with HTTPFetcher(
        timeout=fetcher_settings.timeout,
        max_response_size=fetcher_settings.max_response_size,
    ) as fetcher:
        container = await AnnouncementPreview(fetcher, settings).run(tree.getroot())

    _write_page(tree, out)
    logger.info("page_written", out=str(out), preview_mounted=container is not None)
    return 0


def run_scroll(config: Config, page: Path, offset: float, width: float, variant: str = None, out: Path = None) -> int:
    """Dispatch one scroll sample against page and report the styles applied."""
    settings = config.scroll_settings()
    if variant is not None:
        settings = ScrollSettings(**{**settings.model_dump(), "variant": variant})

    tree = _read_page(page)
    try:
        controller = ScrollTransformController.from_document(tree.getroot(), settings)
    except MissingElementError as e:
        logger.error("scroll_target_missing", page=str(page), marker=e.marker)
        return 1

    stream = ScrollEventStream()
    controller.attach(stream)
    stream.dispatch(Viewport(inner_width=width, page_y_offset=offset))
    controller.detach()

    styles = {role: element.get("style") for role, element in controller.targets.items()}
    print(json.dumps(styles, indent=2, sort_keys=True))
    if out is not None:
        _write_page(tree, out)
        logger.info("page_written", out=str(out))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blckb-site",
        description="Client-side page behaviors for the blck-b static site, run against pages on disk.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_preview = sub.add_parser("preview", help="Mount the announcement preview into a page")
    p_preview.add_argument("page", type=Path, help="Host page (HTML)")
    p_preview.add_argument("--out", "-o", type=Path, required=True, help="Where to write the page")
    p_preview.add_argument("--budget", type=int, default=None, help="Character budget for the snippet")

    p_scroll = sub.add_parser("scroll", help="Apply one scroll sample to a page's header")
    p_scroll.add_argument("page", type=Path, help="Page (HTML)")
    p_scroll.add_argument("--offset", type=float, required=True, help="Pixels scrolled from the top")
    p_scroll.add_argument("--width", type=float, required=True, help="Viewport width in pixels")
    p_scroll.add_argument("--variant", choices=["mobile", "desktop"], default=None)
    p_scroll.add_argument("--out", "-o", type=Path, default=None, help="Write the styled page here")

    return parser


def main(argv=None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        config = Config(args.config)
        log_config = config.logging
        configure_logging(log_config.get("level", "INFO"), log_config.get("format", "json"))

        if args.cmd == "preview":
            return asyncio.run(run_preview(config, args.page, args.out, budget=args.budget))
        if args.cmd == "scroll":
            return run_scroll(config, args.page, args.offset, args.width, variant=args.variant, out=args.out)
    except Exception as e:
        logger.error("fatal_error", error=str(e), exc_info=True)
        return 1

    return 2


if __name__ == "__main__":
    sys.exit(main())

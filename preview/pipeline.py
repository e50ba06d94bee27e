"""
Announcement preview: fetch the announcements page once, take its first
entry and show a shortened copy of it on the host page.

Every failure stays inside run(): it is logged once and the host page is
left as it was.
"""

from typing import Optional

import structlog
from lxml.html import HtmlElement

from common.config import PreviewSettings
from .assembler import build_preview, mount_preview
from .errors import PreviewError
from .extractor import Markers, extract_triple, parse_fragment
from .fetcher import HTTPFetcher

logger = structlog.get_logger(__name__)


class AnnouncementPreview:
    def __init__(self, fetcher: HTTPFetcher, settings: PreviewSettings = None):
        self.fetcher = fetcher
        self.settings = settings or PreviewSettings()

    @property
    def markers(self) -> Markers:
        return Markers(
            title=self.settings.title_marker,
            date=self.settings.date_marker,
            text=self.settings.text_marker,
        )

    async def run(self, host: HtmlElement) -> Optional[HtmlElement]:
        """Mount the preview under the host's mount point; None when it could not."""
        url = self.settings.url
        try:
            html_text = await self.fetcher.fetch_text(url)
            fragment = parse_fragment(html_text)
            triple = extract_triple(fragment, self.markers)
            container = build_preview(
                triple,
                self.settings.budget,
                container_tag=self.settings.container_tag,
                container_class=self.settings.container_class,
            )
            mount_preview(host, container, self.settings.mount_marker)

        except PreviewError as e:
            logger.error("announcement_preview_error",
                         url=url,
                         error_type=type(e).__name__,
                         error=str(e))
            return None

        except Exception as e:
            logger.error("announcement_preview_error",
                         url=url,
                         error_type=type(e).__name__,
                         error=str(e),
                         exc_info=True)
            return None

        logger.info("announcement_preview_mounted",
                    url=url,
                    budget=self.settings.budget,
                    mount=self.settings.mount_marker)
        return container

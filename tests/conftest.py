import asyncio

import httpx
import pytest
from lxml import html as lxml_html

from common.config import PreviewSettings
from preview.fetcher import HTTPFetcher
from preview.pipeline import AnnouncementPreview

ANNOUNCEMENTS_URL = "https://blck-b.github.io/announcements.html"

ANNOUNCEMENT_TEXT = "The blog moved to a new static generator. Posts and tags are where they used to be."

ANNOUNCEMENTS_HTML = f"""<!DOCTYPE html>
<html>
<head><title>Announcements</title><script>document.title = "changed";</script></head>
<body>
  <div class="announcement">
    <h2 class="antitle">Site relaunch</h2>
    <p class="andate">2024-03-01</p>
    <p class="antext">{ANNOUNCEMENT_TEXT}</p>
  </div>
  <div class="announcement">
    <h2 class="antitle">Older news</h2>
    <p class="andate">2023-12-24</p>
    <p class="antext">Nothing to see here.</p>
  </div>
</body>
</html>
"""

HOST_HTML = """<!DOCTYPE html>
<html>
<head><title>Home</title></head>
<body>
  <div class="mobilecont">
    <div class="mobilecont-image"><img src="header.png"></div>
    <div class="mobilecont-content">blck-b</div>
  </div>
  <img class="topimg" src="top.png">
  <section class="announcements"><h1>Announcements</h1></section>
</body>
</html>
"""


def html_handler(body: str = ANNOUNCEMENTS_HTML, status_code: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code,
            text=body,
            headers={"content-type": "text/html; charset=utf-8"},
        )
    return handler


def run_preview(handler, host, **settings):
    async def _run():
        async with HTTPFetcher(transport=httpx.MockTransport(handler)) as fetcher:
            return await AnnouncementPreview(fetcher, PreviewSettings(**settings)).run(host)
    return asyncio.run(_run())


@pytest.fixture
def host():
    return lxml_html.document_fromstring(HOST_HTML)


@pytest.fixture
def announcements():
    return ANNOUNCEMENTS_HTML

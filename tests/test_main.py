"""Tests for the command line entrypoint."""

import functools
import json

import httpx
import pytest
from lxml import html as lxml_html
from structlog.testing import capture_logs

import main
from common.dom import find_by_class, parse_style
from preview.fetcher import HTTPFetcher

from conftest import HOST_HTML, html_handler


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(main, "configure_logging", lambda *args, **kwargs: None)
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def page(tmp_path):
    path = tmp_path / "index.html"
    path.write_text(HOST_HTML)
    return path


def _use_handler(monkeypatch, handler):
    monkeypatch.setattr(main, "HTTPFetcher", functools.partial(HTTPFetcher, transport=httpx.MockTransport(handler)))


class TestPreviewCommand:
    def test_writes_page_with_preview(self, monkeypatch, page, tmp_path):
        _use_handler(monkeypatch, html_handler())
        out = tmp_path / "out.html"

        assert main.main(["preview", str(page), "--out", str(out), "--budget", "14"]) == 0

        # the preview keeps its in-memory nesting, so check the serialized markup
        assert (
            '<section class="announcements"><h1>Announcements</h1>'
            '<p class="antext"><h2 class="antitle">Site relaunch</h2>'
            '<p class="andate">2024-03-01</p>'
            '<p class="antext">The blog moved...</p></p></section>'
        ) in out.read_text()

    def test_failed_fetch_still_writes_page(self, monkeypatch, page, tmp_path):
        _use_handler(monkeypatch, html_handler("down", status_code=502))
        out = tmp_path / "out.html"

        assert main.main(["preview", str(page), "--out", str(out)]) == 0

        written = lxml_html.document_fromstring(out.read_text())
        assert len(find_by_class(written, "announcements")) == 1

    def test_missing_page_is_fatal(self, tmp_path):
        assert main.main(["preview", str(tmp_path / "absent.html"), "--out", str(tmp_path / "o.html")]) == 1


class TestScrollCommand:
    def test_prints_applied_styles(self, page, tmp_path, capsys):
        out = tmp_path / "out.html"
        assert main.main(["scroll", str(page), "--offset", "280", "--width", "500", "--out", str(out)]) == 0

        styles = json.loads(capsys.readouterr().out)
        assert styles["height"] == "height: 60px"
        assert styles["scale"] == "transform: scale(1)"

        written = lxml_html.document_fromstring(out.read_text())
        assert parse_style(find_by_class(written, "mobilecont-content").get("style")) == {"height": "60px"}

    def test_desktop_variant(self, page, capsys):
        assert main.main(["scroll", str(page), "--offset", "100", "--width", "1024", "--variant", "desktop"]) == 0
        assert json.loads(capsys.readouterr().out) == {"fade": "opacity: 0.5"}

    def test_missing_target_fails(self, tmp_path):
        path = tmp_path / "bare.html"
        path.write_text("<html><body><p>nothing</p></body></html>")
        assert main.main(["scroll", str(path), "--offset", "0", "--width", "1024"]) == 1

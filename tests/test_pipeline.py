"""Tests for the announcement preview pipeline."""

import httpx
from lxml import html as lxml_html
from structlog.testing import capture_logs

from common.dom import find_by_class
from preview.snippet import COMPACT_BUDGET, shorten_text

from conftest import ANNOUNCEMENT_TEXT, ANNOUNCEMENTS_HTML, HOST_HTML, html_handler, run_preview


def _mount_markup(host):
    return lxml_html.tostring(find_by_class(host, "announcements"))


class TestAnnouncementPreview:
    def test_mounts_preview(self, host):
        with capture_logs() as logs:
            container = run_preview(html_handler(), host)

        mount = find_by_class(host, "announcements")
        assert container is not None
        assert mount[-1] is container
        assert container.get("class") == "antext"
        assert container[0].text_content() == "Site relaunch"
        assert container[1].text_content() == "2024-03-01"
        assert container[2].text_content() == shorten_text(ANNOUNCEMENT_TEXT, 135)
        assert [e["event"] for e in logs if e["log_level"] == "info"] == ["announcement_preview_mounted"]

    def test_adds_exactly_one_node(self, host):
        before = len(host.xpath("//*"))
        container = run_preview(html_handler(), host)
        assert len(host.xpath("//*")) == before + 1 + len(container)

    def test_compact_budget(self, host):
        container = run_preview(html_handler(), host, budget=COMPACT_BUDGET)
        assert container[2].text_content() == shorten_text(ANNOUNCEMENT_TEXT, COMPACT_BUDGET)

    def test_requests_configured_url(self, host):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, text=ANNOUNCEMENTS_HTML)

        run_preview(handler, host, url="https://example.org/news.html")
        assert seen == ["https://example.org/news.html"]

    def test_http_error_leaves_page_untouched(self, host):
        before = _mount_markup(host)
        with capture_logs() as logs:
            result = run_preview(html_handler("oops", status_code=503), host)

        assert result is None
        assert _mount_markup(host) == before
        assert len(logs) == 1
        assert logs[0]["log_level"] == "error"
        assert logs[0]["event"] == "announcement_preview_error"
        assert logs[0]["error_type"] == "FetchError"

    def test_transport_error_leaves_page_untouched(self, host):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        before = _mount_markup(host)
        with capture_logs() as logs:
            result = run_preview(handler, host)

        assert result is None
        assert _mount_markup(host) == before
        assert len(logs) == 1
        assert logs[0]["error_type"] == "FetchError"

    def test_missing_title_aborts_cleanly(self, host):
        body = ANNOUNCEMENTS_HTML.replace('class="antitle"', 'class="heading"')
        before = _mount_markup(host)
        with capture_logs() as logs:
            result = run_preview(html_handler(body), host)

        assert result is None
        assert _mount_markup(host) == before
        assert len(logs) == 1
        assert logs[0]["error_type"] == "MissingFragmentError"
        assert "antitle" in logs[0]["error"]

    def test_missing_mount_point_is_contained(self):
        host = lxml_html.document_fromstring(HOST_HTML.replace('class="announcements"', 'class="news"'))
        before = lxml_html.tostring(host)
        with capture_logs() as logs:
            result = run_preview(html_handler(), host)

        assert result is None
        assert lxml_html.tostring(host) == before
        assert [e["event"] for e in logs if e["log_level"] == "error"] == ["announcement_preview_error"]
        assert "host page" in logs[-1]["error"]

    def test_unexpected_error_is_contained(self, host, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr("preview.pipeline.build_preview", broken)
        before = _mount_markup(host)
        with capture_logs() as logs:
            result = run_preview(html_handler(), host)

        assert result is None
        assert _mount_markup(host) == before
        errors = [e for e in logs if e["log_level"] == "error"]
        assert len(errors) == 1
        assert errors[0]["error_type"] == "RuntimeError"

from typing import Optional


class PreviewError(Exception):
    """Base for failures the announcement preview contains and logs."""


class FetchError(PreviewError):
    def __init__(self, url: str, status_code: int = 0, reason: Optional[str] = None):
        self.url = url
        self.status_code = status_code
        self.reason = reason or f"HTTP {status_code}"
        super().__init__(f"fetching {url} failed: {self.reason}")


class FragmentParseError(PreviewError):
    pass


class MissingFragmentError(PreviewError):
    def __init__(self, marker: str, where: str = "fetched page"):
        self.marker = marker
        self.where = where
        super().__init__(f"{where} has no element marked '{marker}'")

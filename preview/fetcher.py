from typing import Optional
import httpx
import time

from .errors import FetchError

DEFAULT_MAX_RESPONSE_SIZE = 10 * 1024 * 1024  # 10MB


class FetchResult:
    def __init__(
        self,
        url: str,
        status_code: int,
        content: bytes = b'',
        fetch_time: float = 0.0,
        error: str = None,
        content_type: str = None,
        encoding: str = None
    ):
        """Initialize a FetchResult with HTTP response data and metadata."""
        self.url = url
        self.status_code = status_code
        self.content = content
        self.fetch_time = fetch_time
        self.error = error
        self.content_type = content_type
        self.encoding = encoding

    @property
    def success(self) -> bool:
        """Check if the fetch was successful (no error and 2xx status code)."""
        return self.error is None and 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        """Decode the response content to text using detected or fallback encoding."""
        if not self.content:
            return ""
        encoding = self.encoding or 'utf-8'
        try:
            return self.content.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            return self.content.decode('utf-8', errors='replace')

    @property
    def size(self) -> int:
        """Get the size of the response content in bytes."""
        return len(self.content)


class HTTPFetcher:
    """Plain GET fetcher: no custom headers, no retries, optional timeout.

    Never logs; failures come back on the FetchResult for the caller to report.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        max_response_size: int = DEFAULT_MAX_RESPONSE_SIZE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.max_response_size = max_response_size
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            transport=transport,
        )

    async def fetch(self, url: str) -> FetchResult:
        """Fetch a URL and return a FetchResult; failures are reported, not raised."""
        start_time = time.time()

        try:
            async with self._client.stream("GET", url) as response:
                content_length = response.headers.get('content-length')
                if content_length and content_length.isdigit() and int(content_length) > self.max_response_size:
                    return FetchResult(
                        url=url,
                        status_code=response.status_code,
                        fetch_time=time.time() - start_time,
                        error=f"Content too large: {content_length} bytes > {self.max_response_size} bytes"
                    )

                content = bytearray()
                async for chunk in response.aiter_bytes(chunk_size=8192):
                    content += chunk
                    if len(content) > self.max_response_size:
                        return FetchResult(
                            url=url,
                            status_code=response.status_code,
                            fetch_time=time.time() - start_time,
                            error=f"Content too large: more than {self.max_response_size} bytes"
                        )

                return FetchResult(
                    url=url,
                    status_code=response.status_code,
                    content=bytes(content),
                    fetch_time=time.time() - start_time,
                    content_type=response.headers.get('content-type', '').lower(),
                    encoding=response.charset_encoding,
                )

        except httpx.TimeoutException as e:
            return FetchResult(
                url=url,
                status_code=0,
                fetch_time=time.time() - start_time,
                error=f"Timeout after {self.timeout}s: {e}",
            )
        except httpx.HTTPError as e:
            return FetchResult(
                url=url,
                status_code=0,
                fetch_time=time.time() - start_time,
                error=f"{type(e).__name__}: {e}",
            )

    async def fetch_text(self, url: str) -> str:
        """Fetch a URL and return its body as text, raising FetchError on failure."""
        result = await self.fetch(url)
        if not result.success:
            raise FetchError(url, result.status_code, result.error)
        return result.text

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HTTPFetcher":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

from __future__ import annotations

import contextlib
import threading
import time
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import urlparse

import requests
from bs4 import UnicodeDammit
from urllib3.exceptions import ReadTimeoutError

from ..errors import FetchError, ValidationError
from ..models import RawPage
from ..utils.logging import get_logger
from ..utils.pipeline_config import FetchSettings

logger = get_logger("digest.fetchers.http")

# How often a waiting caller rechecks the cancel flag
_POLL_SECONDS = 0.05


def validate_url(url: str | None) -> str:
    """Return ``url`` trimmed, or raise ``ValidationError`` if it is not absolute http(s)."""
    if url is None or not str(url).strip():
        raise ValidationError("URL is required")
    candidate = str(url).strip()
    try:
        parsed = urlparse(candidate)
        # Accessing .port validates the port number
        parsed.port
    except ValueError as exc:
        raise ValidationError("Invalid URL format") from exc
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ValidationError("Invalid URL format")
    if any(ch.isspace() for ch in candidate):
        raise ValidationError("Invalid URL format")
    return candidate


def _classify_request_error(exc: requests.RequestException) -> Optional[FetchError]:
    if isinstance(exc, requests.exceptions.TooManyRedirects):
        return FetchError("too_many_redirects")
    # ConnectTimeout is also a ConnectionError; check Timeout first
    if isinstance(exc, requests.exceptions.Timeout):
        return FetchError("timeout")
    if isinstance(exc, requests.exceptions.ConnectionError):
        # Read timeouts while streaming the body surface as ConnectionError
        if exc.args and isinstance(exc.args[0], ReadTimeoutError):
            return FetchError("timeout")
        return FetchError("connection")
    # Truncated chunked bodies and corrupt gzip/deflate streams
    if isinstance(exc, (requests.exceptions.ChunkedEncodingError, requests.exceptions.ContentDecodingError)):
        return FetchError("connection")
    return None


def _check_status(resp: requests.Response, url: str) -> None:
    status = resp.status_code
    if 200 <= status < 300:
        return
    logger.warning("HTTP fetch failed (%s): %s", status, url)
    if status == 404:
        raise FetchError("not_found", status=status)
    if status == 403:
        raise FetchError("forbidden", status=status)
    raise FetchError("http_status", status=status)


def _read_body(
    resp: requests.Response,
    settings: FetchSettings,
    *,
    started: float,
    cancel_event: Optional[threading.Event],
) -> bytes:
    content_length = resp.headers.get("Content-Length")
    if content_length:
        with contextlib.suppress(ValueError):
            if int(content_length) > settings.max_response_bytes:
                raise FetchError("too_large")

    chunks: List[bytes] = []
    total = 0
    for chunk in resp.iter_content(chunk_size=settings.chunk_size):
        if cancel_event is not None and cancel_event.is_set():
            raise FetchError("cancelled")
        if time.monotonic() - started > settings.timeout_seconds:
            raise FetchError("timeout")
        total += len(chunk)
        if total > settings.max_response_bytes:
            raise FetchError("too_large")
        chunks.append(chunk)
    return b"".join(chunks)


def _decode(body: bytes, resp: requests.Response) -> str:
    content_type = (resp.headers.get("Content-Type") or "").lower()
    # requests reports ISO-8859-1 for any text/* without a charset; only trust a declared one
    declared = resp.encoding if "charset=" in content_type else None
    dammit = UnicodeDammit(body, [declared] if declared else [], is_html=True)
    if dammit.unicode_markup is not None:
        return dammit.unicode_markup
    return body.decode(declared or "utf-8", errors="replace")


def _run_with_deadline(
    download: Callable[[], Tuple[requests.Response, bytes]],
    *,
    url: str,
    deadline: float,
    cancel_event: Optional[threading.Event],
) -> Tuple[requests.Response, bytes]:
    """Run ``download`` on a worker thread and wait at most until ``deadline``.

    A server that trickles bytes keeps each socket read under the per-read
    timeout, so the wall clock is enforced here. An abandoned worker stops at
    its next chunk boundary or socket timeout.
    """
    outcome: Dict[str, Any] = {}
    done = threading.Event()

    def target() -> None:
        try:
            outcome["result"] = download()
        except Exception as exc:  # re-raised in the waiting thread
            outcome["error"] = exc
        finally:
            done.set()

    worker = threading.Thread(target=target, name="digest-fetch", daemon=True)
    worker.start()
    while not done.is_set():
        if cancel_event is not None and cancel_event.is_set():
            logger.info("Fetch cancelled: %s", url)
            raise FetchError("cancelled")
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            logger.warning("Fetch exceeded its deadline: %s", url)
            raise FetchError("timeout")
        done.wait(min(remaining, _POLL_SECONDS))

    if "error" in outcome:
        raise outcome["error"]
    return outcome["result"]


def _download(
    http: requests.Session,
    url: str,
    settings: FetchSettings,
    *,
    started: float,
    cancel_event: Optional[threading.Event],
) -> Tuple[requests.Response, bytes]:
    logger.debug("Fetching %s (timeout=%.1fs)", url, settings.timeout_seconds)
    try:
        resp = http.get(
            url,
            headers=settings.headers,
            timeout=settings.timeout_seconds,
            allow_redirects=True,
            stream=True,
        )
    except requests.RequestException as exc:
        error = _classify_request_error(exc)
        logger.warning("HTTP request error for %s: %s", url, exc)
        if error is None:
            raise
        raise error from exc

    try:
        _check_status(resp, url)
        content_type = (resp.headers.get("Content-Type") or "").lower()
        if content_type and "html" not in content_type and "xml" not in content_type:
            logger.warning("URL %s returned non-HTML content-type: %s", url, content_type)
        try:
            body = _read_body(resp, settings, started=started, cancel_event=cancel_event)
        except requests.RequestException as exc:
            error = _classify_request_error(exc)
            logger.warning("HTTP read error for %s: %s", url, exc)
            if error is None:
                raise
            raise error from exc
    finally:
        resp.close()
    return resp, body


def fetch_page(
    url: str,
    *,
    settings: Optional[FetchSettings] = None,
    session: Optional[requests.Session] = None,
    cancel_event: Optional[threading.Event] = None,
) -> RawPage:
    """Download the HTML behind ``url``.

    The request carries browser-like headers, follows at most
    ``settings.max_redirects`` redirects and is bounded by
    ``settings.timeout_seconds`` both per socket operation and for the whole
    fetch, headers included. Setting ``cancel_event`` aborts the fetch
    promptly. A caller-supplied ``session`` gets its redirect limit back
    afterwards. No retries are attempted; every failure is raised as
    ``FetchError``.
    """
    settings = settings or FetchSettings()
    url = validate_url(url)
    if cancel_event is not None and cancel_event.is_set():
        raise FetchError("cancelled")

    owns_session = session is None
    http = session or requests.Session()
    previous_redirects = http.max_redirects
    started = time.monotonic()

    def download() -> Tuple[requests.Response, bytes]:
        http.max_redirects = settings.max_redirects
        try:
            return _download(http, url, settings, started=started, cancel_event=cancel_event)
        finally:
            if owns_session:
                http.close()
            else:
                http.max_redirects = previous_redirects

    resp, body = _run_with_deadline(
        download,
        url=url,
        deadline=started + settings.timeout_seconds,
        cancel_event=cancel_event,
    )
    html = _decode(body, resp)
    logger.info("Fetched %s (%d bytes, status=%s)", url, len(body), resp.status_code)
    return RawPage(url=url, html=html, final_url=resp.url, status_code=resp.status_code)

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .errors import DigestError, InternalError
from .fetchers import fetch_page, validate_url
from .models import ExtractedDocument, ProcessedBlog, ProcessOutcome, RawPage
from .output.sinks import RecordSink
from .processors import extract, read_time, summarize, translate, word_count
from .utils.config_loader import DigestConfig
from .utils.logging import get_logger

logger = get_logger("digest.orchestrator")

Fetcher = Callable[..., RawPage]


class Orchestrator:
    """Runs fetch, extract, summarize, translate and metrics for one URL.

    Holds only read-only configuration, so a single instance can serve many
    concurrent ``process`` calls.
    """

    def __init__(
        self,
        config: DigestConfig | None = None,
        *,
        fetcher: Fetcher | None = None,
        sinks: Iterable[RecordSink] = (),
        max_workers: int = 8,
    ) -> None:
        self.config = config or DigestConfig()
        self.fetcher = fetcher or fetch_page
        self.sinks: Sequence[RecordSink] = tuple(sinks)
        self.max_workers = max_workers

    def _persist(self, blog: ProcessedBlog, document: ExtractedDocument) -> None:
        for sink in self.sinks:
            try:
                sink.write(blog, document)
            except Exception as exc:  # noqa: BLE001 - persistence is best effort
                logger.warning("Sink %s failed for %s: %s", type(sink).__name__, blog.url, exc)

    def process(self, url: str, *, cancel_event: Optional[threading.Event] = None) -> ProcessedBlog:
        """Turn ``url`` into a ``ProcessedBlog`` or raise a ``DigestError``.

        The URL is validated before any network access. Nothing is retried.
        """
        url = validate_url(url)
        cfg = self.config
        logger.info("Processing URL: %s", url)

        t0 = time.perf_counter()
        page = self.fetcher(url, settings=cfg.fetch, cancel_event=cancel_event)
        fetch_ms = (time.perf_counter() - t0) * 1000

        t0 = time.perf_counter()
        document = extract(page.html, settings=cfg.extraction, noise=cfg.noise)
        summary = summarize(document.content, settings=cfg.summary, noise=cfg.noise)
        translated = translate(summary, cfg.dictionary)
        words = word_count(document.content)
        process_ms = (time.perf_counter() - t0) * 1000

        blog = ProcessedBlog(
            url=url,
            title=document.title,
            content=document.content[: cfg.extraction.max_content_chars],
            summary=summary,
            translated_summary=translated,
            word_count=words,
            read_time=read_time(words),
        )
        self._persist(blog, document)
        logger.info(
            "Successfully processed: %s (selector=%s, words=%d, fetch_ms=%.1f, process_ms=%.1f)",
            blog.title,
            document.selector,
            words,
            fetch_ms,
            process_ms,
        )
        return blog

    def process_outcome(self, url: str, *, cancel_event: Optional[threading.Event] = None) -> ProcessOutcome:
        """Like ``process`` but never raises; failures land in ``error``."""
        try:
            return ProcessOutcome(url=url, blog=self.process(url, cancel_event=cancel_event))
        except DigestError as exc:
            logger.warning("Failed to process %s (%s): %s", url, exc.kind, exc.message)
            return ProcessOutcome(url=url, error=exc)
        except Exception as exc:  # noqa: BLE001 - unclassified failures become InternalError
            logger.exception("Unexpected error processing %s: %s", url, exc)
            return ProcessOutcome(url=url, error=InternalError())

    def process_many(
        self,
        urls: Iterable[str],
        *,
        max_workers: int | None = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[ProcessOutcome]:
        """Process URLs concurrently; outcomes are returned in input order."""
        url_list = list(urls)
        if not url_list:
            return []

        workers = max(1, min(max_workers or self.max_workers, len(url_list)))
        logger.debug("Starting concurrent processing for %d URLs (workers=%d)", len(url_list), workers)
        outcomes: Dict[int, ProcessOutcome] = {}
        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_map = {
                executor.submit(self.process_outcome, u, cancel_event=cancel_event): i
                for i, u in enumerate(url_list)
            }
            for fut in as_completed(future_map):
                outcomes[future_map[fut]] = fut.result()

        ok = sum(1 for o in outcomes.values() if o.ok)
        logger.info("Batch complete: succeeded=%d failed=%d", ok, len(url_list) - ok)
        return [outcomes[i] for i in range(len(url_list))]

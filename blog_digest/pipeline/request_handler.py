"""Transport-neutral entry point: a ``{url}`` payload in, status and body out.

An HTTP server, queue consumer or test harness can call ``handle_request``
and map ``RequestResult.status_code`` onto its own framing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

from ..errors import DigestError, InternalError, ValidationError
from ..orchestrator import Orchestrator
from ..utils.logging import get_logger

logger = get_logger("digest.pipeline.request")


@dataclass(frozen=True, slots=True)
class RequestResult:
    status_code: int
    body: Dict[str, Any]

    @property
    def ok(self) -> bool:
        return self.status_code == 200


def handle_request(payload: Mapping[str, Any] | None, orchestrator: Orchestrator) -> RequestResult:
    """Process one request; the body is either a full record or an error."""
    try:
        if not isinstance(payload, Mapping):
            raise ValidationError("Request body must be a JSON object")
        url = payload.get("url")
        if url is not None and not isinstance(url, str):
            raise ValidationError("Invalid URL format")
        blog = orchestrator.process(url)
    except DigestError as exc:
        logger.warning("Request failed (%s, %d): %s", exc.kind, exc.status_code, exc.message)
        return RequestResult(status_code=exc.status_code, body=exc.to_payload())
    except Exception as exc:  # noqa: BLE001 - last-resort mapping to 500
        logger.exception("Error processing blog: %s", exc)
        error = InternalError()
        return RequestResult(status_code=error.status_code, body=error.to_payload())
    return RequestResult(status_code=200, body=blog.to_dict())

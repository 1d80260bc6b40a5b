"""
Request handling for the DNSBL check endpoint.

Maps a decoded JSON request body to an HTTP status and JSON body, so any
web framework can mount it.
"""

import asyncio
import logging
from typing import Any

from rblscope.errors import DomainResolutionError, ValidationError
from rblscope.logging_config import track_error
from rblscope.rbl.engine import AggregationEngine


logger = logging.getLogger(__name__)


async def handle_request_async(
    payload: Any,
    engine: AggregationEngine | None = None,
) -> tuple[int, dict[str, Any]]:
    """Handle a `{"target": ...}` request body."""
    target = payload.get("target") if isinstance(payload, dict) else None

    try:
        engine = engine or AggregationEngine.from_config()
        response = await engine.check(target)
    except ValidationError as e:
        return e.status_code, {"message": str(e)}
    except DomainResolutionError as e:
        logger.warning("Domain resolution failed for %r: %s", target, e)
        return e.status_code, {
            "message": f"DNSBL check failed: Failed to resolve domain: {e}"
        }
    except Exception as e:
        message = str(e) or type(e).__name__
        track_error("dnsbl_request", message, exception=e, context={"target": target})
        return 500, {"message": f"DNSBL check failed: {message}"}

    return 200, response.to_dict()


def handle_request(
    payload: Any,
    engine: AggregationEngine | None = None,
) -> tuple[int, dict[str, Any]]:
    """Synchronous wrapper for handle_request_async()."""
    return asyncio.run(handle_request_async(payload, engine))

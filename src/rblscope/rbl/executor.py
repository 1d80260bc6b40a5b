"""
Single-provider DNSBL lookup and response classification.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import re
import time

from netaddr import AddrFormatError, IPAddress, IPNetwork

from rblscope.config import DEFAULT_QUERY_TIMEOUT_MS
from rblscope.dns.core import LookupErrorKind, LookupFailure, Resolver
from rblscope.errors import QueryTimeoutError
from rblscope.rbl.encoding import build_query_name
from rblscope.rbl.models import RBLQuery, RBLResult
from rblscope.rbl.providers import RBLProvider
from rblscope.rbl.timeouts import with_timeout


logger = logging.getLogger(__name__)

# Providers answer from this range to report resolver-side problems
META_RANGE = IPNetwork("127.255.0.0/16")

BLOCKED_TXT_PATTERN = re.compile(
    r"open resolver|query refused|access denied|blocked - see|please use|not supported",
    re.IGNORECASE,
)

BLOCKED_MESSAGE = "RBL query blocked or unsupported"

NOT_LISTED_KINDS = (LookupErrorKind.NOT_FOUND, LookupErrorKind.NO_DATA)


def is_meta_response(address: str) -> bool:
    """Whether address lies in the 127.255.0.0/16 error range."""
    try:
        return IPAddress(address) in META_RANGE
    except (AddrFormatError, ValueError):
        return False


def is_blocked_reason(reason: str | None) -> bool:
    """Whether TXT text reads like a refused or unsupported query."""
    return bool(reason) and BLOCKED_TXT_PATTERN.search(reason) is not None


class RBLQueryExecutor:
    """Look up one target on one provider.

    execute() never raises for DNS or encoding problems; every outcome is
    folded into an RBLResult.
    """

    def __init__(self, resolver: Resolver, timeout_ms: int = DEFAULT_QUERY_TIMEOUT_MS):
        self.resolver = resolver
        self.timeout_ms = timeout_ms

    @property
    def timeout_message(self) -> str:
        return f"Query timeout (>{self.timeout_ms / 1000:g}s)"

    def build_query(
        self, target: str, provider: RBLProvider, is_domain_query: bool = False
    ) -> RBLQuery:
        return RBLQuery(
            target=target,
            provider=provider,
            query_name=build_query_name(target, provider.zone, is_domain_query),
            is_domain_query=is_domain_query,
        )

    async def _lookup_reason(self, query_name: str) -> str | None:
        try:
            records = await with_timeout(
                self.resolver.resolve_txt(query_name), self.timeout_ms
            )
        except Exception as e:
            logger.debug("TXT lookup for %s failed: %s", query_name, e)
            return None
        text = " ".join(s for record in records for s in record)
        return text or None

    async def execute(
        self, target: str, provider: RBLProvider, is_domain_query: bool = False
    ) -> RBLResult:
        """Check target against provider and classify the answer."""
        start = time.monotonic()

        def elapsed() -> int:
            return int((time.monotonic() - start) * 1000)

        try:
            query = self.build_query(target, provider, is_domain_query)
            addresses = await with_timeout(
                self.resolver.resolve_a(query.query_name), self.timeout_ms
            )
        except LookupFailure as e:
            if e.kind in NOT_LISTED_KINDS:
                return RBLResult(rbl=provider.name, listed=False, response_time_ms=elapsed())
            if e.kind is LookupErrorKind.TIMEOUT:
                return self._timeout_result(provider, elapsed())
            return self._error_result(provider, elapsed(), str(e))
        except QueryTimeoutError:
            return self._timeout_result(provider, elapsed())
        except Exception as e:
            return self._error_result(provider, elapsed(), str(e) or type(e).__name__)

        response_time = elapsed()

        if not addresses:
            return RBLResult(rbl=provider.name, listed=False, response_time_ms=response_time)

        response = addresses[0]
        reason = await self._lookup_reason(query.query_name)

        if is_meta_response(response) or is_blocked_reason(reason):
            logger.debug(
                "%s blocked query %s (%s: %s)",
                provider.name, query.query_name, response, reason,
            )
            return RBLResult(
                rbl=provider.name,
                listed=False,
                response_time_ms=response_time,
                error=reason or BLOCKED_MESSAGE,
            )

        logger.debug("%s lists %s (%s)", provider.name, target, response)
        return RBLResult(
            rbl=provider.name,
            listed=True,
            response=response,
            reason=reason,
            response_time_ms=response_time,
            url=provider.url,
            description=provider.description,
        )

    async def run(self, query: RBLQuery) -> RBLResult:
        """Execute a pre-built query."""
        return await self.execute(query.target, query.provider, query.is_domain_query)

    def _timeout_result(self, provider: RBLProvider, response_time: int) -> RBLResult:
        logger.debug("%s timed out after %dms", provider.name, response_time)
        return RBLResult(
            rbl=provider.name,
            listed=False,
            response_time_ms=response_time,
            error=self.timeout_message,
        )

    def _error_result(self, provider: RBLProvider, response_time: int, message: str) -> RBLResult:
        logger.debug("%s query failed: %s", provider.name, message)
        return RBLResult(
            rbl=provider.name,
            listed=False,
            response_time_ms=response_time,
            error=message,
        )

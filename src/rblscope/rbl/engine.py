"""
DNSBL aggregation: fan a target out across every applicable provider.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import logging
from functools import partial
from typing import Any

from rblscope.config import RBLConfig, get_config
from rblscope.dns.core import AsyncDNSResolver, DomainResolver, Resolver
from rblscope.errors import ValidationError
from rblscope.rbl.executor import RBLQueryExecutor
from rblscope.rbl.limiter import ConcurrencyLimiter
from rblscope.rbl.models import AggregateResponse, RBLResult
from rblscope.rbl.providers import DEFAULT_CATALOG, RBLCatalog, can_query
from rblscope.rbl.targets import TargetKind, is_ipv4, parse_target


logger = logging.getLogger(__name__)

TARGET_REQUIRED = "Target IP or domain is required"


def validate_target(target: Any) -> str:
    """Return target if it is a non-blank string, else raise ValidationError."""
    if not isinstance(target, str) or not target.strip():
        raise ValidationError(TARGET_REQUIRED)
    return target


class AggregationEngine:
    """Check a target against every applicable provider in a catalog.

    A domain target is checked on domain lists directly, and each address
    it resolves to is checked on IP lists. All lookups share one
    ConcurrencyLimiter per request.

    Usage:
        engine = AggregationEngine.from_config()
        response = await engine.check("192.0.2.1")
    """

    def __init__(
        self,
        resolver: Resolver | None = None,
        catalog: RBLCatalog = DEFAULT_CATALOG,
        timeout_ms: int | None = None,
        concurrency: int | None = None,
    ):
        config = get_config()
        self.timeout_ms = timeout_ms if timeout_ms is not None else config.query_timeout_ms
        self.concurrency = concurrency if concurrency is not None else config.concurrency
        if resolver is None:
            resolver = AsyncDNSResolver(nameservers=list(config.nameservers) or None)
        self.resolver = resolver
        self.catalog = catalog
        self.executor = RBLQueryExecutor(self.resolver, timeout_ms=self.timeout_ms)
        self.domain_resolver = DomainResolver(self.resolver)

    @classmethod
    def from_config(
        cls,
        config: RBLConfig | None = None,
        resolver: Resolver | None = None,
        catalog: RBLCatalog = DEFAULT_CATALOG,
    ) -> "AggregationEngine":
        config = config or get_config()
        if resolver is None:
            resolver = AsyncDNSResolver(nameservers=list(config.nameservers) or None)
        return cls(
            resolver=resolver,
            catalog=catalog,
            timeout_ms=config.query_timeout_ms,
            concurrency=config.concurrency,
        )

    async def _check_batch(
        self,
        limiter: ConcurrencyLimiter,
        value: str,
        kind: TargetKind,
        suffix: str | None = None,
    ) -> list[RBLResult]:
        is_domain_query = kind is TargetKind.DOMAIN
        futures = [
            limiter.submit(partial(self.executor.execute, value, provider, is_domain_query))
            for provider in self.catalog.eligible_providers(kind)
        ]
        results = await asyncio.gather(*futures)
        if suffix:
            results = [r.with_suffix(suffix) for r in results]
        return list(results)

    async def check(self, raw_target: Any) -> AggregateResponse:
        """Run every applicable provider check for raw_target.

        Raises ValidationError for blank input and DomainResolutionError
        when a domain has no addresses at all.
        """
        target = parse_target(validate_target(raw_target))
        logger.info("Checking %s (%s)", target.value, target.kind.value)

        limiter = ConcurrencyLimiter(self.concurrency)

        if target.kind is TargetKind.DOMAIN:
            target.resolved_ips = await self.domain_resolver.resolve(target.value)
            logger.debug("%s resolved to %s", target.value, target.resolved_ips)

            batches = [self._check_batch(limiter, target.value, TargetKind.DOMAIN)]
            for ip in target.resolved_ips:
                ip_kind = TargetKind.IPV4 if is_ipv4(ip) else TargetKind.IPV6
                batches.append(self._check_batch(limiter, ip, ip_kind, suffix=ip))
            nested = await asyncio.gather(*batches)
            results = [result for batch in nested for result in batch]
            response = AggregateResponse(
                target=target.value,
                target_type=target.kind,
                results=results,
                resolved_ips=target.resolved_ips,
            )
        else:
            results = await self._check_batch(limiter, target.value, target.kind)
            response = AggregateResponse(
                target=target.value,
                target_type=target.kind,
                results=results,
            )

        summary = response.summary
        logger.info(
            "Checked %s on %d lists: %d listed, %d clean, %d errors",
            target.value, summary.total_checked, summary.listed_count,
            summary.clean_count, summary.error_count,
        )
        return response

    async def check_single(self, raw_target: Any, zone: str) -> RBLResult:
        """Check raw_target against one catalog provider identified by zone."""
        target = parse_target(validate_target(raw_target))
        provider = self.catalog.get(zone)
        if provider is None:
            raise ValidationError(f"Unknown RBL zone: {zone}")
        if not can_query(provider, target.kind):
            return RBLResult(
                rbl=provider.name,
                error=f"{provider.name} does not support {target.kind.value} targets",
            )
        return await self.executor.execute(
            target.value, provider, target.kind is TargetKind.DOMAIN
        )

    def check_sync(self, raw_target: Any) -> AggregateResponse:
        """Synchronous wrapper for check()."""
        return asyncio.run(self.check(raw_target))


async def check_target_async(target: Any, config: RBLConfig | None = None) -> AggregateResponse:
    """Check a target with a fresh engine built from configuration."""
    return await AggregationEngine.from_config(config).check(target)


def check_target(target: Any, config: RBLConfig | None = None) -> AggregateResponse:
    """Synchronous convenience wrapper."""
    return asyncio.run(check_target_async(target, config))

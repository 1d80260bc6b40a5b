"""
RBL/Blacklist Lookup Module

Checks IP addresses and domains against Real-time Blackhole Lists
(RBLs/DNSBLs) with bounded concurrency and a deadline on every lookup.

Providers include Spamhaus (ZEN, SBL, XBL, PBL, DBL), SORBS, SpamCop,
Barracuda, UCEPROTECT, PSBL, DroneBL, Blocklist.de, Mailspike,
SpamRats and SURBL.

Full IPv4 and IPv6 support.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from rblscope.rbl.encoding import build_query_name, reverse_ipv4, reverse_ipv6
from rblscope.rbl.engine import AggregationEngine, check_target, check_target_async
from rblscope.rbl.executor import RBLQueryExecutor
from rblscope.rbl.limiter import ConcurrencyLimiter
from rblscope.rbl.models import AggregateResponse, RBLQuery, RBLResult, RBLSummary
from rblscope.rbl.providers import (
    DEFAULT_CATALOG,
    DEFAULT_PROVIDERS,
    ProviderType,
    RBLCatalog,
    RBLProvider,
    can_query,
)
from rblscope.rbl.targets import Target, TargetKind, parse_target
from rblscope.rbl.timeouts import with_timeout

__all__ = [
    "AggregationEngine",
    "AggregateResponse",
    "ConcurrencyLimiter",
    "DEFAULT_CATALOG",
    "DEFAULT_PROVIDERS",
    "ProviderType",
    "RBLCatalog",
    "RBLProvider",
    "RBLQuery",
    "RBLQueryExecutor",
    "RBLResult",
    "RBLSummary",
    "Target",
    "TargetKind",
    "build_query_name",
    "can_query",
    "check_target",
    "check_target_async",
    "parse_target",
    "reverse_ipv4",
    "reverse_ipv6",
    "with_timeout",
]

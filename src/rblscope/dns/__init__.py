"""
DNS Utilities Module

Async resolver adapter with classified lookup failures, and
domain-to-address resolution used ahead of per-IP blacklist checks.
"""

from rblscope.dns.core import (
    AsyncDNSResolver,
    DomainResolver,
    LookupErrorKind,
    LookupFailure,
    Resolver,
)

__all__ = [
    "AsyncDNSResolver",
    "DomainResolver",
    "LookupErrorKind",
    "LookupFailure",
    "Resolver",
]

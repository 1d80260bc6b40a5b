"""
Core DNS functionality.

Async resolver adapter over dnspython and domain-to-address resolution.
"""

import asyncio
import logging
from enum import Enum
from typing import Protocol

import dns.asyncresolver
import dns.exception
import dns.resolver

from rblscope.errors import DomainResolutionError


logger = logging.getLogger(__name__)


class LookupErrorKind(str, Enum):
    """Closed set of DNS lookup failure kinds."""
    NOT_FOUND = "not_found"
    NO_DATA = "no_data"
    TIMEOUT = "timeout"
    OTHER = "other"

    @property
    def code(self) -> str:
        return _ERROR_CODES[self]


_ERROR_CODES = {
    LookupErrorKind.NOT_FOUND: "ENOTFOUND",
    LookupErrorKind.NO_DATA: "ENODATA",
    LookupErrorKind.TIMEOUT: "ETIMEOUT",
    LookupErrorKind.OTHER: "EOTHER",
}


class LookupFailure(Exception):
    """A DNS lookup failed with a classified kind."""

    def __init__(self, kind: LookupErrorKind, message: str = ""):
        super().__init__(message or kind.code)
        self.kind = kind

    @property
    def code(self) -> str:
        return self.kind.code


class Resolver(Protocol):
    """Anything able to answer A, AAAA and TXT lookups."""

    async def resolve_a(self, name: str) -> list[str]: ...

    async def resolve_aaaa(self, name: str) -> list[str]: ...

    async def resolve_txt(self, name: str) -> list[list[str]]: ...


class AsyncDNSResolver:
    """dnspython-backed resolver raising LookupFailure on every error."""

    def __init__(self, nameservers: list[str] | None = None, lifetime: float = 5.0):
        # Explicit nameservers make the system resolv.conf irrelevant
        self.resolver = dns.asyncresolver.Resolver(configure=not nameservers)
        if nameservers:
            self.resolver.nameservers = list(nameservers)
        self.resolver.timeout = lifetime
        self.resolver.lifetime = lifetime

    async def _resolve(self, name: str, record_type: str) -> dns.resolver.Answer:
        try:
            return await self.resolver.resolve(name, record_type)
        except dns.resolver.NXDOMAIN as e:
            raise LookupFailure(LookupErrorKind.NOT_FOUND, str(e)) from e
        except dns.resolver.NoAnswer as e:
            raise LookupFailure(LookupErrorKind.NO_DATA, str(e)) from e
        except dns.exception.Timeout as e:
            raise LookupFailure(LookupErrorKind.TIMEOUT, str(e)) from e
        except dns.resolver.NoNameservers as e:
            raise LookupFailure(LookupErrorKind.OTHER, "No nameservers") from e
        except dns.exception.DNSException as e:
            raise LookupFailure(LookupErrorKind.OTHER, str(e) or type(e).__name__) from e

    async def resolve_a(self, name: str) -> list[str]:
        answers = await self._resolve(name, "A")
        return [rdata.address for rdata in answers]

    async def resolve_aaaa(self, name: str) -> list[str]:
        answers = await self._resolve(name, "AAAA")
        return [rdata.address for rdata in answers]

    async def resolve_txt(self, name: str) -> list[list[str]]:
        answers = await self._resolve(name, "TXT")
        return [
            [s.decode("utf-8", errors="replace") for s in rdata.strings]
            for rdata in answers
        ]


def _resolution_message(domain: str, error: LookupFailure | None) -> str:
    kind = error.kind if error else None
    if kind is LookupErrorKind.NOT_FOUND:
        return f'Domain "{domain}" does not exist or could not be found'
    if kind is LookupErrorKind.NO_DATA:
        return f'Domain "{domain}" exists but has no A or AAAA records'
    if kind is LookupErrorKind.TIMEOUT:
        return f'DNS lookup timed out for "{domain}"'
    return f'Could not resolve domain "{domain}" to any IP addresses'


class DomainResolver:
    """Resolve a domain to its IPv4 and IPv6 addresses."""

    def __init__(self, resolver: Resolver):
        self.resolver = resolver

    async def resolve(self, domain: str) -> list[str]:
        """Return IPv4 addresses followed by IPv6 addresses.

        The two lookups are independent; one failing does not affect the
        other. Raises DomainResolutionError when neither yields anything.
        """
        v4, v6 = await asyncio.gather(
            self.resolver.resolve_a(domain),
            self.resolver.resolve_aaaa(domain),
            return_exceptions=True,
        )

        ips: list[str] = []
        first_error: LookupFailure | None = None
        for outcome in (v4, v6):
            if isinstance(outcome, LookupFailure):
                logger.debug("Address lookup for %s failed: %s", domain, outcome.code)
                first_error = first_error or outcome
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                ips.extend(outcome)

        if not ips:
            raise DomainResolutionError(
                _resolution_message(domain, first_error),
                code=first_error.kind if first_error else None,
            )

        return ips

"""
Exception hierarchy for RBLScope.

Only ValidationError and DomainResolutionError abort a request; per-query
failures are folded into result records by the executor.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rblscope.dns.core import LookupErrorKind


class RBLScopeError(Exception):
    """Base exception for RBLScope errors."""

    status_code = 500


class ValidationError(RBLScopeError):
    """Request input is missing or empty."""

    status_code = 400


class DomainResolutionError(RBLScopeError):
    """A domain target resolved to no IPv4 or IPv6 addresses."""

    def __init__(self, message: str, code: "LookupErrorKind | None" = None):
        super().__init__(message)
        self.code = code


class InvalidAddressError(RBLScopeError, ValueError):
    """An address could not be encoded into a reverse-lookup name."""


class QueryTimeoutError(RBLScopeError):
    """A guarded DNS operation did not settle before its deadline."""

    code = "ETIMEOUT"

    def __init__(self, timeout_ms: int):
        super().__init__(f"DNS query timeout after {timeout_ms}ms")
        self.timeout_ms = timeout_ms

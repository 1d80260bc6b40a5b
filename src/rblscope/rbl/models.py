"""
Data models for DNSBL queries and results.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from rblscope.rbl.providers import RBLProvider
from rblscope.rbl.targets import TargetKind


@dataclass(frozen=True)
class RBLQuery:
    """One (target, provider) pair and its encoded query name."""
    target: str
    provider: RBLProvider
    query_name: str
    is_domain_query: bool = False


@dataclass
class RBLResult:
    """Result from an RBL lookup.

    listed=True never carries an error; an error always means listed=False.
    """
    rbl: str
    listed: bool = False
    response: str | None = None
    reason: str | None = None
    response_time_ms: int = 0
    error: str | None = None
    url: str | None = None
    description: str | None = None

    def __post_init__(self):
        if self.listed and self.error is not None:
            raise ValueError("A listed result cannot carry an error")

    def with_suffix(self, suffix: str) -> "RBLResult":
        """Copy with the provider name suffixed, e.g. 'SpamCop (192.0.2.1)'."""
        return replace(self, rbl=f"{self.rbl} ({suffix})")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "rbl": self.rbl,
            "listed": self.listed,
            "responseTime": self.response_time_ms,
        }
        optional = {
            "response": self.response,
            "reason": self.reason,
            "error": self.error,
            "url": self.url,
            "description": self.description,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data


@dataclass
class RBLSummary:
    """Summary counts; the three buckets partition total_checked."""
    total_checked: int = 0
    listed_count: int = 0
    clean_count: int = 0
    error_count: int = 0

    @classmethod
    def from_results(cls, results: list[RBLResult]) -> "RBLSummary":
        summary = cls(total_checked=len(results))
        for result in results:
            if result.error is not None:
                summary.error_count += 1
            elif result.listed:
                summary.listed_count += 1
            else:
                summary.clean_count += 1
        return summary

    def to_dict(self) -> dict[str, int]:
        return {
            "totalChecked": self.total_checked,
            "listedCount": self.listed_count,
            "cleanCount": self.clean_count,
            "errorCount": self.error_count,
        }


@dataclass
class AggregateResponse:
    """Everything returned for one check request."""
    target: str
    target_type: TargetKind
    results: list[RBLResult] = field(default_factory=list)
    resolved_ips: list[str] | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def summary(self) -> RBLSummary:
        return RBLSummary.from_results(self.results)

    @property
    def listings(self) -> list[RBLResult]:
        return [r for r in self.results if r.listed]

    @property
    def errors(self) -> list[RBLResult]:
        return [r for r in self.results if r.error is not None]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "target": self.target,
            "targetType": self.target_type.value,
        }
        if self.resolved_ips is not None:
            data["resolvedIPs"] = list(self.resolved_ips)
        data["results"] = [r.to_dict() for r in self.results]
        data["summary"] = self.summary.to_dict()
        data["timestamp"] = (
            self.timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        )
        return data

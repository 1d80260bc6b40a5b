"""
RBL/DNSBL provider catalog.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from rblscope.rbl.targets import TargetKind


class ProviderType(str, Enum):
    """Which target kinds a provider accepts."""
    IP = "ip"
    DOMAIN = "domain"
    BOTH = "both"


@dataclass(frozen=True)
class RBLProvider:
    """A single reputation list and its applicability rules."""
    zone: str
    name: str
    type: ProviderType
    supports_ipv6: bool = False
    url: str | None = None
    description: str | None = None
    requires_auth: bool = False

    def __post_init__(self):
        if self.type is ProviderType.DOMAIN and self.supports_ipv6:
            raise ValueError(f"Domain-only provider {self.zone} cannot support IPv6")


def can_query(provider: RBLProvider, target_kind: TargetKind) -> bool:
    """Whether provider accepts targets of target_kind."""
    if provider.type is ProviderType.BOTH:
        return True
    if provider.type is ProviderType.DOMAIN:
        return target_kind is TargetKind.DOMAIN
    # ProviderType.IP
    if target_kind is TargetKind.IPV4:
        return True
    if target_kind is TargetKind.IPV6:
        return provider.supports_ipv6
    return False


class RBLCatalog:
    """Immutable, ordered collection of providers."""

    def __init__(self, providers: Iterable[RBLProvider]):
        self._providers = tuple(providers)

    def __iter__(self) -> Iterator[RBLProvider]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)

    @property
    def providers(self) -> tuple[RBLProvider, ...]:
        return self._providers

    def get(self, zone: str) -> RBLProvider | None:
        """Look up a provider by its zone."""
        zone = zone.lower().rstrip(".")
        for provider in self._providers:
            if provider.zone.lower() == zone:
                return provider
        return None

    def eligible_providers(self, target_kind: TargetKind) -> list[RBLProvider]:
        """Providers that can be queried for target_kind, in catalog order."""
        return [p for p in self._providers if can_query(p, target_kind)]


SPAMHAUS_URL = "https://www.spamhaus.org/lookup/"
SORBS_URL = "https://www.sorbs.net/lookup.shtml"
UCEPROTECT_URL = "https://www.uceprotect.net/en/rblcheck.php"

DEFAULT_PROVIDERS = (
    # Spamhaus
    RBLProvider(
        zone="zen.spamhaus.org",
        name="Spamhaus ZEN",
        description="Combined blocklist",
        url=SPAMHAUS_URL,
        type=ProviderType.BOTH,
        supports_ipv6=True,
    ),
    RBLProvider(
        zone="sbl.spamhaus.org",
        name="Spamhaus SBL",
        description="Spam sources",
        url=SPAMHAUS_URL,
        type=ProviderType.IP,
        supports_ipv6=True,
    ),
    RBLProvider(
        zone="xbl.spamhaus.org",
        name="Spamhaus XBL",
        description="Exploits",
        url=SPAMHAUS_URL,
        type=ProviderType.IP,
        supports_ipv6=True,
    ),
    RBLProvider(
        zone="pbl.spamhaus.org",
        name="Spamhaus PBL",
        description="Policy blocklist",
        url=SPAMHAUS_URL,
        type=ProviderType.IP,
        supports_ipv6=True,
    ),
    RBLProvider(
        zone="dbl.spamhaus.org",
        name="Spamhaus DBL",
        description="Domain blocklist",
        url=SPAMHAUS_URL,
        type=ProviderType.DOMAIN,
    ),

    # SORBS
    RBLProvider(
        zone="dnsbl.sorbs.net",
        name="SORBS",
        description="Spam sources",
        url=SORBS_URL,
        type=ProviderType.IP,
    ),

    # SpamCop
    RBLProvider(
        zone="bl.spamcop.net",
        name="SpamCop",
        description="Spam reports",
        url="https://www.spamcop.net/bl.shtml",
        type=ProviderType.IP,
    ),

    # Barracuda
    RBLProvider(
        zone="b.barracudacentral.org",
        name="Barracuda",
        description="Reputation system",
        url="https://barracudacentral.org/lookups",
        type=ProviderType.IP,
        requires_auth=True,
    ),

    # UCEPROTECT
    RBLProvider(
        zone="dnsbl-1.uceprotect.net",
        name="UCEPROTECT L1",
        description="Single IPs",
        url=UCEPROTECT_URL,
        type=ProviderType.IP,
    ),
    RBLProvider(
        zone="dnsbl-2.uceprotect.net",
        name="UCEPROTECT L2",
        description="ISP ranges",
        url=UCEPROTECT_URL,
        type=ProviderType.IP,
    ),
    RBLProvider(
        zone="dnsbl-3.uceprotect.net",
        name="UCEPROTECT L3",
        description="Countries/ASNs",
        url=UCEPROTECT_URL,
        type=ProviderType.IP,
    ),

    # PSBL
    RBLProvider(
        zone="psbl.surriel.com",
        name="PSBL",
        description="Passive spam block",
        url="https://psbl.org/",
        type=ProviderType.IP,
    ),

    # Others
    RBLProvider(
        zone="dnsbl.dronebl.org",
        name="DroneBL",
        description="Drones/zombies",
        url="https://dronebl.org/lookup",
        type=ProviderType.IP,
        supports_ipv6=True,
    ),
    RBLProvider(
        zone="spam.dnsbl.sorbs.net",
        name="SORBS Spam",
        description="Verified spam",
        url=SORBS_URL,
        type=ProviderType.IP,
    ),
    RBLProvider(
        zone="dul.dnsbl.sorbs.net",
        name="SORBS DUL",
        description="Dynamic IPs",
        url=SORBS_URL,
        type=ProviderType.IP,
    ),
    RBLProvider(
        zone="bl.blocklist.de",
        name="Blocklist.de",
        description="Abusive mail servers",
        url="https://www.blocklist.de/en/index.html",
        type=ProviderType.IP,
    ),
    RBLProvider(
        zone="bl.mailspike.net",
        name="Mailspike",
        description="Mailspike abuse list",
        url="https://mailspike.org/",
        type=ProviderType.IP,
    ),
    RBLProvider(
        zone="all.spamrats.com",
        name="SpamRats",
        description="SpamRats RBL",
        url="https://www.spamrats.com/",
        type=ProviderType.IP,
    ),

    # URI lists
    RBLProvider(
        zone="multi.surbl.org",
        name="SURBL Multi",
        description="URI/domain lists",
        url="https://www.surbl.org/",
        type=ProviderType.DOMAIN,
    ),
)

DEFAULT_CATALOG = RBLCatalog(DEFAULT_PROVIDERS)

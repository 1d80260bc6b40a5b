"""
Target normalization and classification.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum

import dns.exception
import dns.name


logger = logging.getLogger(__name__)

IPV4_PATTERN = re.compile(r"^(\d{1,3}\.){3}\d{1,3}$")
IPV6_PATTERN = re.compile(r"^([0-9a-fA-F]{0,4}:){2,7}[0-9a-fA-F]{0,4}$")


class TargetKind(str, Enum):
    """What kind of thing is being checked."""
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    DOMAIN = "domain"


@dataclass
class Target:
    """A normalized, classified check target."""
    value: str
    kind: TargetKind
    resolved_ips: list[str] = field(default_factory=list)


def is_ipv4(value: str) -> bool:
    return bool(IPV4_PATTERN.match(value))


def is_ipv6(value: str) -> bool:
    return bool(IPV6_PATTERN.match(value))


def to_ascii_domain(domain: str) -> str:
    """Convert an internationalized domain to its punycode form.

    Falls back to the input unchanged when conversion fails.
    """
    if domain.isascii():
        return domain
    try:
        return dns.name.from_unicode(domain).to_text(omit_final_dot=True)
    except (dns.exception.DNSException, UnicodeError, ValueError) as e:
        logger.debug("IDN conversion failed for %r: %s", domain, e)
        return domain


def classify(value: str) -> TargetKind:
    """Classify an already normalized string."""
    if is_ipv4(value):
        return TargetKind.IPV4
    if is_ipv6(value):
        return TargetKind.IPV6
    return TargetKind.DOMAIN


def normalize(raw: str) -> str:
    """Trim, lower-case, drop one trailing dot and punycode-encode domains."""
    value = raw.strip().lower()
    if value.endswith("."):
        value = value[:-1]
    if classify(value) is TargetKind.DOMAIN:
        value = to_ascii_domain(value)
    return value


def parse_target(raw: str) -> Target:
    """Normalize and classify a user-supplied target."""
    value = normalize(raw)
    return Target(value=value, kind=classify(value))

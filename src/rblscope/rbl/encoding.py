"""
Reverse-lookup query name construction for DNSBL zones.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from rblscope.errors import InvalidAddressError
from rblscope.rbl.targets import is_ipv4, is_ipv6


def reverse_ipv4(ip: str) -> str:
    """Reverse an IPv4 address: 192.0.2.1 -> 1.2.0.192"""
    return ".".join(reversed(ip.split(".")))


def reverse_ipv6(ip: str) -> str:
    """Expand an IPv6 address and reverse its 32 nibbles, dot separated."""
    # Drop a scope id (fe80::1%eth0)
    address = ip.split("%", 1)[0].lower()

    halves = address.split("::")
    if len(halves) > 2:
        raise InvalidAddressError(f"Invalid IPv6 address: {ip}")

    left = [g for g in halves[0].split(":") if g]
    right = [g for g in halves[1].split(":") if g] if len(halves) == 2 else []

    pad = 8 - (len(left) + len(right))
    if pad < 0:
        raise InvalidAddressError(f"Invalid IPv6 address: {ip}")

    groups = left + ["0"] * pad + right
    nibbles = "".join(group.zfill(4) for group in groups)
    return ".".join(reversed(nibbles))


def build_query_name(value: str, zone: str, is_domain_query: bool = False) -> str:
    """Build the DNS name asking whether value is listed in zone."""
    if is_domain_query:
        return f"{value}.{zone}"
    if is_ipv4(value):
        return f"{reverse_ipv4(value)}.{zone}"
    if is_ipv6(value):
        return f"{reverse_ipv6(value)}.{zone}"
    raise InvalidAddressError("Invalid IP format")

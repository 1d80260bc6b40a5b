"""
RBLScope - DNS Blacklist Diagnostics

Checks IP addresses and domains against DNS-based reputation lists
(DNSBL/RBL), classifying each provider's answer as listed, clean,
blocked or failed.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "0.1.0"
__author__ = "DNS Science.io"
__copyright__ = "Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company"

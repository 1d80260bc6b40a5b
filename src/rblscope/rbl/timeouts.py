"""
Per-operation deadlines for DNS lookups.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
from typing import Awaitable, TypeVar

from rblscope.errors import QueryTimeoutError


T = TypeVar("T")


async def with_timeout(operation: Awaitable[T], ms: int) -> T:
    """Await operation, raising QueryTimeoutError if it takes longer than ms.

    On timeout the operation is cancelled, so its eventual outcome never
    reaches the caller.
    """
    try:
        return await asyncio.wait_for(operation, timeout=ms / 1000)
    except asyncio.TimeoutError:
        raise QueryTimeoutError(ms) from None

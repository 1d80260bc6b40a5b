"""Shared fixtures: in-memory resolvers so no test touches the network."""

import asyncio

import pytest

from rblscope.config import RBLConfig, set_config
from rblscope.dns.core import LookupErrorKind, LookupFailure


class FakeResolver:
    """Answers from dicts; unknown names fail with NOT_FOUND.

    Values may be a list (answer), an exception instance (raised) or a
    callable taking the name and returning either.
    """

    def __init__(self, a=None, aaaa=None, txt=None, delay: float = 0.0):
        self.a = a or {}
        self.aaaa = aaaa or {}
        self.txt = txt or {}
        self.delay = delay
        self.calls: list[tuple[str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def _answer(self, table, record_type: str, name: str):
        self.calls.append((record_type, name))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            value = table.get(name, LookupFailure(LookupErrorKind.NOT_FOUND))
            if callable(value) and not isinstance(value, BaseException):
                value = value(name)
            if isinstance(value, BaseException):
                raise value
            return value
        finally:
            self.in_flight -= 1

    async def resolve_a(self, name: str) -> list[str]:
        return await self._answer(self.a, "A", name)

    async def resolve_aaaa(self, name: str) -> list[str]:
        return await self._answer(self.aaaa, "AAAA", name)

    async def resolve_txt(self, name: str) -> list[list[str]]:
        return await self._answer(self.txt, "TXT", name)

    def queried(self, record_type: str = "A") -> list[str]:
        return [name for rtype, name in self.calls if rtype == record_type]


@pytest.fixture(autouse=True)
def default_config():
    """Pin configuration so local .env files and env vars do not leak in."""
    set_config(RBLConfig())
    yield
    set_config(None)


@pytest.fixture
def fake_resolver():
    return FakeResolver()

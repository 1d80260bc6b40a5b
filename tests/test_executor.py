"""Single-provider lookups and response classification."""

import asyncio

from conftest import FakeResolver
from rblscope.dns.core import LookupErrorKind, LookupFailure
from rblscope.rbl.executor import (
    BLOCKED_MESSAGE,
    RBLQueryExecutor,
    is_blocked_reason,
    is_meta_response,
)
from rblscope.rbl.providers import ProviderType, RBLProvider


PROVIDER = RBLProvider(
    zone="bl.test.example",
    name="Test BL",
    type=ProviderType.BOTH,
    supports_ipv6=True,
    url="https://bl.test.example/lookup",
    description="Test list",
)
QUERY = "1.2.0.192.bl.test.example"


def run(resolver, target="192.0.2.1", is_domain=False, timeout_ms=1000):
    executor = RBLQueryExecutor(resolver, timeout_ms=timeout_ms)
    return asyncio.run(executor.execute(target, PROVIDER, is_domain))


def test_not_found_is_clean():
    result = run(FakeResolver())
    assert result.rbl == "Test BL"
    assert result.listed is False
    assert result.error is None


def test_no_data_is_clean():
    result = run(FakeResolver(a={QUERY: LookupFailure(LookupErrorKind.NO_DATA)}))
    assert result.listed is False
    assert result.error is None


def test_guard_timeout_is_error():
    resolver = FakeResolver(delay=0.5)
    result = run(resolver, timeout_ms=20)
    assert result.listed is False
    assert result.error == "Query timeout (>0.02s)"


def test_resolver_timeout_uses_same_message():
    resolver = FakeResolver(a={QUERY: LookupFailure(LookupErrorKind.TIMEOUT)})
    assert run(resolver).error == "Query timeout (>1s)"


def test_other_failure_carries_message():
    resolver = FakeResolver(a={QUERY: LookupFailure(LookupErrorKind.OTHER, "No nameservers")})
    result = run(resolver)
    assert result.listed is False
    assert result.error == "No nameservers"


def test_unexpected_exception_is_captured():
    resolver = FakeResolver(a={QUERY: RuntimeError("socket closed")})
    result = run(resolver)
    assert result.error == "socket closed"


def test_listed_with_reason():
    resolver = FakeResolver(
        a={QUERY: ["127.0.0.2"]},
        txt={QUERY: [["Listed by", "Test BL"], ["see https://bl.test.example"]]},
    )
    result = run(resolver)
    assert result.listed is True
    assert result.error is None
    assert result.response == "127.0.0.2"
    assert result.reason == "Listed by Test BL see https://bl.test.example"
    assert result.url == PROVIDER.url
    assert result.description == PROVIDER.description


def test_listed_without_txt():
    resolver = FakeResolver(a={QUERY: ["127.0.0.4"]})
    result = run(resolver)
    assert result.listed is True
    assert result.reason is None


def test_txt_failure_is_swallowed():
    resolver = FakeResolver(
        a={QUERY: ["127.0.0.2"]},
        txt={QUERY: LookupFailure(LookupErrorKind.OTHER, "SERVFAIL")},
    )
    result = run(resolver)
    assert result.listed is True
    assert result.reason is None


def test_meta_range_response_is_blocked():
    resolver = FakeResolver(a={QUERY: ["127.255.0.1"]})
    result = run(resolver)
    assert result.listed is False
    assert result.error == BLOCKED_MESSAGE
    assert result.response is None


def test_blocked_txt_phrase_becomes_error():
    text = "Query Refused. See https://bl.test.example/open-resolver"
    resolver = FakeResolver(a={QUERY: ["127.0.0.2"]}, txt={QUERY: [[text]]})
    result = run(resolver)
    assert result.listed is False
    assert result.error == text


def test_domain_query_name():
    resolver = FakeResolver(a={"example.com.bl.test.example": ["127.0.1.2"]})
    result = run(resolver, target="example.com", is_domain=True)
    assert result.listed is True
    assert resolver.queried("A") == ["example.com.bl.test.example"]


def test_ipv6_query_name():
    resolver = FakeResolver()
    run(resolver, target="2001:db8::1")
    (name,) = resolver.queried("A")
    assert name.startswith("1.0.0.0.")
    assert name.endswith(".8.b.d.0.1.0.0.2.bl.test.example")


def test_invalid_address_becomes_error():
    result = run(FakeResolver(), target="not-an-ip")
    assert result.listed is False
    assert result.error == "Invalid IP format"


def test_response_time_recorded():
    result = run(FakeResolver(delay=0.05))
    assert result.response_time_ms >= 40


def test_meta_and_phrase_helpers():
    assert is_meta_response("127.255.255.254")
    assert not is_meta_response("127.0.0.2")
    assert not is_meta_response("garbage")
    assert is_blocked_reason("Access Denied for open resolvers")
    assert not is_blocked_reason("Listed for spam")
    assert not is_blocked_reason(None)


def test_run_executes_prebuilt_query():
    resolver = FakeResolver(a={QUERY: ["127.0.0.2"]})
    executor = RBLQueryExecutor(resolver, timeout_ms=1000)
    query = executor.build_query("192.0.2.1", PROVIDER, False)
    assert query.query_name == QUERY

    result = asyncio.run(executor.run(query))
    assert result.listed is True
    assert result.response == "127.0.0.2"

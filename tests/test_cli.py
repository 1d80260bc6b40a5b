"""Command line interface."""

import json

import pytest
from click.testing import CliRunner

from conftest import FakeResolver
from rblscope.cli import main
from rblscope.rbl import cli as rbl_cli


WIDE = {"COLUMNS": "200"}


@pytest.fixture
def fake_dns(monkeypatch):
    resolver = FakeResolver(
        a={
            "example.com": ["192.0.2.10"],
            "10.2.0.192.zen.spamhaus.org": ["127.0.0.2"],
        },
    )
    monkeypatch.setattr(rbl_cli, "AsyncDNSResolver", lambda nameservers=None: resolver)
    return resolver


def test_list_all():
    result = CliRunner().invoke(rbl_cli.rbl, ["list"], env=WIDE)
    assert result.exit_code == 0
    assert "zen.spamhaus.org" in result.output
    assert "Showing 19 of 19 providers" in result.output


def test_list_ipv6_only():
    result = CliRunner().invoke(rbl_cli.rbl, ["list", "--ipv6"], env=WIDE)
    assert result.exit_code == 0
    assert "Showing 5 of 19 providers" in result.output
    assert "bl.spamcop.net" not in result.output


def test_list_by_type():
    result = CliRunner().invoke(rbl_cli.rbl, ["list", "--type", "domain"], env=WIDE)
    assert result.exit_code == 0
    assert "Showing 2 of 19 providers" in result.output


def test_check_json(fake_dns):
    result = CliRunner().invoke(rbl_cli.rbl, ["check", "example.com", "--json"], env=WIDE)
    assert result.exit_code == 0
    body = json.loads(result.output)
    assert body["targetType"] == "domain"
    assert body["resolvedIPs"] == ["192.0.2.10"]
    assert body["summary"]["listedCount"] == 1


def test_check_table(fake_dns):
    result = CliRunner().invoke(rbl_cli.rbl, ["check", "192.0.2.10"], env=WIDE)
    assert result.exit_code == 0
    assert "LISTED" in result.output
    assert "Spamhaus ZEN" in result.output


def test_check_unresolvable_exits_1(fake_dns):
    result = CliRunner().invoke(rbl_cli.rbl, ["check", "no-such-domain.invalid"], env=WIDE)
    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_single(fake_dns):
    result = CliRunner().invoke(rbl_cli.rbl, ["single", "192.0.2.10", "zen.spamhaus.org"], env=WIDE)
    assert result.exit_code == 0
    assert "LISTED on Spamhaus ZEN" in result.output


def test_main_registers_rbl_group():
    result = CliRunner().invoke(main, ["--help"], env=WIDE)
    assert result.exit_code == 0
    assert "rbl" in result.output


@pytest.mark.parametrize(
    "args",
    [["check", "192.0.2.10"], ["single", "192.0.2.10", "zen.spamhaus.org"]],
)
def test_resolver_setup_failure_exits_1(monkeypatch, args):
    import dns.resolver

    def no_config(nameservers=None):
        raise dns.resolver.NoResolverConfiguration("no nameservers")

    monkeypatch.setattr(rbl_cli, "AsyncDNSResolver", no_config)
    result = CliRunner().invoke(rbl_cli.rbl, args, env=WIDE)
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "no nameservers" in result.output
    assert not isinstance(result.exception, dns.resolver.NoResolverConfiguration)

"""Tests for the token resolver."""

import pytest
from unittest.mock import Mock
from tokensync.lib.parser.resolvers import TokenResolver
from tokensync.lib.parser.formats import HexFormat
from tokensync.models.dataModel import RGBA, ResolveStatus, Token, TokenType

RED = RGBA(r=1.0, g=0.0, b=0.0, a=1.0)
GREEN = RGBA(r=0.0, g=1.0, b=0.0, a=1.0)
BLUE = RGBA(r=0.0, g=0.0, b=1.0, a=1.0)


def table_make(**values):
    """Build a table from keyword pairs, `a="#fff"` becomes `--a: #fff`."""
    return {f"--{k}": Token(name=f"--{k}", rawValue=v) for k, v in values.items()}


def test_resolves_every_token():
    table = table_make(a="#ff0000", b="rgba(0, 255, 0, 1)", c="0, 0, 255")
    diagnostics = TokenResolver(table).resolve()
    assert diagnostics == []
    assert table["--a"].color == RED
    assert table["--b"].color == GREEN
    assert table["--c"].color == BLUE
    assert all(t.status is ResolveStatus.RESOLVED for t in table.values())


def test_reference_sets_parent():
    table = table_make(link="var(--base)", base="#00ff00")
    TokenResolver(table).resolve()
    link = table["--link"]
    assert link.type is TokenType.COLOR
    assert link.color == GREEN
    assert link.parent is table["--base"]
    assert table["--base"].parent is None


def test_multi_hop_chain():
    table = table_make(a="var(--b)", b="var(--c)", c="#0000ff")
    TokenResolver(table).resolve()
    assert table["--a"].color == BLUE
    assert table["--a"].parent is table["--b"]
    assert table["--b"].parent is table["--c"]


def test_shared_target_resolved_once():
    lookup = Mock(return_value="#ff0000")
    table = table_make(a="var(--base)", b="var(--base)", base="red")
    TokenResolver(table, lookup=lookup).resolve()
    lookup.assert_called_once_with("red")
    assert table["--a"].color == table["--b"].color == RED


def test_missing_reference_is_unknown():
    table = table_make(a="var(--missing)", b="#ff0000")
    diagnostics = TokenResolver(table).resolve()
    assert table["--a"].type is TokenType.UNKNOWN
    assert table["--a"].color is None
    assert table["--b"].color == RED
    assert [d.name for d in diagnostics] == ["--a"]
    assert "--missing" in diagnostics[0].reason


def test_self_reference():
    table = table_make(a="var(--a)")
    diagnostics = TokenResolver(table).resolve()
    assert table["--a"].type is TokenType.UNKNOWN
    assert "Circular reference" in diagnostics[0].reason


def test_mutual_reference():
    table = table_make(a="var(--b)", b="var(--a)", c="#ff0000")
    diagnostics = TokenResolver(table).resolve()
    assert table["--a"].type is TokenType.UNKNOWN
    assert table["--b"].type is TokenType.UNKNOWN
    assert table["--a"].color is None and table["--b"].color is None
    assert table["--c"].color == RED
    assert {d.name for d in diagnostics} == {"--a", "--b"}


def test_reference_into_cycle():
    table = table_make(head="var(--a)", a="var(--b)", b="var(--a)")
    TokenResolver(table).resolve()
    assert all(t.type is TokenType.UNKNOWN for t in table.values())


def chain_make(length, reverse=False):
    """Build `--t0 -> --t1 -> ... -> --t<length>: #0000ff`."""
    tokens = [
        Token(name=f"--t{i}", rawValue=f"var(--t{i + 1})") for i in range(length)
    ]
    tokens.append(Token(name=f"--t{length}", rawValue="#0000ff"))
    if reverse:
        tokens.reverse()
    return {t.name: t for t in tokens}


@pytest.mark.parametrize("length", [70, 2000])
def test_long_chain_independent_of_declaration_order(length):
    forward = chain_make(length)
    backward = chain_make(length, reverse=True)
    assert TokenResolver(forward).resolve() == []
    assert TokenResolver(backward).resolve() == []
    for name, token in forward.items():
        assert token.type is TokenType.COLOR
        assert token.color == BLUE
        assert backward[name].color == token.color
    assert forward["--t0"].parent is forward["--t1"]


def test_long_chain_into_cycle():
    table = chain_make(1500)
    table["--t1500"].rawValue = "var(--t0)"
    diagnostics = TokenResolver(table).resolve()
    assert all(t.type is TokenType.UNKNOWN for t in table.values())
    assert len(diagnostics) == len(table)
    assert sum("Circular reference" in d.reason for d in diagnostics) == 1


def test_text_type_inherited_without_color():
    table = {
        "--label": Token(
            name="--label",
            rawValue="Hello",
            type=TokenType.TEXT,
            status=ResolveStatus.RESOLVED,
        ),
        "--alias": Token(name="--alias", rawValue="var(--label)"),
    }
    diagnostics = TokenResolver(table).resolve()
    alias = table["--alias"]
    assert alias.type is TokenType.TEXT
    assert alias.color is None
    assert alias.parent is table["--label"]
    assert diagnostics == []


def test_malformed_hex_keeps_color_type():
    table = table_make(a="#fff")
    diagnostics = TokenResolver(table).resolve()
    assert table["--a"].type is TokenType.COLOR
    assert table["--a"].color == RGBA.zero()
    assert len(diagnostics) == 1


def test_custom_formats_without_fallback():
    table = table_make(a="#ff0000", b="red")
    diagnostics = TokenResolver(table, formats=[HexFormat()]).resolve()
    assert table["--a"].color == RED
    assert table["--b"].type is TokenType.UNKNOWN
    assert "No value format" in diagnostics[0].reason


@pytest.mark.parametrize("value", ["", "16px", "bold"])
def test_unrecognized_values(value):
    table = table_make(a=value)
    diagnostics = TokenResolver(table).resolve()
    assert table["--a"].type is TokenType.UNKNOWN
    assert len(diagnostics) == 1

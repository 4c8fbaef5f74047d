"""Tests for style library synchronization."""

import json
import pytest
from tokensync.lib.sync import (
    JSONStyleLibrary,
    StyleLibrary,
    name_clean,
    style_find,
    styles_sync,
)
from tokensync.lib.tokens import tokens_resolve
from tokensync.models.dataModel import NamedStyle, Paint, RGB

TOKENS = """
--Primary: rgba(255, 0, 0, 0.5);
--secondary: #00ff00;
--spacing: 4px;
"""


@pytest.fixture
def library(tmp_path):
    lib = JSONStyleLibrary(tmp_path / "styles.json")
    lib.style_create("primary")
    lib.style_create("--SECONDARY")
    return lib


@pytest.fixture
def tokens():
    return tokens_resolve(TOKENS).tokens


def test_json_library_is_style_library(library):
    assert isinstance(library, StyleLibrary)


def test_name_clean():
    assert name_clean("--primary") == "primary"
    assert name_clean("$$primary", prefix_length=1) == "$primary"


def test_style_find_ignores_case(library):
    assert style_find(library.styles_list(), "PRIMARY").name == "primary"
    assert style_find(library.styles_list(), "missing") is None


def test_sync_updates_matching_names(library, tokens):
    result = styles_sync(tokens, library)
    assert (result.updated, result.created, result.skipped) == (1, 0, 1)
    secondary = style_find(library.styles_list(), "--secondary")
    assert secondary.paints == [Paint(color=RGB(r=0.0, g=1.0, b=0.0), opacity=1.0)]
    assert style_find(library.styles_list(), "primary").paints == []


def test_sync_clean_name(library, tokens):
    result = styles_sync(tokens, library, clean_name=True)
    assert result.updated == 1
    primary = style_find(library.styles_list(), "primary")
    assert primary.paints == [Paint(color=RGB(r=1.0, g=0.0, b=0.0), opacity=0.5)]


def test_sync_creates_when_enabled(library, tokens):
    result = styles_sync(tokens, library, clean_name=True, add_styles=True)
    assert (result.updated, result.created) == (1, 1)
    created = style_find(library.styles_list(), "secondary")
    assert created is not None
    assert created.paints[0].color == RGB(r=0.0, g=1.0, b=0.0)


def test_sync_never_creates_for_non_colors(library, tokens):
    styles_sync(tokens, library, clean_name=True, add_styles=True)
    assert style_find(library.styles_list(), "spacing") is None


def test_library_round_trip(tmp_path, library, tokens):
    styles_sync(tokens, library, add_styles=True)
    library.save()
    data = json.loads((tmp_path / "styles.json").read_text())
    assert [s["name"] for s in data["styles"]] == [
        "primary",
        "--SECONDARY",
        "--Primary",
    ]
    reloaded = JSONStyleLibrary(tmp_path / "styles.json").load()
    assert reloaded.styles_list() == library.styles_list()


def test_load_missing_file_is_empty(tmp_path):
    lib = JSONStyleLibrary(tmp_path / "nope.json").load()
    assert lib.styles_list() == []


def test_load_invalid_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"styles": [{"paints": []}]}))
    with pytest.raises(ValueError, match="Invalid style library"):
        JSONStyleLibrary(path).load()


def test_load_from_alternative_path(tmp_path):
    source = tmp_path / "in.json"
    source.write_text(json.dumps({"styles": [NamedStyle(name="x").model_dump()]}))
    lib = JSONStyleLibrary(tmp_path / "out.json").load(source)
    assert [s.name for s in lib.styles_list()] == ["x"]
    lib.save()
    assert (tmp_path / "out.json").exists()

"""Tests for the plugin entry point."""

import json
import pytest
from argparse import Namespace
from pathlib import Path
from tokensync.tokensync import __version__, parser, tokens_process
from tokensync.models.dataModel import NamedStyle, Paint, RGB, StyleLibraryDocument


@pytest.fixture
def dirs(tmp_path: Path) -> tuple[Path, Path]:
    inputdir = tmp_path / "incoming"
    outputdir = tmp_path / "outgoing"
    inputdir.mkdir()
    outputdir.mkdir()
    (inputdir / "brand.css").write_text(
        ":root {\n  --primary: #ff0000;\n  --accent: var(--primary);\n  --gap: 8px;\n}\n"
    )
    (inputdir / "notes.txt").write_text("--ignored: #00ff00;\n")
    library = StyleLibraryDocument(
        styles=[
            NamedStyle(
                name="Primary",
                paints=[Paint(color=RGB(r=0.0, g=0.0, b=0.0))],
            )
        ]
    )
    (inputdir / "styles.json").write_text(library.model_dump_json())
    return inputdir, outputdir


def options_make(**overrides) -> Namespace:
    values = dict(pattern="**/*.css", library="styles.json", cleanName=True, addStyles=False)
    values.update(overrides)
    return Namespace(**values)


def test_version_output(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        parser.parse_args(["-V"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_parser_defaults() -> None:
    assert parser.get_default("pattern") == "**/*.css"
    assert parser.get_default("library") == "styles.json"
    assert parser.get_default("cleanName") is False
    assert parser.get_default("addStyles") is False


def test_updates_existing_styles(dirs: tuple[Path, Path]) -> None:
    inputdir, outputdir = dirs
    total = tokens_process(options_make(), inputdir, outputdir)
    assert (total.updated, total.created, total.skipped) == (1, 0, 1)

    data = json.loads((outputdir / "styles.json").read_text())
    assert [s["name"] for s in data["styles"]] == ["Primary"]
    assert data["styles"][0]["paints"][0]["color"] == {"r": 1.0, "g": 0.0, "b": 0.0}


def test_adds_missing_styles(dirs: tuple[Path, Path]) -> None:
    inputdir, outputdir = dirs
    total = tokens_process(options_make(addStyles=True), inputdir, outputdir)
    assert total.created == 1

    data = json.loads((outputdir / "styles.json").read_text())
    assert [s["name"] for s in data["styles"]] == ["Primary", "accent"]


def test_writes_token_json(dirs: tuple[Path, Path]) -> None:
    inputdir, outputdir = dirs
    tokens_process(options_make(), inputdir, outputdir)

    outputs = [p for p in outputdir.rglob("*.json") if p.name != "styles.json"]
    assert len(outputs) == 1
    payload = json.loads(outputs[0].read_text())
    names = [t["name"] for t in payload["tokens"]]
    assert names == ["--primary", "--accent", "--gap"]
    assert payload["diagnostics"][0]["name"] == "--gap"


def test_input_library_left_untouched(dirs: tuple[Path, Path]) -> None:
    inputdir, outputdir = dirs
    before = (inputdir / "styles.json").read_text()
    tokens_process(options_make(addStyles=True), inputdir, outputdir)
    assert (inputdir / "styles.json").read_text() == before

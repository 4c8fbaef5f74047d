"""
Style library synchronization.

Pushes resolved color tokens into a library of named styles: an existing style
whose name matches a token (case-insensitively) gets its paints overwritten,
and a missing one is created when creation is enabled. Tokens that did not
resolve to a color are skipped.

The library itself sits behind the `StyleLibrary` protocol; `JSONStyleLibrary`
keeps one on disk as a JSON document.
"""

import json
from pathlib import Path
from typing import Iterable, Protocol, Self, runtime_checkable
from pydantic import ValidationError
from tokensync.config.settings import appsettings
from tokensync.lib.log import LOG
from tokensync.models.dataModel import (
    NamedStyle,
    Paint,
    StyleLibraryDocument,
    SyncResult,
    Token,
    TokenType,
)


@runtime_checkable
class StyleLibrary(Protocol):
    """Protocol for a store of named styles."""

    def styles_list(self: Self) -> list[NamedStyle]:
        """Return the styles, in library order. Returned styles are live."""
        ...

    def style_create(self: Self, name: str) -> NamedStyle:
        """Create an empty style with the given name and return it."""
        ...


class JSONStyleLibrary:
    """Style library persisted as a JSON document.

    Attributes:
        path: Location of the JSON document
        document: In-memory library contents
    """

    def __init__(self: Self, path: Path) -> None:
        self.path: Path = path
        self.document: StyleLibraryDocument = StyleLibraryDocument()

    def load(self: Self, path: Path | None = None) -> Self:
        """Read the library from disk. A missing file is an empty library.

        Args:
            path: Alternative file to read from, defaults to `self.path`

        Raises:
            ValueError: If the file is not a valid library document
        """
        source: Path = path or self.path
        if not source.exists():
            LOG(f"No style library at {source}, starting empty")
            self.document = StyleLibraryDocument()
            return self

        try:
            self.document = StyleLibraryDocument.model_validate_json(
                source.read_text(encoding="utf-8")
            )
        except ValidationError as e:
            raise ValueError(f"Invalid style library {source}: {e}") from e

        LOG(f"Loaded {len(self.document.styles)} styles from {source}")
        return self

    def save(self: Self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(self.document.model_dump(), indent=2), encoding="utf-8"
        )
        LOG(f"Saved {len(self.document.styles)} styles to {self.path}")

    def styles_list(self: Self) -> list[NamedStyle]:
        return self.document.styles

    def style_create(self: Self, name: str) -> NamedStyle:
        style: NamedStyle = NamedStyle(name=name)
        self.document.styles.append(style)
        return style


def name_clean(name: str, prefix_length: int | None = None) -> str:
    """Strip the leading prefix (`--` by default) from a token name."""
    length: int = (
        appsettings.cleanPrefixLength if prefix_length is None else prefix_length
    )
    return name[length:]


def style_find(styles: Iterable[NamedStyle], name: str) -> NamedStyle | None:
    """Return the first style whose name equals `name` ignoring case."""
    wanted: str = name.lower()
    for style in styles:
        if style.name.lower() == wanted:
            return style
    return None


def styles_sync(
    tokens: Iterable[Token],
    library: StyleLibrary,
    clean_name: bool = False,
    add_styles: bool = False,
) -> SyncResult:
    """Synchronize resolved tokens into a style library.

    Args:
        tokens: Resolved tokens
        library: Target style library
        clean_name: Strip the name prefix before matching
        add_styles: Create styles for tokens with no match

    Returns:
        SyncResult with updated, created and skipped counts
    """
    result: SyncResult = SyncResult()

    for token in tokens:
        if token.type is not TokenType.COLOR or token.color is None:
            LOG(f"Skipping {token.name}: type is {token.type.value}, not a color")
            result.skipped += 1
            continue

        style_name: str = name_clean(token.name) if clean_name else token.name
        paint: Paint = Paint.from_rgba(token.color)

        style: NamedStyle | None = style_find(library.styles_list(), style_name)
        if style is not None:
            style.paints = [paint]
            result.updated += 1
        elif add_styles:
            style = library.style_create(style_name)
            style.paints = [paint]
            result.created += 1

    LOG(f"Updated {result.updated} styles")
    LOG(f"Added {result.created} styles")
    return result

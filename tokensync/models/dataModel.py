"""
dataModel.py

This module defines the data models used throughout the tokensync plugin.
Value objects leverage Pydantic for validation; tokens are plain dataclasses
because the resolver mutates them in place and links them to each other.

Features:
- Enum classes for token types and resolution status.
- RGBA color values and resolved tokens.
- Structured diagnostics collected during parsing and resolution.
- Named-style library documents and synchronization results.

Usage:
Import these models to validate and structure data used in the plugin.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class TokenType(Enum):
    """
    Semantic type of a token. Every token starts UNKNOWN.
    """

    UNKNOWN = "unknown"
    COLOR = "color"
    TEXT = "text"


class ResolveStatus(Enum):
    """
    Per-token resolution state, used for memoization and cycle detection.
    """

    UNRESOLVED = 1
    RESOLVING = 2
    RESOLVED = 3


class RGBA(BaseModel):
    """
    Four-channel floating point color.

    Attributes:
        r: Red channel, nominally in [0, 1]
        g: Green channel, nominally in [0, 1]
        b: Blue channel, nominally in [0, 1]
        a: Alpha channel, nominally in [0, 1]
    """

    model_config = ConfigDict(frozen=True)

    r: float
    g: float
    b: float
    a: float

    @classmethod
    def zero(cls) -> RGBA:
        """The color produced for a recognized but malformed value."""
        return cls(r=0.0, g=0.0, b=0.0, a=0.0)


@dataclass(eq=False)
class Token:
    """One named declaration and its resolved state.

    Attributes:
        name: Declaration name, unique within one parse
        rawValue: Unparsed right-hand side with the terminator removed
        type: Semantic type, set during resolution
        color: Resolved color, present iff type is COLOR
        parent: Token this one was resolved through (references only)
        status: Resolution state tag
    """

    name: str
    rawValue: str
    type: TokenType = TokenType.UNKNOWN
    color: Optional[RGBA] = None
    parent: Optional[Token] = field(default=None, repr=False)
    status: ResolveStatus = ResolveStatus.UNRESOLVED

    def export(self) -> dict[str, Any]:
        """Render the token as a JSON-ready dictionary."""
        return {
            "name": self.name,
            "rawValue": self.rawValue,
            "type": self.type.value,
            "color": self.color.model_dump() if self.color else None,
            "parent": self.parent.name if self.parent else None,
        }


TokenTable = dict[str, Token]


class Diagnostic(BaseModel):
    """A non-fatal problem found while parsing or resolving.

    Attributes:
        name: Offending token name, or the raw line for malformed declarations
        reason: Human readable description
    """

    name: str
    reason: str


@dataclass
class ResolveResult:
    """Result of resolving a style sheet.

    Attributes:
        tokens: Every declared token, resolved
        diagnostics: Problems found along the way
    """

    tokens: list[Token] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.diagnostics


class RGB(BaseModel):
    r: float
    g: float
    b: float


class Paint(BaseModel):
    """
    A solid paint as stored on a named style. The color alpha lives in
    `opacity`.
    """

    type: Literal["SOLID"] = "SOLID"
    color: RGB
    opacity: float = 1.0
    visible: bool = True

    @classmethod
    def from_rgba(cls, rgba: RGBA) -> Paint:
        return cls(color=RGB(r=rgba.r, g=rgba.g, b=rgba.b), opacity=rgba.a)


class NamedStyle(BaseModel):
    """
    A reusable named color definition in a style library.

    Attributes:
        name: Style name, matched case-insensitively against token names
        paints: Paint stack of the style
    """

    name: str
    paints: list[Paint] = Field(default_factory=list)


class StyleLibraryDocument(BaseModel):
    """On-disk representation of a style library."""

    styles: list[NamedStyle] = Field(default_factory=list)


class SyncResult(BaseModel):
    """Counts reported by a style synchronization pass.

    Attributes:
        updated: Existing styles whose paints were overwritten
        created: New styles added to the library
        skipped: Tokens not synchronized because they are not colors
    """

    updated: int = 0
    created: int = 0
    skipped: int = 0

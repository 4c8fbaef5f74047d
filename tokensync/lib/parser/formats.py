"""
Value formats recognized by the resolver.

Each format decides whether it owns a raw value (`matches`) and turns the
owning token into a `Resolution`. The resolver tries formats in a fixed
priority order:

1. `rgba(r, g, b, a)` functional notation
2. `#rrggbb` hex notation
3. `var(--name)` references to other tokens
4. `r, g, b[, a]` bare numeric lists
5. browser named colors (fallback)

Formats never raise on bad input; a malformed body is reported through
`Resolution.error`.
"""

import math
import re
from dataclasses import dataclass
from typing import Callable, Final, Optional, Protocol, Self, runtime_checkable
from tokensync.lib.parser.base import text_withinBounds
from tokensync.models.dataModel import (
    RGBA,
    ResolveStatus,
    Token,
    TokenTable,
    TokenType,
)

HEX_RE: Final[re.Pattern[str]] = re.compile(
    r"#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})", re.IGNORECASE
)
CHANNEL_MAX: Final[float] = 255.0
INTEGER_RE: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")


@dataclass
class Resolution:
    """Outcome of resolving one token.

    Attributes:
        type: Semantic type to assign
        color: Color to assign, only meaningful for COLOR
        parent: Referenced token, for references
        error: Diagnostic message if resolution degraded
    """

    type: TokenType = TokenType.UNKNOWN
    color: Optional[RGBA] = None
    parent: Optional[Token] = None
    error: Optional[str] = None


class ResolveContext(Protocol):
    """What a format may use from the running resolver."""

    table: TokenTable
    lookup: Callable[[str], str | None]

    def token_resolve(self: Self, token: Token) -> Token: ...


@runtime_checkable
class ValueFormat(Protocol):
    """Protocol for a value syntax understood by the resolver."""

    def matches(self: Self, raw_value: str) -> bool:
        """Whether this format owns the raw value."""
        ...

    def resolve(self: Self, token: Token, context: ResolveContext) -> Resolution:
        """Resolve the token's raw value.

        Args:
            token: Token being resolved
            context: The running resolver

        Returns:
            Resolution describing the new token state
        """
        ...


def channel_parse(text: str) -> float:
    """Parse one numeric component.

    Raises:
        ValueError: If the text is not a finite number
    """
    value: float = float(text.strip())
    if not math.isfinite(value):
        raise ValueError(f"Non-finite component: {text.strip()}")
    return value


def integer_parse(text: str) -> int:
    """Parse the leading integer of a component, ignoring what follows it.

    Raises:
        ValueError: If the component does not start with an integer
    """
    match: re.Match[str] | None = INTEGER_RE.match(text.strip())
    if not match:
        raise ValueError(f"Not an integer: {text.strip()}")
    return int(match.group())


def hex_parse(raw_value: str) -> RGBA | None:
    """Parse `#rrggbb` (the `#` is optional) into a color with alpha 1.

    Returns:
        The color, or None if the value is not six hex digits
    """
    match: re.Match[str] | None = HEX_RE.fullmatch(raw_value.strip())
    if not match:
        return None
    r, g, b = (int(pair, 16) / CHANNEL_MAX for pair in match.groups())
    return RGBA(r=r, g=g, b=b, a=1.0)


class RGBAFormat:
    prefix: str = "rgba("

    def matches(self: Self, raw_value: str) -> bool:
        return raw_value.startswith(self.prefix)

    def resolve(self: Self, token: Token, context: ResolveContext) -> Resolution:
        parts: list[str] = text_withinBounds(token.rawValue, "(", ")").split(",")
        if len(parts) != 4:
            return Resolution(
                type=TokenType.COLOR,
                color=RGBA.zero(),
                error=f"Couldn't parse RGBA value {token.rawValue}: "
                f"expected 4 components, got {len(parts)}",
            )
        try:
            r, g, b = (channel_parse(part) / CHANNEL_MAX for part in parts[:3])
            a: float = channel_parse(parts[3])
        except ValueError as e:
            return Resolution(
                type=TokenType.COLOR,
                color=RGBA.zero(),
                error=f"Couldn't parse RGBA value {token.rawValue}: {e}",
            )
        return Resolution(type=TokenType.COLOR, color=RGBA(r=r, g=g, b=b, a=a))


class HexFormat:
    prefix: str = "#"

    def matches(self: Self, raw_value: str) -> bool:
        return raw_value.startswith(self.prefix)

    def resolve(self: Self, token: Token, context: ResolveContext) -> Resolution:
        color: RGBA | None = hex_parse(token.rawValue)
        if color is None:
            return Resolution(
                type=TokenType.COLOR,
                color=RGBA.zero(),
                error=f"Couldn't parse HEX value {token.rawValue}",
            )
        return Resolution(type=TokenType.COLOR, color=color)


class ReferenceFormat:
    """`var(--name)`: inherit the resolved state of another token."""

    prefix: str = "var("

    def matches(self: Self, raw_value: str) -> bool:
        return raw_value.startswith(self.prefix)

    def target_name(self: Self, raw_value: str) -> str:
        return text_withinBounds(raw_value, "(", ")").strip()

    def resolve(self: Self, token: Token, context: ResolveContext) -> Resolution:
        target_name: str = self.target_name(token.rawValue)
        target: Token | None = context.table.get(target_name)
        if target is None:
            return Resolution(error=f"Token {target_name} is not present in the file")

        if target.status is ResolveStatus.RESOLVING:
            return Resolution(
                error=f"Circular reference: {token.name} -> {target_name}"
            )

        if target.status is ResolveStatus.UNRESOLVED:
            context.token_resolve(target)

        if target.type is TokenType.UNKNOWN:
            return Resolution(
                parent=target,
                error=f"Referenced token {target_name} could not be resolved",
            )
        if target.type is TokenType.COLOR:
            return Resolution(type=TokenType.COLOR, color=target.color, parent=target)
        return Resolution(type=target.type, parent=target)


class NumericListFormat:
    """`r, g, b` or `r, g, b, a` without any function wrapper.

    Color channels are truncated to their leading integer, so `127.5` reads
    as 127 and `50%` as 50.
    """

    def matches(self: Self, raw_value: str) -> bool:
        return len(raw_value.split(",")) > 2

    def resolve(self: Self, token: Token, context: ResolveContext) -> Resolution:
        parts: list[str] = token.rawValue.split(",")
        try:
            r, g, b = (integer_parse(part) / CHANNEL_MAX for part in parts[:3])
            a: float = channel_parse(parts[3]) if len(parts) > 3 else 1.0
        except ValueError as e:
            return Resolution(
                error=f"Couldn't parse color list {token.rawValue}: {e}"
            )
        return Resolution(type=TokenType.COLOR, color=RGBA(r=r, g=g, b=b, a=a))


class NamedColorFormat:
    """Fallback: browser color keywords such as `red` or `RebeccaPurple`."""

    def matches(self: Self, raw_value: str) -> bool:
        return True

    def resolve(self: Self, token: Token, context: ResolveContext) -> Resolution:
        hex_value: str | None = context.lookup(token.rawValue.lower())
        if hex_value is None:
            return Resolution(error=f'Couldn\'t parse rawValue "{token.rawValue}"')

        color: RGBA | None = hex_parse(hex_value)
        if color is None:
            return Resolution(
                type=TokenType.COLOR,
                color=RGBA.zero(),
                error=f"Couldn't parse HEX value {hex_value} for color {token.rawValue}",
            )
        return Resolution(type=TokenType.COLOR, color=color)


DEFAULT_FORMATS: Final[tuple[ValueFormat, ...]] = (
    RGBAFormat(),
    HexFormat(),
    ReferenceFormat(),
    NumericListFormat(),
    NamedColorFormat(),
)

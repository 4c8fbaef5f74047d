"""
Token resolver for tokensync.

Resolves every token of a table in place: each raw value is dispatched to the
first matching value format, and `var()` references are followed through the
table with memoization. A reference chain is walked iteratively from its head
to the first token that is not an unresolved reference, then resolved from
that tail back to the head, so chains of any length resolve the same way
regardless of declaration order. Cycles degrade the affected tokens to
UNKNOWN.

Per-token failures never stop the pass; they are logged and collected as
diagnostics.
"""

from typing import Callable, Iterable, Self
from tokensync.lib.log import LOG
from tokensync.lib.parser.colors import namedColor_lookup
from tokensync.lib.parser.formats import (
    DEFAULT_FORMATS,
    ReferenceFormat,
    Resolution,
    ValueFormat,
)
from tokensync.models.dataModel import (
    Diagnostic,
    ResolveStatus,
    Token,
    TokenTable,
    TokenType,
)


class TokenResolver:
    """Resolver for a token table.

    Attributes:
        table: Tokens to resolve, keyed by name
        formats: Value formats in priority order
        lookup: Named-color collaborator
        diagnostics: Problems found so far
    """

    def __init__(
        self: Self,
        table: TokenTable,
        formats: Iterable[ValueFormat] | None = None,
        lookup: Callable[[str], str | None] | None = None,
    ) -> None:
        """Initialize resolver with its table and collaborators."""
        self.table: TokenTable = table
        self.formats: list[ValueFormat] = list(
            formats if formats is not None else DEFAULT_FORMATS
        )
        self.lookup: Callable[[str], str | None] = lookup or namedColor_lookup
        self.diagnostics: list[Diagnostic] = []

    def resolve(self: Self) -> list[Diagnostic]:
        """Resolve every token in the table.

        Returns:
            Diagnostics for the tokens that degraded
        """
        for token in self.table.values():
            self.token_resolve(token)
        LOG(f"Imported {len(self.table)} tokens")
        return self.diagnostics

    def token_resolve(self: Self, token: Token) -> Token:
        """Resolve one token and the reference chain below it, at most once.

        Args:
            token: Token to resolve

        Returns:
            The same token, now RESOLVED
        """
        chain: list[Token] = self.chain_collect(token)
        try:
            for pending in reversed(chain):
                self.resolution_apply(pending, self.format_apply(pending))
                pending.status = ResolveStatus.RESOLVED
        finally:
            for pending in chain:
                pending.status = ResolveStatus.RESOLVED
        return token

    def chain_collect(self: Self, token: Token) -> list[Token]:
        """Walk unresolved references starting at `token`.

        Every collected token is marked RESOLVING. The walk stops at a
        token that is not a reference, at a missing target, or at a target
        that is already RESOLVING (a cycle) or RESOLVED.

        Returns:
            The chain from head to tail
        """
        chain: list[Token] = []
        current: Token | None = token
        while current is not None and current.status is ResolveStatus.UNRESOLVED:
            current.status = ResolveStatus.RESOLVING
            chain.append(current)
            value_format: ValueFormat | None = self.format_find(current.rawValue)
            if not isinstance(value_format, ReferenceFormat):
                break
            current = self.table.get(value_format.target_name(current.rawValue))
        return chain

    def format_find(self: Self, raw_value: str) -> ValueFormat | None:
        for value_format in self.formats:
            if value_format.matches(raw_value):
                return value_format
        return None

    def format_apply(self: Self, token: Token) -> Resolution:
        value_format: ValueFormat | None = self.format_find(token.rawValue)
        if value_format is None:
            return Resolution(error=f"No value format matches {token.rawValue!r}")
        return value_format.resolve(token, self)

    def resolution_apply(self: Self, token: Token, resolution: Resolution) -> None:
        token.type = resolution.type
        token.color = resolution.color if resolution.type is TokenType.COLOR else None
        token.parent = resolution.parent
        if resolution.error:
            LOG(f"{token.name}: {resolution.error}")
            self.diagnostics.append(Diagnostic(name=token.name, reason=resolution.error))

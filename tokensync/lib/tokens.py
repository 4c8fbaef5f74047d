r"""
Design token resolution entry point.

`tokens_resolve` is the core operation of the plugin: raw style sheet text in,
resolved token list out. A fresh token table is built for every call, so
resolving the same text twice gives identical results.

Example:
    result = tokens_resolve(":root {\n  --brand: #ff0000;\n  --link: var(--brand);\n}")
    for token in result.tokens:
        print(token.name, token.type, token.color)
"""

from typing import Any, Callable
from tokensync.lib.parser import StyleSheetTokenizer, TokenResolver
from tokensync.models.dataModel import Diagnostic, ResolveResult, TokenTable


def tokens_resolve(
    content: str, lookup: Callable[[str], str | None] | None = None
) -> ResolveResult:
    """Parse and resolve a style sheet.

    Args:
        content: Raw style sheet text
        lookup: Named-color collaborator, defaults to the browser color table

    Returns:
        ResolveResult with every declared token and the diagnostics from
        both tokenizing and resolving
    """
    table: TokenTable
    diagnostics: list[Diagnostic]
    table, diagnostics = StyleSheetTokenizer().tokenize(content)

    resolver: TokenResolver = TokenResolver(table, lookup=lookup)
    diagnostics = diagnostics + resolver.resolve()

    return ResolveResult(tokens=list(table.values()), diagnostics=diagnostics)


def tokens_export(result: ResolveResult) -> dict[str, Any]:
    """Render a resolve result as a JSON-ready dictionary."""
    return {
        "tokens": [token.export() for token in result.tokens],
        "diagnostics": [diagnostic.model_dump() for diagnostic in result.diagnostics],
    }

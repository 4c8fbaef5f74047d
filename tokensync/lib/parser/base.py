r"""
Style sheet tokenizer.

Turns raw design-token text into a name-keyed token table. The tokenizer
handles:
- Block (`/* ... */`) and line (`// ...`) comment removal
- Isolation of the outermost `{ ... }` declaration block, if any
- Line splitting on any newline convention
- `name: value;` extraction with last-declaration-wins semantics

Malformed lines do not abort the parse; they are reported as diagnostics.

Example:
    tokenizer = StyleSheetTokenizer()
    table, diagnostics = tokenizer.tokenize(":root { --primary: #ff0000; }")
"""

import re
from typing import Final, Self
from tokensync.models.dataModel import Diagnostic, Token, TokenTable
from tokensync.lib.log import LOG

COMMENTS_RE: Final[re.Pattern[str]] = re.compile(r"/\*[\s\S]*?\*/|//.*")


def text_withinBounds(text: str, opening: str, closing: str) -> str:
    """Return the text strictly between the first `opening` and its match.

    Nested pairs are balanced, so for `a(b(c)d)e` with parentheses the
    result is `b(c)d`. If `opening` is absent the text is returned
    unchanged; if the pair never closes, everything after `opening` is
    returned.

    Args:
        text: Text to search
        opening: Opening delimiter character
        closing: Closing delimiter character

    Returns:
        Enclosed text
    """
    start: int = text.find(opening)
    if start < 0:
        return text

    depth: int = 0
    for i in range(start, len(text)):
        char: str = text[i]
        if char == opening:
            depth += 1
        elif char == closing:
            depth -= 1
            if depth == 0:
                return text[start + 1 : i]

    LOG(f"Unbalanced '{opening}{closing}' pair, reading to end of input")
    return text[start + 1 :]


class StyleSheetTokenizer:
    """Tokenizer for `name: value;` declaration lists.

    Attributes:
        separator: Character splitting a declaration into name and value
        terminator: Statement terminator stripped from values
        diagnostics: Problems found by the most recent `tokenize` call
    """

    def __init__(self: Self, separator: str = ":", terminator: str = ";") -> None:
        """Initialize tokenizer with declaration syntax.

        Raises:
            ValueError: If separator is empty
        """
        if not separator:
            raise ValueError("Separator cannot be empty")

        self.separator: str = separator
        self.terminator: str = terminator
        self.diagnostics: list[Diagnostic] = []

    def tokenize(self: Self, content: str) -> tuple[TokenTable, list[Diagnostic]]:
        """Parse raw text into a token table.

        Args:
            content: Raw style sheet text, either a bare declaration list or
                a rule block such as `:root { ... }`

        Returns:
            The token table and the diagnostics collected while parsing
        """
        self.diagnostics = []
        table: TokenTable = {}

        content = self.comments_strip(content)
        if "{" in content:
            content = text_withinBounds(content, "{", "}")

        lines: list[str] = self.lines_split(content)
        LOG(f"Will parse {len(lines)} lines")

        for line in lines:
            token: Token | None = self.line_parse(line)
            if token is None:
                continue
            if token.name in table:
                LOG(f"Token {token.name} redeclared, keeping the later value")
            table[token.name] = token

        return table, self.diagnostics

    def comments_strip(self: Self, content: str) -> str:
        return COMMENTS_RE.sub("", content)

    def lines_split(self: Self, content: str) -> list[str]:
        """Split on any newline convention and drop blank lines."""
        return [line.strip() for line in content.splitlines() if line.strip()]

    def line_parse(self: Self, line: str) -> Token | None:
        """Parse one `name: value;` line.

        Args:
            line: A single non-blank, trimmed line

        Returns:
            The parsed token, or None if the line is malformed (a diagnostic
            is recorded in that case)
        """
        name, found, value = line.partition(self.separator)
        name = name.strip()
        if not found or not name:
            msg: str = f"Malformed declaration, expected 'name{self.separator} value'"
            LOG(f"{msg}: {line}")
            self.diagnostics.append(Diagnostic(name=line, reason=msg))
            return None

        value = value.strip()
        if self.terminator and value.endswith(self.terminator):
            value = value[: -len(self.terminator)].strip()

        return Token(name=name, rawValue=value)

"""
Parser package for tokensync.

Provides the style sheet tokenizer, the value formats and the resolver that
turns a token table into typed, colored tokens.
"""

from .base import StyleSheetTokenizer, text_withinBounds
from .formats import ValueFormat, Resolution, DEFAULT_FORMATS, hex_parse
from .resolvers import TokenResolver

__all__ = [
    "StyleSheetTokenizer",
    "text_withinBounds",
    "ValueFormat",
    "Resolution",
    "DEFAULT_FORMATS",
    "hex_parse",
    "TokenResolver",
]

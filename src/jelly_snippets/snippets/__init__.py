"""Snippet parsing, classification, and matching."""

from jelly_snippets.snippets.engine import try_trigger
from jelly_snippets.snippets.model import RHS, RHSInfo, Snippet, SnippetType, classify
from jelly_snippets.snippets.parser import ParseDiagnostic, ParseResult, parse_snippets
from jelly_snippets.snippets.registry import SnippetRegistry, SnippetTable
from jelly_snippets.snippets.symbols import compile_rhs

__all__ = [
    "RHS",
    "RHSInfo",
    "ParseDiagnostic",
    "ParseResult",
    "Snippet",
    "SnippetRegistry",
    "SnippetTable",
    "SnippetType",
    "classify",
    "compile_rhs",
    "parse_snippets",
    "try_trigger",
]

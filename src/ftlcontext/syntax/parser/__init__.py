"""Fluent FTL parser module.

This module provides the main FluentParser class and related
parsing utilities organized into focused submodules.

Module Organization:
- core.py: Main FluentParser class and parse() entry point
- primitives.py: Character classes and single-character takers
- whitespace.py: Inline whitespace, blank lines and line endings
- lookahead.py: Next-line classification and error recovery scan
- rules.py: All grammar rules (entries, patterns, expressions)

Public API:
    FluentParser: Main parser class
    ParseContext: Parse options shared by the grammar rules
"""

from ftlcontext.syntax.parser.core import FluentParser
from ftlcontext.syntax.parser.rules import ParseContext

__all__ = ["FluentParser", "ParseContext"]

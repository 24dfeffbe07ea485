"""Shared constants for ftlcontext.

This module provides centralized configuration constants used across
syntax and runtime packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion bounds for parser and resolver
- Resolution limits: Bounds on formatted output
- Bidi isolation: Unicode marks wrapped around interpolations
- Input limits: Size constraints on parsed sources
- Cache limits: Memory bounds for Babel locale lookups
- Fallback strings: Text rendered when a value cannot be resolved

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Resolution limits
    "MAX_PLACEABLE_LENGTH",
    # Bidi isolation
    "UNICODE_FSI",
    "UNICODE_PDI",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
    # Fallback strings
    "FALLBACK_NONE",
    # Function naming
    "FUNCTION_NAME_PATTERN",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting depth, shared by parser and resolver.
# Parser: placeables, call arguments and variant lists nested inside each other.
# Resolver: patterns being resolved at once, and nested placeables.
# Legitimate FTL rarely nests more than a few levels; deeper input is
# rejected well before Python's default recursion limit of 1000.
MAX_DEPTH: int = 100

# ============================================================================
# RESOLUTION LIMITS
# ============================================================================

# Maximum length of a single formatted placeable.
# Longer output is truncated and a FluentRangeError is reported.
# Bounds the output of a resource that references itself many times over
# (the "billion laughs" shape) without needing a global output budget.
MAX_PLACEABLE_LENGTH: int = 2500

# ============================================================================
# BIDI ISOLATION
# ============================================================================

# Unicode bidirectional isolation characters per Unicode TR9.
# Used to prevent RTL/LTR text interference when interpolating values.
UNICODE_FSI: str = "\u2068"  # U+2068 FIRST STRONG ISOLATE
UNICODE_PDI: str = "\u2069"  # U+2069 POP DIRECTIONAL ISOLATE

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MB of ASCII).
# Prevents unbounded memory allocation from very large FTL sources.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached Babel Locale instances.
# 128 covers typical multi-region applications (major locales + variants).
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Rendered by FluentNone when nothing better is known about the failed value.
FALLBACK_NONE: str = "???"

# ============================================================================
# FUNCTION NAMING
# ============================================================================

# Callee names in call expressions and registered function names.
FUNCTION_NAME_PATTERN: str = r"^[A-Z][A-Z_?-]*$"

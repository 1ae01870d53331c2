"""Traversal limits shared by the fixer and the config layer."""

from __future__ import annotations

DEFAULT_MAX_RECURSION = 10
"""Reference-driven descents allowed before a call fails."""

# Each descent costs a few interpreter frames; stay well inside the stack.
MAX_RECURSION_CEILING = 200

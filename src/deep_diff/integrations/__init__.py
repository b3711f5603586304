"""Integrations subpackage for deep-diff.

Contains the pytest plugin, auto-discovered through the ``pytest11`` entry
point.  Nothing here is imported by the core package.
"""

from __future__ import annotations

__all__: list[str] = []

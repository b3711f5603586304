"""Exception hierarchy for deep-diff.

Comparison never raises for ordinary inputs.  Errors are reserved for edit
records that cannot be interpreted (``MalformedEditError``) and for strict-mode
application against a target whose shape disagrees with a record's path
(``PathMismatchError``).
"""

from __future__ import annotations

from typing import Any

__all__ = ["DeepDiffError", "MalformedEditError", "PathMismatchError"]


class DeepDiffError(Exception):
    """Base class for all deep-diff exceptions."""


class MalformedEditError(DeepDiffError, ValueError):
    """An edit record has an unknown kind or lacks a field its kind requires."""


class PathMismatchError(DeepDiffError, TypeError):
    """A path step resolved to a value that cannot hold the next step.

    Attributes:
        path: The full path of the record being applied.
        step: The step at which traversal hit a non-container value.
    """

    def __init__(self, msg: str, path: tuple[Any, ...] = (), step: Any = None) -> None:
        super().__init__(msg)
        self.path = path
        self.step = step

"""pytest plugin for deep-diff.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.
"""

from __future__ import annotations

from typing import Any

import pytest

from deep_diff import DiffConfig, compare_observable


@pytest.fixture(scope="session")
def assert_no_diff() -> Any:
    """Fixture that returns a callable structural equality asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to compare_observable() which creates a fresh DiffEngine per call).

    Usage in tests::

        def test_roundtrip(assert_no_diff):
            assert_no_diff(load(dump(doc)), doc)

        def test_changed(assert_no_diff):
            with pytest.raises(AssertionError, match=r"E at a: 1 -> 2"):
                assert_no_diff({"a": 2}, {"a": 1})

    Returns:
        A callable ``_assert(actual, expected, prefilter=None, config=None) -> None``
        that raises ``AssertionError`` listing every record when the values differ.
    """

    def _assert(
        actual: Any,
        expected: Any,
        prefilter: Any = None,
        config: DiffConfig | None = None,
    ) -> None:
        """Assert that *actual* is structurally equal to *expected*.

        Args:
            actual:    The value produced by the code under test.
            expected:  The reference value.
            prefilter: Optional predicate or ``PreFilter`` hooks, as for ``compare``.
            config:    Optional DiffConfig, e.g. for order-independent arrays.

        Raises:
            AssertionError: When at least one record is produced.  The message
                lists the records, one per line, describing how to turn
                *expected* into *actual*.
        """
        changes = compare_observable(expected, actual, prefilter=prefilter, config=config)
        if changes:
            lines = "\n".join(f"  {change}" for change in changes)
            raise AssertionError(
                f"values differ ({len(changes)} change(s)):\n{lines}\n"
                f"  actual:   {actual!r}\n"
                f"  expected: {expected!r}"
            )

    return _assert

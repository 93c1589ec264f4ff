"""pytest plugin for object-tree-projector.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from object_tree import GraphProjector, TreeNode
from object_tree.tree.binding import render_text, validate_forest


@pytest.fixture(scope="session")
def assert_valid_tree() -> Any:
    """Fixture that returns a callable projection-shape asserter.

    The fixture is session-scoped because the returned callable is stateless.

    Usage in tests::

        def test_settings_projection(assert_valid_tree):
            nodes = project(settings)
            assert_valid_tree(nodes)

    Returns:
        A callable ``_assert(nodes) -> None`` that raises ``AssertionError``
        when ids are not 1..N, a parent does not precede its child, there is
        not exactly one root, or a terminal node has children.
    """

    def _assert(nodes: Sequence[TreeNode]) -> None:
        """Assert that ``nodes`` form one well-ordered tree.

        Raises:
            AssertionError: With the violated invariant and an outline of the
                projection.
        """
        try:
            validate_forest(nodes)
        except ValueError as exc:
            outline = render_text(nodes) if nodes else "<no nodes>"
            raise AssertionError(
                f"Projection is not a valid tree: {exc}\n{outline}"
            ) from exc

    return _assert


@pytest.fixture
def tree_projector() -> GraphProjector:
    """A fresh GraphProjector with default introspection and config."""
    return GraphProjector()

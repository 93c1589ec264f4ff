"""Shared fixtures for the object_tree test suite."""

from __future__ import annotations

import pytest
from settings_domain import AppSettings, ExampleRoot, example_root

from object_tree import GraphProjector


@pytest.fixture
def projector() -> GraphProjector:
    """A fresh GraphProjector for each test."""
    return GraphProjector()


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings()


@pytest.fixture
def example() -> ExampleRoot:
    return example_root()

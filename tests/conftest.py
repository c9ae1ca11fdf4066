"""Pytest configuration and shared fixtures for the adf2md test suite.

This module provides shared fixtures and test configuration used across the
entire test suite.
"""

import os
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings
from utils import bullet_list, cell, code_block, doc, list_item, para, table, text

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests")


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """Provide a document exercising the common block types.

    Returns
    -------
    dict
        Document tree with a heading, formatted paragraph, list, code block,
        panel and table.

    """
    return doc(
        {"type": "heading", "attrs": {"level": 2}, "content": [text("Overview")]},
        para("Some ", text("bold", "strong"), " and ", text("code", "code"), " text."),
        bullet_list(list_item(para("First")), list_item(para("Second"))),
        code_block("print('hi')", "python"),
        {"type": "panel", "attrs": {"panelType": "warning"}, "content": [para("Careful")]},
        table([cell("Name", True), cell("Role", True), cell("Team", True)], [cell("Ada"), cell("Dev"), cell("Core")]),
    )

"""Pytest configuration and fixtures."""

import pytest

from strview.stringview import wrap


@pytest.fixture
def date_view():
    return wrap("2023/07/03")


@pytest.fixture
def names_view():
    return wrap("First name: FRED, Second name: SMITH")


@pytest.fixture
def mixed_lines():
    return wrap("line1\r\nline2\rline3")

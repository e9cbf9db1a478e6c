"""Shared fixtures for the source writer tests."""

import pytest

from jvm_writer import JavaWriter


@pytest.fixture
def make_writer(tmp_path):
    """Create writers for files under a temporary directory."""

    def _make(file_name="Book.java", **kwargs):
        return JavaWriter(tmp_path / file_name, **kwargs)

    return _make


@pytest.fixture
def java_writer(make_writer):
    """Writer for com.acme.Book with its package already declared."""
    writer = make_writer("Book.java")
    writer.print_package_specification("com.acme")
    writer.print_imports()
    return writer

"""Shared fixtures for the prooftrans test suite."""

import pytest

from prooftrans.catalogs import TransformationCatalogs
from prooftrans.domains.arithmetic import make_arithmetic_database, make_demo_worksheet


@pytest.fixture
def database():
    """The arithmetic demonstration database."""
    return make_arithmetic_database()


@pytest.fixture
def catalogs(database):
    """Catalogs mined from the arithmetic database."""
    return TransformationCatalogs.build(database)


@pytest.fixture
def worksheet():
    """|- X e. CC, |- Y e. CC, |- Z e. CC, |- X = Y, |- Y = Z."""
    return make_demo_worksheet()

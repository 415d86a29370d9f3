"""Shared pytest fixtures for wirebox tests."""

import pytest

from wirebox import Container


@pytest.fixture()
def container() -> Container:
    """Empty container with autowiring disabled."""
    return Container()


@pytest.fixture()
def autowired_container() -> Container:
    """Empty container with autowiring enabled."""
    return Container(autowire=True)


@pytest.fixture()
def entries() -> dict[str, object]:
    """One parameter and one service definition."""
    return {
        "foo": "bar",
        "baz": lambda c: object(),
    }

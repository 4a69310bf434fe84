"""
Fixtures used in the tests
"""
import pytest

from scriptexec.script import Stack


@pytest.fixture()
def stack():
    return Stack()


@pytest.fixture()
def seeded_stack():
    return Stack.from_buffers([b"\x01\x02", b"\x03"])

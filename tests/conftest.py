import pytest

from onion.builtin import stdlib
from onion.interpreter import Interpreter


@pytest.fixture
def ctx():
    """Fresh root context with the standard operators and natives."""
    return stdlib()


@pytest.fixture
def interp():
    return Interpreter()


@pytest.fixture
def run(interp):
    """Evaluate a program in a fresh interpreter and return the last value."""
    return interp.eval

import pytest

from scalar_aad import use_tape


@pytest.fixture
def tape():
    """Fresh tape installed as the active one for the duration of a test."""
    with use_tape() as t:
        yield t

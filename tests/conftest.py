import pytest

from scalar_aad import use_tape


@pytest.fixture
def tape():
    # every test builds on its own tape, so the process default stays empty
    with use_tape() as t:
        yield t

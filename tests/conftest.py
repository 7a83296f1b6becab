#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from valrepr.layout import DEFAULT_MAX_LENGTH
from valrepr.representation import (
    Representation,
    get_default,
    remove_all_registered_formatters,
    set_max_length_for_single_line_description,
)


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def default_representation():
    """Default representation, restored to its initial state after each test."""
    yield get_default()
    remove_all_registered_formatters()
    set_max_length_for_single_line_description(DEFAULT_MAX_LENGTH)


@pytest.fixture
def representation() -> Representation:
    """Isolated representation with its own registry and the default threshold."""
    return Representation()


@pytest.fixture
def narrow():
    """Factory of isolated representations with a given single line threshold."""

    def _create(max_length: int) -> Representation:
        return Representation(max_length=max_length)

    return _create

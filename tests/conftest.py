#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from tablex.collections import Container


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def recorder():
    """Fixture returning a visitor that records every call's arguments, plus the call log."""
    calls = []

    def _visit(*args):
        calls.append(args)

    _visit.calls = calls
    return _visit


@pytest.fixture
def grid_2d() -> list[list[int]]:
    """Ragged 2-D grid: two rows of different lengths."""
    return [[1, 2], [3, 4, 5]]


@pytest.fixture
def grid_3d() -> Container:
    """3-D grid built from Containers and lists: 2 planes x 2 rows x 2 cells."""
    return Container([
        Container([[1, 2], [3, 4]]),
        [Container([5, 6]), (7, 8)],
    ])


@pytest.fixture
def config_tree() -> Container:
    """Nested Container with falsy leaves."""
    root = Container()
    root["server"] = Container(mapping={"port": 0, "host": "", "debug": False, "proxy": None})
    root["name"] = "svc"
    return root

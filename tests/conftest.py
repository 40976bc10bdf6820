# tests/conftest.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Test configuration and shared fixtures for pytest

"""Test configuration and shared fixtures for Chronicle tests.

The configuration handles:
- Python path setup for module imports
- Test environment initialization
- Common fixtures for nodes, clocks and trace files
"""

import sys
import pytest
from pathlib import Path

# Ensure project modules can be imported
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core.node import Node  # noqa: E402
from core.vector_clock import VectorClock  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Verify module availability before any test runs.

    Raises:
        pytest.skip: If required modules cannot be imported
    """
    try:
        import core  # noqa: F401
        import parser  # noqa: F401
        import replay  # noqa: F401
        import utils  # noqa: F401
    except ImportError as e:
        pytest.skip(f"Cannot import required modules: {e}")

    # Bind the shared logger before any test swaps sys.stdout
    from utils.logger import get_logger

    get_logger()
    yield


@pytest.fixture
def xyz_nodes():
    """Provide the standard three-node system.

    Returns:
        Tuple[Node, Node, Node]: Nodes X, Y and Z
    """
    return Node("X"), Node("Y"), Node("Z")


@pytest.fixture
def make_clock():
    """Factory for clocks initialized over a node set at zero.

    Returns:
        Callable[..., VectorClock]: ``make_clock(*nodes, **kwargs)``
    """

    def _make(*nodes, **kwargs):
        clock = VectorClock(**kwargs)
        for node in nodes:
            clock.init_node(node)
        return clock

    return _make


@pytest.fixture
def write_trace(tmp_path):
    """Write trace text to a temporary CSV file.

    Returns:
        Callable[[str], Path]: ``write_trace(text, name="trace.csv")``
    """

    def _write(text: str, name: str = "trace.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


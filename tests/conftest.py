"""
Shared pytest fixtures for clinic-simulator tests.
"""

import logging
from pathlib import Path

import pytest

from clinicsim import Constant, NetworkConfig


@pytest.fixture(scope="session")
def test_output_root() -> Path:
    """
    Returns the root test_output directory. Created once per test session.
    Files here persist after tests complete for easy access.
    """
    output_dir = Path(__file__).parent.parent / "test_output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


@pytest.fixture
def test_output_dir(request, test_output_root) -> Path:
    """
    Returns a directory for the current test to write output files.
    Directory structure: test_output/<module_name>/<test_name>/
    """
    module_name = request.module.__name__.split(".")[-1]
    test_name = request.node.name

    test_dir = test_output_root / module_name / test_name
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


@pytest.fixture
def deterministic_config() -> NetworkConfig:
    """One office, one receptionist, arrivals every 10, triage 5, consultation 20, horizon 60."""
    return NetworkConfig(
        horizon=60.0,
        arrival=Constant(10.0),
        triage=Constant(5.0),
        consultation=Constant(20.0),
        num_offices=1,
        num_receptionists=1,
        queue_capacity=5,
        urgency_probability=0.0,
        seed=1,
    )


@pytest.fixture(autouse=True)
def reset_clinicsim_logging():
    """Give every test a clean clinicsim logger: a NullHandler and level NOTSET."""
    logger = logging.getLogger("clinicsim")

    def _reset():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)

    _reset()
    yield
    _reset()

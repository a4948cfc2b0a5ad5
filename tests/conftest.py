# tests/conftest.py
from pathlib import Path
import pytest

import config as cfg
import ufl_solver
import ufl_utils.logging as ufl_logging
from data_structures import ProblemInstance

ROOT = Path(__file__).resolve().parents[1]
SAMPLE_DAT = ROOT / "UFL.dat"


@pytest.fixture(scope="session")
def env():
    """One Gurobi environment for every engine-backed test."""
    with ufl_solver.solver_session(cfg.SolverConfig()) as session_env:
        yield session_env


@pytest.fixture
def settings():
    return cfg.SolverConfig()


@pytest.fixture
def single_facility():
    return ProblemInstance(demand=(10.0, 20.0), cost=((1.0, 1.0),), fixed_cost=(5.0,))


@pytest.fixture
def dominated_pair():
    # facility 0 is cheaper to open and to ship from than facility 1
    return ProblemInstance(
        demand=(5.0, 7.0, 3.0),
        cost=((1.0, 2.0, 1.0), (1.0, 3.0, 4.0)),
        fixed_cost=(10.0, 20.0),
    )


@pytest.fixture
def small_instance():
    return ProblemInstance(
        demand=(80.0, 270.0, 250.0, 160.0, 180.0),
        cost=(
            (4.0, 5.0, 6.0, 8.0, 10.0),
            (6.0, 4.0, 3.0, 5.0, 8.0),
            (9.0, 7.0, 4.0, 3.0, 4.0),
            (5.0, 8.0, 9.0, 7.0, 6.0),
            (7.0, 6.0, 8.0, 4.0, 5.0),
        ),
        fixed_cost=(1000.0, 1000.0, 1000.0, 900.0, 1100.0),
    )


@pytest.fixture
def write_dat(tmp_path):
    """Write raw text into a data file under tmp_path and return its path."""
    def _write(text, name="UFL.dat"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def fresh_settings(monkeypatch, tmp_path):
    """Isolate main(): new SETTINGS singleton, logs under tmp_path, handlers removed afterwards."""
    for key in list(cfg._ENV_FIELDS):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("UFL_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setattr(cfg, "SETTINGS", cfg.SolverConfig())
    ufl_logging.teardown()
    yield cfg
    ufl_logging.teardown()

# tests/test_config.py
import pytest

import config as cfg
from exceptions import ConfigError


def test_defaults():
    c = cfg.SolverConfig()
    assert c.input_path == "UFL.dat"
    assert c.disable_cuts is True
    assert c.clock_type == "wall"
    assert c.report_dir is None


def test_update_unknown_field():
    c = cfg.SolverConfig()
    with pytest.raises(ConfigError):
        c.update(time_limit=10)


def test_update_rejects_bad_clock_type():
    c = cfg.SolverConfig()
    with pytest.raises(ConfigError):
        c.update(clock_type="ticks")
    with pytest.raises(ConfigError):
        cfg.SolverConfig(clock_type="ticks")


def test_update_from_env_reads_present_keys():
    c = cfg.SolverConfig()
    env = {
        "UFL_INPUT": "data/other.dat",
        "UFL_CLOCK_TYPE": "CPU",
        "UFL_DISABLE_CUTS": "no",
        "UFL_THREADS": "2",
        "UFL_REPORT_DIR": "",
    }
    out = cfg.update_from_env(env, c)
    assert out is c
    assert c.input_path == "data/other.dat"
    assert c.clock_type == "cpu"
    assert c.disable_cuts is False
    assert c.threads == 2
    assert c.report_dir is None
    assert c.as_dict()["log_level"] == "INFO"


@pytest.mark.parametrize("env", [{"UFL_THREADS": "many"}, {"UFL_DISABLE_CUTS": "maybe"}])
def test_update_from_env_invalid_values(env):
    with pytest.raises(ConfigError):
        cfg.update_from_env(env, cfg.SolverConfig())

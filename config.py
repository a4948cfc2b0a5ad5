# config.py
"""
Centralized run and solver configuration.
main.py calls update_from_env(...) and then applies the optional positional input path.
"""

import os
from dataclasses import dataclass, asdict
from typing import Dict, Any, Mapping, Optional

from exceptions import ConfigError

CLOCK_TYPES = ("wall", "cpu")


@dataclass
class SolverConfig:
    # Input
    input_path: str = "UFL.dat"

    # Engine parameters
    disable_cuts: bool = True
    clock_type: str = "wall"
    log_to_console: bool = False
    threads: int = 0  # 0 = let Gurobi decide

    # Logging / output
    log_dir: str = "logs"
    log_level: str = "INFO"
    report_dir: Optional[str] = None  # None = no CSV export

    def __post_init__(self):
        self._validate()

    def _validate(self) -> None:
        if self.clock_type not in CLOCK_TYPES:
            raise ConfigError(f"clock_type must be one of {CLOCK_TYPES}, got {self.clock_type!r}")
        if self.threads < 0:
            raise ConfigError(f"threads must be >= 0, got {self.threads}")

    def update(self, **kwargs) -> None:
        """
        Programmatic override of fields, with safety for unknown keys.
        Example:
            SETTINGS.update(clock_type="cpu")
        """
        for k, v in kwargs.items():
            if hasattr(self, k):
                setattr(self, k, v)
            else:
                raise ConfigError(f"Unknown config field: {k}")
        self._validate()

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Singleton instance
SETTINGS = SolverConfig()

# environment variable -> (field, converter)
_ENV_FIELDS = {
    "UFL_INPUT": ("input_path", str),
    "UFL_DISABLE_CUTS": ("disable_cuts", None),
    "UFL_CLOCK_TYPE": ("clock_type", str.lower),
    "UFL_LOG_TO_CONSOLE": ("log_to_console", None),
    "UFL_THREADS": ("threads", int),
    "UFL_LOG_DIR": ("log_dir", str),
    "UFL_LOG_LEVEL": ("log_level", str.upper),
    "UFL_REPORT_DIR": ("report_dir", str),
}


def _to_bool(value: str) -> bool:
    v = value.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"Not a boolean value: {value!r}")


def update_from_env(environ: Optional[Mapping[str, str]] = None, cfg: Optional[SolverConfig] = None) -> SolverConfig:
    """
    Reads the UFL_* variables that are present and applies them to cfg (SETTINGS by default):
      UFL_INPUT, UFL_DISABLE_CUTS, UFL_CLOCK_TYPE, UFL_LOG_TO_CONSOLE,
      UFL_THREADS, UFL_LOG_DIR, UFL_LOG_LEVEL, UFL_REPORT_DIR
    """
    environ = os.environ if environ is None else environ
    cfg = SETTINGS if cfg is None else cfg

    overrides = {}
    for key, (field_name, conv) in _ENV_FIELDS.items():
        raw = environ.get(key)
        if raw is None or raw == "":
            continue
        try:
            overrides[field_name] = _to_bool(raw) if conv is None else conv(raw)
        except ValueError as e:
            raise ConfigError(f"Invalid value for {key}: {raw!r}") from e

    cfg.update(**overrides)
    return cfg


__all__ = [
    "SolverConfig",
    "SETTINGS",
    "CLOCK_TYPES",
    "update_from_env",
]

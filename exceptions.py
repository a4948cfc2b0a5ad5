"""
Custom exception hierarchy for clearer error handling.
Every stage raises one of these; main() turns them into a diagnostic and an exit status.
"""
class UflError(Exception):
    """Base class for facility-location errors."""

class ConfigError(UflError):
    pass

class FileNotFound(UflError):
    """Input data file cannot be opened."""

class MalformedInput(UflError):
    """Data file does not describe demand vector, cost matrix and fixed-cost vector."""

class DegenerateInstance(UflError):
    """Instance has no facilities or no clients."""

class EngineFailure(UflError):
    """Gurobi reported an error or a non-optimal final status."""

class ReportWriteError(UflError):
    pass

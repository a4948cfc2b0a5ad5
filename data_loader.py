"""
Reading of UFL.dat style data files.

The upstream file holds three array literals: the demand vector, the cost
matrix and the fixed-cost vector. Matrix rows sit one per line, each ending
with a stray comma, and only the first and last rows carry the outer brackets:

    [10, 20, 30]
    [4, 6, 9,
    5, 4, 7,
    6, 3, 4]
    [100, 120, 90]

normalize_lines() rebuilds a proper nested literal from that layout and
parse_instance() turns the result into a ProblemInstance.
"""
import json
import math
import numbers
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Sequence, Union

from data_structures import ProblemInstance
from exceptions import FileNotFound, MalformedInput
from ufl_utils.decorators import log_and_time
import ufl_utils.logging as logging

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_decoder = json.JSONDecoder()


@contextmanager
def _open_data_file(path: PathLike):
    try:
        fh = open(path, "r", encoding="utf-8")
    except OSError as e:
        raise FileNotFound(f"Cannot open the File : {path}") from e
    try:
        yield fh
    finally:
        fh.close()


def iter_lines(path: PathLike) -> Iterator[str]:
    """
    Lazily yield the non-blank lines of path in file order, newline stripped.
    FileNotFound is raised on the first next() if the file cannot be opened.
    """
    with _open_data_file(path) as fh:
        for raw in fh:
            line = raw.rstrip("\r\n")
            # Skip the blank lines
            if line != "":
                yield line


def read_lines(path: PathLike) -> List[str]:
    return list(iter_lines(path))


def normalize_lines(lines: Sequence[str]) -> str:
    """
    Input: raw lines of the data file
    Output: demand vector, bracketed cost matrix and fixed-cost vector, one per line group
    """
    length = len(lines)
    if length < 3:
        raise MalformedInput(f"Expected at least 3 non-blank lines, got {length}")

    out = [lines[0]]
    for i in range(1, length - 2):
        found = lines[i].rfind(",")
        if found < 0:
            raise MalformedInput(f"Cost matrix row {i} has no trailing comma: {lines[i]!r}")
        out.append("[" + lines[i][:found] + "],")

    out.append("[" + lines[length - 2] + "]")
    out.append(lines[length - 1])
    return "\n".join(out)


def _read_literals(text: str) -> list:
    """Decode the array literals laid back to back in text."""
    values = []
    idx = 0
    end = len(text)
    while True:
        while idx < end and (text[idx].isspace() or text[idx] == ","):
            idx += 1
        if idx >= end:
            return values
        if text[idx] != "[":
            raise MalformedInput(f"Expected '[' at offset {idx}, found {text[idx]!r}")
        try:
            value, idx = _decoder.raw_decode(text, idx)
        except json.JSONDecodeError as e:
            raise MalformedInput(f"Bad array literal: {e}") from e
        values.append(value)


def _is_number(v) -> bool:
    return isinstance(v, numbers.Real) and not isinstance(v, bool) and math.isfinite(v)


def _as_vector(value, name: str) -> tuple:
    if not isinstance(value, list) or not all(_is_number(v) for v in value):
        raise MalformedInput(f"{name} must be a flat list of numbers")
    if any(v < 0 for v in value):
        raise MalformedInput(f"{name} must be non-negative")
    return tuple(float(v) for v in value)


def parse_instance(text: str) -> ProblemInstance:
    """Parse normalized text into (demand, cost, fixed_cost) and check their shapes."""
    values = _read_literals(text)
    if len(values) != 3:
        raise MalformedInput(f"Expected 3 arrays (demand, cost, fixed cost), found {len(values)}")

    demand = _as_vector(values[0], "demand")
    fixed_cost = _as_vector(values[2], "fixed cost")

    matrix = values[1]
    if not isinstance(matrix, list) or not all(isinstance(row, list) for row in matrix):
        raise MalformedInput("cost must be a list of rows")
    cost = []
    for p, row in enumerate(matrix):
        if not all(_is_number(v) for v in row):
            raise MalformedInput(f"cost row {p} holds a non-numeric entry")
        if len(row) != len(demand):
            raise MalformedInput(f"cost row {p} has {len(row)} entries, expected {len(demand)} (one per client)")
        cost.append(tuple(float(v) for v in row))

    if len(cost) != len(fixed_cost):
        raise MalformedInput(f"cost has {len(cost)} rows but there are {len(fixed_cost)} fixed costs")

    return ProblemInstance(demand=demand, cost=tuple(cost), fixed_cost=fixed_cost)


@log_and_time("load_instance", error_cls=MalformedInput)
def load_instance(path: PathLike) -> ProblemInstance:
    lines = read_lines(path)
    logger.info("Read %d non-blank lines from %s", len(lines), path)
    instance = parse_instance(normalize_lines(lines))
    logger.info("Loaded instance: %d facilities, %d clients", instance.n_facilities, instance.n_clients)
    return instance


def _fmt(v: float) -> str:
    return repr(v) if v != int(v) else str(int(v))


def format_instance(instance: ProblemInstance) -> str:
    """Write instance in the raw data-file layout read by load_instance."""
    lines = ["[" + ", ".join(_fmt(v) for v in instance.demand) + "]"]
    n_p = len(instance.cost)
    for p, row in enumerate(instance.cost):
        body = ", ".join(_fmt(v) for v in row)
        prefix = "[" if p == 0 else ""
        suffix = "]" if p == n_p - 1 else ","
        lines.append(prefix + body + suffix)
    lines.append("[" + ", ".join(_fmt(v) for v in instance.fixed_cost) + "]")
    return "\n".join(lines) + "\n"


def write_instance(path: PathLike, instance: ProblemInstance) -> None:
    Path(path).write_text(format_instance(instance), encoding="utf-8")


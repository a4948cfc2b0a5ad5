"""Text report on stdout and optional CSV export of the run."""
import csv
import os
from datetime import datetime

import pandas as pd

from data_structures import SolutionReport
from exceptions import ReportWriteError
import ufl_utils.logging as logging

logger = logging.getLogger(__name__)

SECTION_BANNER = "*****************************    Section E   *****************************"

# (label, SolutionReport field) in print order
REPORT_LINES = [
    ("Optimal Objective Value of MIP instance", "mip_obj"),
    ("No of Integer Variables", "n_integer_vars"),
    ("No of Continuous Variables", "n_continuous_vars"),
    ("No of Constraints", "n_constraints"),
    ("Run time to solve the LP relaxation", "lp_time"),
    ("Optimal objective function value for this LP relaxation", "lp_obj"),
    ("Run Time to solve MIP", "mip_time"),
    ("No of Nodes", "node_count"),
    ("Percentage Gap of MIP and LP Solutions", "gap_percent"),
    ("No of Cuts", "n_cuts"),
]


def _fmt(value) -> str:
    if isinstance(value, float):
        return f"{value:.10g}"
    return str(value)


def format_header(n_integer_vars: int) -> str:
    return "\n".join(["", SECTION_BANNER, "", f"Integer variables in MIP model: {n_integer_vars}"])


def format_report(report: SolutionReport) -> str:
    lines = []
    for label, attr in REPORT_LINES:
        lines.append("")
        lines.append(f"{label}: {_fmt(getattr(report, attr))}")
    return "\n".join(lines)


def report_rows(report: SolutionReport) -> list:
    return [[label, getattr(report, attr)] for label, attr in REPORT_LINES]


def write_summary_csv(path: str, report: SolutionReport) -> None:
    with open(path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(["METRIC", "VALUE"])
        writer.writerows(report_rows(report))


def write_report_csv(folder: str, report: SolutionReport, flows: pd.DataFrame, facilities: pd.DataFrame) -> str:
    """Writes summary, flow and facility tables into a timestamped sub-folder; returns it."""
    output_folder = os.path.join(folder, f"ufl_report_{datetime.now().strftime('%Y%m%d_%H%M%S')}")
    try:
        os.makedirs(output_folder, exist_ok=True)
        write_summary_csv(os.path.join(output_folder, "summary.csv"), report)
        flows.to_csv(os.path.join(output_folder, "flows.csv"), index=False)
        facilities.to_csv(os.path.join(output_folder, "facilities.csv"), index=False)
    except OSError as e:
        raise ReportWriteError(f"Writing reports to {output_folder} failed: {e}") from e
    logger.info("Reports written to %s", output_folder)
    return output_folder

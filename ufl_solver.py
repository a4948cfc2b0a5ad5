"""
Gurobi session handling, solving and the MIP vs LP-relaxation summary.
"""
import re
import time
from contextlib import contextmanager
from typing import Dict, Iterable, List, Tuple

import gurobipy as gp
from gurobipy import GRB

from config import SolverConfig
from data_structures import SolveStats, SolutionReport
from exceptions import EngineFailure
from model_builder import DecisionModel
from ufl_utils.context import variant_context
from ufl_utils.decorators import log_and_time
import ufl_utils.logging as logging

logger = logging.getLogger(__name__)

STATUS_NAMES = {getattr(GRB.Status, n): n for n in dir(GRB.Status) if n.isupper()}

_CUT_LINE = re.compile(r"^\s+([A-Za-z][A-Za-z -]*?):\s+(\d+)\s*$")


@contextmanager
def solver_session(cfg: SolverConfig):
    """
    One Gurobi environment shared by both models.
    Models must be disposed before the session closes.
    """
    env = None
    try:
        env = gp.Env(empty=True)
        env.setParam("OutputFlag", 1)  # the cut summary is read from the log
        env.setParam("LogToConsole", 1 if cfg.log_to_console else 0)
        if cfg.threads:
            env.setParam("Threads", cfg.threads)
        env.start()
        logger.info("Gurobi session started (version %s)", ".".join(map(str, gp.gurobi.version())))
        yield env
    except gp.GurobiError as e:
        raise EngineFailure(f"Gurobi error {e.errno}: {e}") from e
    finally:
        if env is not None:
            env.dispose()


def configure(model: gp.Model, cfg: SolverConfig) -> None:
    if cfg.disable_cuts:
        model.Params.Cuts = 0


def parse_cut_counts(log_lines: Iterable[str]) -> Dict[str, int]:
    """
    Read the "Cutting planes:" block of a Gurobi log, e.g.
        Cutting planes:
          Implied bound: 4
          MIR: 2
    into {"Implied bound": 4, "MIR": 2}.
    """
    counts: Dict[str, int] = {}
    in_block = False
    for line in log_lines:
        if line.strip() == "Cutting planes:":
            in_block = True
            continue
        if not in_block:
            continue
        m = _CUT_LINE.match(line)
        if not m:
            in_block = False
            continue
        counts[m.group(1)] = counts.get(m.group(1), 0) + int(m.group(2))
    return counts


def _run_optimize(model: gp.Model) -> List[str]:
    chunks: List[str] = []

    def _capture(cb_model, where):
        if where == GRB.Callback.MESSAGE:
            chunks.append(cb_model.cbGet(GRB.Callback.MSG_STRING))

    model.optimize(_capture)
    return "".join(chunks).splitlines()


def solve_model(dm: DecisionModel, cfg: SolverConfig) -> SolveStats:
    model = dm.model
    with variant_context(dm.variant):
        try:
            configure(model, cfg)
            cpu0 = time.process_time()
            log_lines = _run_optimize(model)
            cpu_time = time.process_time() - cpu0

            status = model.Status
            if status != GRB.OPTIMAL:
                name = STATUS_NAMES.get(status, str(status))
                logger.error("%s solve ended with status=%s", dm.variant, name)
                raise EngineFailure(f"{dm.variant} solve ended with status {name}")

            stats = SolveStats(
                variant=dm.variant,
                status=status,
                obj_val=model.ObjVal,
                num_vars=model.NumVars,
                num_bin_vars=model.NumBinVars,
                num_constrs=model.NumConstrs,
                solve_time=model.Runtime if cfg.clock_type == "wall" else cpu_time,
                node_count=model.NodeCount if model.IsMIP else 0.0,
                cut_counts=parse_cut_counts(log_lines),
            )
        except gp.GurobiError as e:
            raise EngineFailure(f"Gurobi error {e.errno}: {e}") from e

        logger.info("%s => OPTIMAL, ObjVal=%s, time=%.3fs", dm.variant, stats.obj_val, stats.solve_time)
        return stats


def gap_percent(mip_obj: float, lp_obj: float) -> float:
    if mip_obj == 0:
        return 0.0
    return 100 * (mip_obj - lp_obj) / abs(mip_obj)


# GurobiError is mapped to EngineFailure in solve_model; other errors stay unrecognised
@log_and_time("solve_and_report", error_cls=None)
def solve_and_report(mip: DecisionModel, lp: DecisionModel, cfg: SolverConfig) -> Tuple[SolutionReport, SolveStats, SolveStats]:
    """Solve the MIP, then its LP relaxation, and summarise both."""
    mip_stats = solve_model(mip, cfg)
    lp_stats = solve_model(lp, cfg)

    n_p = len(mip.y)
    report = SolutionReport(
        mip_obj=mip_stats.obj_val,
        n_integer_vars=n_p,
        n_continuous_vars=len(mip.x),
        n_constraints=mip_stats.num_constrs,
        lp_time=lp_stats.solve_time,
        lp_obj=lp_stats.obj_val,
        mip_time=mip_stats.solve_time,
        node_count=mip_stats.node_count,
        gap_percent=gap_percent(mip_stats.obj_val, lp_stats.obj_val),
        n_cuts=mip_stats.reported_cuts(),
    )
    return report, mip_stats, lp_stats

"""Instance, solve statistics and report records shared across the pipeline."""
from dataclasses import dataclass, field
from typing import Dict, Tuple

# Cut types summed into the report's cut count (labels as printed in the Gurobi log).
REPORTED_CUT_TYPES: Tuple[str, ...] = ("Flow cover", "Flow path", "Implied bound", "MIR")


@dataclass(frozen=True)
class ProblemInstance:
    """
    demand[q]     : demand of client q
    cost[p][q]    : unit shipping cost from facility p to client q
    fixed_cost[p] : cost of opening facility p
    """
    demand: Tuple[float, ...]
    cost: Tuple[Tuple[float, ...], ...]
    fixed_cost: Tuple[float, ...]

    @property
    def n_facilities(self) -> int:
        return len(self.fixed_cost)

    @property
    def n_clients(self) -> int:
        return len(self.demand)


@dataclass
class SolveStats:
    """What one optimize() call left behind."""
    variant: str
    status: int
    obj_val: float
    num_vars: int
    num_bin_vars: int
    num_constrs: int
    solve_time: float
    node_count: float = 0.0
    cut_counts: Dict[str, int] = field(default_factory=dict)

    def reported_cuts(self) -> int:
        return sum(self.cut_counts.get(name, 0) for name in REPORTED_CUT_TYPES)


@dataclass(frozen=True)
class SolutionReport:
    mip_obj: float
    n_integer_vars: int
    n_continuous_vars: int
    n_constraints: int
    lp_time: float
    lp_obj: float
    mip_time: float
    node_count: float
    gap_percent: float
    n_cuts: int

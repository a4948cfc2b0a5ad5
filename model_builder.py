"""
Builds the uncapacitated facility location model.

Decision variables:
  x[p,q] : portion of client q's demand served by facility p, x >= 0
  y[p]   : 1 if facility p is opened (binary in the MIP, [0,1] in the LP relaxation)

Objective:
  minimize sum(p,q) c[p][q] * x[p,q] + sum(p) f[p] * y[p]

Both variants are created from the same builder, so a given (p,q) or p maps to
the same variable name and index in each of them.
"""
from dataclasses import dataclass
from typing import Dict, Tuple

import gurobipy as gp
from gurobipy import GRB

from constraint_builder import add_demand_constraints, add_linking_constraints
from data_structures import ProblemInstance
from exceptions import DegenerateInstance
import ufl_utils.logging as logging

logger = logging.getLogger(__name__)

MIP = "MIP"
LP = "LP"

# Domain of the facility-opening variables per variant
Y_DOMAINS = {
    MIP: dict(vtype=GRB.BINARY),
    LP: dict(vtype=GRB.CONTINUOUS, lb=0.0, ub=1.0),
}


@dataclass
class DecisionModel:
    variant: str
    model: gp.Model
    x: Dict[Tuple[int, int], gp.Var]
    y: Dict[int, gp.Var]
    demand_constrs: Dict[int, gp.Constr]
    open_constrs: Dict[Tuple[int, int], gp.Constr]

    def dispose(self) -> None:
        self.model.dispose()


def check_instance(instance: ProblemInstance) -> None:
    if instance.n_facilities <= 0:
        raise DegenerateInstance("Instance has no facilities")
    if instance.n_clients <= 0:
        raise DegenerateInstance("Instance has no clients")


def build_model(instance: ProblemInstance, env: gp.Env, variant: str = MIP) -> DecisionModel:
    if variant not in Y_DOMAINS:
        raise ValueError(f"Unknown model variant: {variant}")
    check_instance(instance)

    n_p, n_q = instance.n_facilities, instance.n_clients
    model = gp.Model(f"UFL_{variant}", env=env)

    # Decision variables
    x = {}
    for p in range(n_p):
        for q in range(n_q):
            x[(p, q)] = model.addVar(lb=0.0, ub=GRB.INFINITY, vtype=GRB.CONTINUOUS, name=f"x_{p}_{q}")

    y = {}
    for p in range(n_p):
        y[p] = model.addVar(name=f"y_{p}", **Y_DOMAINS[variant])

    # Objective: shipping + opening cost
    cost = gp.quicksum(instance.cost[p][q] * x[(p, q)] for p in range(n_p) for q in range(n_q))
    cost += gp.quicksum(instance.fixed_cost[p] * y[p] for p in range(n_p))
    model.setObjective(cost, GRB.MINIMIZE)

    demand_constrs = add_demand_constraints(model, instance, x)
    open_constrs = add_linking_constraints(model, instance, x, y)
    model.update()

    logger.info(
        "Built %s model: %d vars (%d binary), %d constraints",
        variant, model.NumVars, model.NumBinVars, model.NumConstrs,
    )
    return DecisionModel(variant, model, x, y, demand_constrs, open_constrs)


def build_models(instance: ProblemInstance, env: gp.Env) -> Tuple[DecisionModel, DecisionModel]:
    """Return the (MIP, LP relaxation) pair."""
    mip = build_model(instance, env, MIP)
    try:
        lp = build_model(instance, env, LP)
    except Exception:
        mip.dispose()
        raise
    return mip, lp

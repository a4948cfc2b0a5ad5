"""Solution Processor module: reads solved variable values into pandas tables."""
import pandas as pd

from model_builder import DecisionModel

TOL = 1e-6


def facility_frame(dm: DecisionModel, instance) -> pd.DataFrame:
    """One row per facility: opening value, fixed cost, total shipped."""
    rows = []
    for p, var in dm.y.items():
        shipped = sum(dm.x[(p, q)].X for q in range(instance.n_clients))
        rows.append({
            "FACILITY": p,
            "OPEN": var.X,
            "FIXED_COST": instance.fixed_cost[p],
            "SHIPPED": shipped,
        })
    return pd.DataFrame(rows, columns=["FACILITY", "OPEN", "FIXED_COST", "SHIPPED"])


def flow_frame(dm: DecisionModel, instance, tol: float = TOL) -> pd.DataFrame:
    """Non-zero flows x[p,q] with their shipping cost."""
    rows = []
    for (p, q), var in dm.x.items():
        val = var.X
        if val > tol:
            rows.append({
                "FACILITY": p,
                "CLIENT": q,
                "QUANTITY": val,
                "UNIT_COST": instance.cost[p][q],
                "COST": instance.cost[p][q] * val,
            })
    return pd.DataFrame(rows, columns=["FACILITY", "CLIENT", "QUANTITY", "UNIT_COST", "COST"])


def open_facilities(dm: DecisionModel, tol: float = TOL) -> list:
    return [p for p, var in dm.y.items() if var.X > 1 - tol]


def coverage_violations(dm: DecisionModel, instance, tol: float = TOL) -> dict:
    """Clients whose received quantity differs from their demand: {q: received}."""
    out = {}
    for q in range(instance.n_clients):
        received = sum(dm.x[(p, q)].X for p in range(instance.n_facilities))
        if abs(received - instance.demand[q]) > tol * max(1.0, instance.demand[q]):
            out[q] = received
    return out


def closed_facility_shipments(dm: DecisionModel, tol: float = TOL) -> list:
    """(p, q) pairs that ship from a facility whose y[p] is 0."""
    return [
        (p, q) for (p, q), var in dm.x.items()
        if dm.y[p].X < tol and var.X > tol
    ]

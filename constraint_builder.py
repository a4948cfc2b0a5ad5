"""Constraint families of the facility-location model."""
import gurobipy as gp


def add_demand_constraints(model, instance, x):
    """
    sum(over p) x[p][q] = d[q]  for every client q
    """
    n_p, n_q = instance.n_facilities, instance.n_clients
    constrs = {}
    for q in range(n_q):
        lhs = gp.quicksum(x[(p, q)] for p in range(n_p))
        constrs[q] = model.addConstr(lhs == instance.demand[q], name=f"Demand_{q}")
    return constrs


def add_linking_constraints(model, instance, x, y):
    """
    x[p][q] <= d[q] * y[p]  for every facility p and client q

    Nothing ships from a closed facility, and no single facility ships more
    than the client asked for, so x needs no explicit upper bound.
    """
    n_p, n_q = instance.n_facilities, instance.n_clients
    constrs = {}
    for p in range(n_p):
        for q in range(n_q):
            constrs[(p, q)] = model.addConstr(
                x[(p, q)] <= instance.demand[q] * y[p], name=f"Open_{p}_{q}"
            )
    return constrs

# tests/test_model_builder.py
import pytest
from gurobipy import GRB

import model_builder
from data_structures import ProblemInstance
from exceptions import DegenerateInstance


@pytest.fixture
def pair(env, small_instance):
    mip, lp = model_builder.build_models(small_instance, env)
    yield mip, lp
    lp.dispose()
    mip.dispose()


def test_variable_and_constraint_counts(pair, small_instance):
    mip, lp = pair
    n_p, n_q = small_instance.n_facilities, small_instance.n_clients
    for dm in (mip, lp):
        assert dm.model.NumVars == n_p * n_q + n_p
        assert dm.model.NumConstrs == n_q + n_p * n_q
        assert len(dm.x) == n_p * n_q
        assert len(dm.y) == n_p
    assert mip.model.NumBinVars == n_p
    assert lp.model.NumBinVars == 0
    assert lp.model.NumIntVars == 0


def test_variants_share_indexing(pair):
    mip, lp = pair
    assert [v.VarName for v in mip.model.getVars()] == [v.VarName for v in lp.model.getVars()]
    assert [c.ConstrName for c in mip.model.getConstrs()] == [c.ConstrName for c in lp.model.getConstrs()]
    assert mip.x[(2, 3)].VarName == lp.x[(2, 3)].VarName == "x_2_3"
    assert mip.y[4].VarName == lp.y[4].VarName == "y_4"


def test_only_y_domain_differs(pair, small_instance):
    mip, lp = pair
    for p in range(small_instance.n_facilities):
        assert mip.y[p].VType == GRB.BINARY
        assert lp.y[p].VType == GRB.CONTINUOUS
        assert (lp.y[p].LB, lp.y[p].UB) == (0.0, 1.0)
        assert mip.y[p].Obj == lp.y[p].Obj == small_instance.fixed_cost[p]
    for key, var in mip.x.items():
        assert var.VType == GRB.CONTINUOUS
        assert var.LB == 0.0
        assert var.UB >= GRB.INFINITY
        assert var.Obj == lp.x[key].Obj == small_instance.cost[key[0]][key[1]]


def test_linking_constraint_coefficients(pair, small_instance):
    mip, _ = pair
    row = mip.model.getRow(mip.open_constrs[(1, 2)])
    coeffs = {row.getVar(i).VarName: row.getCoeff(i) for i in range(row.size())}
    assert coeffs == {"x_1_2": 1.0, "y_1": -small_instance.demand[2]}
    assert mip.open_constrs[(1, 2)].RHS == 0.0
    assert mip.demand_constrs[0].RHS == small_instance.demand[0]
    assert mip.demand_constrs[0].Sense == GRB.EQUAL


@pytest.mark.parametrize("inst", [
    ProblemInstance(demand=(1.0,), cost=(), fixed_cost=()),
    ProblemInstance(demand=(), cost=((),), fixed_cost=(3.0,)),
])
def test_degenerate_instance(env, inst):
    with pytest.raises(DegenerateInstance):
        model_builder.build_models(inst, env)


def test_unknown_variant(env, single_facility):
    with pytest.raises(ValueError):
        model_builder.build_model(single_facility, env, "QP")

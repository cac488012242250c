import numpy as np
import pytest
from mdgi import (
    ALSParams, InvalidInput, InvalidParameter, compute_mdgi,
)

FAST = ALSParams(nstart=5, seed=7)

def _ladder():
    # 4 units, 2 variables, 1 occasion
    return np.array([[10.0, 10.0], [20.0, 20.0], [30.0, 30.0], [40.0, 40.0]])[:, :, None]

def test_ladder_scenario():
    res = compute_mdgi(_ladder(), delta=2, beta=0.5, als=FAST)
    assert np.all(res.weights_var >= 0)
    # equal columns -> equal variable weights
    assert np.isclose(res.weights_var[0], res.weights_var[1])
    assert res.mdgi_yearly.shape == (1,)
    assert res.mdgi_yearly[0] > 0
    assert np.isclose(res.mdgi_yearly[0], 0.25)
    eta = res.gini_scores[:, 0]
    assert np.all(np.diff(eta) > 0)
    assert np.allclose(eta, [0.4, 0.8, 1.2, 1.6])
    assert np.allclose(res.scores[:, 0], [10.0, 20.0, 30.0, 40.0])

def test_perfect_equality_gives_zero():
    X = np.full((5, 3, 4), 2.5)
    res = compute_mdgi(X, delta=2, beta=0.3, als=FAST)
    assert np.allclose(res.mdgi_yearly, 0.0, atol=1e-9)
    assert np.isclose(res.mdgi_global, 0.0, atol=1e-9)
    assert np.allclose(res.gini_scores, 1.0)

def test_indices_bounded_on_random_data():
    rng = np.random.default_rng(2024)
    X = rng.lognormal(mean=1.0, sigma=0.6, size=(30, 4, 5))
    res = compute_mdgi(X, delta=2, beta=0.005, als=FAST)
    assert res.mdgi_yearly.shape == (5,)
    assert np.all((res.mdgi_yearly >= 0) & (res.mdgi_yearly <= 1))
    assert 0 <= res.mdgi_global <= 1
    assert res.scores.shape == res.gini_scores.shape == (30, 5)
    assert np.allclose(res.xn.sum(axis=0), 1.0)
    assert np.isclose(res.xn_global.sum(), 1.0)
    assert np.allclose(res.xn, res.xn_global[:, None])

def test_larger_delta_raises_index_on_unequal_data():
    X = _ladder()
    g1 = compute_mdgi(X, delta=1.0, beta=0.5, als=FAST).mdgi_yearly[0]
    g15 = compute_mdgi(X, delta=1.5, beta=0.5, als=FAST).mdgi_yearly[0]
    g2 = compute_mdgi(X, delta=2.0, beta=0.5, als=FAST).mdgi_yearly[0]
    assert g1 < g15 < g2

def test_reproducible_with_fixed_seed():
    rng = np.random.default_rng(5)
    X = rng.uniform(1, 9, size=(12, 3, 3))
    r1 = compute_mdgi(X, als={"nstart": 6, "seed": 99})
    r2 = compute_mdgi(X, als={"nstart": 6, "seed": 99})
    assert r1.mdgi_global == r2.mdgi_global
    assert np.array_equal(r1.mdgi_yearly, r2.mdgi_yearly)
    assert np.array_equal(r1.weights_var, r2.weights_var)

def test_result_is_read_only_and_has_named_fields():
    res = compute_mdgi(_ladder(), delta=2, beta=0.5, als=FAST)
    with pytest.raises(ValueError):
        res.scores[0, 0] = 1.0
    d = res.as_dict()
    assert set(d) == {"MDGI_Global", "MDGI_Yearly", "Weights_Var", "Weights_Time", "Scores", "GiniScores"}
    assert "MDGI_Global=" in res.summary()

@pytest.mark.parametrize("kwargs", [
    {"beta": 1.0}, {"beta": 0.0}, {"beta": 1.2}, {"delta": 0.0}, {"delta": -1.0},
])
def test_rejects_bad_parameters(kwargs):
    with pytest.raises(InvalidParameter):
        compute_mdgi(_ladder(), als=FAST, **kwargs)

def test_rejects_negative_and_malformed_tensors():
    X = _ladder().copy()
    X[1, 0, 0] = -1.0
    with pytest.raises(InvalidInput):
        compute_mdgi(X, als=FAST)
    with pytest.raises(InvalidInput):
        compute_mdgi(np.ones((4, 2)), als=FAST)
    with pytest.raises(InvalidInput):
        compute_mdgi(np.ones((0, 2, 3)), als=FAST)

def test_recorded_settings_are_read_only():
    res = compute_mdgi(_ladder(), delta=2, beta=0.5, als=FAST)
    assert res.params["nstart"] == 5
    with pytest.raises(TypeError):
        res.params["nstart"] = 999
    assert res.params["nstart"] == 5

def test_unknown_als_setting_is_rejected():
    with pytest.raises(InvalidParameter, match="nstrat"):
        compute_mdgi(np.ones((3, 2, 2)), als={"nstart": 2, "nstrat": 50})

import numpy as np

from pyadaptfilt import RLS, NLMS


def test_rls_shapes(rls_test_data):
    x, d = rls_test_data["x"], rls_test_data["d"]
    length = rls_test_data["length"]
    n_samples = len(x)

    model = RLS(filter_length=length, forgetting_factor=0.98, eps=0.1)
    res = model.filter(d, x)

    assert len(res.outputs) == n_samples
    assert len(res.errors) == n_samples
    assert res.coefficients.shape == (n_samples + 1, length)
    assert model.w.shape == (length,)
    assert model.R.shape == (length, length)


def test_rls_convergence(rls_test_data, calculate_msd):
    model = RLS(filter_length=rls_test_data["length"])
    model.filter(rls_test_data["d"], rls_test_data["x"])
    assert calculate_msd(rls_test_data["w_optimal"][::-1], model.w) < 1e-4


def test_rls_initial_inverse_correlation():
    model = RLS(filter_length=3, eps=0.25)
    np.testing.assert_array_equal(model.R, 4.0 * np.eye(3))


def test_rls_single_step_matches_kalman_gain_form():
    w0 = np.array([0.1, -0.2])
    lam, eps = 0.95, 0.5
    model = RLS(forgetting_factor=lam, eps=eps, w_init=w0)
    model.filter([0.0, 1.5], [0.0, 2.0])

    # step 0 has an all-zero window: R only gets scaled by 1/lam
    R = np.eye(2) / eps / lam
    x = np.array([0.0, 2.0])
    e = 1.5 - w0 @ x
    k = R @ x / (lam + x @ R @ x)
    w_expected = w0 + k * e
    R_expected = (R - np.outer(k, x @ R)) / lam

    np.testing.assert_allclose(model.get_weights(), w_expected, rtol=1e-12)
    np.testing.assert_allclose(model.R, R_expected, rtol=1e-12)


def test_rls_inverse_correlation_stays_symmetric(rls_test_data):
    model = RLS(filter_length=rls_test_data["length"], forgetting_factor=0.99)
    res = model.filter(rls_test_data["d"], rls_test_data["x"], return_internal_states=True)
    R = res.extra["inverse_correlation"]
    assert np.allclose(R, R.T, rtol=1e-6, atol=1e-9 * np.max(np.abs(R)))


def test_rls_and_nlms_reach_wiener_solution(system_data):
    """Noisy FIR identification: both estimators settle near the true taps."""
    x, d = system_data["x"], system_data["d_noisy"]
    w_true = system_data["w_optimal"][::-1]

    rls = RLS(filter_length=system_data["length"], forgetting_factor=0.999)
    nlms = NLMS(filter_length=system_data["length"], step_size=0.2)
    rls.filter(d, x)
    nlms.filter(d, x)

    rel = lambda w: np.linalg.norm(w - w_true) / np.linalg.norm(w_true)
    assert rel(rls.get_weights()) < 0.05
    assert rel(nlms.get_weights()) < 0.05
    assert np.linalg.norm(rls.get_weights() - nlms.get_weights()) / np.linalg.norm(w_true) < 0.05


def test_rls_reset_restores_state(rls_test_data):
    model = RLS(filter_length=rls_test_data["length"], eps=0.1)
    model.filter(rls_test_data["d"], rls_test_data["x"])
    model.reset_filter()
    np.testing.assert_array_equal(model.R, 10.0 * np.eye(rls_test_data["length"]))
    np.testing.assert_array_equal(model.w, np.zeros(rls_test_data["length"]))

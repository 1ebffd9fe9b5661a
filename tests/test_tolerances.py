import numpy as np
import pytest

from verify.tolerances import ToleranceExceeded, check_error, infer_tolerance, machine_epsilon


def test_machine_epsilon_uses_real_part_type():
    assert machine_epsilon("f32") == float(np.finfo(np.float32).eps)
    assert machine_epsilon("c64") == float(np.finfo(np.float32).eps)
    assert machine_epsilon("z") == float(np.finfo(np.float64).eps)


def test_bound_scales_with_problem_size():
    tol = infer_tolerance("d", 50)
    assert tol.bound == pytest.approx(50 * np.finfo(np.float64).eps)
    assert tol.to_dict()["scale"] == 50.0
    # degenerate sizes still get one eps
    assert infer_tolerance("s", 0).scale == 1.0


def test_check_error_passes_at_the_bound_and_fails_above():
    eps = np.finfo(np.float32).eps
    check_error("f32", 10 * eps, 10)
    with pytest.raises(ToleranceExceeded) as ei:
        check_error("f32", 11 * eps, 10)
    assert isinstance(ei.value, AssertionError)
    assert ei.value.n == 10


def test_nan_error_fails():
    with pytest.raises(ToleranceExceeded):
        check_error("f64", float("nan"), 100)

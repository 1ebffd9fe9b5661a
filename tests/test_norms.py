import numpy as np
import pytest

from verify.norms import as_matrix, matrix_norm, norm_error


def test_as_matrix_column_major_with_leading_dimension():
    buf = np.arange(12, dtype=np.float64)
    a = as_matrix(buf, 2, 3, 4)
    np.testing.assert_array_equal(a, [[0, 4, 8], [1, 5, 9]])


def test_as_matrix_rejects_bad_shapes():
    with pytest.raises(ValueError):
        as_matrix(np.zeros(4), 2, 2, 1)
    with pytest.raises(ValueError):
        as_matrix(np.zeros(3), 2, 2, 2)


@pytest.mark.parametrize(
    "kind,expected",
    [("O", 6.0), ("1", 6.0), ("I", 7.0), ("M", 4.0), ("F", np.sqrt(1 + 4 + 9 + 16))],
)
def test_matrix_norm_kinds(kind, expected):
    # column sums 4, 6; row sums 3, 7
    a = np.array([[1.0, 2.0], [-3.0, 4.0]])
    assert matrix_norm(kind, a) == pytest.approx(expected)


def test_matrix_norm_unknown_kind():
    with pytest.raises(ValueError):
        matrix_norm("X", np.ones((1, 1)))


def test_norm_error_strided_vector_is_relative_max_abs():
    gold = np.array([1.0, 99.0, -4.0, 99.0, 2.0, 99.0], dtype=np.float32)
    comp = gold.copy()
    comp[2] = -4.5
    comp[1] = 0.0  # outside the strided view
    err = norm_error("O", 1, 3, 2, gold, comp)
    assert err == pytest.approx(0.5 / 4.0)


def test_norm_error_empty_and_zero_gold():
    assert norm_error("O", 1, 0, 1, np.zeros(1), np.ones(1)) == 0.0
    assert norm_error("F", 1, 2, 1, np.zeros(2), np.array([3.0, 4.0])) == pytest.approx(5.0)


def test_norm_error_complex_identical_is_zero():
    x = np.array([1 + 2j, 3 - 4j], dtype=np.complex64)
    assert norm_error("F", 1, 2, 1, x, x.copy()) == 0.0

import math

import pytest

from rmcontrol.matrix import Matrix, SingularMatrixError


def _values(m: Matrix) -> list:
    return [(m.rows(), m.cols())] + [v for i in range(m.rows()) for v in m[i]]


@pytest.fixture
def square():
    return Matrix(3, 3, [[2, 1, 0], [1, 3, 1], [0, 1, 4]])


@pytest.fixture
def wide():
    return Matrix(2, 3, [1, 2, 3, 4, 5, 6])


def test_shape_and_indexing(wide):
    assert wide.rows() == 2
    assert wide.cols() == 3
    assert wide[1, 2] == 6.0
    assert wide[0] == (1.0, 2.0, 3.0)
    assert wide[1][0] == 4.0


def test_setitem_element_and_row(wide):
    wide[0, 1] = 9
    assert wide[0, 1] == 9.0
    wide[1] = [7, 8, 9]
    assert wide[1] == (7.0, 8.0, 9.0)


def test_setitem_row_wrong_length(wide):
    with pytest.raises(ValueError):
        wide[0] = [1, 2]
    assert wide[0] == (1.0, 2.0, 3.0)


def test_index_out_of_range(wide):
    with pytest.raises(IndexError):
        wide[2, 0]
    with pytest.raises(IndexError):
        wide[0, 3] = 1.0
    assert wide == Matrix(2, 3, [1, 2, 3, 4, 5, 6])


def test_wrong_data_length():
    with pytest.raises(ValueError):
        Matrix(2, 2, [1, 2, 3])


def test_add_sub_round_trip(square):
    other = Matrix.ones(3, 3) * 5
    assert (square + other) - other == square


def test_add_shape_mismatch(square, wide):
    with pytest.raises(ValueError):
        square + wide
    with pytest.raises(ValueError):
        square - wide
    assert square == Matrix(3, 3, [2, 1, 0, 1, 3, 1, 0, 1, 4])
    assert wide == Matrix(2, 3, [1, 2, 3, 4, 5, 6])


def test_scalar_mul_matches_addition(square):
    assert 2 * square == square + square
    assert square * 2 == square + square


def test_division_undoes_scaling(square):
    result = (square * 4) / 4
    assert _values(result) == pytest.approx(_values(square))


def test_matmul_identity(wide):
    assert wide @ Matrix.eye(3, 3) == wide
    assert Matrix.eye(2, 2) @ wide == wide


def test_mul_with_matrix_is_matmul(square, wide):
    assert wide * square == wide @ square


def test_matmul_transpose_rule(square, wide):
    left = (wide @ square).trans()
    right = square.trans() @ wide.trans()
    assert _values(left) == pytest.approx(_values(right))


def test_matmul_shape_mismatch(wide):
    with pytest.raises(ValueError):
        wide @ wide
    gram = wide @ wide.trans()
    assert (gram.rows(), gram.cols()) == (2, 2)


def test_transpose(wide):
    t = wide.trans()
    assert (t.rows(), t.cols()) == (3, 2)
    assert t[2, 1] == wide[1, 2]
    assert t.trans() == wide


def test_block_row_col(wide):
    b = wide.block(0, 1, 2, 2)
    assert b == Matrix(2, 2, [wide[0, 1], wide[0, 2], wide[1, 1], wide[1, 2]])
    assert wide.row(1) == Matrix(1, 3, wide[1])
    assert wide.col(2) == Matrix(2, 1, [wide[0, 2], wide[1, 2]])


def test_block_out_of_range(wide):
    with pytest.raises(IndexError):
        wide.block(1, 1, 2, 2)


def test_trace(square):
    assert Matrix.eye(3, 3).trace() == 3.0
    assert square.trace() == square[0, 0] + square[1, 1] + square[2, 2]
    assert Matrix.ones(2, 3).trace() == 2.0


def test_norm_of_column_vector():
    assert math.isclose(Matrix(2, 1, [3, 4]).norm(), 5.0)


def test_inverse_of_inverse(square):
    inverse = square.inv()
    identity = _values(Matrix.eye(3, 3))
    assert _values(inverse @ square) == pytest.approx(identity, abs=1e-9)
    assert _values(square @ inverse) == pytest.approx(identity, abs=1e-9)
    assert _values(inverse.inv()) == pytest.approx(_values(square), abs=1e-9)


def test_inverse_singular():
    with pytest.raises(SingularMatrixError):
        Matrix(2, 2, [1, 2, 2, 4]).inv()


def test_inverse_zero_pivot_without_row_exchange():
    with pytest.raises(SingularMatrixError):
        Matrix(2, 2, [0, 1, 1, 0]).inv()


def test_inverse_non_square_is_zero(wide):
    assert wide.inv() == Matrix.zeros(3, 2)


def test_factories():
    assert Matrix.zeros(2, 3) == Matrix(2, 3)
    assert Matrix.ones(2, 2) == Matrix(2, 2, [1, 1, 1, 1])
    assert Matrix.eye(2, 3) == Matrix(2, 3, [1, 0, 0, 0, 1, 0])


def test_diag_from_vector():
    vec = Matrix(3, 1, [4, 5, 6])
    d = Matrix.diag(vec, 3)
    assert d @ Matrix.ones(3, 1) == vec
    assert d == d.trans()
    assert Matrix.diag([1, 1], 2) == Matrix.eye(2, 2)


def test_diag_rejects_row_vector():
    with pytest.raises(ValueError):
        Matrix.diag(Matrix(1, 3, [1, 2, 3]), 3)


def test_equality_with_other_types(wide):
    assert (wide == "matrix") is False
    assert wide != Matrix(3, 2, [1, 2, 3, 4, 5, 6])
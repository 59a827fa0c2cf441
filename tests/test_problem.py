import numpy as np
import pytest
from scipy import sparse

from conftest import INF, make_data
from presolve.exceptions import InconsistentDataError, ProblemShapeError
from presolve.problem import PresolveData, ProblemData


def test_row_and_column_views():
    A = np.array([[1, 0, 2],
                  [0, 3, 4],
                  [5, 0, 0]], dtype=float)
    pb = ProblemData(A)
    assert (pb.ncon, pb.nvar, pb.nnz) == (3, 3, 5)
    assert pb.arows[1].nzind.tolist() == [1, 2]
    assert pb.arows[1].nzval.tolist() == [3.0, 4.0]
    assert pb.acols[0].nzind.tolist() == [0, 2]
    assert pb.acols[2].nzval.tolist() == [2.0, 4.0]
    np.testing.assert_array_equal(pb.to_csr().toarray(), A)


def test_colslot_points_at_mirrored_entry():
    A = sparse.random(20, 15, density=0.3, format="csr", random_state=3)
    pb = ProblemData(A)
    for i, row in enumerate(pb.arows):
        for k, (j, value) in enumerate(row):
            slot = pb.colslot[i][k]
            assert pb.acols[j].nzind[slot] == i
            assert pb.acols[j].nzval[slot] == value


def test_set_coef_writes_both_mirrors():
    pb = ProblemData(np.array([[1.0, 2.0], [3.0, 4.0]]))
    pb.set_coef(1, 0, 7.0)
    assert pb.arows[1].nzval.tolist() == [7.0, 4.0]
    assert pb.acols[0].nzval.tolist() == [1.0, 7.0]
    assert pb.to_csr()[1, 0] == 7.0
    assert pb.mirrors_consistent()


def test_unsorted_input_and_duplicates():
    # coo with unsorted, duplicated entries
    A = sparse.coo_matrix(([1.0, 2.0, 3.0, 4.0], ([1, 0, 1, 0], [2, 1, 0, 1])), shape=(2, 3))
    pb = ProblemData(A)
    assert pb.arows[0].nzind.tolist() == [1]
    assert pb.arows[0].nzval.tolist() == [6.0]
    assert pb.arows[1].nzind.tolist() == [0, 2]
    assert pb.mirrors_consistent()


def test_input_matrix_is_not_aliased():
    A = sparse.csr_matrix(np.array([[1.0, 2.0]]))
    pb = ProblemData(A)
    pb.set_coef(0, 0, 9.0)
    assert A[0, 0] == 1.0


def test_structural_zeros_are_not_counted():
    A = sparse.csr_matrix((np.array([0.0, 2.0, 3.0]), np.array([0, 1, 1]), np.array([0, 2, 3])), shape=(2, 2))
    ps = PresolveData(ProblemData(A), [0, 0], [1, 1], [-INF, -INF], [1, 1], ['B', 'B'])
    assert len(ps.pb0.arows[0]) == 2
    assert ps.nzrow.tolist() == [1, 1]
    assert ps.nzcol.tolist() == [0, 2]
    ps.validate()


def test_row_classification():
    ps = make_data([[1], [1], [1], [1]], [0], [1], [0, -INF, 0, -INF], [1, 1, INF, INF], ['C'])
    assert [ps.is_ranged(i) for i in range(4)] == [True, False, False, False]
    assert [ps.is_free(i) for i in range(4)] == [False, False, False, True]
    assert ps.is_integral(0) is False


def test_shape_errors():
    with pytest.raises(ProblemShapeError):
        make_data([[1, 2]], [0], [1, 1], [-INF], [1], ['B', 'B'])
    with pytest.raises(ProblemShapeError):
        make_data([[1, 2]], [0, 0], [1, 1], [-INF], [1], ['B'])
    with pytest.raises(ProblemShapeError):
        make_data([[1, 2]], [0, 0], [1, 1], [-INF], [1], ['B', 'X'])
    with pytest.raises(ProblemShapeError):
        make_data([[1, 2]], [0, 0], [1, 1], [-INF], [1], ['B', 'B'], colflag=[True])


def test_validate_detects_broken_mirror():
    ps = make_data([[1, 2]], [0, 0], [1, 1], [-INF], [1], ['B', 'B'])
    ps.pb0.arows[0].nzval[1] = 5.0
    with pytest.raises(InconsistentDataError, match="coefficients differ"):
        ps.validate()


def test_validate_detects_wrong_counters():
    ps = make_data([[1, 2]], [0, 0], [1, 1], [-INF], [1], ['B', 'B'])
    ps.nzrow[0] = 1
    with pytest.raises(InconsistentDataError, match="nzrow"):
        ps.validate()
    ps.nzrow[0] = 2
    ps.nzcol[1] = 0
    with pytest.raises(InconsistentDataError, match="nzcol"):
        ps.validate()


def test_validate_detects_crossed_bounds_on_active_columns():
    ps = make_data([[1, 2]], [0, 3], [1, 1], [-INF], [1], ['B', 'I'])
    with pytest.raises(InconsistentDataError, match="Active column 1"):
        ps.validate()
    ps.colflag[1] = False
    ps.validate()

import numpy as np
import pytest

from presolve.problem import PresolveData

INF = np.inf


def make_data(A, lcol, ucol, lrow, urow, var_types, colflag=None):
    return PresolveData.from_matrix(np.array(A, dtype=float), lcol, ucol, lrow, urow, var_types, colflag)


def row_values(ps, i):
    return ps.pb0.arows[i].nzval.tolist()


def dense(ps):
    return ps.pb0.to_csr().toarray()


@pytest.fixture
def knapsack_pair():
    # 3x1 + 3x2 <= 5 and 3x1 + 3x2 >= 1 over binaries
    return make_data([[3, 3], [3, 3]], [0, 0], [1, 1], [-INF, 1], [5, INF], ['B', 'B'])

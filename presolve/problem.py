from typing import List, Sequence, Tuple
import numpy as np
from scipy import sparse

from presolve.exceptions import InconsistentDataError, ProblemShapeError

CONTINUOUS = 'C'
INTEGER = 'I'
BINARY = 'B'


class SparseVector:
    """One row or column of the constraint matrix.

    ``nzind`` and ``nzval`` are views into the owning matrix, so writing
    ``nzval[k]`` writes the matrix itself.
    """
    __slots__ = ("nzind", "nzval")

    def __init__(self, nzind: np.ndarray, nzval: np.ndarray):
        self.nzind = nzind
        self.nzval = nzval

    def __len__(self):
        return len(self.nzind)

    def __iter__(self):
        return zip(self.nzind, self.nzval)

    def __repr__(self):
        return f"SparseVector(nzind={self.nzind.tolist()}, nzval={self.nzval.tolist()})"


class ProblemData:
    """Constraint matrix stored both row-major and column-major.

    The two storages are linked by a transpose index map computed once here:
    ``colslot[i][k]`` is the slot inside ``acols[j]`` holding the k-th stored
    entry of row ``i``.
    """

    def __init__(self, A):
        csr = sparse.csr_matrix(A, dtype=float, copy=True)
        csr.sum_duplicates()
        csr.sort_indices()
        self.ncon, self.nvar = csr.shape
        nnz = csr.nnz

        # Carry csr positions (offset by one so none of them is zero) through
        # the transpose to learn where each entry lands in csc order.
        marker = sparse.csr_matrix(
            (np.arange(1, nnz + 1, dtype=np.int64), csr.indices.copy(), csr.indptr.copy()),
            shape=csr.shape)
        marker = marker.tocsc()
        marker.sort_indices()
        csc_to_csr = marker.data - 1
        csr_to_csc = np.empty(nnz, dtype=np.int64)
        csr_to_csc[csc_to_csr] = np.arange(nnz, dtype=np.int64)

        csc = sparse.csc_matrix(
            (csr.data[csc_to_csr], marker.indices, marker.indptr), shape=csr.shape)

        self._csr = csr
        self._csc = csc
        self._csr_to_csc = csr_to_csc

        self.arows: List[SparseVector] = []
        self.colslot: List[np.ndarray] = []
        for i in range(self.ncon):
            s, e = csr.indptr[i], csr.indptr[i + 1]
            self.arows.append(SparseVector(csr.indices[s:e], csr.data[s:e]))
            self.colslot.append(csr_to_csc[s:e] - csc.indptr[csr.indices[s:e]])

        self.acols: List[SparseVector] = []
        for j in range(self.nvar):
            s, e = csc.indptr[j], csc.indptr[j + 1]
            self.acols.append(SparseVector(csc.indices[s:e], csc.data[s:e]))

    @property
    def nnz(self) -> int:
        return self._csr.nnz

    def set_coef(self, i: int, k: int, value):
        # both mirrors are written before returning
        j = self.arows[i].nzind[k]
        self.arows[i].nzval[k] = value
        self.acols[j].nzval[self.colslot[i][k]] = value

    def mirrors_consistent(self) -> bool:
        return bool(np.array_equal(self._csr.data, self._csc.data[self._csr_to_csc]))

    def count_nonzeros(self) -> Tuple[np.ndarray, np.ndarray]:
        csr = self._csr
        nonzero = csr.data != 0
        row_of_entry = np.repeat(np.arange(self.ncon), np.diff(csr.indptr))
        nzrow = np.bincount(row_of_entry[nonzero], minlength=self.ncon)
        nzcol = np.bincount(csr.indices[nonzero], minlength=self.nvar)
        return nzrow.astype(np.int64), nzcol.astype(np.int64)

    def to_csr(self) -> sparse.csr_matrix:
        return self._csr.copy()

    def __repr__(self):
        return f"ProblemData(ncon={self.ncon}, nvar={self.nvar}, nnz={self.nnz})"


class PresolveData:
    """Mutable presolve state: the problem plus bounds, types, flags and counters."""

    def __init__(self, pb0: ProblemData, lcol, ucol, lrow, urow,
                 var_types: Sequence[str], colflag=None):
        self.pb0 = pb0
        self.lcol = self._vector(lcol, pb0.nvar, "lcol")
        self.ucol = self._vector(ucol, pb0.nvar, "ucol")
        self.lrow = self._vector(lrow, pb0.ncon, "lrow")
        self.urow = self._vector(urow, pb0.ncon, "urow")

        self.var_types = list(var_types)
        if len(self.var_types) != pb0.nvar:
            raise ProblemShapeError(f"var_types has length {len(self.var_types)}, expected {pb0.nvar}")
        unknown = set(self.var_types) - {CONTINUOUS, INTEGER, BINARY}
        if unknown:
            raise ProblemShapeError(f"Unknown variable types: {sorted(unknown)}")

        if colflag is None:
            self.colflag = np.ones(pb0.nvar, dtype=bool)
        else:
            self.colflag = np.array(colflag, dtype=bool)
            if self.colflag.shape != (pb0.nvar,):
                raise ProblemShapeError(f"colflag has shape {self.colflag.shape}, expected ({pb0.nvar},)")

        self.nzrow, self.nzcol = pb0.count_nonzeros()

    @staticmethod
    def _vector(values, n: int, name: str) -> np.ndarray:
        arr = np.array(values, dtype=float)
        if arr.shape != (n,):
            raise ProblemShapeError(f"{name} has shape {arr.shape}, expected ({n},)")
        return arr

    @classmethod
    def from_matrix(cls, A, lcol, ucol, lrow, urow, var_types, colflag=None) -> "PresolveData":
        return cls(ProblemData(A), lcol, ucol, lrow, urow, var_types, colflag)

    @property
    def nvar(self) -> int:
        return self.pb0.nvar

    @property
    def ncon(self) -> int:
        return self.pb0.ncon

    def is_ranged(self, i: int) -> bool:
        return bool(np.isfinite(self.lrow[i]) and np.isfinite(self.urow[i]))

    def is_free(self, i: int) -> bool:
        return not (np.isfinite(self.lrow[i]) or np.isfinite(self.urow[i]))

    def is_integral(self, j: int) -> bool:
        return self.var_types[j] != CONTINUOUS

    def validate(self):
        """Raise InconsistentDataError if an upstream invariant is broken."""
        pb0 = self.pb0
        if not pb0.mirrors_consistent():
            raise InconsistentDataError("Row-major and column-major coefficients differ")

        nzrow, nzcol = pb0.count_nonzeros()
        bad_rows = np.flatnonzero(nzrow != self.nzrow)
        if bad_rows.size:
            i = bad_rows[0]
            raise InconsistentDataError(f"nzrow[{i}] = {self.nzrow[i]} but row has {nzrow[i]} nonzeros")
        bad_cols = np.flatnonzero(nzcol != self.nzcol)
        if bad_cols.size:
            j = bad_cols[0]
            raise InconsistentDataError(f"nzcol[{j}] = {self.nzcol[j]} but column has {nzcol[j]} nonzeros")

        crossed = np.flatnonzero(self.colflag & (self.lcol > self.ucol))
        if crossed.size:
            j = crossed[0]
            raise InconsistentDataError(f"Active column {j} has lcol {self.lcol[j]} > ucol {self.ucol[j]}")

    def __repr__(self):
        return f"PresolveData({self.pb0!r})"

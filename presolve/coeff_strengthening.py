"""
Coefficient strengthening for rows with one finite side.

For a row a'x <= b and an integer column x_j with upper bound u_j, let M be the
maximal activity of the row without x_j. If

    a_j >= d = b - M - a_j (u_j - 1) > 0

then a_j <- a_j - d and b <- b - d u_j leave the integer-feasible set unchanged.
Negative coefficients and rows of the form c <= a'x use the mirrored rules.
Ranged rows are left alone. A coefficient reduced to 0 stays stored as a
structural zero and only the nonzero counters are updated.
"""
import logging
import math
from typing import List, Tuple

from presolve.activity import maximal_activity, minimal_activity
from presolve.base import Presolver, Reduction
from presolve.problem import PresolveData

logger = logging.getLogger(__name__)


def upperbound_strengthening(coef, bound, lcol_j, ucol_j, max_act) -> Tuple[float, float]:
    # row a'x <= bound; max_act excludes column j
    new_coef, new_bound = coef, bound
    if coef > 0:
        d = bound - max_act - coef * (ucol_j - 1)
        if coef >= d > 0:
            new_coef = coef - d
            new_bound = bound - d * ucol_j
    elif coef < 0:
        d = bound - max_act - coef * (lcol_j + 1)
        if -coef >= d > 0:
            new_coef = coef + d
            new_bound = bound + d * lcol_j
    return new_coef, new_bound


def lowerbound_strengthening(coef, bound, lcol_j, ucol_j, min_act) -> Tuple[float, float]:
    # row bound <= a'x; min_act excludes column j
    new_coef, new_bound = coef, bound
    if coef > 0:
        d = -bound + min_act + coef * (lcol_j + 1)
        if coef >= d > 0:
            new_coef = coef - d
            new_bound = bound - d * lcol_j
    elif coef < 0:
        d = -bound + min_act + coef * (ucol_j - 1)
        if -coef >= d > 0:
            new_coef = coef + d
            new_bound = bound + d * ucol_j
    return new_coef, new_bound


class CoefficientStrengthening(Presolver):
    def __init__(self):
        super().__init__("CoefficientStrengthening")

    def apply(self, ps: PresolveData) -> List[Reduction]:
        pb0 = ps.pb0
        reductions = []

        for i in range(pb0.ncon):
            lrow = float(ps.lrow[i])
            urow = float(ps.urow[i])
            upper = math.isfinite(urow)
            lower = math.isfinite(lrow)
            if upper and lower:
                continue  # ranged
            if not (upper or lower):
                continue  # free

            row = pb0.arows[i]
            if not any(ps.is_integral(j) for j in row.nzind):
                continue

            sup = maximal_activity(row, ps.ucol, ps.lcol)
            inf = minimal_activity(row, ps.ucol, ps.lcol)

            for k, j in enumerate(row.nzind):
                if not ps.is_integral(j) or not ps.colflag[j]:
                    continue
                coef = float(row.nzval[k])
                if coef == 0:
                    continue
                lcol_j = float(ps.lcol[j])
                ucol_j = float(ps.ucol[j])

                if upper:
                    max_act = sup - coef * (ucol_j if coef > 0 else lcol_j)
                    new_coef, new_bound = upperbound_strengthening(coef, urow, lcol_j, ucol_j, max_act)
                else:
                    min_act = inf - coef * (lcol_j if coef > 0 else ucol_j)
                    new_coef, new_bound = lowerbound_strengthening(coef, lrow, lcol_j, ucol_j, min_act)

                if new_coef == coef:
                    continue

                pb0.set_coef(i, k, new_coef)
                if new_coef == 0:
                    ps.nzrow[i] -= 1
                    ps.nzcol[j] -= 1
                    reductions.append(Reduction('zero_coefficient', (i, int(j)), (coef, 0.0)))
                else:
                    reductions.append(Reduction('tighten_coefficient', (i, int(j)), (coef, new_coef)))

                if upper:
                    ps.urow[i] = new_bound
                    if new_bound != urow:
                        reductions.append(Reduction('tighten_row_bound', (i, 'U'), (urow, new_bound)))
                    urow = new_bound
                    sup -= (coef - new_coef) * (ucol_j if coef > 0 else lcol_j)
                else:
                    ps.lrow[i] = new_bound
                    if new_bound != lrow:
                        reductions.append(Reduction('tighten_row_bound', (i, 'L'), (lrow, new_bound)))
                    lrow = new_bound
                    inf -= (coef - new_coef) * (lcol_j if coef > 0 else ucol_j)

                logger.debug("Row %d col %d: coefficient %g -> %g, bound -> %g", i, j, coef, new_coef, new_bound)

        if reductions:
            changed = sum(1 for r in reductions if r.kind != 'tighten_row_bound')
            logger.info("%s: strengthened %d coefficients", self.name, changed)
        return reductions


def coefficient_strengthening(ps: PresolveData) -> List[Reduction]:
    """Apply coefficient strengthening to ps in place."""
    return CoefficientStrengthening().apply(ps)

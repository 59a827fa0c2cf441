from presolve.base import Presolver, Reduction
from presolve.problem import BINARY, CONTINUOUS, INTEGER, PresolveData, ProblemData, SparseVector
from presolve.activity import maximal_activity, minimal_activity
from presolve.coeff_strengthening import (CoefficientStrengthening, coefficient_strengthening,
                                          lowerbound_strengthening, upperbound_strengthening)
from presolve.engine import PresolveEngine
from presolve.exceptions import InconsistentDataError, PresolveError, ProblemShapeError

import numpy as np
import gurobipy as gp
from gurobipy import GRB
from scipy import sparse
from typing import Tuple

from presolve.problem import PresolveData

SENSE_MAP = {GRB.LESS_EQUAL: 'L', GRB.GREATER_EQUAL: 'G', GRB.EQUAL: 'E'}


class MIPInstance:
    def __init__(self, mps_path: str = None, model: gp.Model = None):
        self.mps_path = mps_path
        self._env = None
        if model is None:
            env = gp.Env(empty=True)
            env.setParam('OutputFlag', 0)
            env.start()
            self._env = env
            model = gp.read(mps_path, env=env)
        self.model = model
        self.A = None
        self.b = []
        self.sense = []
        self.lb = []
        self.ub = []
        self.var_types = []
        self.var_names = []
        self.row_names = []
        self.obj = []
        self.obj_const = 0.0
        self.model_sense = GRB.MINIMIZE

        self._extract_data()

    @classmethod
    def from_model(cls, model: gp.Model) -> "MIPInstance":
        return cls(model=model)

    @property
    def num_vars(self) -> int:
        return len(self.var_names)

    @property
    def num_constraints(self) -> int:
        return len(self.row_names)

    @property
    def num_binary(self) -> int:
        return self.var_types.count('B')

    @property
    def num_integer(self) -> int:
        return self.var_types.count('I')

    @property
    def num_continuous(self) -> int:
        return self.var_types.count('C')

    @property
    def num_nonzeros(self) -> int:
        return int(np.count_nonzero(self.A.data))

    def _extract_data(self):
        self.model.update()

        variables = self.model.getVars()
        self.var_names = [v.VarName for v in variables]
        self.obj = np.array([v.Obj for v in variables], dtype=float)
        self.lb = np.array([v.LB for v in variables], dtype=float)
        self.ub = np.array([v.UB for v in variables], dtype=float)
        # Gurobi reports infinite bounds as +-GRB.INFINITY (1e100)
        self.lb[self.lb <= -GRB.INFINITY] = -np.inf
        self.ub[self.ub >= GRB.INFINITY] = np.inf
        self.var_types = [v.VType for v in variables]
        self.obj_const = self.model.ObjCon
        self.model_sense = self.model.ModelSense

        constraints = self.model.getConstrs()
        self.row_names = [c.ConstrName for c in constraints]
        self.b = np.array([c.RHS for c in constraints], dtype=float)
        self.sense = [SENSE_MAP[c.Sense] for c in constraints]
        self.A = sparse.csr_matrix(self.model.getA(), dtype=float)

    def pretty_print(self):
        print(f'This model has {self.num_vars} variables, {self.num_constraints} constraints '
              f'and {self.num_nonzeros} nonzeros')
        print('\n=== Variables ===')
        print(f"Total binary variables: {self.num_binary}")
        print(f"Total integer variables: {self.num_integer}")
        print(f"Total continuous variables: {self.num_continuous}")

    def row_bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        lrow = np.full(self.num_constraints, -np.inf)
        urow = np.full(self.num_constraints, np.inf)
        for i, s in enumerate(self.sense):
            if s in ('L', 'E'):
                urow[i] = self.b[i]
            if s in ('G', 'E'):
                lrow[i] = self.b[i]
        return lrow, urow

    def to_presolve_data(self) -> PresolveData:
        lrow, urow = self.row_bounds()
        return PresolveData.from_matrix(self.A, self.lb, self.ub, lrow, urow, self.var_types)

    def load_presolve_data(self, ps: PresolveData):
        """Copy coefficients and row right-hand sides back from a presolve state."""
        self.A = ps.pb0.to_csr()
        for i, s in enumerate(self.sense):
            if s == 'L':
                self.b[i] = ps.urow[i]
            elif s == 'G':
                self.b[i] = ps.lrow[i]

    def build_gurobi_model(self) -> gp.Model:
        """Builds and returns a Gurobi model from the current instance data."""
        model = gp.Model(env=self._env)
        model.Params.OutputFlag = 0

        x = model.addVars(self.num_vars,
                          lb=[-GRB.INFINITY if np.isinf(l) else l for l in self.lb],
                          ub=[GRB.INFINITY if np.isinf(u) else u for u in self.ub],
                          vtype=self.var_types,
                          name=self.var_names)
        model.update()

        senses = {'L': GRB.LESS_EQUAL, 'G': GRB.GREATER_EQUAL, 'E': GRB.EQUAL}
        A = self.A
        for i in range(self.num_constraints):
            s, e = A.indptr[i], A.indptr[i + 1]
            terms = [(float(a), x[int(j)]) for j, a in zip(A.indices[s:e], A.data[s:e]) if a != 0]
            lhs = gp.LinExpr(terms)
            model.addLConstr(lhs, senses[self.sense[i]], float(self.b[i]), name=self.row_names[i])

        objective_expression = gp.quicksum(float(self.obj[j]) * x[j] for j in range(self.num_vars))
        model.setObjective(objective_expression + self.obj_const, self.model_sense)
        model.update()
        return model

    def write_model(self, output_path: str):
        """Builds a Gurobi model and writes it to a file."""
        model = self.build_gurobi_model()
        model.write(output_path)

from abc import ABC, abstractmethod
from typing import List

class Reduction:
    """Record of one change a presolver made to the presolve state.

    kind is one of 'tighten_coefficient', 'zero_coefficient' or
    'tighten_row_bound'; target and value depend on the kind.
    """
    def __init__(self, kind: str, target, value):
        self.kind = kind
        self.target = target
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, Reduction):
            return NotImplemented
        return (self.kind, self.target, self.value) == (other.kind, other.target, other.value)

    def __repr__(self):
        return f"Reduction(kind={self.kind}, target={self.target}, value={self.value})"



class Presolver(ABC):
    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def apply(self, data) -> List[Reduction]:
        """Mutate data in place and return the reductions that were applied."""

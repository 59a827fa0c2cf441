import logging
from typing import List, Optional
from collections import Counter
from presolve.base import Presolver, Reduction
from presolve.problem import PresolveData

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUNDS = 10


class PresolveEngine:
    def __init__(self, data: PresolveData, max_rounds: int = DEFAULT_MAX_ROUNDS, validate: bool = False):
        self.data = data
        self.max_rounds = max_rounds
        self.validate = validate
        self.presolvers: List[Presolver] = []
        self.applied_reductions: List[Reduction] = []
        self.rounds = 0

    def register(self, presolver: Presolver):
        self.presolvers.append(presolver)

    def run(self, max_rounds: Optional[int] = None) -> List[Reduction]:
        if max_rounds is None:
            max_rounds = self.max_rounds
        if self.validate:
            self.data.validate()

        round_count = 0
        changed = True
        while changed and round_count < max_rounds:
            changed = False
            round_count += 1
            logger.info("Presolve Round %d", round_count)
            for presolver in self.presolvers:
                reductions = presolver.apply(self.data)
                if self.validate:
                    self.data.validate()
                if reductions:
                    logger.info("  %s: %d reductions", presolver.name, len(reductions))
                    self.applied_reductions.extend(reductions)
                    changed = True
            if not changed:
                logger.info("  No more applicable reductions.")

        self.rounds += round_count
        return self.applied_reductions

    def summary(self) -> Counter:
        counter = Counter(r.kind for r in self.applied_reductions)
        logger.info("Presolve complete. Reductions applied:")
        for kind, count in counter.items():
            logger.info("%s: %d", kind, count)
        return counter

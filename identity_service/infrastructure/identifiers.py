import random
from typing import Callable

ID_MIN = 100000
ID_MAX = 999999


class IdentifierAllocator:
    """Draws random six-digit account ids until the oracle reports one as unused.

    Only best-effort: two allocators can pick the same free id before either
    persists it, so storage must still enforce uniqueness on ``users.id``.
    """

    def __init__(self, exists: Callable[[str], bool], rng: random.Random | None = None):
        self.exists = exists
        self.rng = rng or random.SystemRandom()

    def candidate(self) -> str:
        return str(self.rng.randint(ID_MIN, ID_MAX))

    def allocate(self) -> str:
        while True:
            candidate = self.candidate()
            if not self.exists(candidate):
                return candidate

from __future__ import annotations

import random

FIRST_NAMES = [
    "Tony", "Vinnie", "Joey", "Sal", "Mike", "Frank", "Eddie", "Bobby",
    "Jimmy", "Tommy", "Paulie", "Richie", "Danny", "Lou", "Ray",
]

LAST_INITIALS = ["M", "S", "D", "C", "B", "T", "R", "G", "P", "L"]


class NameGenerator:
    """Hands out street names like ``Tony M.``, avoiding repeats until the pool runs dry."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._used: set[str] = set()

    def reserve(self, names: list[str]) -> None:
        self._used.update(names)

    def next_name(self) -> str:
        pool = [f"{first} {initial}." for first in FIRST_NAMES for initial in LAST_INITIALS]
        fresh = [name for name in pool if name not in self._used]
        if fresh:
            name = self._rng.choice(fresh)
            self._used.add(name)
            return name
        # Everyone is taken; regulars tell them apart by number.
        suffix = 2
        base = self._rng.choice(pool)
        while f"{base} {suffix}" in self._used:
            suffix += 1
        name = f"{base} {suffix}"
        self._used.add(name)
        return name


def random_name(rng: random.Random) -> str:
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_INITIALS)}."

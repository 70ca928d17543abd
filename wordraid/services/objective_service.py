"""
Objective Service

Objectives the team must complete during a wave to avoid taking damage, and
the seeded selection of objectives by damage tier.
"""

from typing import Dict, List

from ..models.tile import VOWELS


class Objective:
    """
    Base class for objectives.

    Subclasses describe their criteria and decide whether a word fulfills them.
    `damage` is dealt to the team if the objective is not completed.
    """

    def __init__(self, damage: int):
        if not isinstance(damage, int) or damage <= 0:
            raise ValueError("damage must be a positive integer")
        self.damage = damage

    def description(self) -> str:
        raise NotImplementedError

    def is_satisfied_by(self, word: str, score: int) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.damage}, {self.description()!r})"


class LengthObjective(Objective):
    def __init__(self, damage: int, length: int):
        super().__init__(damage)
        if not isinstance(length, int) or length <= 0:
            raise ValueError("length must be a positive integer")
        self.length = length

    def description(self) -> str:
        return f"Spell a word at least {self.length} long"

    def is_satisfied_by(self, word: str, score: int) -> bool:
        return len(word) >= self.length


class DamageObjective(Objective):
    def __init__(self, damage: int, score: int):
        super().__init__(damage)
        if not isinstance(score, int) or score <= 0:
            raise ValueError("score must be a positive integer")
        self.score = score

    def description(self) -> str:
        return f"Spell a word dealing at least {self.score} dmg"

    def is_satisfied_by(self, word: str, score: int) -> bool:
        return score >= self.score


class PrefixObjective(Objective):
    def __init__(self, damage: int, prefix: str):
        super().__init__(damage)
        if not prefix:
            raise ValueError("prefix cannot be empty")
        self.prefix = prefix.lower()

    def description(self) -> str:
        return f"Spell a word starting with {self.prefix.upper()}"

    def is_satisfied_by(self, word: str, score: int) -> bool:
        return word.lower().startswith(self.prefix)


class SuffixObjective(Objective):
    def __init__(self, damage: int, suffix: str):
        super().__init__(damage)
        if not suffix:
            raise ValueError("suffix cannot be empty")
        self.suffix = suffix.lower()

    def description(self) -> str:
        return f"Spell a word ending with {self.suffix.upper()}"

    def is_satisfied_by(self, word: str, score: int) -> bool:
        return word.lower().endswith(self.suffix)


class DoubleConsonantObjective(Objective):
    def description(self) -> str:
        return "Spell a word with doubled consonants"

    def is_satisfied_by(self, word: str, score: int) -> bool:
        letters = word.upper()
        return any(
            first == second and first.isalpha() and first not in VOWELS
            for first, second in zip(letters, letters[1:])
        )


# Objectives grouped by family. Selection picks a family, then a member.
OBJECTIVE_POOL: List[List[Objective]] = [
    [
        LengthObjective(2, 4),
        LengthObjective(3, 5),
        LengthObjective(4, 6),
        LengthObjective(5, 7),
        LengthObjective(5, 8),
        LengthObjective(6, 9),
    ],
    [
        DamageObjective(2, 8),
        DamageObjective(3, 15),
        DamageObjective(4, 24),
        DamageObjective(5, 35),
        DamageObjective(6, 48),
    ],
    [
        PrefixObjective(2, "S"),
        PrefixObjective(2, "C"),
        PrefixObjective(2, "P"),
        PrefixObjective(2, "D"),
        PrefixObjective(3, "J"),
        PrefixObjective(3, "K"),
        PrefixObjective(3, "N"),
        PrefixObjective(3, "O"),
        PrefixObjective(3, "V"),
    ],
    [
        SuffixObjective(2, "S"),
        SuffixObjective(3, "IVE"),
        SuffixObjective(4, "IC"),
        SuffixObjective(5, "ENCE"),
    ],
    [
        DoubleConsonantObjective(3),
    ],
]

DAMAGE_TIERS = range(2, 7)


def objective_pools_by_damage() -> Dict[int, List[List[Objective]]]:
    """Returns, per damage tier, the non-empty families filtered to that tier."""
    pools: Dict[int, List[List[Objective]]] = {}
    for damage in DAMAGE_TIERS:
        families = [[obj for obj in family if obj.damage == damage] for family in OBJECTIVE_POOL]
        pools[damage] = [family for family in families if family]
    return pools


_POOLS_BY_DAMAGE = objective_pools_by_damage()


def get_random_objective(damage: int, rng) -> Objective:
    """
    Returns a random objective with the specified damage.

    Args:
        damage: Damage tier, 2 to 6
        rng: Random number generator. It is polled twice.

    Raises:
        ValueError: If there are no objectives for the tier
    """
    families = _POOLS_BY_DAMAGE.get(damage)
    if not families:
        raise ValueError(f"No objectives deal {damage} damage")
    family = families[rng.next_int(0, len(families))]
    return family[rng.next_int(0, len(family))]

"""
Tile Models

Contains the tile enum, its display table and the seeded tile generators.
"""

from enum import Enum
from typing import Dict, FrozenSet, List

from .errors import InvariantError


class Tile(Enum):
    """A letter tile or one of the three wildcard tiles."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"
    H = "H"
    I = "I"
    J = "J"
    K = "K"
    L = "L"
    M = "M"
    N = "N"
    O = "O"
    P = "P"
    Q = "Q"
    R = "R"
    S = "S"
    T = "T"
    U = "U"
    V = "V"
    W = "W"
    X = "X"
    Y = "Y"
    Z = "Z"
    WILD = "WILD"
    WILD_VOWEL = "WILD_VOWEL"
    WILD_CONSONANT = "WILD_CONSONANT"


ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

WILDCARDS: FrozenSet[Tile] = frozenset({Tile.WILD, Tile.WILD_VOWEL, Tile.WILD_CONSONANT})

# Letter categories used when a wildcard stands in for a letter. Y belongs to neither.
VOWELS: FrozenSet[str] = frozenset("AEIOU")
CONSONANTS: FrozenSet[str] = frozenset("BCDFGHJKLMNPQRSTVWXZ")

# Letters drawn by the random generators. Y is in both lists.
RANDOM_VOWELS: List[Tile] = [Tile.A, Tile.E, Tile.I, Tile.O, Tile.U, Tile.Y]
RANDOM_CONSONANTS: List[Tile] = [
    Tile.B, Tile.C, Tile.D, Tile.F, Tile.G, Tile.H, Tile.J, Tile.K, Tile.L, Tile.M, Tile.N,
    Tile.P, Tile.Q, Tile.R, Tile.S, Tile.T, Tile.V, Tile.W, Tile.X, Tile.Y, Tile.Z,
]

TILE_SYMBOLS: Dict[Tile, str] = {
    **{Tile(letter): letter for letter in ALPHABET},
    Tile.WILD: "*",
    Tile.WILD_VOWEL: "0",
    Tile.WILD_CONSONANT: "1",
}

_missing_symbols = [tile.name for tile in Tile if tile not in TILE_SYMBOLS]
if _missing_symbols:
    raise InvariantError(f"Tiles missing a display symbol: {', '.join(_missing_symbols)}")


def tile_symbol(tile: Tile) -> str:
    """Returns the display symbol for a tile."""
    return TILE_SYMBOLS[tile]


def letter_tile(char: str) -> Tile:
    """Returns the letter tile for a single character, in either case."""
    letter = char.upper()
    if len(letter) != 1 or letter not in ALPHABET:
        raise ValueError(f"'{char}' is not a letter A-Z")
    return Tile(letter)


def random_tile(rng) -> Tile:
    """Returns any tile kind, wildcards included. Polls `rng` once."""
    tiles = list(Tile)
    return tiles[rng.next_int(0, len(tiles))]


def random_vowel(rng) -> Tile:
    """Returns a random vowel, including Y. Polls `rng` once."""
    return RANDOM_VOWELS[rng.next_int(0, len(RANDOM_VOWELS))]


def random_consonant(rng) -> Tile:
    """Returns a random consonant, including Y. Polls `rng` once."""
    return RANDOM_CONSONANTS[rng.next_int(0, len(RANDOM_CONSONANTS))]

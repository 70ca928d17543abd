"""
Word Service

Spells words out of the tile pool and scores the tiles that were used.
"""

import re
from typing import Dict, List, Optional

from ..models.errors import ensure
from ..models.inventory import TileInventory
from ..models.tile import CONSONANTS, VOWELS, WILDCARDS, Tile, letter_tile

_ASCII_LETTERS_ONLY = re.compile(r"[A-Za-z]+")

# Base damage of each letter tile. Wildcards are worth nothing.
TILE_VALUES: Dict[Tile, int] = {
    **{Tile(letter): 1 for letter in "ESIARNTOLCDU"},
    **{Tile(letter): 2 for letter in "GPMHBYF"},
    **{Tile(letter): 3 for letter in "VKW"},
    **{Tile(letter): 5 for letter in "ZXJQ"},
    **{tile: 0 for tile in WILDCARDS},
}

ensure(set(TILE_VALUES) == set(Tile), "every tile needs a score value")


def word_to_tiles(word: str, inventory: TileInventory) -> Optional[List[Tile]]:
    """
    Spells out a word using a set of tiles.

    Letters are first matched to their own tiles, left to right. Letters still
    missing, other than Y, then take a vowel or consonant wildcard, falling back
    to a generic wildcard. Missing Y's go last and take a vowel wildcard, then a
    consonant wildcard, then a generic one. Assignments are never revisited, so
    some spellable words are refused.

    Args:
        word: The word to spell, in any case
        inventory: Tiles available. It is not modified.

    Returns:
        One tile per letter of the word, or None if it cannot be spelt
    """
    if not word or not _ASCII_LETTERS_ONLY.fullmatch(word):
        return None
    word = word.upper()

    counts = inventory.clone()
    word_as_tiles: List[Optional[Tile]] = []
    for char in word:
        tile = letter_tile(char)
        word_as_tiles.append(tile if counts.decrement(tile) else None)

    # Missing letters other than Y
    for index, char in enumerate(word):
        if word_as_tiles[index] is not None or char == "Y":
            continue
        if char in VOWELS:
            specific = Tile.WILD_VOWEL
        else:
            ensure(char in CONSONANTS, f"'{char}' is neither vowel nor consonant")
            specific = Tile.WILD_CONSONANT
        if counts.decrement(specific):
            word_as_tiles[index] = specific
        elif counts.decrement(Tile.WILD):
            word_as_tiles[index] = Tile.WILD
        else:
            return None

    # Missing Y's
    for index, char in enumerate(word):
        if word_as_tiles[index] is not None:
            continue
        for wildcard in (Tile.WILD_VOWEL, Tile.WILD_CONSONANT, Tile.WILD):
            if counts.decrement(wildcard):
                word_as_tiles[index] = wildcard
                break
        else:
            return None

    ensure(all(tile is not None for tile in word_as_tiles), "unresolved tile left over")
    return word_as_tiles


def score_word(tiles: List[Tile]) -> int:
    """Calculates the damage dealt by the tiles spelling out a word."""
    score = 0
    non_wild_tiles = 0
    for tile in tiles:
        score += TILE_VALUES[tile]
        if tile not in WILDCARDS:
            non_wild_tiles += 1
    length_bonus = max(0, len(tiles) - 3) * non_wild_tiles
    return score + length_bonus

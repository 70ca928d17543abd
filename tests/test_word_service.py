import pytest

from wordraid.models import Tile, TileInventory
from wordraid.services.word_service import TILE_VALUES, score_word, word_to_tiles


def inventory_of(*tiles):
    return TileInventory(tiles)


def test_spells_word_from_exact_tiles():
    tiles = word_to_tiles('bat', inventory_of(Tile.A, Tile.B, Tile.T))
    assert tiles == [Tile.B, Tile.A, Tile.T]
    assert score_word(tiles) == 4


def test_generic_wildcards_stand_in_for_any_letter():
    tiles = word_to_tiles('ox', inventory_of(Tile.WILD, Tile.WILD))
    assert tiles == [Tile.WILD, Tile.WILD]
    assert score_word(tiles) == 0


@pytest.mark.parametrize('word', ['b4t', 'b t', '', 'bat!', 'café', 'straße', 'bıt', 'bat\n'])
def test_rejects_anything_but_letters(word):
    assert word_to_tiles(word, inventory_of(Tile.A, Tile.B, Tile.T, Tile.WILD, Tile.WILD)) is None


def test_is_case_insensitive():
    assert word_to_tiles('BaT', inventory_of(Tile.A, Tile.B, Tile.T)) == [Tile.B, Tile.A, Tile.T]


def test_does_not_consume_the_pool():
    inventory = inventory_of(Tile.C, Tile.A, Tile.T)
    before = inventory.clone()
    word_to_tiles('cat', inventory)
    assert inventory == before


def test_fails_when_letters_run_out():
    assert word_to_tiles('ball', inventory_of(Tile.B, Tile.A, Tile.L)) is None


def test_exact_tiles_are_used_before_wildcards():
    assert word_to_tiles('a', inventory_of(Tile.WILD, Tile.A)) == [Tile.A]


def test_specific_wildcard_preferred_over_generic():
    tiles = word_to_tiles('cat', inventory_of(Tile.C, Tile.T, Tile.WILD, Tile.WILD_VOWEL))
    assert tiles == [Tile.C, Tile.WILD_VOWEL, Tile.T]

    tiles = word_to_tiles('cat', inventory_of(Tile.A, Tile.T, Tile.WILD, Tile.WILD_CONSONANT))
    assert tiles == [Tile.WILD_CONSONANT, Tile.A, Tile.T]


def test_wildcard_category_must_match_letter():
    assert word_to_tiles('cat', inventory_of(Tile.C, Tile.T, Tile.WILD_CONSONANT)) is None
    assert word_to_tiles('cat', inventory_of(Tile.A, Tile.T, Tile.WILD_VOWEL)) is None


def test_generic_wildcard_used_when_specific_runs_out():
    tiles = word_to_tiles('tacos', inventory_of(Tile.T, Tile.C, Tile.S, Tile.WILD_VOWEL, Tile.WILD))
    assert tiles == [Tile.T, Tile.WILD_VOWEL, Tile.C, Tile.WILD, Tile.S]


def test_y_prefers_vowel_wildcard_then_consonant_wildcard():
    assert word_to_tiles('yes', inventory_of(Tile.E, Tile.S, Tile.WILD_CONSONANT, Tile.WILD_VOWEL)) == [
        Tile.WILD_VOWEL, Tile.E, Tile.S
    ]
    assert word_to_tiles('yes', inventory_of(Tile.E, Tile.S, Tile.WILD_CONSONANT, Tile.WILD)) == [
        Tile.WILD_CONSONANT, Tile.E, Tile.S
    ]
    assert word_to_tiles('yes', inventory_of(Tile.E, Tile.S, Tile.WILD)) == [Tile.WILD, Tile.E, Tile.S]


def test_y_resolved_after_other_letters():
    # The only vowel wildcard goes to A even though Y comes first
    tiles = word_to_tiles('yak', inventory_of(Tile.K, Tile.WILD_VOWEL, Tile.WILD))
    assert tiles == [Tile.WILD, Tile.WILD_VOWEL, Tile.K]


def test_result_matches_word_length():
    tiles = word_to_tiles('taco', inventory_of(Tile.T, Tile.A, Tile.C, Tile.O, Tile.B))
    assert len(tiles) == 4


def test_every_tile_has_a_value():
    assert set(TILE_VALUES) == set(Tile)
    assert TILE_VALUES[Tile.E] == 1
    assert TILE_VALUES[Tile.Y] == 2
    assert TILE_VALUES[Tile.K] == 3
    assert TILE_VALUES[Tile.Q] == 5
    assert TILE_VALUES[Tile.WILD_VOWEL] == 0


def test_length_bonus_counts_letter_tiles_only():
    assert score_word([Tile.C, Tile.O, Tile.A, Tile.T]) == 4 + 1 * 4
    assert score_word([Tile.C, Tile.WILD, Tile.A, Tile.T]) == 3 + 1 * 3
    assert score_word([Tile.T, Tile.A, Tile.C, Tile.O, Tile.S]) == 5 + 2 * 5


def test_short_words_get_no_bonus():
    assert score_word([Tile.Q, Tile.I]) == 6
    assert score_word([]) == 0


def test_non_ascii_letters_never_stand_in_for_ascii():
    # 'ß' upper-cases to 'SS' and dotless 'ı' to 'I'
    assert word_to_tiles('straße', inventory_of(*[Tile.S, Tile.T, Tile.R, Tile.A, Tile.S, Tile.S, Tile.E])) is None
    assert word_to_tiles('bıt', inventory_of(Tile.B, Tile.I, Tile.T)) is None


def test_trailing_newline_rejected_without_error():
    assert word_to_tiles('bat\n', inventory_of(Tile.B, Tile.A, Tile.T)) is None

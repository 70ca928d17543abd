"""
Dictionary Service

Holds the set of playable words, loaded once at startup.
"""

import os
import re
from typing import Iterable, List

_NON_LETTERS = re.compile(r"[^a-z]")


class WordList:
    """An immutable set of lowercase words answering membership queries."""

    def __init__(self, words: Iterable[str]):
        self._words = frozenset(words)

    def is_word(self, word: str) -> bool:
        return word in self._words

    def __contains__(self, word: str) -> bool:
        return self.is_word(word)

    def __len__(self) -> int:
        return len(self._words)


def _read_word_file(path: str) -> List[str]:
    """
    Reads one word list file.

    Blank lines and lines starting with '#' are skipped. Every other line is
    lowercased and stripped of anything that is not a-z.
    """
    words = []
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.rstrip('\r\n')
            if not line or line.startswith('#'):
                continue
            word = _NON_LETTERS.sub('', line.lower())
            if word:
                words.append(word)
    return words


def load_word_list(paths: Iterable[str]) -> WordList:
    """
    Load and merge the given word list files.

    Raises:
        FileNotFoundError: If a file does not exist
        ValueError: If no words were found
    """
    words = set()
    for path in paths:
        if not os.path.isfile(path):
            raise FileNotFoundError(f"Word list file not found: {path}")
        words.update(_read_word_file(path))

    if not words:
        raise ValueError("Word list cannot be empty")

    return WordList(words)

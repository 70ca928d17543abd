"""
Tile Inventory

Counts how many of each tile kind are available in the shared pool.
"""

from typing import Dict, Iterable, Optional

from .errors import ensure
from .tile import Tile


class TileInventory:
    """
    A count of tiles mapping every tile kind to its amount.

    Every kind has an entry at all times, zero included, and no count is ever
    negative. The only mutation is `decrement`, which refuses to go below zero.
    """

    def __init__(self, tiles: Iterable[Tile] = (), clone_from: Optional["TileInventory"] = None):
        if clone_from is not None:
            self._counts: Dict[Tile, int] = dict(clone_from._counts)
        else:
            self._counts = {tile: 0 for tile in Tile}
            for tile in tiles:
                self._counts[tile] += 1

    def clone(self) -> "TileInventory":
        """Returns an independent copy for speculative consumption."""
        return TileInventory(clone_from=self)

    def count(self, tile: Tile) -> int:
        count = self._counts.get(tile)
        ensure(count is not None, f"tile inventory is missing an entry for {tile}")
        return count

    def decrement(self, tile: Tile) -> bool:
        """
        Removes one tile of the given kind if any are left.

        Returns:
            bool: True if a tile was removed, False if none were available
        """
        count = self.count(tile)
        if count > 0:
            self._counts[tile] = count - 1
            return True
        return False

    def total(self) -> int:
        return sum(self._counts.values())

    def as_dict(self) -> Dict[str, int]:
        """Returns the counts keyed by tile name, for serialization."""
        return {tile.name: count for tile, count in self._counts.items()}

    def __eq__(self, other) -> bool:
        if not isinstance(other, TileInventory):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        held = {tile.name: count for tile, count in self._counts.items() if count}
        return f"TileInventory({held})"

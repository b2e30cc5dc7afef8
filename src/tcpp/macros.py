"""
Macro Table
===========

Maps object-like macro names to their replacement text.

The table is a fixed-size array of slots addressed by a seeded 32-bit
MurmurHash2 of the macro name. There is no chaining, probing or resizing:
a define simply overwrites whatever sits in its slot, so two names that
hash to the same slot cannot both be defined. The later define wins.

Lookups are checked against the name stored in the slot, so an identifier
that merely collides with a macro is left alone. Constructing the table
with alias_collisions=True drops that check: any name landing on an
occupied slot then reads that slot's text, which is how the table
behaved before the check was added.

Example
-------
>>> table = MacroTable()
>>> table.define("MAX", "100")
>>> table.lookup("MAX")
'100'
>>> table.lookup("MIN") is None
True
"""

import logging
from typing import Iterator, Optional


logger = logging.getLogger(__name__)

# MurmurHash2 mixing constants
MURMUR_M = 0x5BD1E995
MURMUR_R = 24
MASK_32 = 0xFFFFFFFF

DEFAULT_TABLE_SIZE = 1024
DEFAULT_SEED = 0


def murmur_hash2(data: bytes, seed: int = 0) -> int:
    """
    Compute the 32-bit MurmurHash2 of `data`.

    Blocks of four bytes are read little-endian, matching the reference
    implementation on x86.

    Args:
        data: Bytes to hash
        seed: Hash seed

    Returns:
        Unsigned 32-bit hash value
    """
    length = len(data)
    h = (seed ^ length) & MASK_32

    offset = 0
    while length - offset >= 4:
        k = int.from_bytes(data[offset:offset + 4], "little")
        k = (k * MURMUR_M) & MASK_32
        k ^= k >> MURMUR_R
        k = (k * MURMUR_M) & MASK_32

        h = (h * MURMUR_M) & MASK_32
        h ^= k
        offset += 4

    tail = data[offset:]
    if len(tail) == 3:
        h ^= tail[2] << 16
    if len(tail) >= 2:
        h ^= tail[1] << 8
    if len(tail) >= 1:
        h ^= tail[0]
        h = (h * MURMUR_M) & MASK_32

    h ^= h >> 13
    h = (h * MURMUR_M) & MASK_32
    h ^= h >> 15
    return h


class MacroTable:
    """
    Fixed-size hash table of macro definitions.

    Attributes:
        size: Number of slots
        seed: Hash seed
        alias_collisions: Answer lookups for any name landing on an
                          occupied slot, not only the name stored there
    """

    def __init__(
        self,
        size: int = DEFAULT_TABLE_SIZE,
        seed: int = DEFAULT_SEED,
        alias_collisions: bool = False,
    ):
        if size <= 0:
            raise ValueError(f"macro table size must be positive, got {size}")
        self.size = size
        self.seed = seed
        self.alias_collisions = alias_collisions
        self._slots: list[Optional[tuple[str, str]]] = [None] * size

    def slot(self, name: str) -> int:
        """Return the slot index `name` hashes to."""
        return murmur_hash2(name.encode("utf-8"), self.seed) % self.size

    def define(self, name: str, text: str) -> None:
        """Record a macro, overwriting whatever occupies its slot."""
        index = self.slot(name)
        previous = self._slots[index]
        if previous is not None and previous[0] != name:
            logger.debug(f"Macro '{name}' evicts '{previous[0]}' from slot {index}")
        self._slots[index] = (name, text)

    def lookup(self, name: str) -> Optional[str]:
        """Return the replacement text for `name`, or None if it is not a macro."""
        entry = self._slots[self.slot(name)]
        if entry is None:
            return None
        if entry[0] != name and not self.alias_collisions:
            return None
        return entry[1]

    def remove(self, name: str) -> None:
        """Clear the slot `name` hashes to (a no-op if it is empty)."""
        index = self.slot(name)
        entry = self._slots[index]
        if entry is not None and (entry[0] == name or self.alias_collisions):
            self._slots[index] = None

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    def __len__(self) -> int:
        return sum(1 for entry in self._slots if entry is not None)

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield (name, text) pairs of the defined macros, sorted by name."""
        return iter(sorted(entry for entry in self._slots if entry is not None))

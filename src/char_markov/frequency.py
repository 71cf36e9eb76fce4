from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np


FALLBACK_CHAR = " "


@dataclass
class CharacterStat:
    """One character observed after a context.

    `p` and `cp` stay `None` until the owning table is finalized.
    """

    character: str
    count: int = 0
    p: float | None = None
    cp: float | None = None

    def __str__(self) -> str:
        return f"({self.character} {self.count} {self.p} {self.cp})"


class FrequencyTable:
    """Ordered next-character counts for a single context.

    Entries keep first-seen order, which only decides ties when sampling.
    """

    def __init__(self) -> None:
        self._entries: list[CharacterStat] = []
        self._index: dict[str, int] = {}
        self._finalized = False

    def update(self, character: str) -> None:
        if len(character) != 1:
            raise ValueError(f"expected a single character, got {character!r}")

        pos = self._index.get(character)
        if pos is None:
            self._index[character] = len(self._entries)
            self._entries.append(CharacterStat(character, 1))
        else:
            self._entries[pos].count += 1

    def finalize(self) -> None:
        """Set `p` and `cp` on every entry from the current counts."""

        if not self._entries:
            raise ValueError("cannot finalize an empty frequency table")

        counts = np.array([e.count for e in self._entries], dtype=np.float64)
        p = counts / counts.sum()
        cp = np.cumsum(p)

        for entry, p_i, cp_i in zip(self._entries, p, cp):
            entry.p = float(p_i)
            entry.cp = float(cp_i)
        self._finalized = True

    def pick(self, r: float) -> str:
        """Map a uniform draw in [0, 1) onto a character.

        Returns the first character whose `cp` is strictly greater than `r`,
        or `FALLBACK_CHAR` when rounding leaves every `cp` at or below `r`.
        """

        if not self._finalized:
            raise RuntimeError("frequency table has not been finalized")

        for entry in self._entries:
            if entry.cp > r:
                return entry.character
        return FALLBACK_CHAR

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def total(self) -> int:
        return sum(e.count for e in self._entries)

    def get(self, character: str) -> CharacterStat | None:
        pos = self._index.get(character)
        return None if pos is None else self._entries[pos]

    def __contains__(self, character: object) -> bool:
        return character in self._index

    def __iter__(self) -> Iterator[CharacterStat]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __str__(self) -> str:
        return "(" + " ".join(str(e) for e in self._entries) + ")"

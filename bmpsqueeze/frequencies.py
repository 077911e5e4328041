"""Counting how often each symbol occurs in a stream of values."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

MIN_VALUE = -255
MAX_VALUE = 255


class FrequencyTable:
    """Occurrence counts for symbols in the range [-255, 255].

    Items are reported in ascending symbol order, which is the order the
    Huffman tree builder relies on.
    """

    def __init__(self) -> None:
        self._counts: Counter[int] = Counter()

    def insert(self, value: int) -> None:
        """Count one occurrence of ``value``.

        Raises ValueError when the value lies outside [-255, 255].
        """
        if not MIN_VALUE <= value <= MAX_VALUE:
            raise ValueError(
                f"value {value} outside [{MIN_VALUE}, {MAX_VALUE}]"
            )
        self._counts[value] += 1

    def update(self, values: Iterable[int]) -> None:
        """Count every value of an iterable."""
        for value in values:
            self.insert(value)

    def frequency(self, value: int) -> int:
        """Return how often ``value`` was inserted (0 if never)."""
        return self._counts.get(value, 0)

    def items(self) -> list[tuple[int, int]]:
        """Return ``(value, frequency)`` pairs in ascending value order."""
        return sorted(self._counts.items())

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, value: object) -> bool:
        return value in self._counts

    def format(self) -> str:
        """Render the table as numbered lines followed by a blank line."""
        lines = [
            f"NODE {index}: (diff > {value}; freq > {freq})\n"
            for index, (value, freq) in enumerate(self.items(), start=1)
        ]
        return "".join(lines) + "\n"
from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass


class LineIndex(Mapping[int, int]):
    """Integer-keyed line lookup with a dense or sparse backend.

    The dense backend is a list indexed by line number and is used when the
    file length is known up front; the sparse backend is a plain dict.
    Missing keys behave like any Mapping: ``get`` returns None.
    """

    def __init__(self, size: int | None = None) -> None:
        self._dense: list[int | None] | None = [None] * (size + 1) if size is not None else None
        self._sparse: dict[int, int] = {}
        self._count = 0

    @property
    def is_dense(self) -> bool:
        return self._dense is not None

    def set(self, key: int, value: int) -> None:
        if key < 1:
            return
        if self._dense is None:
            self._sparse[key] = value
            return
        if key >= len(self._dense):
            self._dense.extend([None] * (key + 1 - len(self._dense)))
        if self._dense[key] is None:
            self._count += 1
        self._dense[key] = value

    def __getitem__(self, key: int) -> int:
        if self._dense is None:
            return self._sparse[key]
        if isinstance(key, int) and 0 < key < len(self._dense):
            value = self._dense[key]
            if value is not None:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[int]:
        if self._dense is None:
            return iter(sorted(self._sparse))
        return (key for key, value in enumerate(self._dense) if value is not None)

    def __len__(self) -> int:
        return len(self._sparse) if self._dense is None else self._count

    def __repr__(self) -> str:
        backend = "dense" if self.is_dense else "sparse"
        return f"LineIndex({backend}, {len(self)} lines)"


@dataclass(frozen=True)
class LineMapping:
    """Bidirectional old/new line correspondence for unchanged lines of one file.

    Added and removed lines have no counterpart and are absent from both indexes.
    """

    new_to_old: LineIndex
    old_to_new: LineIndex

    @classmethod
    def sparse(cls) -> LineMapping:
        return cls(new_to_old=LineIndex(), old_to_new=LineIndex())

    @classmethod
    def dense(cls, new_total_lines: int, old_total_lines: int) -> LineMapping:
        return cls(
            new_to_old=LineIndex(max(new_total_lines, 0)),
            old_to_new=LineIndex(max(old_total_lines, 0)),
        )

    def pair(self, old_line: int, new_line: int) -> None:
        self.new_to_old.set(new_line, old_line)
        self.old_to_new.set(old_line, new_line)

    def old_line_for(self, new_line: int) -> int | None:
        return self.new_to_old.get(new_line)

    def new_line_for(self, old_line: int) -> int | None:
        return self.old_to_new.get(old_line)

"""Spatial indexing for efficient proximity queries."""

import math
from typing import Dict, Generic, Iterator, List, Tuple, TypeVar

T = TypeVar("T")

Cell = Tuple[int, int]


class SpatialHash(Generic[T]):
    """
    Uniform hash grid keyed by ``(floor(x / cell), floor(y / cell))``.

    Unlike a fixed-size grid the hash is unbounded, so points outside the
    world (for example jittered deposits near an edge) still index
    correctly. Buckets are created lazily and deleted as soon as they
    become empty, so the number of buckets never exceeds the number of
    stored items.
    """

    def __init__(self, cell_size: float):
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell_size = float(cell_size)
        # Grid storage: (col, row) -> items in insertion order
        self._buckets: Dict[Cell, List[T]] = {}

    def cell_of(self, x: float, y: float) -> Cell:
        """Get the bucket key for a position."""
        return (math.floor(x / self.cell_size), math.floor(y / self.cell_size))

    def insert(self, item: T, x: float, y: float) -> Cell:
        cell = self.cell_of(x, y)
        bucket = self._buckets.get(cell)
        if bucket is None:
            self._buckets[cell] = [item]
        else:
            bucket.append(item)
        return cell

    def remove(self, item: T, x: float, y: float) -> bool:
        """Remove an item previously inserted at (x, y).

        Returns:
            True if the item was found and removed, False otherwise
        """
        cell = self.cell_of(x, y)
        bucket = self._buckets.get(cell)
        if not bucket:
            return False
        for index, existing in enumerate(bucket):
            if existing is item:
                del bucket[index]
                if not bucket:
                    del self._buckets[cell]
                return True
        return False

    def cells_in_radius(self, x: float, y: float, radius: float) -> List[Cell]:
        """Bucket keys overlapping the square that bounds a circle query."""
        span = math.ceil(radius / self.cell_size)
        col, row = self.cell_of(x, y)
        return [
            (c, r)
            for c in range(col - span, col + span + 1)
            for r in range(row - span, row + span + 1)
        ]

    def query(self, x: float, y: float, radius: float) -> Iterator[T]:
        """Yield candidates from every bucket a circle query could touch.

        Callers still have to filter by exact distance.
        """
        buckets = self._buckets
        for cell in self.cells_in_radius(x, y, radius):
            bucket = buckets.get(cell)
            if bucket:
                yield from bucket

    def clear(self) -> None:
        self._buckets.clear()

    @property
    def bucket_count(self) -> int:
        return len(self._buckets)

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())

    def items(self) -> Iterator[Tuple[Cell, List[T]]]:
        """Iterate over ``(cell, bucket)`` pairs (for integrity checks)."""
        return iter(self._buckets.items())

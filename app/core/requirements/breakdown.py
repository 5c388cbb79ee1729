from __future__ import annotations

from typing import Collection, Dict, List, Sequence

from app.core.requirements.domain import SIZE_BUCKETS, SizeBreakdownRow, SizeBucket, SizeFormat


SIZE_LABELS: Dict[SizeFormat, tuple[str, ...]] = {
    SizeFormat.STANDARD: ("S", "M", "L", "XL", "XXL", "3XL"),
    SizeFormat.NUMERIC: ("65", "70", "75", "80", "85", "90"),
}


def labels_for(size_format: SizeFormat) -> List[str]:
    """Header labels for the six buckets, in bucket order."""
    return list(SIZE_LABELS[SizeFormat(size_format)])


def buckets_for_sizes(sizes: Collection[str], size_format: SizeFormat) -> List[SizeBucket]:
    """Buckets whose label under ``size_format`` is one of ``sizes``.

    Matching is exact and case-sensitive.
    """
    labels = SIZE_LABELS[SizeFormat(size_format)]
    return [bucket for bucket, label in zip(SIZE_BUCKETS, labels) if label in sizes]


def row_total(row: SizeBreakdownRow) -> int:
    return sum(row.quantity(bucket) for bucket in SIZE_BUCKETS)


def column_total(rows: Sequence[SizeBreakdownRow], bucket: SizeBucket) -> int:
    return sum(row.quantity(SizeBucket(bucket)) for row in rows)


def grand_total(rows: Sequence[SizeBreakdownRow]) -> int:
    return sum(row_total(row) for row in rows)


def selection_total(
    rows: Sequence[SizeBreakdownRow],
    selected_rows: Collection[int],
    selected_buckets: Collection[SizeBucket],
) -> int:
    """Sum every cell whose row OR bucket is selected.

    This is a union over the (row, bucket) grid: a cell lying in both a
    selected row and a selected bucket is counted once.
    """
    row_indices = set(selected_rows)
    buckets = {SizeBucket(b) for b in selected_buckets}

    total = 0
    for index, row in enumerate(rows):
        for bucket in SIZE_BUCKETS:
            if index in row_indices or bucket in buckets:
                total += row.quantity(bucket)
    return total

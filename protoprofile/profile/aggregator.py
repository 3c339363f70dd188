# coding=utf-8
"""
Description:
FileName：aggregator.py
Notes:
    Per field path statistics. ``SampleValues`` fixes the order of the values
    in every pprof sample, and ``SAMPLE_VALUE_TYPES`` declares the matching
    (type, unit) pairs through the same record, so the two can not disagree.

"""
from typing import Dict, Iterable, Iterator, List, NamedTuple, Tuple

import numpy as np

from protoprofile.util.constant import ValueTypeName, Unit
from protoprofile.util.utils import InvariantViolation

FieldPath = Tuple[str, ...]
SampleSet = Dict[FieldPath, List[int]]


class SampleValues(NamedTuple):
    count: object
    max_size: object
    min_size: object
    median: object
    total_size: object


SAMPLE_VALUE_TYPES = SampleValues(
    count=(ValueTypeName.count, Unit.count),
    max_size=(ValueTypeName.max_size, Unit.bytes),
    min_size=(ValueTypeName.min_size, Unit.bytes),
    median=(ValueTypeName.median, Unit.bytes),
    total_size=(ValueTypeName.total_size, Unit.bytes),
)


def compute_stats(sizes: Iterable[int]) -> SampleValues:
    """
    Aggregate the sizes of every occurrence of one field path.

    The median is ``sorted[count // 2]``: for an even count this is the upper
    middle element, never an average.
    """
    ordered = np.sort(np.asarray(list(sizes), dtype=np.int64), kind="stable")
    count = int(ordered.size)
    if count == 0:
        raise InvariantViolation("field path recorded without any size sample")
    return SampleValues(
        count=count,
        max_size=int(ordered[count - 1]),
        min_size=int(ordered[0]),
        median=int(ordered[count // 2]),
        total_size=int(ordered.sum()),
    )


def aggregate(samples: SampleSet) -> Iterator[Tuple[FieldPath, SampleValues]]:
    for field_path, sizes in samples.items():
        yield field_path, compute_stats(sizes)

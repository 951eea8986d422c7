"""Splitters."""

from screencv.split.partition import (
    FoldPartition,
    PartitionKind,
    build_fold_partition,
    holdout_split,
)

__all__ = ["FoldPartition", "PartitionKind", "build_fold_partition", "holdout_split"]

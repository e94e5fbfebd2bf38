"""Index preparation helpers: Bloom filter bin sizes and minimiser file names."""

from __future__ import annotations

import math
import os
from pathlib import Path
from typing import Sequence

__all__ = ["bin_size_in_bits", "parse_bin_paths"]


def bin_size_in_bits(fpr: float, hash_count: int, elements: int) -> int:
    """Bits needed per bin to hold ``elements`` with false positive rate ``fpr``."""
    if hash_count <= 0:
        raise ValueError("hash_count must be positive")
    if not 0.0 < fpr < 1.0:
        raise ValueError("fpr must lie strictly between 0 and 1")

    numerator = -float(elements * hash_count)
    denominator = math.log(1 - math.exp(math.log(fpr) / hash_count))
    return int(math.ceil(numerator / denominator))


def parse_bin_paths(
    bin_paths: Sequence[str | os.PathLike],
    out_dir: str | os.PathLike,
    seg_count: int,
    extension: str = "minimiser",
) -> list[str]:
    """Output file names for the bins of an index, one per bin.

    With several bin files each gets ``<out_dir>/<stem>.<extension>``; a single
    reference file is split into ``seg_count`` segments named
    ``<out_dir>/<stem>.<segment>.<extension>``.
    """
    if not bin_paths:
        raise ValueError("no bin paths given")
    out = Path(out_dir)

    if len(bin_paths) > 1:
        return [str(out / Path(Path(p).stem).with_suffix("." + extension)) for p in bin_paths]

    stem = Path(bin_paths[0]).stem
    return [str(out / f"{stem}.{segment}.{extension}") for segment in range(seg_count)]
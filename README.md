# valik

A pure-Python library of building blocks for finding approximate local
matches (epsilon-matches) between DNA sequences. It depends only on the
standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `valik.extension`

Extends epsilon-cores into epsilon-matches.

- `align_banded_nw_best_ends(seq1, seq2, match_score, gap_score, lower_diagonal, upper_diagonal)`
  fills a banded global alignment matrix. Mismatches cost the same as gaps,
  and `match_score` must be 1. It returns the `ExtensionBandedTraceMatrix`
  and a list of `ExtensionEndPosition`. The list is indexed by error count and
  holds the longest end reachable with that many errors. The list stops at
  the point where one more error no longer gives a longer alignment.
- `longest_eps_match(left_ends, right_ends, align_length, align_errors, min_length, epsilon)`
  picks the pair of left and right end indices that gives the longest match
  within the error rate `epsilon`. It returns `None` when no pair reaches
  `min_length`.
- `ExtensionBandedTraceMatrix` stores one `Trace` direction per cell of the
  band (`DIAGONAL`, `HORIZONTAL`, `VERTICAL`). These methods describe the
  layout of the band:
  - `row_interval`, `diagonal_interval_in_row` and `column_interval_in_row`
  - `diagonal_width` and `data_size`
  - `row_span`, which returns a writable `memoryview` of one row

### `valik.xdrop`

Post-processes local alignments.

- `GappedAlignment` holds two gapped rows of equal length, using `-` for gaps,
  seen through a column window. `clip` narrows the window.
- `split_at_x_drops(alignment, score, score_drop_off, min_score)` cuts an
  alignment into pieces that contain no X-drop. It merges runs of matching
  and non-matching columns with `negative_merge` and `positive_merge`. Only
  pieces scoring at least `min_score` are returned.
- `verification_scoring(epsilon, min_length, x_drop, host_length)` derives
  three values and returns them as a `VerificationScoring`:
  - the `Score` scheme
  - the drop-off
  - the minimal seed score
- `band_diagonals(...)` gives the lower and upper diagonal of the band for a
  hit. It returns `None` when the database infix is longer than the query
  infix.

### `valik.stellar_types`

Match records and statistics.

- `StellarMatch` is a database/query alignment record.
- `compare_by_position` and `compare_by_length` return -1, 0 or 1.
  `compare_by_length` sorts matches with `StellarMatch.INVALID_ID` last.
- `sort_by_position` and `sort_by_length` return new, stably sorted lists.
- `is_upstream(match1, match2, row, min_length)` tests whether `match1` is
  upstream of `match2` in the given row.
- `StellarComputeStatistics` and `StellarOutputStatistics` are counters that
  can be combined with `merge_in`.
- `StellarComputeStatisticsCollection` holds one entry per database record.

### `valik.validators`

Validators for option values. Each one raises `ValidationError`, a subclass
of `ValueError`, when it rejects a value.

- `PowerOfTwoValidator`
- `PositiveIntegerValidator`, which accepts zero only with
  `zero_is_positive=True`
- `SizeValidator`, which checks against a regular expression
- `InputFileValidator`, which checks that the file exists, is a regular file
  and is readable, and optionally checks its extension
- `BinValidator`, which accepts any of the following:
  - sequence files, possibly compressed
  - `.minimiser` files
  - a single file that lists bin paths, one per line

  It rejects a mix of sequence files and minimiser files.
- `sequence_file_extensions()` lists the recognised sequence file extensions.

### `valik.prepare`

- `bin_size_in_bits(fpr, hash_count, elements)` gives the number of bits
  needed for one Bloom filter bin.
- `parse_bin_paths(bin_paths, out_dir, seg_count, extension="minimiser")`
  names the per-bin output files:
  - with several bin files, one `<stem>.<extension>` per file
  - with a single reference, `<stem>.<segment>.<extension>` for each of the
    `seg_count` segments

### `valik.records`

- `QueryRecord` is a query that owns its sequence.
- `SharedQueryRecord` is a query segment that refers to a shared underlying
  sequence. Create one with `from_sequence` or `from_segment`.
- `to_dna4` maps a sequence to the letters A, C, G and T:
  - lower case letters become upper case
  - U becomes T
  - any other character becomes A

## Example

```python
from valik.prepare import bin_size_in_bits, parse_bin_paths
from valik.xdrop import GappedAlignment, Score, split_at_x_drops

bits = bin_size_in_bits(fpr=0.05, hash_count=2, elements=1000)
paths = parse_bin_paths(["ref.fasta"], "out", seg_count=4)

alignment = GappedAlignment("ACGTACGT", "ACGTACGT")
pieces = split_at_x_drops(alignment, Score(), score_drop_off=5, min_score=1)
```

## What this package does not do

There is no command-line program. The package does not provide any of the
following:

- reading or writing sequence files, GFF match files or index files
- building or querying a Bloom filter index
- running a search from start to finish

It provides the algorithmic and validation pieces that such a tool would be
built from.
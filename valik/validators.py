"""Validators for command line option values."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable, Sequence

__all__ = [
    "ValidationError",
    "PowerOfTwoValidator",
    "PositiveIntegerValidator",
    "SizeValidator",
    "InputFileValidator",
    "BinValidator",
    "sequence_file_extensions",
]

_MINIMISER_SUFFIX = ".minimiser"
_COMPRESSION_EXTENSIONS = ("bz2", "gz", "bgzf")


class ValidationError(ValueError):
    """An option value was rejected."""


def sequence_file_extensions() -> list[str]:
    """File extensions recognised as sequence files."""
    return [
        "embl",
        "fasta", "fa", "fna", "ffn", "faa", "frn", "fas",
        "fastq", "fq",
        "genbank", "gb", "gbk",
        "sam",
        "bam",
    ]


def _bracketed(items: Iterable[str]) -> str:
    return "[" + ",".join(items) + "]"


class PowerOfTwoValidator:
    """Accepts only powers of two."""

    def __call__(self, value: int) -> None:
        if value <= 0 or value & (value - 1):
            raise ValidationError("The value must be a power of two.")

    def help_message(self) -> str:
        return "Value must be a power of two."


class PositiveIntegerValidator:
    """Accepts positive integers, and zero if ``zero_is_positive``."""

    def __init__(self, zero_is_positive: bool = False):
        self.zero_is_positive = zero_is_positive

    def __call__(self, value: int) -> None:
        if value < 0 or (value == 0 and not self.zero_is_positive):
            raise ValidationError("The value must be a positive integer.")

    def help_message(self) -> str:
        if self.zero_is_positive:
            return "Value must be a positive integer or 0."
        return "Value must be a positive integer."


class SizeValidator:
    """Accepts sizes such as ``4g`` that match the given regular expression."""

    def __init__(self, pattern: str):
        self.expression = re.compile(pattern)

    def __call__(self, value: str | Iterable[str]) -> None:
        if not isinstance(value, str):
            for item in value:
                self(item)
            return
        if not self.expression.fullmatch(value):
            raise ValidationError(
                f"Value {value} must be an integer followed by [k,m,g,t] (case insensitive)."
            )

    def help_message(self) -> str:
        return "Must be an integer followed by [k,m,g,t] (case insensitive)."


class InputFileValidator:
    """Accepts readable regular files, optionally with one of ``extensions``."""

    def __init__(self, extensions: Sequence[str] | None = None):
        self.extensions = list(extensions or [])

    def __call__(self, path: str | os.PathLike) -> None:
        path = Path(path)
        if self.extensions:
            name = path.name.lower()
            if not any(name.endswith("." + ext.lower()) for ext in self.extensions):
                raise ValidationError(
                    f"Expected one of the following valid extensions: {_bracketed(self.extensions)}! "
                    f"Got {path.name} instead!"
                )
        if not path.exists():
            raise ValidationError(f"The file {str(path)!r} does not exist!")
        if not path.is_file():
            raise ValidationError(f"The path {str(path)!r} is not a regular file!")
        if not os.access(path, os.R_OK):
            raise ValidationError(f"Cannot read the file {str(path)!r}!")


class BinValidator:
    """Accepts bin inputs: sequence files, minimiser files, or one file listing bin paths."""

    def __init__(self) -> None:
        self.sequence_extensions = sequence_file_extensions()
        self.compression_extensions = list(_COMPRESSION_EXTENSIONS)
        self.combined_extensions = [
            combined
            for ext in self.sequence_extensions
            for combined in (ext, *(f"{ext}.{c}" for c in self.compression_extensions))
        ]
        self.sequence_file_validator = InputFileValidator(self.combined_extensions)
        self._minimiser_file_validator = InputFileValidator(["minimiser"])

    def _validate_listed(self, list_file: Path) -> None:
        try:
            text = list_file.read_text()
        except OSError:
            return
        for line in text.splitlines():
            if not line:
                continue
            bin_path = Path(line)
            if bin_path.suffix == _MINIMISER_SUFFIX:
                self._minimiser_file_validator(bin_path)
            else:
                self.sequence_file_validator(bin_path)

    def __call__(self, values: Sequence[str | os.PathLike]) -> None:
        paths = [Path(v) for v in values]
        if not paths:
            raise ValidationError("The list of input files cannot be empty.")

        for path in paths:
            try:
                self.sequence_file_validator(path)
            except ValidationError:
                if path.suffix == _MINIMISER_SUFFIX:
                    self._minimiser_file_validator(path)
                elif len(paths) == 1:
                    self._validate_listed(path)
                else:
                    raise

        is_minimiser_input = paths[0].suffix == _MINIMISER_SUFFIX
        if any((p.suffix == _MINIMISER_SUFFIX) != is_minimiser_input for p in paths):
            raise ValidationError("You cannot mix sequence and minimiser files as input.")

    def help_message(self) -> str:
        return (
            "The input file must exist and read permissions must be granted. Valid file "
            f"extensions for bin files are: [minimiser], or {_bracketed(self.sequence_extensions)}"
            f" possibly followed by: {_bracketed(self.compression_extensions)}. "
            "All other extensions will be assumed to contain one line per path to a bin."
        )
"""Column-oriented loading of numeric CSV files."""

from __future__ import annotations

import enum
import math
import re
import struct
from array import array
from dataclasses import dataclass
from os import PathLike
from typing import Mapping, Union

__all__ = ["ColumnType", "Column", "ColumnTypeError", "parse_value", "load_csv"]

_MAX_FIELD_SIZE = 64

_SIGNED_INT = re.compile(r"-?\d+")
_UNSIGNED_INT = re.compile(r"\d+")
_FLOAT = re.compile(
    r"-?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


class ColumnType(enum.Enum):
    """Numeric storage type of a column."""

    INT32 = "int32"
    INT64 = "int64"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"

    @property
    def typecode(self) -> str:
        """The :mod:`array` type code that stores values of this type."""
        return _TYPECODES[self]

    @property
    def is_integer(self) -> bool:
        return self not in (ColumnType.FLOAT32, ColumnType.FLOAT64)


_TYPECODES = {
    ColumnType.INT32: "i",
    ColumnType.INT64: "q",
    ColumnType.UINT32: "I",
    ColumnType.UINT64: "Q",
    ColumnType.FLOAT32: "f",
    ColumnType.FLOAT64: "d",
}

_INT_RANGES = {
    ColumnType.INT32: (-(2**31), 2**31 - 1),
    ColumnType.INT64: (-(2**63), 2**63 - 1),
    ColumnType.UINT32: (0, 2**32 - 1),
    ColumnType.UINT64: (0, 2**64 - 1),
}


class ColumnTypeError(TypeError):
    """Raised when a column is read as a type it does not hold."""


@dataclass
class Column:
    """Parsed values of one CSV column."""

    type: ColumnType
    values: array

    @property
    def size(self) -> int:
        return len(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def values_as(self, column_type: ColumnType) -> array:
        """Return the values, checking that they are of ``column_type``."""
        if column_type is not self.type:
            raise ColumnTypeError(
                f"column holds {self.type.value}, not {column_type.value}"
            )
        return self.values


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def parse_value(column_type: ColumnType, text: str) -> Union[int, float]:
    """Parse the leading number of ``text`` as a value of ``column_type``.

    Like a prefix parser, trailing characters after the number are ignored.
    Raises ValueError when no number starts the text or an integer is out
    of range for the type.
    """
    if column_type.is_integer:
        pattern = _UNSIGNED_INT if column_type in (ColumnType.UINT32, ColumnType.UINT64) else _SIGNED_INT
        match = pattern.match(text)
        if match is None:
            raise ValueError(f"bad numeric token: {text!r}")
        value = int(match.group())
        low, high = _INT_RANGES[column_type]
        if not low <= value <= high:
            raise ValueError(f"{text!r} is out of range for {column_type.value}")
        return value

    match = _FLOAT.match(text)
    if match is None:
        raise ValueError(f"bad numeric token: {text!r}")
    value = float(match.group())
    if column_type is ColumnType.FLOAT32:
        return _to_float32(value)
    return value


def load_csv(
    path: Union[str, "PathLike[str]"], fields: Mapping[str, ColumnType]
) -> dict[str, Column]:
    """Load the columns named in ``fields`` from the CSV file at ``path``.

    The first line is the header; each following newline-terminated line is
    one row, and text after the last newline is ignored. Header names are
    compared after truncation to 63 characters. Columns absent from the
    header are absent from the result.
    """
    with open(path, "r", encoding="utf-8", newline="") as handle:
        header_line = handle.readline()
        if not header_line:
            raise ValueError(f"failed to read the header of {path}")
        body = handle.read() if header_line.endswith("\n") else ""

    names = [
        name[: _MAX_FIELD_SIZE - 1]
        for name in header_line.removesuffix("\n").split(",")
    ]
    selected = [
        (offset, name, fields[name]) for offset, name in enumerate(names) if name in fields
    ]
    columns = {
        name: Column(column_type, array(column_type.typecode))
        for _, name, column_type in selected
    }

    rows = body.split("\n")[:-1]
    for line_number, line in enumerate(rows, start=2):
        cells = line.split(",")
        for offset, name, column_type in selected:
            if offset >= len(cells):
                raise ValueError(f"line {line_number}: missing value for {name!r}")
            try:
                value = parse_value(column_type, cells[offset])
            except ValueError as exc:
                raise ValueError(f"line {line_number}, column {name!r}: {exc}") from exc
            columns[name].values.append(value)

    return columns
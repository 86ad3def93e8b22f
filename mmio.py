import re
import sys
from dataclasses import dataclass
from typing import Iterable, Iterator

import numpy as np
import scipy.io

from errors import FormatError

MM_BANNER = "%%MatrixMarket"

# largest row count a 32-bit index can address
MAX_ROWS = int(np.iinfo(np.int32).max)

# what C's "%lg" accepts, minus hex floats
FLOAT_RE = re.compile(r"[+-]?((\d+\.?\d*|\.\d+)([eE][+-]?\d+)?|inf(inity)?|nan)$", re.IGNORECASE)

@dataclass(frozen=True)
class MMTypecode:
    object: str = "matrix"
    format: str = "array"
    field: str = "real"
    symmetry: str = "general"

    def __str__(self):
        return f"{self.object} {self.format} {self.field} {self.symmetry}"

def format_banner(typecode: MMTypecode) -> str:
    return f"{MM_BANNER} {typecode}"

def read_header(fname: str) -> tuple[MMTypecode, int, int]:
    """
    Read the banner and size line of a Matrix Market file with scipy.
    Returns (typecode, M, N).
    """
    with open(fname, "rb") as f:
        try:
            rows, cols, _entries, fmt, field, symmetry = scipy.io.mminfo(f)
        except Exception as e:
            raise FormatError(f"Could not process Matrix Market banner or size line: {e}", line=1) from e
    m, n = int(rows), int(cols)
    if m <= 0 or n <= 0:
        raise FormatError(f"Size of array must be positive, got M: {m}, N: {n}")
    return MMTypecode("matrix", fmt, field, symmetry), m, n

def data_lines(f) -> Iterator[tuple[int, str]]:
    """
    Yield (line number, text) for the lines after the size line of a file
    opened in binary mode. Lines must be ASCII.
    """
    seen_size = False
    for lineno, raw in enumerate(f, start=1):
        try:
            line = raw.decode("ascii")
        except UnicodeDecodeError:
            raise FormatError(f"Non-ASCII data on line {lineno}", line=lineno) from None
        if lineno == 1:
            continue
        if not seen_size:
            stripped = line.strip()
            if stripped and not stripped.startswith("%"):
                seen_size = True
            continue
        yield lineno, line

def parse_value(token: str, index: int, lineno: int) -> float:
    if not FLOAT_RE.match(token):
        raise FormatError(
            f"Badly formatted input file and end line is {index} (line {lineno}: {token!r})",
            line=lineno, index=index)
    return float(token)

def read_vector(fname: str, verbose: bool = True, max_rows: int = MAX_ROWS) -> tuple[MMTypecode, np.ndarray]:
    """
    Read a dense Matrix Market vector. The header must describe an M x 1
    real (or integer) array with M <= max_rows; the M values that follow
    may be split over lines in any way. Anything after the M-th value is
    ignored.
    """
    typecode, m, n = read_header(fname)

    if verbose:
        sys.stdout.write(f"{format_banner(typecode)}\n")
        sys.stdout.write(f"M: {m}, N: {n}\n")
        sys.stdout.flush()

    if typecode.format != "array":
        raise FormatError(f"Only array files can be read as a vector, not '{typecode.format}'", line=1)
    if typecode.field not in ("real", "integer"):
        raise FormatError(f"Only real vectors are supported, not '{typecode.field}'", line=1)
    if n != 1:
        raise FormatError(f"Expected a vector with N = 1, got an {m} x {n} array")
    if m > max_rows:
        raise FormatError(f"Vector of length {m} does not fit 32-bit indices (at most {max_rows})")

    val = np.empty(m, dtype=np.float64)
    i = 0
    lineno = 0
    with open(fname, "rb") as f:
        for lineno, line in data_lines(f):
            for token in line.split():
                if i == m:
                    break
                val[i] = parse_value(token, i, lineno)
                i += 1
            if i == m:
                break
    if i < m:
        raise FormatError(f"Badly formatted input file and end line is {i} (expected {m} values)",
                          line=lineno, index=i)

    if verbose:
        sys.stdout.write("Reading vector completes.\n")
        sys.stdout.flush()
    return typecode, val

def write_vector(fname: str, values: Iterable[float], comment: str = ""):
    values = np.asarray(values, dtype=np.float64).reshape(-1, 1)
    scipy.io.mmwrite(fname, values, comment=comment, field="real", symmetry="general")

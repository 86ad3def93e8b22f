"""
PETSc binary vector container, as written by VecView() on a binary viewer
for a real, double precision build with 32-bit indices:

    int32    VEC_FILE_CLASSID
    int32    number of entries M
    float64  M values

All fields are big-endian.
"""

import os
import sys

import numpy as np

from errors import FormatError
from vector import SeqVector

VEC_FILE_CLASSID = 1211214
MAX_INDEX = np.iinfo(np.int32).max

HEADER_DTYPE = np.dtype(">i4")
SCALAR_DTYPE = np.dtype(">f8")

def info_vec(fname: str) -> tuple[int, int, int, str]:
    with open(fname, "rb") as f:
        filesize = os.path.getsize(fname)
        header = np.fromfile(f, count=2, dtype=HEADER_DTYPE)
    if len(header) < 2 or header[0] != VEC_FILE_CLASSID:
        raise FormatError(f"'{fname}' is not a PETSc binary vector file")
    return int(header[1]), 1, filesize, "float64"

def read_vec(fname: str) -> np.ndarray:
    with open(fname, "rb") as f:
        filesize = os.path.getsize(fname)
        header = np.fromfile(f, count=2, dtype=HEADER_DTYPE)
        if len(header) < 2 or header[0] != VEC_FILE_CLASSID:
            raise FormatError(f"'{fname}' is not a PETSc binary vector file")
        n = int(header[1])
        expected = HEADER_DTYPE.itemsize * 2 + SCALAR_DTYPE.itemsize * n
        if n < 0 or filesize != expected:
            raise FormatError(f"'{fname}' holds {filesize} bytes, expected {expected} for {n} entries")
        arr = np.fromfile(f, count=n, dtype=SCALAR_DTYPE)
    return arr.astype(np.float64)

def write_vec(fname: str, vec: SeqVector, skip_info: bool = False, verbose: bool = False):
    """
    Write an assembled vector to `fname`, replacing any existing file. Unless
    `skip_info` is set, an options file `fname.info` is written next to it
    the same way PETSc's binary viewer does; it stays empty for vectors with
    block size 1. If either file cannot be written, the vector file is
    removed again; a file that could not be opened is left untouched.
    """
    values = vec.get_array()
    if len(values) > MAX_INDEX:
        raise FormatError(f"vector of length {len(values)} does not fit 32-bit PETSc indices")

    opened = False
    try:
        with open(fname, "wb") as f:
            opened = True
            np.array([VEC_FILE_CLASSID, len(values)], dtype=HEADER_DTYPE).tofile(f)
            values.astype(SCALAR_DTYPE).tofile(f)
        if not skip_info:
            with open(f"{fname}.info", "w"):
                pass
    except OSError:
        if opened and os.path.exists(fname):
            os.remove(fname)
        raise

    if verbose:
        sys.stdout.write("Writing vector completes.\n")
        sys.stdout.flush()

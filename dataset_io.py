import sys
import numpy as np
import os

import mmio
import petsc_io
from vector import SeqVector

MTX_EXTENSIONS = (".mtx",)
PETSC_EXTENSIONS = (".petsc", ".bin", ".vec")

def sizeof_fmt(num, suffix="B"):
    """
    Reference: https://stackoverflow.com/questions/1094841/get-a-human-readable-version-of-a-file-size
    """
    for unit in ("", "K", "M", "G", "T", "P", "E", "Z"):
        if abs(num) < 1024.0:
            return f"{num:3.1f}{unit}{suffix}"
        num /= 1024.0
    return f"{num:.1f}Y{suffix}"

def info_mtx(fname: str) -> tuple[int, int, int, str]:
    filesize = os.path.getsize(fname)
    typecode, m, n = mmio.read_header(fname)
    return m, n, filesize, typecode.field

def read_mtx(fname: str) -> np.ndarray:
    _, val = mmio.read_vector(fname, verbose=False)
    return val

def write_mtx(fname: str, values: np.ndarray):
    mmio.write_vector(fname, values)

def write_petsc(fname: str, values: np.ndarray):
    petsc_io.write_vec(fname, SeqVector.from_array(values))

"""
Main interface:
"""

def info_file(fname: str) -> tuple[int, int, int, str]:
    """
    Get info on a vector file. Currently only accepts files with the
    extensions *.{mtx, petsc, bin, vec}. Returns a tuple[int, int, int, str]
    where:

        int: number of rows
        int: number of columns (1 for a vector)
        int: filesize in bytes
        str: scalar type (e.g. real, float64)
    """
    if fname.endswith(MTX_EXTENSIONS): return info_mtx(fname)
    elif fname.endswith(PETSC_EXTENSIONS): return petsc_io.info_vec(fname)
    else: raise ValueError(f"cannot read file '{fname}': unknown extension")

def read_file(fname: str) -> np.ndarray:
    """
    Read a vector file. Currently only accepts files with the extensions
    *.{mtx, petsc, bin, vec}. Returns a 1-d float64 numpy array.
    """
    if fname.endswith(MTX_EXTENSIONS): return read_mtx(fname)
    elif fname.endswith(PETSC_EXTENSIONS): return petsc_io.read_vec(fname)
    else: raise ValueError(f"cannot read file '{fname}': unknown extension")

def write_file(fname: str, values: np.ndarray):
    """
    Writes a vector file. Currently only writes files with the extensions
    *.{mtx, petsc, bin, vec}.
    """
    if fname.endswith(MTX_EXTENSIONS): write_mtx(fname, values)
    elif fname.endswith(PETSC_EXTENSIONS): write_petsc(fname, values)
    else: raise ValueError(f"cannot write file '{fname}': unknown extension")

def main(files):

    sys.stdout.write(f"path\tnum\tdim\ttype\tsize\n")
    for fname in files:
        n, d, filesize, kind = info_file(fname)
        sys.stdout.write(f"{fname}\t{n}\t{d}\t{kind}\t{sizeof_fmt(filesize)}\n")
        sys.stdout.flush()
    return 0

if __name__ == "__main__":

    if len(sys.argv) < 2:
        sys.stderr.write(f"Usage: {sys.argv[0]} <files>\n")
        sys.stderr.flush()
        sys.exit(1)
    else:
        sys.exit(main(sys.argv[1:]))

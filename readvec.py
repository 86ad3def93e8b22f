"""
Read a vector from a Matrix Market array file and write it to a file in
PETSc binary format.

Usage: python readvec.py -fin <infile> -fout <outfile>
(See https://math.nist.gov/MatrixMarket/ for the input format.)
"""

import argparse
import sys

import numpy as np

import mmio
import petsc_io
from errors import FormatError, UsageError
from runtime import Runtime
from vector import SeqVector

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readvec",
        description="Convert a Matrix Market array vector to PETSc binary format.",
        allow_abbrev=False,
    )
    parser.add_argument("-fin", metavar="<path>", help="input Matrix Market file")
    parser.add_argument("-fout", metavar="<path>", help="output file in PETSc binary format")
    parser.add_argument("-viewer_binary_skip_info", action="store_true",
                        help="do not write the <fout>.info options file")
    return parser

def parse_args(argv=None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.fin:
        parser.error("Please use -fin <filename> to specify the input file name!")
    if not args.fout:
        parser.error("Please use -fout <filename> to specify the output file name!")
    return args

def convert(infile: str, outfile: str, skip_info: bool = False) -> SeqVector:
    _, val = mmio.read_vector(infile, max_rows=petsc_io.MAX_INDEX)

    vec = SeqVector(len(val))
    vec.set_values(np.arange(len(val)), val)
    vec.assemble()

    petsc_io.write_vec(outfile, vec, skip_info=skip_info, verbose=True)
    return vec

def main(argv=None):
    args = parse_args(argv)
    try:
        with Runtime():
            convert(args.fin, args.fout, skip_info=args.viewer_binary_skip_info)
    except (UsageError, FormatError, OSError, MemoryError) as e:
        sys.stderr.write(f"error: {e}\n")
        sys.stderr.flush()
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())

import os
import sys
from typing import Mapping

from errors import UsageError

# environment variables MPI launchers set to the number of ranks started
LAUNCHER_SIZE_VARS = ("OMPI_COMM_WORLD_SIZE", "PMI_SIZE", "MV2_COMM_WORLD_SIZE", "MPI_LOCALNRANKS")

def comm_size(environ: Mapping[str, str] = None) -> int:
    environ = os.environ if environ is None else environ
    size = 1
    for var in LAUNCHER_SIZE_VARS:
        value = environ.get(var, "").strip()
        if value.isdigit():
            size = max(size, int(value))
    return size

class Runtime:
    """
    Process-wide context for one conversion. Entering it checks that only
    one process was launched; leaving it flushes the diagnostic streams
    whether the conversion succeeded or not. Files are owned by the reader
    and writer, which close them on every path.
    """

    def __init__(self, environ: Mapping[str, str] = None):
        self.environ = os.environ if environ is None else environ
        self.size = None

    def __enter__(self) -> "Runtime":
        self.size = comm_size(self.environ)
        if self.size != 1:
            raise UsageError(f"This is a uniprocessor tool only! (started with {self.size} processes)")
        return self

    def __exit__(self, exc_type, exc, tb):
        sys.stdout.flush()
        sys.stderr.flush()
        return False

from typing import Iterable

import numpy as np

INSERT_VALUES = "insert"
ADD_VALUES = "add"

class SeqVector:
    """
    Sequential dense vector. Values are staged with set_values() and only
    become visible after assembly; an unassembled vector cannot be read or
    written out.
    """

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"vector size must be non-negative, got {size}")
        self.size = size
        self._array = np.zeros(size, dtype=np.float64)
        self._stash = []
        self._mode = None
        self._assembled = False
        self._assembling = False

    @classmethod
    def from_array(cls, values: Iterable[float]) -> "SeqVector":
        values = np.asarray(values, dtype=np.float64).ravel()
        vec = cls(len(values))
        vec.set_values(np.arange(len(values)), values)
        vec.assemble()
        return vec

    @property
    def assembled(self) -> bool:
        return self._assembled

    def set_values(self, indices: Iterable[int], values: Iterable[float], mode: str = INSERT_VALUES):
        if mode not in (INSERT_VALUES, ADD_VALUES):
            raise ValueError(f"unknown insert mode '{mode}'")
        if self._mode is not None and mode != self._mode:
            raise ValueError("cannot mix insert and add values without assembling in between")
        indices = np.asarray(indices, dtype=np.int64).ravel()
        values = np.asarray(values, dtype=np.float64).ravel()
        if len(indices) != len(values):
            raise ValueError(f"got {len(indices)} indices but {len(values)} values")
        bad = (indices < 0) | (indices >= self.size)
        if bad.any():
            raise IndexError(f"index {indices[bad][0]} out of range for vector of size {self.size}")
        self._stash.append((indices, values))
        self._mode = mode
        self._assembled = False

    def assembly_begin(self):
        self._assembling = True

    def assembly_end(self):
        if not self._assembling:
            raise RuntimeError("assembly_end() called without assembly_begin()")
        for indices, values in self._stash:
            if self._mode == ADD_VALUES:
                np.add.at(self._array, indices, values)
            else:
                self._array[indices] = values
        self._stash = []
        self._mode = None
        self._assembling = False
        self._assembled = True

    def assemble(self):
        self.assembly_begin()
        self.assembly_end()

    def get_array(self) -> np.ndarray:
        if not self._assembled:
            raise RuntimeError("vector must be assembled before its values are used")
        return self._array.copy()

    def __len__(self):
        return self.size

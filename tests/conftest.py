import pytest
import numpy as np

from runtime import LAUNCHER_SIZE_VARS


@pytest.fixture(autouse=True)
def single_process(monkeypatch):
    for var in LAUNCHER_SIZE_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture()
def mtx_file(tmp_path):
    def wrap(text, name="vec.mtx"):
        path = tmp_path / name
        path.write_text(text)
        return str(path)

    return wrap


@pytest.fixture()
def gen_vector():
    def wrap(n, seed=0):
        return np.random.default_rng(seed).standard_normal(n)

    return wrap


@pytest.fixture()
def petsc_bytes():
    def wrap(values):
        values = np.asarray(values, dtype=np.float64)
        return np.array([1211214, len(values)], dtype=">i4").tobytes() + values.astype(">f8").tobytes()

    return wrap

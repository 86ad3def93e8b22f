import numpy as np
import pytest

import dataset_io
import readvec


SCENARIO = """%%MatrixMarket matrix array real general
3 1
1.0
2.5
-3.25
"""


def test_scenario(mtx_file, tmp_path, capsys, petsc_bytes):
    fin = mtx_file(SCENARIO)
    fout = tmp_path / "vec.petsc"
    assert readvec.main(["-fin", fin, "-fout", str(fout)]) == 0
    assert fout.read_bytes() == petsc_bytes([1.0, 2.5, -3.25])
    assert (tmp_path / "vec.petsc.info").exists()
    out = capsys.readouterr().out
    assert out.splitlines() == [
        "%%MatrixMarket matrix array real general",
        "M: 3, N: 1",
        "Reading vector completes.",
        "Writing vector completes.",
    ]


def test_round_trip_length_and_values(tmp_path, gen_vector):
    values = gen_vector(257)
    fin = str(tmp_path / "in.mtx")
    fout = str(tmp_path / "out.petsc")
    dataset_io.write_file(fin, values)
    assert readvec.main(["-fin", fin, "-fout", fout, "-viewer_binary_skip_info"]) == 0
    back = dataset_io.read_file(fout)
    assert len(back) == 257
    assert np.array_equal(back, values)
    assert not (tmp_path / "out.petsc.info").exists()


@pytest.mark.parametrize("argv, flag", [
    (["-fout", "out.petsc"], "-fin"),
    (["-fin", "in.mtx"], "-fout"),
    ([], "-fin"),
])
def test_missing_flag_is_usage_error(tmp_path, monkeypatch, capsys, argv, flag):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as exc:
        readvec.main(argv)
    assert exc.value.code == 2
    assert f"Please use {flag} <filename>" in capsys.readouterr().err
    assert not (tmp_path / "out.petsc").exists()


def test_truncated_input_writes_nothing(mtx_file, tmp_path, capsys):
    fin = mtx_file("%%MatrixMarket matrix array real general\n10 1\n" + "1.5\n" * 5)
    fout = tmp_path / "out.petsc"
    assert readvec.main(["-fin", fin, "-fout", str(fout)]) == 1
    assert "end line is 5" in capsys.readouterr().err
    assert not fout.exists()


def test_malformed_banner(mtx_file, tmp_path, capsys):
    fin = mtx_file("this is not a matrix market file\n1 1\n1.0\n")
    fout = tmp_path / "out.petsc"
    assert readvec.main(["-fin", fin, "-fout", str(fout)]) == 1
    assert "banner" in capsys.readouterr().err
    assert not fout.exists()


def test_matrix_input_rejected(mtx_file, tmp_path):
    fin = mtx_file("%%MatrixMarket matrix array real general\n2 2\n1\n2\n3\n4\n")
    fout = tmp_path / "out.petsc"
    assert readvec.main(["-fin", fin, "-fout", str(fout)]) == 1
    assert not fout.exists()


def test_missing_input_file(tmp_path, capsys):
    fout = tmp_path / "out.petsc"
    assert readvec.main(["-fin", str(tmp_path / "nope.mtx"), "-fout", str(fout)]) == 1
    assert "error:" in capsys.readouterr().err
    assert not fout.exists()


def test_unwritable_output(mtx_file, tmp_path):
    fin = mtx_file(SCENARIO)
    assert readvec.main(["-fin", fin, "-fout", str(tmp_path / "no" / "out.petsc")]) == 1


def test_multiprocess_launch_rejected(mtx_file, tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("OMPI_COMM_WORLD_SIZE", "4")
    fout = tmp_path / "out.petsc"
    assert readvec.main(["-fin", mtx_file(SCENARIO), "-fout", str(fout)]) == 1
    assert "uniprocessor" in capsys.readouterr().err
    assert not fout.exists()


@pytest.mark.parametrize("m", [4294967296, 1000000000000000])
def test_oversized_header_is_format_error(mtx_file, tmp_path, capsys, m):
    fin = mtx_file(f"%%MatrixMarket matrix array real general\n{m} 1\n1.0\n")
    fout = tmp_path / "out.petsc"
    assert readvec.main(["-fin", fin, "-fout", str(fout)]) == 1
    assert "32-bit" in capsys.readouterr().err
    assert not fout.exists()


def test_non_ascii_input_is_format_error(tmp_path, capsys):
    fin = tmp_path / "bad.mtx"
    fin.write_bytes(b"%%MatrixMarket matrix array real general\n2 1\n1.0\n\xff\xfe\n")
    fout = tmp_path / "out.petsc"
    assert readvec.main(["-fin", str(fin), "-fout", str(fout)]) == 1
    assert "line 4" in capsys.readouterr().err
    assert not fout.exists()


def test_info_failure_leaves_no_output(mtx_file, tmp_path):
    fout = tmp_path / "out.petsc"
    (tmp_path / "out.petsc.info").mkdir()
    assert readvec.main(["-fin", mtx_file(SCENARIO), "-fout", str(fout)]) == 1
    assert not fout.exists()

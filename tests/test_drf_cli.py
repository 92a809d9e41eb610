import pytest

from drf_cli import main


def test_write_and_verify(tmp_path, capsys):
    path = tmp_path / "file.bin"
    assert main(["write", str(path), "123"]) == 0
    assert path.stat().st_size == 123
    assert main(["verify", str(path)]) == 0
    assert "[+] OK" in capsys.readouterr().out


def test_write_to_other_path(tmp_path):
    out = tmp_path / "copy.bin"
    assert main(["write", "seed-name", "40", "--out", str(out)]) == 0
    assert main(["verify", str(out), "--seed", "seed-name"]) == 0
    assert main(["verify", str(out)]) == 1


def test_verify_failure_exit_code(tmp_path, capsys):
    path = tmp_path / "bad.bin"
    main(["write", str(path), "32"])
    data = bytearray(path.read_bytes())
    data[20] ^= 0x10
    path.write_bytes(bytes(data))
    assert main(["verify", str(path)]) == 1
    assert "[16, 32)" in capsys.readouterr().out


def test_missing_file_is_fatal(tmp_path, capsys):
    assert main(["verify", str(tmp_path / "nope")]) == 2
    assert "[FATAL]" in capsys.readouterr().out


def test_selftest():
    assert main(["selftest"]) == 0
    assert main(["selftest", "--force-fail"]) == 0
    assert main(["selftest", "--length", "0", "--force-fail"]) == 1


@pytest.mark.parametrize("argv", [
    ["write", "x", "10", "--block-size", "0"],
    ["write", "x", "-5"],
    ["frobnicate"],
])
def test_bad_arguments(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2

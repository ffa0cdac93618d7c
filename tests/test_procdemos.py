import errno
import os
import subprocess
import sys

import pytest

from linuxlab import procdemos


def test_format_arguments():
    assert procdemos.format_arguments(["./env", "-l"]) == [
        "argv[0]=[./env]",
        "argv[1]=[-l]",
    ]


def test_format_arguments_empty():
    assert procdemos.format_arguments([]) == []


def test_format_environment_mapping_and_list_agree():
    env = {"MYVAL": "1000", "TESTVAL": "2000"}
    from_mapping = procdemos.format_environment(env)
    from_list = procdemos.format_environment(["MYVAL=1000", "TESTVAL=2000"])
    assert from_mapping == from_list
    assert from_mapping[0] == "env[0]=[MYVAL=1000]"


def test_get_myval():
    assert procdemos.get_myval({"MYVAL": "1000"}) == "1000"


def test_get_myval_missing():
    with pytest.raises(KeyError):
        procdemos.get_myval({"OTHER": "1"})


def test_decode_exit_status():
    decoded = procdemos.decode_wait_status(99 << 8)
    assert decoded.exited
    assert decoded.exit_code == 99
    assert decoded.signal is None


def test_decode_signal_status():
    decoded = procdemos.decode_wait_status(9)
    assert not decoded.exited
    assert decoded.signal == 9
    assert not decoded.stopped


def test_decode_stopped_status():
    decoded = procdemos.decode_wait_status((19 << 8) | 0x7F)
    assert decoded.stopped
    assert decoded.signal == 19


def test_decode_negative_rejected():
    with pytest.raises(ValueError):
        procdemos.decode_wait_status(-1)


def test_decode_real_child_status():
    proc = subprocess.Popen([sys.executable, "-c", "import os; os._exit(99)"])
    _, status = os.waitpid(proc.pid, 0)
    proc.returncode = 99
    assert procdemos.decode_wait_status(status).exit_code == 99


def test_wait_with_polling_ticks_until_exit():
    proc = subprocess.Popen(
        [sys.executable, "-c", "import time, sys; time.sleep(0.4); sys.exit(7)"]
    )
    ticks = []
    code = procdemos.wait_with_polling(proc, lambda: ticks.append(1), 0.05)
    assert code == 7
    assert len(ticks) >= 1


def test_describe_errno():
    assert "No such file" in procdemos.describe_errno(errno.ENOENT)


def test_run_with_env_passes_environment():
    result = procdemos.run_with_env(
        sys.executable,
        ["-c", "import os; print(os.environ.get('MYVAL'), os.environ.get('TESTVAL'))"],
        {"MYVAL": "1000", "TESTVAL": "2000"},
    )
    assert result.returncode == 0
    assert result.stdout.split() == ["1000", "2000"]


def test_run_with_env_missing_program(tmp_path):
    with pytest.raises(OSError):
        procdemos.run_with_env(str(tmp_path / "no-such-program"))
"""Tests for local and remote command transport."""

import subprocess
from unittest.mock import patch

import pytest
from structlog.testing import capture_logs

from logweave.core.errors import DecodeError, TransportError
from logweave.core.transport import decode_output, run_local, run_remote, ssh_command

RUN = "logweave.core.transport.subprocess.run"

def completed(argv=("cmd",), returncode=0, stdout=b"", stderr=b""):
    return subprocess.CompletedProcess(list(argv), returncode, stdout=stdout, stderr=stderr)

def test_run_local_returns_stdout():
    with patch(RUN, return_value=completed(stdout=b"line one\nline two\n")) as mock_run:
        output = run_local("journalctl", ["-o", "short-iso-precise"], timeout=5)

    assert output == "line one\nline two\n"
    mock_run.assert_called_once_with(
        ["journalctl", "-o", "short-iso-precise"],
        capture_output=True,
        timeout=5,
        check=False
    )

def test_run_local_launch_failure():
    with patch(RUN, side_effect=FileNotFoundError(2, "No such file or directory")):
        with pytest.raises(TransportError, match="could not be launched") as excinfo:
            run_local("missing-binary")
    assert excinfo.value.details["command"] == "missing-binary"

def test_run_local_timeout():
    with patch(RUN, side_effect=subprocess.TimeoutExpired("journalctl", 5)):
        with pytest.raises(TransportError, match="timed out"):
            run_local("journalctl", timeout=5)

def test_run_local_nonzero_exit():
    with patch(RUN, return_value=completed(returncode=1, stderr=b"permission denied\n")):
        with pytest.raises(TransportError, match="status 1") as excinfo:
            run_local("journalctl")
    assert excinfo.value.details["stderr"] == "permission denied"

def test_run_local_nonzero_exit_allowed():
    with patch(RUN, return_value=completed(returncode=3, stdout=b"partial\n")):
        with capture_logs() as logs:
            output = run_local("journalctl", fail_on_nonzero_exit=False)

    assert output == "partial\n"
    assert logs[-1]["event"] == "command_nonzero_exit"
    assert logs[-1]["status"] == 3

def test_decode_output_replaces_invalid_bytes():
    with capture_logs() as logs:
        text = decode_output(b"ok \xff\xfe end", source="hostA")

    assert text == "ok \ufffd\ufffd end"
    assert logs[0]["event"] == "lossy_decode"
    assert logs[0]["position"] == 3

def test_decode_output_strict():
    with pytest.raises(DecodeError):
        decode_output(b"\xff", errors="strict")

def test_run_local_lossy_output():
    with patch(RUN, return_value=completed(stdout=b"caf\xe9\n")):
        assert run_local("cat") == "caf\ufffd\n"

def test_ssh_command_is_strict():
    argv = ssh_command("deploy@web1", "journalctl", ["-u", "nginx web"], connect_timeout=7)

    assert argv[0] == "ssh"
    assert "StrictHostKeyChecking=yes" in argv
    assert "BatchMode=yes" in argv
    assert "ConnectTimeout=7" in argv
    assert argv[-3:] == ["--", "deploy@web1", "journalctl -u 'nginx web'"]

def test_ssh_command_known_hosts_file():
    argv = ssh_command("web1", "journalctl", known_hosts_file="/etc/logweave/known_hosts")
    assert "UserKnownHostsFile=/etc/logweave/known_hosts" in argv

def test_run_remote_returns_stdout():
    with patch(RUN, return_value=completed(stdout=b"remote\n")) as mock_run:
        assert run_remote("web1", "journalctl", timeout=10) == "remote\n"

    argv = mock_run.call_args.args[0]
    assert argv[0] == "ssh"
    assert mock_run.call_args.kwargs["timeout"] == 10

def test_run_remote_connection_failure():
    """Test that ssh's own failures, such as an unknown host key, are transport errors."""
    stderr = b"No ED25519 host key is known for web1 and you have requested strict checking.\n"
    with patch(RUN, return_value=completed(returncode=255, stderr=stderr)):
        with pytest.raises(TransportError, match="ssh session failed") as excinfo:
            run_remote("web1", "journalctl", fail_on_nonzero_exit=False)
    assert "strict checking" in excinfo.value.details["stderr"]

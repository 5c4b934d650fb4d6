"""Running commands locally or over ssh and capturing their output."""

import shlex
import subprocess
from typing import List, Optional, Sequence

from logweave.core.errors import DecodeError, TransportError
from logweave.core.logging import get_logger

logger = get_logger(__name__)

SSH_EXECUTABLE = "ssh"
# ssh reports its own failures (connection, authentication, host key) as 255
SSH_FAILURE_STATUS = 255
STDERR_TAIL = 500

def decode_output(data: bytes, errors: str = "replace", source: str = "<output>") -> str:
    """Decode captured output as UTF-8.

    Args:
        data: Raw bytes
        errors: ``replace`` substitutes invalid sequences, ``strict`` raises
        source: Name used in log events and errors

    Raises:
        DecodeError: If the bytes are not valid UTF-8 and errors is strict
    """
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        if errors == "strict":
            raise DecodeError(
                "Output is not valid UTF-8",
                details={"source": source, "position": e.start}
            ) from e
        logger.warning("lossy_decode", source=source, position=e.start)
        return data.decode("utf-8", errors="replace")

def _stderr_tail(stderr: Optional[bytes]) -> str:
    if not stderr:
        return ""
    return stderr.decode("utf-8", errors="replace").strip()[-STDERR_TAIL:]

def _run(
    argv: List[str],
    source: str,
    timeout: Optional[float],
    fail_on_nonzero_exit: bool,
    decode_errors: str
) -> str:
    logger.debug("command_started", source=source, argv=argv, timeout=timeout)
    try:
        completed = subprocess.run(argv, capture_output=True, timeout=timeout, check=False)
    except subprocess.TimeoutExpired as e:
        raise TransportError(
            f"Command timed out after {timeout}s",
            details={"source": source, "command": argv[0]}
        ) from e
    except OSError as e:
        raise TransportError(
            f"Command could not be launched: {e.strerror or e}",
            details={"source": source, "command": argv[0]}
        ) from e

    if argv[0] == SSH_EXECUTABLE and completed.returncode == SSH_FAILURE_STATUS:
        raise TransportError(
            "ssh session failed",
            details={"source": source, "stderr": _stderr_tail(completed.stderr)}
        )
    if completed.returncode != 0:
        if fail_on_nonzero_exit:
            raise TransportError(
                f"Command exited with status {completed.returncode}",
                details={
                    "source": source,
                    "status": completed.returncode,
                    "stderr": _stderr_tail(completed.stderr)
                }
            )
        logger.warning(
            "command_nonzero_exit",
            source=source,
            status=completed.returncode,
            stderr=_stderr_tail(completed.stderr)
        )

    return decode_output(completed.stdout, errors=decode_errors, source=source)

def run_local(
    executable: str,
    args: Sequence[str] = (),
    timeout: Optional[float] = None,
    fail_on_nonzero_exit: bool = True,
    decode_errors: str = "replace"
) -> str:
    """Run a local executable and return its standard output as text.

    Raises:
        TransportError: If the command cannot be launched, times out or,
            when ``fail_on_nonzero_exit`` is set, exits with non-zero status
        DecodeError: If the output is not valid text and ``decode_errors``
            is ``strict``
    """
    return _run(
        [executable, *args],
        source=executable,
        timeout=timeout,
        fail_on_nonzero_exit=fail_on_nonzero_exit,
        decode_errors=decode_errors
    )

def ssh_command(
    address: str,
    executable: str,
    args: Sequence[str] = (),
    connect_timeout: int = 10,
    known_hosts_file: Optional[str] = None
) -> List[str]:
    """Build the ssh invocation for running a command on a remote host.

    Host keys are checked strictly: unknown or changed keys fail the
    connection. Batch mode disables password and passphrase prompts.
    """
    argv = [
        SSH_EXECUTABLE,
        "-o", "StrictHostKeyChecking=yes",
        "-o", "BatchMode=yes",
        "-o", f"ConnectTimeout={connect_timeout}",
    ]
    if known_hosts_file:
        argv += ["-o", f"UserKnownHostsFile={known_hosts_file}"]
    argv += ["--", address, shlex.join([executable, *args])]
    return argv

def run_remote(
    address: str,
    executable: str,
    args: Sequence[str] = (),
    timeout: Optional[float] = None,
    connect_timeout: int = 10,
    known_hosts_file: Optional[str] = None,
    fail_on_nonzero_exit: bool = True,
    decode_errors: str = "replace"
) -> str:
    """Run an executable on a remote host over ssh and return its output.

    The session is closed when the remote command finishes.

    Raises:
        TransportError: On connection, authentication or host key failure,
            timeout, or non-zero exit when ``fail_on_nonzero_exit`` is set
        DecodeError: If the output is not valid text and ``decode_errors``
            is ``strict``
    """
    argv = ssh_command(address, executable, args, connect_timeout, known_hosts_file)
    return _run(
        argv,
        source=address,
        timeout=timeout,
        fail_on_nonzero_exit=fail_on_nonzero_exit,
        decode_errors=decode_errors
    )

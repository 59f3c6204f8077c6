import logging
import os
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path

import psutil

logger = logging.getLogger("ferris")

# status reported when a child is killed after exceeding its timeout
TIMEOUT_RETURNCODE = 124

# ---------------------------------------------------------------------------- #
#                               Helper Functions                               #
# ---------------------------------------------------------------------------- #


# build a table mapping all non-printable characters to None
LINE_BREAK_CHARACTERS = set(["\n", "\r"])
NO_PRINT_TRANS_TABLE = {
    i: None
    for i in range(0, sys.maxunicode + 1)
    if not chr(i).isprintable() and not chr(i) in LINE_BREAK_CHARACTERS
}


def make_printable(data: str) -> str:
    """Replace non-printable characters in a string."""
    return data.translate(NO_PRINT_TRANS_TABLE)


def make_utf8(data: bytes | None) -> str:
    return "" if data is None else data.decode("utf-8", errors="ignore")


# ---------------------------------------------------------------------------- #
#                            Execution Status Class                            #
# ---------------------------------------------------------------------------- #


@dataclass
class ExecStatus:
    command: str
    stdout: str
    stderr: str
    stdout_raw: bytes | None
    stderr_raw: bytes | None
    returncode: int
    delta_time: float
    is_timeout: bool = False
    env: dict[str, str] | None = None
    cwd: Path | None = None

    def is_failure(self):
        return not self.returncode == 0


# ---------------------------------------------------------------------------- #
#                       Core Command Invocation Function                       #
# ---------------------------------------------------------------------------- #


def invoke_command(
    command: list[str],
    cwd: Path | None = None,
    env: dict[str, str] | None = None,
    input: bytes | None = None,
    timeout: float | None = None,
    is_log_debug: bool = True,
    explicit_clean_zombies: bool = False,
) -> ExecStatus:
    """
    Run `command` to completion and collect its output. `input` is fed to the
    child's stdin, which is closed afterwards (the child sees end of input when
    `input` is None). `env` is merged on top of the current environment.
    """

    logger.info("run command: " + " ".join(command))
    logger.debug(f"  - cwd     : {cwd}")
    logger.debug(f"  - env     : {env}")
    logger.debug(f"  - timeout : {timeout}")

    combined_env = None
    if env is not None:
        combined_env = os.environ.copy()
        combined_env.update(env)

    pre_call_active_children = None
    if explicit_clean_zombies:
        pre_call_active_children = set(p.pid for p in psutil.Process().children(recursive=True))

    start_time = time.time()
    is_timeout = False
    try:
        complete_proc = subprocess.run(
            command,
            close_fds=True,
            shell=False,
            input=input if input is not None else b"",
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=cwd,
            timeout=timeout,
            env=combined_env,
        )
        stdout_bytes, stderr_bytes = complete_proc.stdout, complete_proc.stderr
        returncode = complete_proc.returncode
    except subprocess.TimeoutExpired as time_err:
        stdout_bytes, stderr_bytes = time_err.stdout, time_err.stderr
        returncode = TIMEOUT_RETURNCODE
        is_timeout = True
    delta_time = time.time() - start_time

    stdout, stderr = [make_printable(make_utf8(x)) for x in [stdout_bytes, stderr_bytes]]

    logger.info(f"  => exit {returncode}")
    if is_log_debug:
        logger.debug("========== START STDOUT ==========")
        logger.debug(stdout)
        logger.debug("=========== END STDOUT ===========")
        logger.debug("========== START STDERR ==========")
        logger.debug(stderr)
        logger.debug("=========== END STDERR ===========")

    status = ExecStatus(
        " ".join(command),
        stdout,
        stderr,
        stdout_bytes,
        stderr_bytes,
        returncode,
        delta_time,
        is_timeout,
        env,
        cwd,
    )

    if explicit_clean_zombies:
        assert pre_call_active_children is not None, "unexpected value of child process list"
        _clean_up_new_children(pre_call_active_children)

    return status


def _clean_up_new_children(known_pids: set[int]):
    for child in psutil.Process().children(recursive=True):
        if child.pid in known_pids:
            continue
        logger.debug(f"possible zombie detected, waiting for {child.pid} ...")
        try:
            if child.status() == psutil.STATUS_ZOMBIE:
                child.wait()
            elif child.is_running():
                child.terminate()
                child.wait(timeout=5)
        except (psutil.NoSuchProcess, psutil.TimeoutExpired):
            logger.error(f"unable to clean up possible zombie {child.pid}")

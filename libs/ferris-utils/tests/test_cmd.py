import sys

from ferris_utils.cmd import TIMEOUT_RETURNCODE, invoke_command, make_printable


def test_invoke_command_collects_output_and_exit_code():
    status = invoke_command(
        [sys.executable, "-c", "import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)"]
    )

    assert status.returncode == 3
    assert status.is_failure()
    assert status.stdout.strip() == "out"
    assert status.stderr.strip() == "err"
    assert not status.is_timeout


def test_invoke_command_feeds_stdin():
    status = invoke_command(
        [sys.executable, "-c", "import sys; print(sys.stdin.readline().upper(), end='')"],
        input=b"hello\n",
    )

    assert not status.is_failure()
    assert status.stdout == "HELLO\n"


def test_invoke_command_merges_env():
    status = invoke_command(
        [sys.executable, "-c", "import os; print(os.environ['FERRIS_TEST_VALUE'])"],
        env={"FERRIS_TEST_VALUE": "crab"},
        explicit_clean_zombies=True,
    )

    assert status.stdout.strip() == "crab"
    assert status.env == {"FERRIS_TEST_VALUE": "crab"}


def test_invoke_command_timeout():
    status = invoke_command([sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.5)

    assert status.is_timeout
    assert status.returncode == TIMEOUT_RETURNCODE


def test_make_printable_keeps_line_breaks():
    assert make_printable("a\x00b\nc\x07") == "ab\nc"

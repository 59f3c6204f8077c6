import argparse
import logging

import pytest

from ferris_utils.cli import FerrisClient
from ferris_utils.file import create_dir, create_file
from ferris_utils.project import AbstractProjectGenerator


class EchoClient(FerrisClient):
    def add_arguments(self, parser: argparse.ArgumentParser):
        parser.add_argument("word")

    def run(self) -> int:
        logging.getLogger("ferris").info(f"echo {self.args.word}")
        print(self.args.word)
        return 0


def test_client_parses_shared_flags_and_runs(capsys):
    client = EchoClient("echo", "Echo")

    assert client.start(["-v", "2", "-s", "3", "crab"]) == 0
    assert client.seed == 3.0
    assert client.verbosity == 2

    captured = capsys.readouterr()
    assert captured.out == "crab\n"
    assert "[Echo " in captured.err
    assert "~ INFO]: echo crab" in captured.err


def test_client_without_seed_uses_timestamp():
    client = EchoClient("echo", "Echo")
    client.start(["-v", "0", "crab"])
    assert client.seed > 0


def test_client_restart_keeps_single_handler():
    client = EchoClient("echo", "Echo")
    client.start(["-v", "0", "a"])
    client.start(["-v", "0", "b"])
    assert len(logging.getLogger("ferris").handlers) == 1


def test_client_rejects_bad_verbosity():
    client = EchoClient("echo", "Echo")
    with pytest.raises(SystemExit) as exc_info:
        client.start(["-v", "5", "crab"])
    assert exc_info.value.code == 2


class TextProjectGenerator(AbstractProjectGenerator):
    def create(self):
        path = self.root / "nested" / "hello.txt"
        create_file(path, "hello\n")
        return [path]


def test_project_generator_writes_below_root(tmp_path):
    written = TextProjectGenerator(tmp_path / "proj").create()

    assert written == [tmp_path / "proj" / "nested" / "hello.txt"]
    assert written[0].read_text() == "hello\n"


def test_create_dir_refuses_file(tmp_path):
    target = tmp_path / "occupied"
    target.write_text("x")
    with pytest.raises(FileExistsError):
        create_dir(target)

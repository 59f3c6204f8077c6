import argparse
import logging
from abc import ABC, abstractmethod
from datetime import datetime


class FerrisClient(ABC):
    """Base class for a ferris-lab program. Handles argument parsing, logger
    setup and the seed, then hands over to `run()`.
    """

    program_name: str
    logger_prefix: str
    description: str

    # Common State
    verbosity: int
    seed: float

    argument_parser: argparse.ArgumentParser
    args: argparse.Namespace

    def __init__(self, program_name: str, logger_prefix: str, description: str = ""):
        self.program_name = program_name
        self.logger_prefix = logger_prefix
        self.description = description

        self.verbosity = 0
        self.seed = 0

        self.argument_parser = self.generate_parser()
        self.args = argparse.Namespace()

    def set_logger_config(self):
        logger = logging.getLogger("ferris")
        logger.propagate = False
        verbosity = min(max(0, self.verbosity), 2)
        logging_level = {0: logging.ERROR, 1: logging.INFO, 2: logging.DEBUG}.get(
            verbosity, logging.ERROR
        )
        logger.setLevel(logging.DEBUG)

        # a client may be started more than once in the same process
        for handler in list(logger.handlers):
            logger.removeHandler(handler)

        console_handler = logging.StreamHandler()
        formatter = logging.Formatter(
            f"[{self.logger_prefix} %(asctime)s ~ %(levelname)s]: %(message)s"
        )
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging_level)
        logger.addHandler(console_handler)

    def add_shared_flags(self, parser: argparse.ArgumentParser):
        """Flags every program understands"""
        parser.add_argument("-v", "--verbosity", default=1, choices=[0, 1, 2], type=int)
        parser.add_argument(
            "-s", "--seed", metavar="SEED_NUM", type=float, help="seed for randomness"
        )

    def generate_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog=self.program_name, description=self.description)
        self.add_shared_flags(parser)
        self.add_arguments(parser)
        return parser

    def start(self, argv: list[str] | None = None) -> int:
        self.args = self.argument_parser.parse_args(argv)
        self.verbosity = self.args.verbosity
        self.set_logger_config()
        self.seed = self.args.seed if self.args.seed is not None else datetime.now().timestamp()
        return self.run()

    @abstractmethod
    def add_arguments(self, parser: argparse.ArgumentParser):
        """Register program specific arguments and subcommands"""
        raise NotImplementedError()

    @abstractmethod
    def run(self) -> int:
        """Execute the program and return its exit status"""
        raise NotImplementedError()

#!/usr/bin/env python3

import argparse
import logging
import sys

from ferris_core.borrow import Owner
from ferris_utils.cli import FerrisClient
from lifetime_demo.experiments import EXPERIMENTS, run_experiment
from lifetime_demo.longest import longest_borrow

logger = logging.getLogger("ferris")

DEFAULT_FIRST = "hello"
DEFAULT_SECOND = "world"


class LifetimeDemoClient(FerrisClient):
    def add_arguments(self, parser: argparse.ArgumentParser):
        subparsers = parser.add_subparsers(required=True, dest="command")

        longest_parser = subparsers.add_parser("longest", help="Print the longer of two strings")
        longest_parser.add_argument("first", nargs="?", default=DEFAULT_FIRST)
        longest_parser.add_argument("second", nargs="?", default=DEFAULT_SECOND)

        experiment_parser = subparsers.add_parser(
            "experiment", help="Walk through a checked lifetime mistake"
        )
        experiment_parser.add_argument("name", choices=sorted(EXPERIMENTS))

    def run(self) -> int:
        match self.args.command:
            case "longest":
                s1 = Owner(self.args.first, "s1")
                s2 = Owner(self.args.second, "s2")
                result = longest_borrow(s1.borrow(), s2.borrow())
                logger.info(f"lengths {len(self.args.first)} vs {len(self.args.second)}")
                print(result.get())
            case "experiment":
                run_experiment(self.args.name, sys.stdout)
        return 0


def app():
    cli = LifetimeDemoClient("lifetime-demo", "Lifetime", "Shared lifetime demonstrations")
    sys.exit(cli.start())


if __name__ == "__main__":
    app()

#!/usr/bin/env python3

import argparse
import logging
import sys

from ferris_core.secret import SecretGenerator
from ferris_utils.cli import FerrisClient
from guessing_game.game import GuessingGameError, play
from guessing_game.settings import EXIT_FAILURE, EXIT_SUCCESS, GUESS_SECRET_MAX, GUESS_SECRET_MIN

logger = logging.getLogger("ferris")


class GuessingGameClient(FerrisClient):
    def add_arguments(self, parser: argparse.ArgumentParser):
        # the game itself takes no arguments; only the shared flags apply
        pass

    def run(self) -> int:
        logger.info(f"=== Start {self.logger_prefix} Round ===")
        logger.info(f" * seed: {self.seed}")

        generator = SecretGenerator(self.seed, GUESS_SECRET_MIN, GUESS_SECRET_MAX)
        try:
            play(sys.stdin.buffer, sys.stdout, generator)
        except GuessingGameError as err:
            sys.stdout.flush()
            logger.error(err.message)
            if err.detail:
                logger.error(err.detail)
            return EXIT_FAILURE

        logger.info(f"=== End {self.logger_prefix} Round ===")
        return EXIT_SUCCESS


def app():
    cli = GuessingGameClient("guessing-game", "Guess", "Guess a number between 1 and 100")
    sys.exit(cli.start())


if __name__ == "__main__":
    app()

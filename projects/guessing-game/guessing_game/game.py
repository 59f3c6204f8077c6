import logging
import re
from typing import BinaryIO, TextIO

from ferris_core.kinds import Ordering
from ferris_core.secret import SecretGenerator
from ferris_core.types import is_u32
from guessing_game.settings import (
    GUESS_SECRET_MAX,
    GUESS_SECRET_MIN,
    MSG_ECHO,
    MSG_PARSE_FAILURE,
    MSG_PROMPT,
    MSG_READ_FAILURE,
    MSG_SECRET,
    MSG_TITLE,
    MSG_TOO_BIG,
    MSG_TOO_SMALL,
    MSG_WIN,
    U32_MAX_DIGITS,
    WHITESPACE,
)

logger = logging.getLogger("ferris")

# optional plus sign followed by ASCII digits, nothing else
GUESS_PATTERN = re.compile(r"\+?[0-9]+")

OUTCOME_MESSAGES = {
    Ordering.LESS: MSG_TOO_SMALL,
    Ordering.GREATER: MSG_TOO_BIG,
    Ordering.EQUAL: MSG_WIN,
}

# ---------------------------------------------------------------------------- #
#                                  Exceptions                                  #
# ---------------------------------------------------------------------------- #


class GuessingGameError(Exception):
    """Fatal error of a guessing round. `message` is shown to the player."""

    message: str

    def __init__(self, message: str, detail: str = ""):
        super().__init__(f"{message} ({detail})" if detail else message)
        self.message = message
        self.detail = detail


class GuessReadError(GuessingGameError):
    def __init__(self, detail: str = ""):
        super().__init__(MSG_READ_FAILURE, detail)


class GuessParseError(GuessingGameError):
    def __init__(self, detail: str = ""):
        super().__init__(MSG_PARSE_FAILURE, detail)


# ---------------------------------------------------------------------------- #
#                                  Round Steps                                 #
# ---------------------------------------------------------------------------- #


def generate_secret(generator: SecretGenerator) -> int:
    secret = generator.generate()
    assert GUESS_SECRET_MIN <= secret <= GUESS_SECRET_MAX, f"secret {secret} out of range"
    return secret


def read_guess(stream: BinaryIO) -> str:
    """
    Read a single line of raw bytes and decode it as strict UTF-8, whatever
    the locale of the process. End of input yields an empty string.
    """
    try:
        raw = stream.readline()
        return raw.decode("utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise GuessReadError(str(err)) from err


def parse_guess(text: str) -> int:
    """Parse an unsigned 32-bit integer surrounded by optional whitespace."""
    trimmed = text.strip(WHITESPACE)
    if not trimmed:
        raise GuessParseError("cannot parse integer from empty string")
    if not GUESS_PATTERN.fullmatch(trimmed):
        raise GuessParseError(f"invalid digit found in string: {trimmed!r}")
    # bound the digit count before int() so huge inputs never reach it
    if len(trimmed.lstrip("+").lstrip("0")) > U32_MAX_DIGITS:
        raise GuessParseError("number too large to fit in target type")
    value = int(trimmed)
    if not is_u32(value):
        raise GuessParseError(f"number too large to fit in target type: {trimmed!r}")
    return value


def compare(guess: int, secret: int) -> Ordering:
    return Ordering.of(guess, secret)


# ---------------------------------------------------------------------------- #
#                                  Full Round                                  #
# ---------------------------------------------------------------------------- #


def play(stdin: BinaryIO, stdout: TextIO, generator: SecretGenerator) -> Ordering:
    """
    Play exactly one round: draw and show the secret, read one guess and print
    the comparison. Read and parse failures propagate as `GuessingGameError`.
    """
    print(MSG_TITLE, file=stdout)

    secret = generate_secret(generator)
    logger.debug(f"secret drawn from [{GUESS_SECRET_MIN}, {GUESS_SECRET_MAX}]")
    print(MSG_SECRET.format(secret=secret), file=stdout)

    print(MSG_PROMPT, file=stdout)
    stdout.flush()

    line = read_guess(stdin)
    # the raw line is echoed including its line break
    print(MSG_ECHO.format(guess=line), file=stdout)

    guess = parse_guess(line)
    outcome = compare(guess, secret)
    logger.info(f"guess {guess} vs secret {secret}: {outcome}")

    print(OUTCOME_MESSAGES[outcome], file=stdout)
    return outcome

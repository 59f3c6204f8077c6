from ferris_core.secret import SECRET_MAX, SECRET_MIN

#
# Secret Range
#

GUESS_SECRET_MIN = SECRET_MIN
GUESS_SECRET_MAX = SECRET_MAX

#
# Console Messages
#

MSG_TITLE = "Guess the number!"
MSG_SECRET = "The secret number is: {secret}"
MSG_PROMPT = "Please input your guess."
MSG_ECHO = "You guessed: {guess}"

MSG_TOO_SMALL = "Too small!"
MSG_TOO_BIG = "Too big!"
MSG_WIN = "You win!"

MSG_READ_FAILURE = "Failed to read line"
MSG_PARSE_FAILURE = "Please type a number!"

#
# Guess Parsing
#

# Unicode White_Space characters trimmed around a guess; narrower than str.isspace(),
# which also counts the \x1c-\x1f separators
WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)

# decimal digits of 4294967295
U32_MAX_DIGITS = 10

#
# Exit Status
#

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

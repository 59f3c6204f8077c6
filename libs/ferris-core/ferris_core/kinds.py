from enum import StrEnum

# ---------------------------------------------------------------------------- #
#                                   Ordering                                   #
# ---------------------------------------------------------------------------- #


class Ordering(StrEnum):
    LESS = "less"
    GREATER = "greater"
    EQUAL = "equal"

    @classmethod
    def of(cls, lhs: int, rhs: int) -> "Ordering":
        """Three-way comparison of `lhs` against `rhs`."""
        if lhs < rhs:
            return cls.LESS
        if lhs > rhs:
            return cls.GREATER
        return cls.EQUAL


# ---------------------------------------------------------------------------- #

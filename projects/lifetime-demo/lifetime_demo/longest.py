from ferris_core.borrow import Borrow


def longest(x: str, y: str) -> str:
    """
    Return whichever of `x` and `y` has more characters; ties go to `y`.

    The result is one of the arguments itself, not a copy, so it is only good
    for as long as both arguments are.
    """
    return x if len(x) > len(y) else y


def longest_borrow(x: Borrow[str], y: Borrow[str]) -> Borrow[str]:
    """
    `longest` over checked views. The returned view is bound to the sources of
    BOTH arguments, so it dies with whichever of them is dropped first, even
    when it points into the other one.
    """
    chosen = x if len(x.get()) > len(y.get()) else y
    other = y if chosen is x else x
    return chosen.bind(other)

import logging
from typing import Callable, TextIO

from ferris_core.borrow import BorrowError, OwnedList, Owner, Scope
from lifetime_demo.longest import longest_borrow

logger = logging.getLogger("ferris")

# ---------------------------------------------------------------------------- #
#                                  Experiments                                 #
# ---------------------------------------------------------------------------- #
#
# Each experiment walks through a lifetime mistake step by step and returns the
# error that stopped it. Where an unchecked program would read freed or moved
# memory, the checked borrow raises instead.


def scope_experiment(out: TextIO) -> BorrowError:
    """A result that may point into an inner block is used after the block."""
    s1 = Owner("hello", "s1")

    with Scope("inner") as inner:
        s2 = inner.own("world!!!", "s2")
        result = longest_borrow(s1.borrow(), s2.borrow())
        print(f"Inside: {result.get()}", file=out)

    try:
        print(f"Outside: {result.get()}", file=out)
    except BorrowError as err:
        print(f"Outside: refused ({err})", file=out)
        return err
    raise AssertionError("borrow survived its scope")


def invalidate_experiment(out: TextIO) -> BorrowError:
    """An element borrow is kept while the list grows."""
    v = OwnedList([1, 2, 3], "v")
    first = v.item(0)
    print(f"Before: v = {v.value}", file=out)
    print(f"first (borrow) = {first.get()}", file=out)

    for i in range(100):
        v.push(i)
    print(f"After: len(v) = {len(v)}", file=out)

    try:
        print(f"first (stale) = {first.get()}", file=out)
    except BorrowError as err:
        print(f"first (stale) = refused ({err})", file=out)
        return err
    raise AssertionError("element borrow survived a push")


def double_drop_experiment(out: TextIO) -> BorrowError:
    """Two owners share one value and both try to release it."""
    s1 = Owner("hello", "s1")
    s2 = s1  # shallow: same owner under two names
    deep = s1.clone("s3")
    print(f"s1 = {s1.value!r}, s2 = {s2.value!r}, s3 = {deep.value!r}", file=out)

    deep.drop()
    print("s3 dropped independently", file=out)
    s2.drop()
    print("s2 dropped", file=out)
    try:
        s1.drop()
    except BorrowError as err:
        print(f"s1 drop refused ({err})", file=out)
        return err
    raise AssertionError("value released twice")


EXPERIMENTS: dict[str, Callable[[TextIO], BorrowError]] = {
    "scope": scope_experiment,
    "invalidate": invalidate_experiment,
    "double-drop": double_drop_experiment,
}


def run_experiment(name: str, out: TextIO) -> BorrowError:
    if name not in EXPERIMENTS:
        raise ValueError(f"unknown experiment '{name}'")
    logger.info(f"run experiment '{name}'")
    err = EXPERIMENTS[name](out)
    logger.debug(f"experiment '{name}' stopped by {type(err).__name__}")
    return err

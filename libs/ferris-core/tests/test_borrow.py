import pytest

from ferris_core.borrow import (
    Borrow,
    DanglingReferenceError,
    DoubleDropError,
    OwnedList,
    Owner,
    Scope,
)


def test_borrow_reads_while_owner_alive():
    owner = Owner("hello", "s1")
    view = owner.borrow()

    assert view.is_valid()
    assert view.get() == "hello"


def test_borrow_fails_after_owner_dropped():
    owner = Owner("hello", "s1")
    view = owner.borrow()
    owner.drop()

    assert not view.is_valid()
    with pytest.raises(DanglingReferenceError, match="s1"):
        view.get()
    with pytest.raises(DanglingReferenceError):
        owner.value


def test_double_drop_is_rejected_and_clone_is_independent():
    original = Owner(["h", "i"], "s1")
    copied = original.clone()

    copied.value.append("!")
    assert original.value == ["h", "i"]

    copied.drop()
    assert original.alive
    original.drop()
    with pytest.raises(DoubleDropError):
        original.drop()


def test_bind_intersects_sources():
    a = Owner("abc", "a")
    b = Owner("de", "b")
    bound = a.borrow().bind(b.borrow())

    assert bound.get() == "abc"
    assert len(bound.sources) == 2

    b.drop()
    with pytest.raises(DanglingReferenceError, match="'b'"):
        bound.get()


def test_owned_list_growth_invalidates_element_borrows():
    items = OwnedList([1, 2, 3], "v")
    first = items.item(0)
    assert first.get() == 1

    for i in range(100):
        items.push(i)

    assert len(items) == 103
    with pytest.raises(DanglingReferenceError, match="mutation"):
        first.get()
    # fresh borrows see the current generation
    assert items.item(0).get() == 1


def test_scope_drops_owners_on_exit():
    with Scope("inner") as scope:
        s2 = scope.own("world!!!", "s2")
        view = s2.borrow()
        assert view.get() == "world!!!"

    assert not s2.alive
    with pytest.raises(DanglingReferenceError):
        view.get()


def test_scope_tolerates_owners_dropped_early():
    with Scope() as scope:
        owner = scope.own("x")
        owner.drop()
    assert not owner.alive


def test_borrow_is_plain_value_container():
    owner = Owner(42, "n")
    view = owner.borrow()
    assert isinstance(view, Borrow)
    assert view.target == 42
    assert view.sources == ((owner, 0),)

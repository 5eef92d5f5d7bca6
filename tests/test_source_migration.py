import pytest

from schemamigrate.source.migration import Direction, Migration, Migrations


@pytest.fixture
def standard():
    ms = Migrations()
    for version, direction in [
        (1, Direction.UP),
        (1, Direction.DOWN),
        (3, Direction.UP),
        (4, Direction.UP),
        (4, Direction.DOWN),
        (5, Direction.DOWN),
        (7, Direction.UP),
        (7, Direction.DOWN),
    ]:
        assert ms.append(Migration(version, f"m{version}", direction, f"{version}.{direction.value}"))
    return ms


def test_find_pos():
    ms = Migrations()
    for v in (3, 1, 2):
        ms.append(Migration(v, "x", Direction.UP))
    assert ms._find_pos(0) == -1
    assert ms._find_pos(1) == 0
    assert ms._find_pos(3) == 2


def test_new_migrations_is_empty():
    ms = Migrations()
    assert ms.first() is None
    assert ms.next(0) is None
    assert ms.up(0) is None


def test_append_rejects_none_and_duplicates():
    ms = Migrations()
    assert ms.append(None) is False
    assert ms.append(Migration(1, "a", Direction.UP)) is True
    assert ms.append(Migration(1, "b", Direction.UP)) is False
    assert ms.append(Migration(1, "b", Direction.DOWN)) is True
    assert ms.up(1).identifier == "a"


def test_first(standard):
    assert standard.first() == 1


@pytest.mark.parametrize(
    "version, expected",
    [(0, None), (1, None), (2, None), (3, 1), (4, 3), (5, 4), (6, None), (7, 5), (8, None), (9, None)],
)
def test_prev(standard, version, expected):
    assert standard.prev(version) == expected


@pytest.mark.parametrize(
    "version, expected",
    [(0, None), (1, 3), (2, None), (3, 4), (4, 5), (5, 7), (6, None), (7, None), (8, None), (9, None)],
)
def test_next(standard, version, expected):
    assert standard.next(version) == expected


@pytest.mark.parametrize(
    "version, present",
    [(0, False), (1, True), (2, False), (3, True), (4, True), (5, False), (6, False), (7, True), (8, False)],
)
def test_up(standard, version, present):
    m = standard.up(version)
    assert (m is not None) == present
    if present:
        assert m.direction == Direction.UP
        assert m.version == version


@pytest.mark.parametrize(
    "version, present",
    [(0, False), (1, True), (2, False), (3, False), (4, True), (5, True), (6, False), (7, True), (8, False)],
)
def test_down(standard, version, present):
    m = standard.down(version)
    assert (m is not None) == present
    if present:
        assert m.direction == Direction.DOWN
        assert m.raw == f"{version}.down"


def test_direction_values():
    assert Direction("up") is Direction.UP
    assert Direction("down") is Direction.DOWN
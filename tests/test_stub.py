import pytest

from schemamigrate.source.driver import list_drivers, open_source
from schemamigrate.source.migration import Direction, Migration, Migrations
from schemamigrate.source.stub import Config, Stub, with_instance

PREV = {3: 1, 4: 3, 5: 4, 7: 5}
NEXT = {1: 3, 3: 4, 4: 5, 5: 7}
UPS = (1, 3, 4, 7)
DOWNS = (1, 4, 5, 7)


@pytest.fixture
def driver():
    d = Stub().open("")
    m = Migrations()
    for versions, direction in ((UPS, Direction.UP), (DOWNS, Direction.DOWN)):
        for version in versions:
            m.append(Migration(version=version, direction=direction))
    d.migrations = m
    return d


def test_first(driver):
    assert driver.first() == 1


@pytest.mark.parametrize("version", range(10))
@pytest.mark.parametrize("method, table", [("prev", PREV), ("next", NEXT)])
def test_steps(driver, method, table, version):
    step = getattr(driver, method)
    if version in table:
        assert step(version) == table[version]
    else:
        with pytest.raises(FileNotFoundError):
            step(version)


@pytest.mark.parametrize("version", range(9))
@pytest.mark.parametrize("word, present", [("up", UPS), ("down", DOWNS)])
def test_reads(driver, word, present, version):
    reader = getattr(driver, f"read_{word}")
    if version in present:
        body, identifier = reader(version)
        with body:
            assert body.read() == b""
        assert identifier == f"{version}.{word}.stub"
    else:
        with pytest.raises(FileNotFoundError):
            reader(version)


def test_body_is_identifier():
    d = Stub().open("stub://")
    d.migrations.append(Migration(version=2, identifier="create users", direction=Direction.UP))
    body, identifier = d.read_up(2)
    assert (body.read(), identifier) == (b"create users", "2.up.stub")


def test_open_sets_url_and_empty_migrations():
    d = Stub().open("stub://somewhere")
    assert d.url == "stub://somewhere"
    assert d.config == Config()
    with pytest.raises(FileNotFoundError):
        d.first()


def test_registered_under_stub():
    assert "stub" in list_drivers()
    d = open_source("stub://x")
    assert isinstance(d, Stub)
    assert d.url == "stub://x"


def test_close_marks_closed():
    d = Stub().open("stub://")
    d.close()
    assert d.closed is True


def test_with_instance():
    cfg = Config()
    d = with_instance("an-instance", cfg)
    assert (d.instance, d.url) == ("an-instance", "")
    assert d.config is cfg
    with pytest.raises(FileNotFoundError):
        d.next(1)
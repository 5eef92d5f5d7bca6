import pytest

from schemamigrate.source.migration import Direction, Migration
from schemamigrate.source.parse import ParseError, parse


@pytest.mark.parametrize(
    "name, expected",
    [
        ("1_foobar.up.sql", Migration(1, "foobar", Direction.UP, "1_foobar.up.sql")),
        ("1_foobar.down.sql", Migration(1, "foobar", Direction.DOWN, "1_foobar.down.sql")),
        ("1_f-o_ob+ar.up.sql", Migration(1, "f-o_ob+ar", Direction.UP, "1_f-o_ob+ar.up.sql")),
        (
            "1485385885_foobar.up.sql",
            Migration(1485385885, "foobar", Direction.UP, "1485385885_foobar.up.sql"),
        ),
        (
            "20170412214116_date_foobar.up.sql",
            Migration(20170412214116, "date_foobar", Direction.UP, "20170412214116_date_foobar.up.sql"),
        ),
    ],
)
def test_parse_valid(name, expected):
    assert parse(name) == expected


@pytest.mark.parametrize(
    "name",
    [
        "-1_foobar.up.sql",
        "foobar.up.sql",
        "1.up.sql",
        "1_foobar.sql",
        "1_foobar.up",
        "1_foobar.down",
        "1_foobar.up.sql\n",
    ],
)
def test_parse_invalid(name):
    with pytest.raises(ParseError, match="no match"):
        parse(name)


def test_parse_version_overflow():
    with pytest.raises(ValueError, match="out of range"):
        parse("99999999999999999999999_x.up.sql")
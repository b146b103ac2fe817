import pytest

from hacfg.model import FetchError, ParseError, split_line
from hacfg.parsers import (
    StatsTimeout,
    Stick,
    StickTable,
    UseBackend,
    UseServer,
    User,
)


def process_line(line, parser):
    parts, comment = split_line(line)
    return parser.parse(line, parts, [], comment)


def rendered(parser):
    return [str(line) for line in parser.result()]


NORMAL_CASES = [
    (StickTable, "stick-table type ip size 1m expire 5m store gpc0,conn_rate(30s)"),
    (StickTable, "stick-table type ip size 1m expire 5m store gpc0,conn_rate(30s) # comment"),
    (StickTable, "stick-table type string len 1000 size 1m expire 5m store gpc0,conn_rate(30s)"),
    (
        StickTable,
        "stick-table type string len 1000 size 1m expire 5m nopurge peers aaaaa store gpc0,conn_rate(30s)",
    ),
    (User, "user tiger password placeholder groups G1"),
    (User, "user panda insecure-password placeholder groups G1,G2"),
    (User, "user bear insecure-password secret groups G2"),
    (User, "user tiger"),
    (StatsTimeout, "stats timeout 4"),
    (StatsTimeout, "stats timeout 4 # comment"),
    (Stick, "stick on src table pop if !localhost"),
    (Stick, "stick match src table pop if !localhost"),
    (Stick, "stick store-request src table pop if !localhost"),
    (Stick, "stick store-response src"),
    (UseBackend, "use_backend test if TRUE"),
    (UseBackend, "use_backend test if TRUE # deny"),
    (UseServer, "use-server www if { req_ssl_sni -i www.example.com }"),
    (UseServer, "use-server www if { req_ssl_sni -i www.example.com } # comment"),
    (UseServer, "use-server www unless local"),
]

FAIL_LINES = {
    StickTable: [
        "stick-table type string len 1000 size 1m expire 5m something peers aaaaa store gpc0,conn_rate(30s)",
        "stick-table type",
        "stick-table",
        "stick-table type ip size",
    ],
    User: ["user"],
    StatsTimeout: ["stats timeout", "stats", "timeout"],
    Stick: ["stick", "stick foo src", "stick on"],
    UseBackend: ["use_backend", "use_backend test"],
    UseServer: ["use-server", "use-server www when x", "use-server www if"],
}

FAIL_CASES = [
    (kind, line)
    for kind, lines in FAIL_LINES.items()
    for line in [*lines, "---", "--- ---"]
]


@pytest.mark.parametrize(("kind", "line"), NORMAL_CASES)
def test_round_trip(kind, line):
    parser = kind()
    assert process_line(line, parser) == ""
    assert rendered(parser) == [line]


@pytest.mark.parametrize(("kind", "line"), FAIL_CASES)
def test_rejected_line_leaves_nothing_to_fetch(kind, line):
    parser = kind()
    with pytest.raises(ParseError):
        process_line(line, parser)
    with pytest.raises(FetchError):
        parser.result()


def test_stick_table_fields():
    parser = StickTable()
    process_line("stick-table type ip nopurge size 1m", parser)
    assert parser.data.type == "ip"
    assert parser.data.size == "1m"
    assert parser.data.no_purge is True
    assert rendered(parser) == ["stick-table type ip size 1m nopurge"]


def test_user_fields_and_groups_without_password():
    parser = User()
    process_line("user panda insecure-password placeholder groups G1,,G2", parser)
    process_line("user tiger groups G3", parser)
    first, second = parser.data
    assert first.is_insecure is True
    assert first.groups == ["G1", "G2"]
    assert second.password == ""
    assert second.groups == ["G3"]
    assert rendered(parser) == [
        "user panda insecure-password placeholder groups G1,G2",
        "user tiger groups G3",
    ]


def test_stick_collects_entries():
    parser = Stick()
    process_line("stick on src table pop if !localhost", parser)
    process_line("stick match dst", parser)
    assert parser.data[0].cond == "if"
    assert parser.data[0].cond_test == "!localhost"
    assert parser.data[0].table == "pop"
    assert rendered(parser) == [
        "stick on src table pop if !localhost",
        "stick match dst",
    ]


def test_use_backend_without_condition_keyword_drops_words():
    parser = UseBackend()
    process_line("use_backend test a b", parser)
    assert rendered(parser) == ["use_backend test"]
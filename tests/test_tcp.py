import pytest

from hacfg.model import ParseError, split_line
from hacfg.tcp import (
    Connection,
    Content,
    InspectDelay,
    Session,
    TCPRequests,
    TCPResponses,
)


def feed(parser, line):
    parts, comment = split_line(line)
    return parser.parse(line, parts, [], comment)


@pytest.mark.parametrize(
    "line",
    [
        "tcp-request content accept if { req_ssl_hello_type 1 }",
        "tcp-request content reject",
        "tcp-request connection reject unless trusted",
        "tcp-request inspect-delay 5s",
    ],
)
def test_request_round_trip(line):
    parser = TCPRequests()
    assert feed(parser, line) == ""
    lines = parser.result()
    assert len(lines) == 1
    assert lines[0].data == line
    assert lines[0].comment == ""


@pytest.mark.parametrize(
    "line",
    [
        "tcp-response content accept if ok",
        "tcp-response inspect-delay 10s",
    ],
)
def test_response_round_trip(line):
    parser = TCPResponses()
    feed(parser, line)
    assert [entry.data for entry in parser.result()] == [line]


def test_comment_is_kept_in_data_and_comment():
    parser = TCPRequests()
    feed(parser, "tcp-request content accept # note")
    (entry,) = parser.result()
    assert entry.data == "tcp-request content accept # note"
    assert entry.comment == "note"


def test_rules_keep_order():
    parser = TCPRequests()
    lines = ["tcp-request inspect-delay 5s", "tcp-request content accept", "tcp-request content reject"]
    for line in lines:
        feed(parser, line)
    assert [entry.data for entry in parser.result()] == lines


def test_session_renders_with_content_keyword():
    parser = TCPRequests()
    feed(parser, "tcp-request session accept if ok")
    assert parser.result()[0].data == "tcp-request content accept if ok"
    assert isinstance(parser.data[0], Session)


def test_empty_result_is_empty_list():
    assert TCPRequests().result() == []
    assert TCPResponses().result() == []


@pytest.mark.parametrize("kind", ["connection", "session"])
def test_backend_rejects_frontend_only_rules(kind):
    parser = TCPRequests(mode="backend")
    with pytest.raises(ParseError):
        feed(parser, f"tcp-request {kind} accept")
    assert parser.data == []


def test_frontend_accepts_connection():
    parser = TCPRequests(mode="frontend")
    assert feed(parser, "tcp-request connection accept") == ""
    assert [entry.data for entry in parser.result()] == ["tcp-request connection accept"]
    assert len(parser.data) == 1
    assert parser.data[0].action == ["accept"]


@pytest.mark.parametrize(
    "line",
    [
        "tcp-request",
        "tcp-request foo accept",
        "tcp-request content",
        "tcp-request content if ok",
        "tcp-request inspect-delay",
        "---",
        "--- ---",
        "tcp-response content accept",
    ],
)
def test_request_failures(line):
    parser = TCPRequests()
    with pytest.raises(ParseError):
        feed(parser, line)
    assert parser.result() == []


@pytest.mark.parametrize(
    "line",
    [
        "tcp-response connection accept",
        "tcp-response session accept",
        "tcp-response",
        "tcp-request content accept",
    ],
)
def test_response_failures(line):
    parser = TCPResponses()
    with pytest.raises(ParseError):
        feed(parser, line)
    assert parser.data == []


def test_connection_parse_fields():
    action = Connection()
    action.parse(["tcp-request", "connection", "reject", "unless", "a", "b"], "")
    assert action.action == ["reject"]
    assert action.cond == "unless"
    assert action.cond_test == "a b"
    assert str(action) == "connection reject unless a b"


def test_content_parse_without_condition():
    action = Content()
    action.parse(["tcp-request", "content", "set-var(txn.x)", "src"], "c")
    assert action.action == ["set-var(txn.x)", "src"]
    assert action.cond == ""
    assert action.comment == "c"
    assert str(action) == "content set-var(txn.x) src # c"


def test_content_parse_too_short():
    with pytest.raises(ParseError):
        Content().parse(["tcp-request", "content"], "")


def test_inspect_delay_parse():
    action = InspectDelay()
    action.parse(["tcp-request", "inspect-delay", "5s"], "")
    assert action.timeout == "5s"
    assert str(action) == "inspect-delay 5s"


def test_inspect_delay_too_short():
    with pytest.raises(ParseError):
        InspectDelay().parse(["tcp-request", "inspect-delay"], "")
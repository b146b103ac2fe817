"""Records produced by the configuration parsers, their errors and tokenising helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence, TypeVar

CONDITION_KEYWORDS = frozenset({"if", "unless"})

T = TypeVar("T")


class ParseError(Exception):
    """Raised when a parser cannot accept a configuration line."""

    def __init__(self, parser: str, line: str = "", message: str = "") -> None:
        self.parser = parser
        self.line = line
        self.message = message
        text = f"{parser}: cannot parse line [{line}]"
        if message:
            text = f"{text}: {message}"
        super().__init__(text)


class FetchError(LookupError):
    """Raised when a parser is asked for a result it does not hold."""

    def __init__(self, message: str = "no data to fetch") -> None:
        super().__init__(message)


@dataclass
class ResultLine:
    """One rendered configuration line with its optional trailing comment."""

    data: str
    comment: str = ""

    def __str__(self) -> str:
        if self.comment:
            return f"{self.data} # {self.comment}"
        return self.data


@dataclass
class StringC:
    value: str
    comment: str = ""


@dataclass
class Int64C:
    value: int
    comment: str = ""


@dataclass
class SimpleOption:
    no_option: bool = False
    comment: str = ""


@dataclass
class SimpleTimeout(StringC):
    """The value of a ``timeout`` directive."""


@dataclass
class StickTableData:
    type: str
    length: str = ""
    size: str = ""
    expire: str = ""
    no_purge: bool = False
    peers: str = ""
    store: str = ""
    comment: str = ""


@dataclass
class StickData:
    type: str = ""
    pattern: str = ""
    table: str = ""
    cond: str = ""
    cond_test: str = ""
    comment: str = ""


@dataclass
class UseBackendData:
    name: str
    cond: str = ""
    cond_test: str = ""
    comment: str = ""


@dataclass
class UseServerData(UseBackendData):
    """A ``use-server`` rule: a server name and its condition."""


@dataclass
class UserData:
    name: str
    password: str = ""
    is_insecure: bool = False
    groups: list[str] = field(default_factory=list)
    comment: str = ""


def split_request(parts: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split words into the command and the condition starting at "if" or "unless"."""
    for position, word in enumerate(parts):
        if word in CONDITION_KEYWORDS:
            return list(parts[:position]), list(parts[position:])
    return list(parts), []


def split_line(line: str) -> tuple[list[str], str]:
    """Split a configuration line into its words and its trailing comment."""
    data, _, comment = line.strip().partition("#")
    return data.split(), comment.strip()


def split_ignore_empty(value: str, separator: str) -> list[str]:
    """Split on a separator, dropping empty pieces."""
    return [piece for piece in value.split(separator) if piece]


def first_word(parts: Sequence[str]) -> str:
    """The first word of a line, or an empty string for an empty line."""
    return parts[0] if parts else ""


def condition_fields(condition: Sequence[str]) -> tuple[str, str]:
    """The condition keyword and its test, or two empty strings when absent."""
    if len(condition) > 1:
        return condition[0], " ".join(condition[1:])
    return "", ""


def fetched(data: Optional[T]) -> T:
    """Return the held data, raising FetchError when there is none."""
    if not data:
        raise FetchError()
    return data


def single_line(name: str, data) -> list[ResultLine]:
    """Render ``<name> <value>`` for a parser holding one value."""
    held = fetched(data)
    return [ResultLine(f"{name} {held.value}", held.comment)]


def render_all(entries: Iterable[T], render: Callable[[T], str]) -> list[ResultLine]:
    """Render every held entry, raising FetchError when there are none."""
    return [ResultLine(render(entry), entry.comment) for entry in fetched(list(entries))]
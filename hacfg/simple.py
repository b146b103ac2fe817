"""Parsers for single-valued configuration directives."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

from hacfg.model import (
    Int64C,
    ParseError,
    ResultLine,
    SimpleOption,
    SimpleTimeout,
    StringC,
    fetched,
    first_word,
    single_line,
)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_DECIMAL = re.compile(r"[+-]?[0-9]+")


def _parse_int64(text: str) -> int:
    if not _DECIMAL.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text, 10)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return value


def _strip_prefix(prefix: str, keyword: str) -> str:
    return keyword[len(prefix) + 1:] if keyword.startswith(f"{prefix} ") else keyword


def _check_keyword(name: str, label: str, line: str, parts: Sequence[str]) -> None:
    """Raise unless the line starts with ``name`` and carries a value."""
    if first_word(parts) != name:
        raise ParseError(name, line)
    if len(parts) < 2:
        raise ParseError(label, line, "Parse error")


@dataclass
class Number:
    """A directive holding one signed 64-bit integer, such as ``retries 3``."""

    name: str
    data: Optional[Int64C] = field(default=None, init=False)

    def parse(self, line: str, parts: Sequence[str], previous_parts: Sequence[str], comment: str) -> str:
        _check_keyword(self.name, "Number", line, parts)
        try:
            value = _parse_int64(parts[1])
        except ValueError as exc:
            raise ParseError("Number", line, str(exc)) from exc
        self.data = Int64C(value, comment)
        return ""

    def result(self) -> list[ResultLine]:
        return single_line(self.name, self.data)


@dataclass
class String:
    """A directive whose value is the rest of the line, words joined by spaces."""

    name: str
    data: Optional[StringC] = field(default=None, init=False)

    def parse(self, line: str, parts: Sequence[str], previous_parts: Sequence[str], comment: str) -> str:
        _check_keyword(self.name, "String", line, parts)
        self.data = StringC(" ".join(parts[1:]), comment)
        return ""

    def result(self) -> list[ResultLine]:
        return single_line(self.name, self.data)


@dataclass
class Time:
    """A directive holding one time value."""

    name: str
    data: Optional[StringC] = field(default=None, init=False)

    def parse(self, line: str, parts: Sequence[str], previous_parts: Sequence[str], comment: str) -> str:
        _check_keyword(self.name, "Time", line, parts)
        self.data = StringC(parts[1], comment)
        return ""

    def result(self) -> list[ResultLine]:
        return single_line(self.name, self.data)


@dataclass
class Word:
    """A directive holding a single word."""

    name: str
    data: Optional[StringC] = field(default=None, init=False)

    def parse(self, line: str, parts: Sequence[str], previous_parts: Sequence[str], comment: str) -> str:
        _check_keyword(self.name, "Word", line, parts)
        self.data = StringC(parts[1], comment)
        return ""

    def result(self) -> list[ResultLine]:
        return single_line(self.name, self.data)


@dataclass
class Option:
    """An ``option <keyword>`` flag, possibly negated with ``no option``."""

    keyword: str
    name: str = field(init=False)
    data: Optional[SimpleOption] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.keyword = _strip_prefix("option", self.keyword)
        self.name = f"option {self.keyword}"

    def parse(self, line: str, parts: Sequence[str], previous_parts: Sequence[str], comment: str) -> str:
        words = list(parts)
        negated = words[:1] == ["no"]
        if negated:
            words = words[1:]
        if len(words) > 1 and words[0] == "option" and words[1] == self.keyword:
            self.data = SimpleOption(no_option=negated, comment=comment)
            return ""
        raise ParseError(self.name, line)

    def result(self) -> list[ResultLine]:
        data = fetched(self.data)
        prefix = "no " if data.no_option else ""
        return [ResultLine(f"{prefix}{self.name}", data.comment)]


@dataclass
class TimeTwoWords:
    """A time value introduced by two keywords, such as ``hold valid 10s``."""

    keywords: Sequence[str]
    name: str = field(init=False)
    data: Optional[StringC] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.keywords = list(self.keywords)
        if len(self.keywords) != 2:
            raise ValueError("exactly two keywords are required")
        self.name = " ".join(self.keywords)

    def parse(self, line: str, parts: Sequence[str], previous_parts: Sequence[str], comment: str) -> str:
        if len(parts) >= 2 and list(parts[:2]) == self.keywords:
            if len(parts) < 3:
                raise ParseError("TimeTwoWords", line, "Parse error")
            self.data = StringC(parts[2], comment)
            return ""
        raise ParseError(self.name, line)

    def result(self) -> list[ResultLine]:
        return single_line(self.name, self.data)


@dataclass
class Timeout:
    """A ``timeout <keyword> <value>`` directive."""

    keyword: str
    name: str = field(init=False)
    data: Optional[SimpleTimeout] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.keyword = _strip_prefix("timeout", self.keyword)
        self.name = f"timeout {self.keyword}"

    def parse(self, line: str, parts: Sequence[str], previous_parts: Sequence[str], comment: str) -> str:
        if len(parts) > 2 and parts[0] == "timeout" and parts[1] == self.keyword:
            self.data = SimpleTimeout(parts[2], comment)
            return ""
        raise ParseError(self.name, line)

    def result(self) -> list[ResultLine]:
        return single_line(self.name, self.data)
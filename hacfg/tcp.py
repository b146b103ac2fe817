"""Parsers for the ``tcp-request`` and ``tcp-response`` rule lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Sequence, Union

from hacfg.model import ParseError, ResultLine, split_request


def _with_comment(text: str, comment: str) -> str:
    return f"{text} # {comment}" if comment else text


def _not_enough(rule: object, parts: Sequence[str]) -> ParseError:
    return ParseError(type(rule).__name__, " ".join(parts), "not enough params")


@dataclass
class _ConditionalAction:
    """A rule made of an action and an optional ``if``/``unless`` condition."""

    action: list[str] = field(default_factory=list)
    cond: str = ""
    cond_test: str = ""
    comment: str = ""

    def _fill(self, parts: Sequence[str], comment: str) -> None:
        if comment:
            self.comment = comment
        command, condition = split_request(parts[2:]) if len(parts) >= 3 else ([], [])
        if not command:
            raise _not_enough(self, parts)
        self.action = command
        if len(condition) > 1:
            self.cond = condition[0]
            self.cond_test = " ".join(condition[1:])

    def _render(self, keyword: str) -> str:
        text = f"{keyword} {' '.join(self.action)}"
        if self.cond:
            text += f" {self.cond} {self.cond_test}"
        return _with_comment(text, self.comment)


class Connection(_ConditionalAction):
    """A ``tcp-request connection`` rule."""

    def parse(self, parts: Sequence[str], comment: str) -> None:
        """Fill the rule from the words of a full ``tcp-request`` line."""
        self._fill(parts, comment)

    def __str__(self) -> str:
        return self._render("connection")


class Content(_ConditionalAction):
    """A ``tcp-request content`` or ``tcp-response content`` rule."""

    def parse(self, parts: Sequence[str], comment: str) -> None:
        """Fill the rule from the words of a full line."""
        self._fill(parts, comment)

    def __str__(self) -> str:
        return self._render("content")


class Session(_ConditionalAction):
    """A ``tcp-request session`` rule; it renders with the ``content`` keyword."""

    def parse(self, parts: Sequence[str], comment: str) -> None:
        """Fill the rule from the words of a full ``tcp-request`` line."""
        self._fill(parts, comment)

    def __str__(self) -> str:
        return self._render("content")


@dataclass
class InspectDelay:
    """An ``inspect-delay <timeout>`` rule."""

    timeout: str = ""
    comment: str = ""

    def parse(self, parts: Sequence[str], comment: str) -> None:
        """Fill the rule from the words of a full line."""
        if comment:
            self.comment = comment
        if len(parts) < 3:
            raise _not_enough(self, parts)
        self.timeout = parts[2]

    def __str__(self) -> str:
        return _with_comment(f"inspect-delay {self.timeout}", self.comment)


TCPAction = Union[Connection, Content, Session, InspectDelay]


@dataclass
class _TCPRules:
    """A list of rules introduced by one directive keyword."""

    name: ClassVar[str] = ""
    kinds: ClassVar[dict[str, type]] = {}
    frontend_only: ClassVar[frozenset[str]] = frozenset()

    mode: str = ""
    data: list[TCPAction] = field(default_factory=list, init=False)

    def _parse_rule(self, line: str, parts: Sequence[str], comment: str) -> str:
        label = type(self).__name__
        if len(parts) < 2 or parts[0] != self.name:
            raise ParseError(label, line)
        kind = self.kinds.get(parts[1])
        if kind is None or (parts[1] in self.frontend_only and self.mode == "backend"):
            raise ParseError(label, line)
        rule = kind()
        try:
            rule.parse(parts, comment)
        except ParseError as exc:
            raise ParseError(label, "") from exc
        self.data.append(rule)
        return ""

    def _lines(self) -> list[ResultLine]:
        return [ResultLine(f"{self.name} {rule}", rule.comment) for rule in self.data]


class TCPRequests(_TCPRules):
    """The list of ``tcp-request`` rules of a frontend or backend."""

    name = "tcp-request"
    kinds = {
        "connection": Connection,
        "session": Session,
        "content": Content,
        "inspect-delay": InspectDelay,
    }
    frontend_only = frozenset({"connection", "session"})

    def parse(self, line: str, parts: Sequence[str], previous_parts: Sequence[str], comment: str) -> str:
        return self._parse_rule(line, parts, comment)

    def result(self) -> list[ResultLine]:
        return self._lines()


class TCPResponses(_TCPRules):
    """The list of ``tcp-response`` rules of a backend."""

    name = "tcp-response"
    kinds = {
        "content": Content,
        "inspect-delay": InspectDelay,
    }

    def parse(self, line: str, parts: Sequence[str], previous_parts: Sequence[str], comment: str) -> str:
        return self._parse_rule(line, parts, comment)

    def result(self) -> list[ResultLine]:
        return self._lines()
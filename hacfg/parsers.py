"""Parsers for stats, stick, backend/server selection and userlist directives."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from hacfg.model import (
    ParseError,
    ResultLine,
    StickData,
    StickTableData,
    StringC,
    UseBackendData,
    UseServerData,
    UserData,
    condition_fields,
    fetched,
    first_word,
    render_all,
    single_line,
    split_ignore_empty,
    split_request,
)

_STICK_TYPES = frozenset({"match", "on", "store-request", "store-response"})
_NO_PURGE = "nopurge"
# Keywords in rendering order, with the record field holding each value.
_STICK_TABLE_FIELDS = {
    "len": "length",
    "size": "size",
    "expire": "expire",
    _NO_PURGE: "no_purge",
    "peers": "peers",
    "store": "store",
}


def _with_condition(text: str, cond: str, cond_test: str) -> str:
    return f"{text} {cond} {cond_test}" if cond else text


@dataclass
class StatsTimeout:
    """The ``stats timeout <value>`` directive."""

    data: Optional[StringC] = field(default=None, init=False)

    def parse(self, line: str, parts: Sequence[str], previous_parts: Sequence[str], comment: str) -> str:
        if list(parts[:2]) != ["stats", "timeout"]:
            raise ParseError("StatsTimeout", line)
        if len(parts) < 3:
            raise ParseError("StatsTimeout", line, "Parse error")
        self.data = StringC(parts[2], comment)
        return ""

    def result(self) -> list[ResultLine]:
        return single_line("stats timeout", self.data)


@dataclass
class StickTable:
    """The ``stick-table type <type> ...`` directive."""

    data: Optional[StickTableData] = field(default=None, init=False)

    @staticmethod
    def _parse(line: str, parts: Sequence[str], comment: str) -> StickTableData:
        if len(parts) < 3 or parts[0] != "stick-table" or parts[1] != "type":
            raise ParseError("StickTable", line)
        data = StickTableData(type=parts[2], comment=comment)
        words = iter(parts[3:])
        for word in words:
            if word not in _STICK_TABLE_FIELDS:
                raise ParseError("StickTable", line)
            value = True if word == _NO_PURGE else next(words, None)
            if value is None:
                raise ParseError("StickTable", line)
            setattr(data, _STICK_TABLE_FIELDS[word], value)
        return data

    def parse(self, line: str, parts: Sequence[str], previous_parts: Sequence[str], comment: str) -> str:
        if first_word(parts) != "stick-table":
            raise ParseError("StickTable", line)
        self.data = self._parse(line, parts, comment)
        return ""

    def result(self) -> list[ResultLine]:
        req = fetched(self.data)
        words = ["stick-table", "type", req.type]
        for keyword, attribute in _STICK_TABLE_FIELDS.items():
            value = getattr(req, attribute)
            if value is True:
                words.append(keyword)
            elif value:
                words += [keyword, value]
        return [ResultLine(" ".join(words), req.comment)]


@dataclass
class Stick:
    """The ``stick match|on|store-request|store-response`` directives."""

    data: list[StickData] = field(default_factory=list, init=False)

    def parse(self, line: str, parts: Sequence[str], previous_parts: Sequence[str], comment: str) -> str:
        if len(parts) < 2 or parts[0] != "stick" or parts[1] not in _STICK_TYPES:
            raise ParseError("Stick", line)
        command, condition = split_request(parts[2:])
        if not command:
            raise ParseError("Stick", line)
        cond, cond_test = condition_fields(condition)
        self.data.append(
            StickData(
                type=parts[1],
                pattern=command[0],
                table=command[2] if len(command) > 2 else "",
                cond=cond,
                cond_test=cond_test,
                comment=comment,
            )
        )
        return ""

    @staticmethod
    def _render(req: StickData) -> str:
        text = f"stick {req.type} {req.pattern}"
        if req.table:
            text += f" table {req.table}"
        return _with_condition(text, req.cond, req.cond_test)

    def result(self) -> list[ResultLine]:
        return render_all(self.data, self._render)


@dataclass
class UseBackend:
    """The ``use_backend <name> if|unless <condition>`` directive."""

    data: list[UseBackendData] = field(default_factory=list, init=False)

    def parse(self, line: str, parts: Sequence[str], previous_parts: Sequence[str], comment: str) -> str:
        if first_word(parts) != "use_backend" or len(parts) < 4:
            raise ParseError("UseBackend", line)
        _, condition = split_request(parts[2:])
        cond, cond_test = condition_fields(condition)
        self.data.append(UseBackendData(parts[1], cond, cond_test, comment))
        return ""

    def result(self) -> list[ResultLine]:
        return render_all(
            self.data, lambda req: _with_condition(f"use_backend {req.name}", req.cond, req.cond_test)
        )


@dataclass
class UseServer:
    """The ``use-server <name> if|unless <condition>`` directive."""

    data: list[UseServerData] = field(default_factory=list, init=False)

    def parse(self, line: str, parts: Sequence[str], previous_parts: Sequence[str], comment: str) -> str:
        if len(parts) > 3 and parts[0] == "use-server" and parts[2] in ("if", "unless"):
            self.data.append(UseServerData(parts[1], parts[2], " ".join(parts[3:]), comment))
            return ""
        raise ParseError("UseServer", line)

    def result(self) -> list[ResultLine]:
        return render_all(
            self.data, lambda entry: f"use-server {entry.name} {entry.cond} {entry.cond_test}"
        )


@dataclass
class User:
    """The ``user <name> [password|insecure-password <pwd>] [groups <list>]`` directive."""

    data: list[UserData] = field(default_factory=list, init=False)

    @staticmethod
    def _parse(line: str, parts: Sequence[str], comment: str) -> UserData:
        if first_word(parts) != "user" or len(parts) < 2:
            raise ParseError("User", line)
        user = UserData(name=parts[1], comment=comment)
        index = 3
        if len(parts) > index and parts[2] in ("password", "insecure-password"):
            user.password = parts[3]
            user.is_insecure = parts[2] == "insecure-password"
            index += 2
        if len(parts) > index:
            user.groups = split_ignore_empty(parts[index], ",")
        return user

    def parse(self, line: str, parts: Sequence[str], previous_parts: Sequence[str], comment: str) -> str:
        self.data.append(self._parse(line, parts, comment))
        return ""

    @staticmethod
    def _render(user: UserData) -> str:
        words = ["user", user.name]
        if user.password:
            words += ["insecure-password" if user.is_insecure else "password", user.password]
        if user.groups:
            words += ["groups", ",".join(user.groups)]
        return " ".join(words)

    def result(self) -> list[ResultLine]:
        return render_all(self.data, self._render)
# hacfg

This package provides parsers for single HAProxy configuration directives.
Each parser takes a line that has already been split into words. It checks
the line and keeps what it understood. It can then write the directive back
out in its canonical form.

## Installing

    pip install .

To install the test tools as well:

    pip install ".[test]"

## Usage

`hacfg.model.split_line` splits a line into its words and a trailing
comment. The words then go to a parser's
`parse(line, parts, previous_parts, comment)`:

```python
from hacfg.model import split_line
from hacfg.parsers import StickTable

line = "stick-table type ip size 1m expire 5m store gpc0,conn_rate(30s) # comment"
parts, comment = split_line(line)

parser = StickTable()
parser.parse(line, parts, [], comment)

for entry in parser.result():
    print(entry.data, entry.comment)
    print(str(entry))  # "<data> # <comment>", or just the data when there is no comment
```

`result()` returns a list of `hacfg.model.ResultLine` objects. Each one has a
`data` field and a `comment` field.

A parser raises `hacfg.model.ParseError` when it is given a line it does not
accept. `result()` raises `hacfg.model.FetchError` when the parser holds
nothing. `TCPRequests` and `TCPResponses` behave differently: when they hold
no rules, they return an empty list.

## Available parsers

### `hacfg.simple`

These parsers handle directives that hold a single value. Each is built
around the keyword it answers to:

- `Number("retries")` accepts `retries 3`. The value must be a signed 64-bit
  decimal integer.
- `String("log-format")` accepts the keyword followed by the rest of the
  line, with the words joined by single spaces.
- `Word("log-tag")` and `Time("...")` accept the keyword followed by one
  word.
- `Option("httpclose")` accepts `option httpclose` and `no option httpclose`.
- `Timeout("client")` accepts `timeout client 30s`.
- `TimeTwoWords(["hold", "valid"])` accepts `hold valid 10s`. It must be
  given exactly two keywords.

`Option` and `Timeout` also accept a keyword that already carries its
`option ` or `timeout ` prefix.

### `hacfg.parsers`

- `StatsTimeout` parses `stats timeout <value>`.
- `StickTable` parses `stick-table type <type>`, optionally followed by
  `len`, `size`, `expire`, `nopurge`, `peers` and `store`. Any other word is
  rejected. When written back, the options come out in that order.
- `Stick` parses `stick match|on|store-request|store-response <pattern>
  [table <name>] [if|unless <condition>]`.
- `UseBackend` parses `use_backend <name> if|unless <condition>`.
- `UseServer` parses `use-server <name> if|unless <condition>`.
- `User` parses `user <name> [password|insecure-password <pwd>] [groups
  <g1,g2>]`.

`StatsTimeout` and `StickTable` keep only the last line they parsed. `Stick`,
`UseBackend`, `UseServer` and `User` collect every line they are given, and
`result()` returns one entry per line in the order the lines were parsed.

### `hacfg.tcp`

- `TCPRequests` accepts `tcp-request connection|session|content|inspect-delay`
  rules. If it is created with `mode="backend"`, it rejects `connection` and
  `session` rules.
- `TCPResponses` accepts `tcp-response content|inspect-delay` rules.

Each rule is kept as a `Connection`, `Content`, `Session` or `InspectDelay`
object. `str()` of a rule gives its text, followed by ` # <comment>` when the
rule has a comment. A `Session` rule is written with the `content` keyword.
The `data` of each result line is the directive name followed by the rule's
text, so any comment also appears in `data`.

### Helpers in `hacfg.model`

- `split_line(line)` returns the words of a line and its trailing comment.
- `split_request(parts)` splits words into a command and a condition. The
  condition starts at the first `if` or `unless`.
- `split_ignore_empty(value, separator)` splits a string and drops the empty
  pieces.

## What it does not do

The package works one directive at a time. It does not read or write whole
configuration files. It does not track sections such as `global`, `defaults`,
`frontend` or `backend`, and it does not decide which parser a line belongs
to. Directives that have no parser listed above, such as `bind`, `server`,
`acl` or `http-request`, are not handled.

## Running the tests

    pytest
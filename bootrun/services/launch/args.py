"""
Launch argument collections.

``tokenize`` splits a free-form argument string the way the build tool's
command-line translator does; RunArguments and EnvVariables hold the
ordered values handed to the launched program.
"""

import re
from collections import deque
from collections.abc import Iterable, Mapping

from ...core.exceptions import ParseError

_NORMAL, _IN_QUOTE, _IN_DOUBLE_QUOTE = 0, 1, 2
_DELIMITERS = re.compile(r"""(['" ])""")


def tokenize(arguments: str | None) -> list[str]:
    """
    Split ``arguments`` into tokens, honouring single and double quotes.

    Whitespace inside quotes is kept, quoted and unquoted pieces of one
    token are joined (``--x="a b"`` gives ``--x=a b``) and a bare ``""``
    yields an empty token. Newlines and tabs count as spaces.

    Raises:
        ParseError: If a quote is left unterminated
    """
    if arguments is None or not arguments.strip():
        return []

    normalized = arguments.replace("\n", " ").replace("\t", " ")
    tokens: list[str] = []
    current: list[str] = []
    state = _NORMAL
    last_token_quoted = False

    for piece in _DELIMITERS.split(normalized):
        if not piece:
            continue
        if state == _IN_QUOTE:
            if piece == "'":
                last_token_quoted = True
                state = _NORMAL
            else:
                current.append(piece)
        elif state == _IN_DOUBLE_QUOTE:
            if piece == '"':
                last_token_quoted = True
                state = _NORMAL
            else:
                current.append(piece)
        else:
            if piece == "'":
                state = _IN_QUOTE
            elif piece == '"':
                state = _IN_DOUBLE_QUOTE
            elif piece == " ":
                if last_token_quoted or current:
                    tokens.append("".join(current))
                    current = []
            else:
                current.append(piece)
            last_token_quoted = False

    if last_token_quoted or current:
        tokens.append("".join(current))

    if state != _NORMAL:
        raise ParseError(
            f"Failed to parse arguments [{normalized}]: unbalanced quotes",
            arguments=normalized,
        )
    return tokens


def format_system_property(key: str | None, value: str | None) -> str:
    """Render one system property as a JVM flag."""
    if key is None:
        return ""
    if value is None or value == "":
        return f"-D{key}"
    return f'-D{key}="{value}"'


class RunArguments:
    """Ordered arguments, built from a list or parsed from a single string."""

    def __init__(self, arguments: Iterable[str | None] | str | None = None) -> None:
        if isinstance(arguments, str):
            arguments = tokenize(arguments)
        self.args: deque[str] = deque(a for a in (arguments or ()) if a is not None)

    def prepend(self, argument: str) -> None:
        self.args.appendleft(argument)

    def append(self, argument: str) -> None:
        self.args.append(argument)

    def as_list(self) -> list[str]:
        return list(self.args)

    def __len__(self) -> int:
        return len(self.args)

    def __repr__(self) -> str:
        return f"RunArguments({list(self.args)!r})"


class EnvVariables:
    """Environment variables for the forked process, in insertion order."""

    def __init__(self, variables: Mapping[str, str | None] | None = None) -> None:
        self.variables: dict[str, str] = {
            key: "" if value is None else value for key, value in (variables or {}).items()
        }

    def as_dict(self) -> dict[str, str]:
        return dict(self.variables)

    def as_list(self) -> list[str]:
        """``KEY=value`` entries, for logging."""
        return [f"{key}={value}" for key, value in self.variables.items()]

    def __len__(self) -> int:
        return len(self.variables)

"""Path pattern compilation.

Supported syntax::

    /users                 literal
    /users/:id             named parameter, one segment
    /users/:id(\\d+)        named parameter with a custom pattern
    /users/{id}            named parameter, brace style
    /users/{id:int}        typed parameter (see ``params.CONVERTERS``)
    /files/{rest:path}     catch-all parameter
    /foo/(.*)              unnamed group, captured as "0", "1", ...

Everything else is matched literally.
"""

import re
from dataclasses import dataclass
from urllib.parse import quote

from roost.errors import ConfigurationError
from roost.routing.params import DEFAULT_PATTERN, converter_pattern

_TOKEN = re.compile(
    r"""
      :(?P<name>[A-Za-z_]\w*)(?:\((?P<name_re>(?:\\.|[^\\()])+)\))?
    | \{(?P<brace>[A-Za-z_]\w*)(?::(?P<type>\w+))?\}
    | \((?P<group>(?:\\.|[^\\()])+)\)
    """,
    re.VERBOSE,
)


@dataclass(frozen=True, slots=True)
class PathParam:
    """A parameter token in a parsed path."""

    name: str
    pattern: str


type Token = str | PathParam


def tokenize(path: str) -> tuple[Token, ...]:
    """Split *path* into literal strings and ``PathParam`` tokens.

    Examples::

        "/users"          -> ("/users",)
        "/users/:id"      -> ("/users/", PathParam("id", "[^/]+"))
        "/a/(.*)"         -> ("/a/", PathParam("0", ".*"))
    """
    tokens: list[Token] = []
    position = 0
    unnamed = 0
    for m in _TOKEN.finditer(path):
        if m.start() > position:
            tokens.append(path[position : m.start()])
        if m.group("name"):
            tokens.append(PathParam(m.group("name"), m.group("name_re") or DEFAULT_PATTERN))
        elif m.group("brace"):
            tokens.append(
                PathParam(m.group("brace"), converter_pattern(m.group("type") or "str", path))
            )
        else:
            tokens.append(PathParam(str(unnamed), m.group("group")))
            unnamed += 1
        position = m.end()
    if position < len(path):
        tokens.append(path[position:])
    return tuple(tokens)


@dataclass(frozen=True, slots=True)
class CompiledPath:
    """A path pattern compiled to a regex.

    ``end=True`` patterns must match the whole request path; ``end=False``
    patterns match a prefix ending at a segment boundary.
    """

    path: str
    tokens: tuple[Token, ...]
    regex: re.Pattern[str]

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(t.name for t in self.tokens if isinstance(t, PathParam))

    def match(self, path: str) -> dict[str, str] | None:
        """Return the captured parameters, or ``None`` if *path* doesn't match."""
        m = self.regex.match(path)
        if m is None:
            return None
        captured = (m.group(_group_name(i)) for i in range(len(self.keys)))
        return {key: value for key, value in zip(self.keys, captured) if value is not None}

    def build(self, params: dict[str, object] | None = None) -> str:
        """Substitute *params* into the pattern to produce a concrete path.

        Raises ``ConfigurationError`` for a missing parameter or a value
        the parameter's pattern would not match.
        """
        params = params or {}
        parts: list[str] = []
        for token in self.tokens:
            if isinstance(token, str):
                parts.append(token)
                continue
            if token.name not in params:
                msg = f"Missing parameter {token.name!r} to build {self.path!r}"
                raise ConfigurationError(msg)
            value = str(params[token.name])
            if not re.fullmatch(token.pattern, value):
                msg = f"Value {value!r} does not match parameter {token.name!r} of {self.path!r}"
                raise ConfigurationError(msg)
            parts.append(quote(value, safe="/" if token.pattern in (".+", ".*") else ""))
        return "".join(parts) or "/"


def _group_name(index: int) -> str:
    # Keys like "0" are not valid group names
    return f"_p{index}"


def compile_path(
    path: str,
    *,
    end: bool = True,
    strict: bool = False,
    sensitive: bool = False,
) -> CompiledPath:
    """Compile *path* into a ``CompiledPath``.

    Without ``strict`` a trailing slash is optional. Without
    ``sensitive`` literal segments match case-insensitively.
    """
    tokens = tokenize(path)
    match_tokens = tokens
    if not strict and tokens and isinstance(tokens[-1], str) and tokens[-1].endswith("/"):
        trimmed = tokens[-1][:-1]
        match_tokens = (*tokens[:-1], trimmed) if trimmed else tokens[:-1]

    parts: list[str] = []
    index = 0
    for token in match_tokens:
        if isinstance(token, str):
            parts.append(re.escape(token))
            continue
        if token.pattern.startswith("?"):
            msg = f"Invalid route pattern {path!r}: group ({token.pattern}) does not capture"
            raise ConfigurationError(msg)
        parts.append(f"(?P<{_group_name(index)}>{token.pattern})")
        index += 1
    body = "".join(parts)
    if end:
        tail = "$" if strict else "/?$"
    else:
        tail = "" if strict and body.endswith("/") else "(?=/|$)"

    flags = 0 if sensitive else re.IGNORECASE
    try:
        regex = re.compile(f"^{body}{tail}", flags)
    except re.error as exc:
        msg = f"Invalid route pattern {path!r}: {exc}"
        raise ConfigurationError(msg) from exc
    return CompiledPath(path=path, tokens=tokens, regex=regex)

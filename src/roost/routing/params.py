"""Path parameter converters.

Built-in converters for typed segments like ``{id:int}``. Values stay
strings; the converter only constrains what the segment matches.
"""

from roost.errors import ConfigurationError

# Regex pattern for each supported converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}

# Pattern for ``:name`` parameters without an explicit ``(regex)``
DEFAULT_PATTERN = CONVERTERS["str"]


def converter_pattern(param_type: str, path: str) -> str:
    """Return the regex for *param_type*.

    Raises ``ConfigurationError`` naming *path* for unknown converters.
    """
    try:
        return CONVERTERS[param_type]
    except KeyError:
        known = ", ".join(sorted(CONVERTERS))
        msg = f"Unknown converter {param_type!r} in route {path!r}. Known converters: {known}"
        raise ConfigurationError(msg) from None

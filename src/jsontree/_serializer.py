"""
JSON serializer with configurable newline and indentation policy.

Pretty mode puts every container child on its own line, indented one unit
per nesting level. Compact mode emits the whole document on one line with no
insignificant whitespace.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final
from typing import assert_never

from jsontree._errors import SerializeError
from jsontree._errors import SerializeErrorKind
from jsontree._model import JsonArray
from jsontree._model import JsonBool
from jsontree._model import JsonNull
from jsontree._model import JsonNumber
from jsontree._model import JsonObject
from jsontree._model import JsonString
from jsontree._model import JsonValue
from jsontree._model import is_json_value
from jsontree._parser import DEFAULT_MAX_DEPTH
from jsontree._profiling import ProfileContext

_ASCII_LIMIT: Final = 0x7F
_ESCAPED: Final = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


class NewlineKind(Enum):
    """Line terminator written between structural elements."""

    LF = "\n"
    CRLF = "\r\n"
    CR = "\r"
    NONE = ""


class IndentStyle(Enum):
    SPACE = "space"
    TAB = "tab"
    NONE = "none"


@dataclass(frozen=True)
class Indent:
    """
    Unit of indentation repeated once per nesting level.

    Build with ``Indent.space(width)``, ``Indent.tab()`` or ``Indent.none()``.
    The width is validated when the indent is used by the serializer.
    """

    style: IndentStyle
    width: int = 0

    @classmethod
    def space(cls, width: int) -> "Indent":
        return cls(IndentStyle.SPACE, width)

    @classmethod
    def tab(cls) -> "Indent":
        return cls(IndentStyle.TAB, 1)

    @classmethod
    def none(cls) -> "Indent":
        return cls(IndentStyle.NONE)

    @property
    def unit(self) -> str:
        if self.style is IndentStyle.SPACE:
            return " " * self.width
        elif self.style is IndentStyle.TAB:
            return "\t"
        else:
            return ""


def _invalid_config(msg: str) -> SerializeError:
    return SerializeError(SerializeErrorKind.INVALID_CONFIG, msg)


@dataclass(frozen=True)
class SerializeConfig:
    """
    Configures JSON serialization with immutable settings.

    Compact output is selected by NewlineKind.NONE, Indent.none() or a
    zero-width space indent.
    """

    newline: NewlineKind = NewlineKind.LF
    indent: Indent = Indent.space(4)
    ensure_ascii: bool = False
    sort_keys: bool = False
    trailing_newline: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if isinstance(self.indent, int) and not isinstance(self.indent, bool):
            object.__setattr__(self, "indent", Indent.space(self.indent))
        if not isinstance(self.newline, NewlineKind):
            raise _invalid_config(
                f"newline must be a NewlineKind, not {self.newline!r}"
            )
        if not isinstance(self.indent, Indent) or not isinstance(
            self.indent.style, IndentStyle
        ):
            raise _invalid_config(
                f"indent must be an Indent or an int, not {self.indent!r}"
            )
        width = self.indent.width
        if isinstance(width, bool) or not isinstance(width, int) or width < 0:
            raise _invalid_config(
                f"indent width must be a non-negative integer, not {width!r}"
            )
        for flag in ("ensure_ascii", "sort_keys", "trailing_newline"):
            if not isinstance(getattr(self, flag), bool):
                raise _invalid_config(f"{flag} must be a boolean")
        if (
            isinstance(self.max_depth, bool)
            or not isinstance(self.max_depth, int)
            or self.max_depth < 1
        ):
            raise _invalid_config("max_depth must be a positive integer")

    @property
    def compact(self) -> bool:
        return (
            self.newline is NewlineKind.NONE
            or self.indent.style is IndentStyle.NONE
            or (self.indent.style is IndentStyle.SPACE and self.indent.width == 0)
        )


def _encode_string(s: str, ensure_ascii: bool) -> str:
    """Encode string with proper escape sequences."""
    result = ['"']
    for char in s:
        escaped = _ESCAPED.get(char)
        if escaped is not None:
            result.append(escaped)
        elif char < " ":
            result.append(f"\\u{ord(char):04x}")
        elif ensure_ascii and ord(char) > _ASCII_LIMIT:
            code_point = ord(char)
            if code_point > 0xFFFF:
                code_point -= 0x10000
                high = 0xD800 | (code_point >> 10)
                low = 0xDC00 | (code_point & 0x3FF)
                result.append(f"\\u{high:04x}\\u{low:04x}")
            else:
                result.append(f"\\u{code_point:04x}")
        else:
            result.append(char)
    result.append('"')
    return "".join(result)


def _join_container(
    opening: str,
    closing: str,
    items: list[str],
    config: SerializeConfig,
    level: int,
) -> str:
    """Lay out encoded children between brackets at the given nesting level."""
    if config.compact:
        return opening + ",".join(items) + closing

    newline = config.newline.value
    unit = config.indent.unit
    inner = newline + unit * (level + 1)
    return (
        opening
        + inner
        + ("," + inner).join(items)
        + newline
        + unit * level
        + closing
    )


def _check_depth(config: SerializeConfig, level: int) -> None:
    if level >= config.max_depth:
        raise SerializeError(
            SerializeErrorKind.NESTING_TOO_DEEP,
            f"Maximum nesting depth of {config.max_depth} exceeded",
        )


def _encode_array(array: JsonArray, config: SerializeConfig, level: int) -> str:
    """Encode array with the configured layout."""
    _check_depth(config, level)
    if not array:
        return "[]"

    items = [_encode_value(item, config, level + 1) for item in array]
    return _join_container("[", "]", items, config, level)


def _encode_object(obj: JsonObject, config: SerializeConfig, level: int) -> str:
    """Encode object members in insertion or sorted key order."""
    _check_depth(config, level)
    if not obj:
        return "{}"

    members = list(obj.items())
    if config.sort_keys:
        members.sort(key=lambda member: member[0])

    separator = ":" if config.compact else ": "
    items = [
        _encode_string(key.name, config.ensure_ascii)
        + separator
        + _encode_value(value, config, level + 1)
        for key, value in members
    ]
    return _join_container("{", "}", items, config, level)


def _encode_value(value: JsonValue, config: SerializeConfig, level: int) -> str:
    """Encode any JSON value."""
    match value:
        case JsonNull():
            return "null"
        case JsonBool(value=flag):
            return "true" if flag else "false"
        case JsonNumber(text=text):
            return text
        case JsonString(value=text):
            return _encode_string(text, config.ensure_ascii)
        case JsonArray():
            return _encode_array(value, config, level)
        case JsonObject():
            return _encode_object(value, config, level)
        case _:
            assert_never(value)


def serialize(
    value: JsonValue,
    newline: NewlineKind = NewlineKind.LF,
    indent: Indent | int = Indent.space(4),
    **kwargs: object,
) -> str:
    """
    Serializes a value tree to JSON text.

    Raises SerializeError for invalid configuration or a tree nested deeper
    than max_depth.
    """
    config = SerializeConfig(newline, indent, **kwargs)  # type: ignore[arg-type]
    if not is_json_value(value):
        msg = f"Object of type {type(value).__name__} is not a JSON value"
        raise TypeError(msg)

    with ProfileContext("serialize") as profile:
        try:
            text = _encode_value(value, config, 0)
        except RecursionError as e:
            raise SerializeError(
                SerializeErrorKind.NESTING_TOO_DEEP,
                "Maximum nesting depth exceeded",
            ) from e
        profile.chars = len(text)

    if config.trailing_newline and not config.compact:
        text += config.newline.value
    return text

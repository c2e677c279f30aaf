"""
Exception types raised by the parser, the serializer and the value model.

Every failure carries structured data (a kind enum plus position or
configuration details) so callers can branch on it without parsing messages.
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jsontree._model import ValueKind

type Position = int


class ParseErrorKind(Enum):
    """Discriminates the ways a document can fail to parse."""

    UNEXPECTED_EOF = "unexpected_eof"
    UNEXPECTED_TOKEN = "unexpected_token"
    INVALID_ESCAPE = "invalid_escape"
    INVALID_NUMBER = "invalid_number"
    TRAILING_CONTENT = "trailing_content"
    NESTING_TOO_DEEP = "nesting_too_deep"


class SerializeErrorKind(Enum):
    """Discriminates the ways a value tree can fail to serialize."""

    INVALID_CONFIG = "invalid_config"
    NESTING_TOO_DEEP = "nesting_too_deep"


class ParseError(ValueError):
    """
    Handles JSON parsing failures with precise position information.

    Error state containing the failure kind, the character offset, the
    matching UTF-8 byte offset and 1-based line/column numbers to help
    users locate the problem in the source document.
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        msg: str,
        doc: str = "",
        pos: Position = 0,
    ) -> None:
        if not isinstance(kind, ParseErrorKind):
            raise TypeError("kind must be a ParseErrorKind")
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.kind = kind
        self.msg = msg
        self.doc = doc
        self.pos = pos

        # Lines are terminated by LF only; a lone CR does not start a line
        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1
        self.byte_offset = (
            len(doc[:pos].encode("utf-8", "surrogatepass")) if doc else pos
        )

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")

    def __reduce__(
        self,
    ) -> tuple[type["ParseError"], tuple[ParseErrorKind, str, str, int]]:
        return self.__class__, (self.kind, self.msg, self.doc, self.pos)


class SerializeError(ValueError):
    """Reports a serializer failure caused by caller-supplied input."""

    def __init__(self, kind: SerializeErrorKind, msg: str) -> None:
        self.kind = kind
        self.msg = msg
        super().__init__(msg)

    def __reduce__(
        self,
    ) -> tuple[type["SerializeError"], tuple[SerializeErrorKind, str]]:
        return self.__class__, (self.kind, self.msg)


class TypeMismatchError(TypeError):
    """Raised when a value is asked to behave as a variant it does not hold."""

    def __init__(self, expected: "ValueKind", actual: "ValueKind") -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected a JSON {expected.value}, got {actual.value}"
        )

    def __reduce__(
        self,
    ) -> tuple[type["TypeMismatchError"], tuple["ValueKind", "ValueKind"]]:
        return self.__class__, (self.expected, self.actual)

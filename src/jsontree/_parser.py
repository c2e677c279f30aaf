"""
Recursive descent JSON parser.

The lexer owns the cursor and scans scalar tokens; the parser drives it one
significant character at a time and builds the value tree bottom-up. All
failures raise ParseError carrying the kind and offset of the problem.
"""

import math
from dataclasses import dataclass
from typing import Final

from jsontree._errors import ParseError
from jsontree._errors import ParseErrorKind
from jsontree._errors import Position
from jsontree._model import FALSE
from jsontree._model import NULL
from jsontree._model import TRUE
from jsontree._model import JsonArray
from jsontree._model import JsonKey
from jsontree._model import JsonNumber
from jsontree._model import JsonObject
from jsontree._model import JsonString
from jsontree._model import JsonValue
from jsontree._profiling import ProfileContext

DEFAULT_MAX_DEPTH: Final = 256

_WHITESPACE: Final = frozenset(" \t\n\r")
_DIGITS: Final = frozenset("0123456789")
_HEX_DIGITS: Final = frozenset("0123456789abcdefABCDEF")
_NUMBER_START: Final = frozenset("-0123456789")
_LITERALS: Final = (("true", TRUE), ("false", FALSE), ("null", NULL))
_LITERAL_START: Final = frozenset("tfn")

_ESCAPES: Final = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_HIGH_SURROGATES: Final = range(0xD800, 0xDC00)
_LOW_SURROGATES: Final = range(0xDC00, 0xE000)


class JsonLexer:
    """
    Cursor over the source text with scanners for scalar tokens.

    Character-by-character scanning; ``peek`` returns an empty string at the
    end of input so callers test membership against frozensets only.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def error(
        self, kind: ParseErrorKind, msg: str, pos: Position | None = None
    ) -> ParseError:
        return ParseError(kind, msg, self.text, self.pos if pos is None else pos)

    def at_end(self) -> bool:
        return self.pos >= self.length

    def peek(self) -> str:
        """Returns current character without advancing."""
        return self.text[self.pos] if self.pos < self.length else ""

    def advance(self) -> str:
        """Returns current character and advances position."""
        char = self.peek()
        if self.pos < self.length:
            self.pos += 1
        return char

    def skip_whitespace(self) -> None:
        """Skips whitespace characters according to JSON spec."""
        text, pos, length = self.text, self.pos, self.length
        while pos < length and text[pos] in _WHITESPACE:
            pos += 1
        self.pos = pos

    def scan_string(self) -> str:
        """Scans a quoted string at the cursor and returns its decoded text."""
        with ProfileContext("scan_string") as profile:
            start = self.pos
            self.advance()  # opening quote
            text = self.text
            chunks: list[str] = []
            chunk_start = self.pos

            while self.pos < self.length:
                char = text[self.pos]
                if char == '"':
                    chunks.append(text[chunk_start : self.pos])
                    self.pos += 1
                    profile.chars = self.pos - start
                    return "".join(chunks)
                elif char == "\\":
                    chunks.append(text[chunk_start : self.pos])
                    chunks.append(self._scan_escape())
                    chunk_start = self.pos
                elif char < " ":
                    raise self.error(
                        ParseErrorKind.UNEXPECTED_TOKEN,
                        "Invalid control character at",
                    )
                elif "\ud800" <= char <= "\udfff":
                    raise self.error(
                        ParseErrorKind.UNEXPECTED_TOKEN,
                        "Invalid surrogate character at",
                    )
                else:
                    self.pos += 1

            raise self.error(
                ParseErrorKind.UNEXPECTED_EOF,
                "Unterminated string starting at",
                start,
            )

    def _scan_escape(self) -> str:
        """Decodes the escape sequence whose backslash is at the cursor."""
        escape_pos = self.pos
        escape_char = self.text[self.pos + 1 : self.pos + 2]

        if escape_char in _ESCAPES:
            self.pos += 2
            return _ESCAPES[escape_char]
        if escape_char != "u":
            raise self.error(
                ParseErrorKind.INVALID_ESCAPE, "Invalid \\escape", escape_pos
            )

        code_point = self._scan_hex_quad(escape_pos)
        if code_point in _LOW_SURROGATES:
            raise self.error(
                ParseErrorKind.INVALID_ESCAPE,
                "Unpaired low surrogate in \\u escape",
                escape_pos,
            )
        if code_point in _HIGH_SURROGATES:
            if self.text[self.pos : self.pos + 2] != "\\u":
                raise self.error(
                    ParseErrorKind.INVALID_ESCAPE,
                    "Unpaired high surrogate in \\u escape",
                    escape_pos,
                )
            low = self._scan_hex_quad(self.pos)
            if low not in _LOW_SURROGATES:
                raise self.error(
                    ParseErrorKind.INVALID_ESCAPE,
                    "Unpaired high surrogate in \\u escape",
                    escape_pos,
                )
            code_point = 0x10000 + ((code_point - 0xD800) << 10) + (low - 0xDC00)
        return chr(code_point)

    def _scan_hex_quad(self, escape_pos: Position) -> int:
        """Reads the four hex digits of a \\u escape starting at the cursor."""
        digits = self.text[self.pos + 2 : self.pos + 6]
        if len(digits) != 4 or not all(c in _HEX_DIGITS for c in digits):
            raise self.error(
                ParseErrorKind.INVALID_ESCAPE,
                "Invalid \\uXXXX escape",
                escape_pos,
            )
        self.pos += 6
        return int(digits, 16)

    def _scan_digits(self) -> None:
        while self.peek() in _DIGITS:
            self.advance()

    def _scan_integer_part(self, start: Position) -> None:
        """Scans the integer part of a JSON number."""
        if self.peek() not in _DIGITS:
            raise self.error(
                ParseErrorKind.INVALID_NUMBER, "Invalid number", start
            )

        if self.advance() == "0":
            if self.peek() in _DIGITS:
                raise self.error(
                    ParseErrorKind.INVALID_NUMBER,
                    "Leading zeros not allowed",
                    start,
                )
        else:
            self._scan_digits()

    def _scan_decimal_part(self, start: Position) -> None:
        """Scans the decimal part of a JSON number if present."""
        if self.peek() == ".":
            self.advance()
            if self.peek() not in _DIGITS:
                raise self.error(
                    ParseErrorKind.INVALID_NUMBER,
                    "Invalid decimal number",
                    start,
                )
            self._scan_digits()

    def _scan_exponent_part(self, start: Position) -> None:
        """Scans the exponent part of a JSON number if present."""
        if self.peek() in ("e", "E"):
            self.advance()
            if self.peek() in ("+", "-"):
                self.advance()
            if self.peek() not in _DIGITS:
                raise self.error(
                    ParseErrorKind.INVALID_NUMBER, "Invalid exponent", start
                )
            self._scan_digits()

    def scan_number(self) -> str:
        """Scans a JSON number token and returns its text."""
        with ProfileContext("scan_number"):
            start = self.pos

            if self.peek() == "-":
                self.advance()

            self._scan_integer_part(start)
            self._scan_decimal_part(start)
            self._scan_exponent_part(start)

            token = self.text[start : self.pos]
            if math.isinf(float(token)):
                raise self.error(
                    ParseErrorKind.INVALID_NUMBER, "Number out of range", start
                )
            return token

    def scan_literal(self) -> JsonValue:
        """Scans literal tokens: true, false, null."""
        start = self.pos
        for literal, value in _LITERALS:
            if self.text.startswith(literal, start):
                self.pos += len(literal)
                return value

        rest = self.text[start:]
        if any(literal.startswith(rest) for literal, _ in _LITERALS):
            raise self.error(
                ParseErrorKind.UNEXPECTED_EOF, "Incomplete literal", self.length
            )
        raise self.error(ParseErrorKind.UNEXPECTED_TOKEN, "Expecting value")


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures JSON parsing behavior with immutable settings.
    """

    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(
            self.max_depth, int
        ):
            raise TypeError("max_depth must be an integer")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")


class JsonParser:
    """
    Recursive descent parser over a JsonLexer.

    Each container method consumes its own brackets and separators and leaves
    the cursor just past the closing bracket.
    """

    def __init__(self, lexer: JsonLexer, config: ParseConfig):
        self.lexer = lexer
        self.config = config
        self.depth = 0
        self._keys: dict[str, JsonKey] = {}

    def parse_document(self) -> JsonValue:
        """Parses one root value and rejects anything after it."""
        lexer = self.lexer
        if lexer.text.startswith("\ufeff"):
            raise lexer.error(
                ParseErrorKind.UNEXPECTED_TOKEN,
                "JSON input should not contain BOM (Byte Order Mark)",
                0,
            )

        value = self.parse_value()

        lexer.skip_whitespace()
        if not lexer.at_end():
            raise lexer.error(ParseErrorKind.TRAILING_CONTENT, "Extra data")
        return value

    def parse_value(self) -> JsonValue:
        """Parses any JSON value starting at the next significant character."""
        lexer = self.lexer
        lexer.skip_whitespace()
        char = lexer.peek()

        if char == "{":
            return self.parse_object()
        elif char == "[":
            return self.parse_array()
        elif char == '"':
            return JsonString(lexer.scan_string())
        elif char in _NUMBER_START:
            return JsonNumber(lexer.scan_number())
        elif char in _LITERAL_START:
            return lexer.scan_literal()
        elif not char:
            raise lexer.error(ParseErrorKind.UNEXPECTED_EOF, "Expecting value")
        else:
            raise lexer.error(ParseErrorKind.UNEXPECTED_TOKEN, "Expecting value")

    def _enter_container(self) -> None:
        self.depth += 1
        if self.depth > self.config.max_depth:
            raise self.lexer.error(
                ParseErrorKind.NESTING_TOO_DEEP,
                f"Maximum nesting depth of {self.config.max_depth} exceeded",
            )
        self.lexer.advance()

    def _expect_delimiter(self, delimiter: str, msg: str) -> None:
        lexer = self.lexer
        lexer.skip_whitespace()
        if lexer.at_end():
            raise lexer.error(ParseErrorKind.UNEXPECTED_EOF, msg)
        if lexer.peek() != delimiter:
            raise lexer.error(ParseErrorKind.UNEXPECTED_TOKEN, msg)
        lexer.advance()

    def _intern_key(self, name: str) -> JsonKey:
        """Reuses one JsonKey per distinct member name within a document."""
        key = self._keys.get(name)
        if key is None:
            key = self._keys[name] = JsonKey(name)
        return key

    def _parse_object_key(self) -> JsonKey:
        """Parses object key and validates it's a proper string token."""
        lexer = self.lexer
        lexer.skip_whitespace()
        msg = "Expecting property name enclosed in double quotes"
        if lexer.at_end():
            raise lexer.error(ParseErrorKind.UNEXPECTED_EOF, msg)
        if lexer.peek() != '"':
            raise lexer.error(ParseErrorKind.UNEXPECTED_TOKEN, msg)
        return self._intern_key(lexer.scan_string())

    def _continue_container(self, closing: str, trailing_msg: str) -> bool:
        """Consumes ',' or the closing bracket; True when another item follows."""
        lexer = self.lexer
        lexer.skip_whitespace()
        if lexer.at_end():
            raise lexer.error(
                ParseErrorKind.UNEXPECTED_EOF, "Expecting ',' delimiter"
            )

        char = lexer.peek()
        if char == closing:
            lexer.advance()
            return False
        elif char == ",":
            comma_pos = lexer.pos
            lexer.advance()
            lexer.skip_whitespace()
            if lexer.peek() == closing:
                raise lexer.error(
                    ParseErrorKind.UNEXPECTED_TOKEN, trailing_msg, comma_pos
                )
            return True
        else:
            raise lexer.error(
                ParseErrorKind.UNEXPECTED_TOKEN, "Expecting ',' delimiter"
            )

    def parse_object(self) -> JsonObject:
        """Parses a JSON object; later duplicate keys overwrite earlier ones."""
        with ProfileContext("parse_object"):
            self._enter_container()
            lexer = self.lexer
            members: dict[JsonKey, JsonValue] = {}

            lexer.skip_whitespace()
            if lexer.peek() == "}":
                lexer.advance()
            else:
                while True:
                    key = self._parse_object_key()
                    self._expect_delimiter(":", "Expecting ':' delimiter")
                    members[key] = self.parse_value()
                    if not self._continue_container(
                        "}", "Illegal trailing comma before end of object"
                    ):
                        break

            self.depth -= 1
            return JsonObject._adopt(members)

    def parse_array(self) -> JsonArray:
        """Parses a JSON array preserving element order."""
        with ProfileContext("parse_array"):
            self._enter_container()
            lexer = self.lexer
            items: list[JsonValue] = []

            lexer.skip_whitespace()
            if lexer.peek() == "]":
                lexer.advance()
            else:
                while True:
                    items.append(self.parse_value())
                    if not self._continue_container(
                        "]", "Illegal trailing comma before end of array"
                    ):
                        break

            self.depth -= 1
            return JsonArray._adopt(items)


def parse(text: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> JsonValue:
    """
    Parses a JSON document into a value tree.

    Raises ParseError describing the first problem found; no partial tree is
    ever returned.
    """
    if not isinstance(text, str):
        raise TypeError(
            f"the JSON object must be str, not {type(text).__name__}"
        )

    config = ParseConfig(max_depth=max_depth)
    with ProfileContext("parse", len(text)):
        lexer = JsonLexer(text)
        parser = JsonParser(lexer, config)
        try:
            return parser.parse_document()
        except RecursionError as e:
            raise lexer.error(
                ParseErrorKind.NESTING_TOO_DEEP,
                "Maximum nesting depth exceeded",
            ) from e

"""
JSON text parser and serializer built around an explicit value tree.

``parse`` turns JSON text into a tree of JsonValue variants that callers can
inspect and mutate; ``serialize`` writes a tree back out under a chosen
newline and indentation policy. ``loads``/``dumps`` convert straight to and
from plain Python data.
"""

from typing import IO
from typing import Any

from jsontree._errors import ParseError
from jsontree._errors import ParseErrorKind
from jsontree._errors import SerializeError
from jsontree._errors import SerializeErrorKind
from jsontree._errors import TypeMismatchError
from jsontree._model import FALSE
from jsontree._model import NULL
from jsontree._model import TRUE
from jsontree._model import JsonArray
from jsontree._model import JsonBool
from jsontree._model import JsonKey
from jsontree._model import JsonNull
from jsontree._model import JsonNumber
from jsontree._model import JsonObject
from jsontree._model import JsonString
from jsontree._model import JsonValue
from jsontree._model import ValueKind
from jsontree._model import from_python
from jsontree._model import is_json_value
from jsontree._parser import DEFAULT_MAX_DEPTH
from jsontree._parser import JsonLexer
from jsontree._parser import JsonParser
from jsontree._parser import ParseConfig
from jsontree._parser import parse
from jsontree._profiling import HotPathStats
from jsontree._profiling import clear_hot_path_stats
from jsontree._profiling import get_hot_path_stats
from jsontree._serializer import Indent
from jsontree._serializer import IndentStyle
from jsontree._serializer import NewlineKind
from jsontree._serializer import SerializeConfig
from jsontree._serializer import serialize

__version__ = "0.1.0"


def load(fp: IO[str], **kwargs: Any) -> JsonValue:
    """
    Parses JSON from a file-like object into a value tree.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return parse(fp.read(), **kwargs)


def dump(value: JsonValue, fp: IO[str], **kwargs: Any) -> None:
    """
    Serializes a value tree to a file-like object.
    """
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(serialize(value, **kwargs))


def loads(s: str, **kwargs: Any) -> Any:
    """Parses JSON text straight into plain Python data."""
    return parse(s, **kwargs).to_python()


def dumps(obj: Any, **kwargs: Any) -> str:
    """Serializes plain Python data; keyword options match ``serialize``."""
    return serialize(from_python(obj), **kwargs)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "FALSE",
    "NULL",
    "TRUE",
    "HotPathStats",
    "Indent",
    "IndentStyle",
    "JsonArray",
    "JsonBool",
    "JsonKey",
    "JsonLexer",
    "JsonNull",
    "JsonNumber",
    "JsonObject",
    "JsonParser",
    "JsonString",
    "JsonValue",
    "NewlineKind",
    "ParseConfig",
    "ParseError",
    "ParseErrorKind",
    "SerializeConfig",
    "SerializeError",
    "SerializeErrorKind",
    "TypeMismatchError",
    "ValueKind",
    "clear_hot_path_stats",
    "dump",
    "dumps",
    "from_python",
    "get_hot_path_stats",
    "is_json_value",
    "load",
    "loads",
    "parse",
    "serialize",
]

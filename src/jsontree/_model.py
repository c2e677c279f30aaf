"""
JSON value model: a closed union of six variants and the ordered object type.

Scalars (null, boolean, number, string) are immutable dataclasses. Containers
(array, object) are mutable and exclusively own their children. A container
has at most one parent, and it cannot be inserted into itself or into one
of its descendants.
"""

import math
import re
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from collections.abc import MutableMapping
from collections.abc import MutableSequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any
from typing import ClassVar
from typing import Final

from jsontree._errors import TypeMismatchError

# RFC 8259 number grammar
NUMBER_PATTERN: Final = re.compile(
    r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][-+]?[0-9]+)?"
)
_SURROGATE_PATTERN: Final = re.compile("[\ud800-\udfff]")


class ValueKind(Enum):
    """Tags the variant a JSON value holds."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class _JsonValueBase:
    """
    Shared variant inspection for every JSON value.

    Each accessor fails with TypeMismatchError unless the concrete variant
    overrides it, so callers that assume the wrong variant get a structured
    error instead of a silently wrong payload.
    """

    __slots__ = ()

    kind: ClassVar[ValueKind]

    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def as_bool(self) -> bool:
        raise TypeMismatchError(ValueKind.BOOLEAN, self.kind)

    def as_number(self) -> "JsonNumber":
        raise TypeMismatchError(ValueKind.NUMBER, self.kind)

    def as_str(self) -> str:
        raise TypeMismatchError(ValueKind.STRING, self.kind)

    def as_array(self) -> "JsonArray":
        raise TypeMismatchError(ValueKind.ARRAY, self.kind)

    def as_object(self) -> "JsonObject":
        raise TypeMismatchError(ValueKind.OBJECT, self.kind)

    def to_python(self) -> Any:
        raise NotImplementedError


def _check_text(text: object, what: str) -> str:
    if not isinstance(text, str):
        raise TypeError(f"{what} must be str, not {type(text).__name__}")
    if _SURROGATE_PATTERN.search(text):
        raise ValueError(f"{what} must not contain unpaired surrogates")
    return text


@dataclass(frozen=True, slots=True, order=True)
class JsonKey:
    """Immutable object member name compared by exact string content."""

    name: str

    def __post_init__(self) -> None:
        _check_text(self.name, "JSON object keys")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class JsonNull(_JsonValueBase):
    kind: ClassVar[ValueKind] = ValueKind.NULL

    def to_python(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class JsonBool(_JsonValueBase):
    kind: ClassVar[ValueKind] = ValueKind.BOOLEAN

    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(
                f"JSON booleans must be bool, not {type(self.value).__name__}"
            )

    def as_bool(self) -> bool:
        return self.value

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True, slots=True, eq=False)
class JsonNumber(_JsonValueBase):
    """
    JSON number kept in its textual form.

    Keeping the source text means parsed numbers serialize back exactly as
    written; the accessors interpret the text on demand. Equality and hashing
    follow the decimal value, so ``1e1`` equals ``10``.
    """

    kind: ClassVar[ValueKind] = ValueKind.NUMBER

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(
                f"JSON number text must be str, not {type(self.text).__name__}"
            )
        if NUMBER_PATTERN.fullmatch(self.text) is None:
            raise ValueError(f"Invalid JSON number: {self.text!r}")

    @classmethod
    def from_int(cls, number: int) -> "JsonNumber":
        if isinstance(number, bool) or not isinstance(number, int):
            raise TypeError(f"expected int, not {type(number).__name__}")
        return cls(str(number))

    @classmethod
    def from_float(cls, number: float) -> "JsonNumber":
        number = float(number)
        if math.isnan(number) or math.isinf(number):
            raise ValueError("Out of range float values are not JSON compliant")
        return cls(repr(number))

    @property
    def is_integer(self) -> bool:
        """True when the text has neither a fraction nor an exponent."""
        return not any(c in self.text for c in ".eE")

    def as_number(self) -> "JsonNumber":
        return self

    def as_int(self) -> int:
        if not self.is_integer:
            raise ValueError(f"JSON number {self.text} is not an integer")
        return int(self.text)

    def as_float(self) -> float:
        return float(self.text)

    def as_decimal(self) -> Decimal:
        return Decimal(self.text)

    def to_python(self) -> int | float:
        return self.as_int() if self.is_integer else self.as_float()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonNumber):
            return NotImplemented
        return self.text == other.text or self.as_decimal() == other.as_decimal()

    def __hash__(self) -> int:
        return hash(self.as_decimal())


@dataclass(frozen=True, slots=True)
class JsonString(_JsonValueBase):
    kind: ClassVar[ValueKind] = ValueKind.STRING

    value: str

    def __post_init__(self) -> None:
        _check_text(self.value, "JSON strings")

    def as_str(self) -> str:
        return self.value

    def to_python(self) -> str:
        return self.value


NULL: Final = JsonNull()
TRUE: Final = JsonBool(True)
FALSE: Final = JsonBool(False)

_SHARED_CHILD_MSG: Final = (
    "A JSON container can only belong to one parent; remove it or copy() it first"
)


def _is_container(value: object) -> bool:
    return isinstance(value, JsonArray | JsonObject)


def _detached(value: "JsonValue") -> "JsonValue":
    """Scalars are immutable and shared; containers are deep copied."""
    if isinstance(value, JsonArray | JsonObject):
        return value.copy()
    return value


def _claim_children(
    container: "JsonArray | JsonObject",
    values: Iterable[object],
    replacing: Iterable["JsonValue"] = (),
) -> list["JsonValue"]:
    """
    Checks that values may become children of container.

    Every value must be a JSON value. A container value must have no parent,
    unless it is one of the children of container being replaced, and must
    not be container itself or one of its ancestors. Nothing is modified;
    the caller stores the returned children and then calls _transfer.
    """
    reusable = {id(child) for child in replacing if _is_container(child)}
    claimed: set[int] = set()
    children: list[JsonValue] = []
    for value in values:
        if not isinstance(value, _JsonValueBase):
            raise TypeError(
                f"Object of type {type(value).__name__} is not a JSON value"
            )
        if isinstance(value, JsonArray | JsonObject):
            if id(value) in claimed:
                raise ValueError(_SHARED_CHILD_MSG)
            if value._parent is not None:
                if id(value) not in reusable:
                    raise ValueError(_SHARED_CHILD_MSG)
            else:
                node: JsonArray | JsonObject | None = container
                while node is not None:
                    if node is value:
                        raise ValueError(
                            "A JSON container cannot be nested inside itself"
                        )
                    node = node._parent
            claimed.add(id(value))
        children.append(value)  # type: ignore[arg-type]
    return children


def _transfer(
    container: "JsonArray | JsonObject",
    released: Iterable["JsonValue"],
    claimed: Iterable["JsonValue"],
) -> None:
    """Detaches released children, then attaches claimed ones to container."""
    for child in released:
        if isinstance(child, JsonArray | JsonObject):
            child._parent = None
    for child in claimed:
        if isinstance(child, JsonArray | JsonObject):
            child._parent = container


class JsonArray(_JsonValueBase, MutableSequence["JsonValue"]):
    """
    Ordered, mutable sequence of JSON values.

    A container child belongs to exactly one parent. Slicing returns a new,
    detached array holding copies of any container children.
    """

    __slots__ = ("_items", "_parent")

    kind: ClassVar[ValueKind] = ValueKind.ARRAY

    def __init__(self, items: Iterable["JsonValue"] = ()) -> None:
        self._items: list[JsonValue] = []
        self._parent: JsonArray | JsonObject | None = None
        self.extend(items)

    @classmethod
    def _adopt(cls, items: list["JsonValue"]) -> "JsonArray":
        """Wraps a freshly built list whose elements are detached and valid."""
        array = cls.__new__(cls)
        array._items = items
        array._parent = None
        _transfer(array, (), items)
        return array

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            return JsonArray._adopt([_detached(v) for v in self._items[index]])
        return self._items[index]

    def __setitem__(self, index: Any, value: Any) -> None:
        if isinstance(index, slice):
            released = self._items[index]
            children = _claim_children(self, value, released)
            self._items[index] = children
        else:
            released = [self._items[index]]
            children = _claim_children(self, [value], released)
            self._items[index] = children[0]
        _transfer(self, released, children)

    def __delitem__(self, index: int | slice) -> None:
        if isinstance(index, slice):
            released = self._items[index]
        else:
            released = [self._items[index]]
        del self._items[index]
        _transfer(self, released, ())

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator["JsonValue"]:
        return iter(self._items)

    def insert(self, index: int, value: "JsonValue") -> None:
        children = _claim_children(self, [value])
        self._items.insert(index, children[0])
        _transfer(self, (), children)

    def extend(self, values: Iterable["JsonValue"]) -> None:
        children = _claim_children(self, values)
        self._items.extend(children)
        _transfer(self, (), children)

    def reverse(self) -> None:
        self._items.reverse()

    def copy(self) -> "JsonArray":
        """Returns a detached deep copy of this array."""
        return JsonArray._adopt([_detached(item) for item in self._items])

    __copy__ = copy

    def __deepcopy__(self, memo: dict[int, Any]) -> "JsonArray":
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonArray):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"JsonArray({self._items!r})"

    def as_array(self) -> "JsonArray":
        return self

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self._items]


def _as_key(key: object) -> JsonKey:
    if isinstance(key, JsonKey):
        return key
    if isinstance(key, str):
        return JsonKey(key)
    raise TypeError(f"keys must be str or JsonKey, not {type(key).__name__}")


class JsonObject(_JsonValueBase, MutableMapping[JsonKey, "JsonValue"]):
    """
    Insertion-ordered mapping from member names to JSON values.

    Keys are unique: assigning an existing key replaces its value and keeps
    the key at its original position. Every method taking a key accepts a
    JsonKey or a plain str.
    """

    __slots__ = ("_members", "_parent")

    kind: ClassVar[ValueKind] = ValueKind.OBJECT

    def __init__(
        self,
        members: Mapping[JsonKey | str, "JsonValue"]
        | Iterable[tuple[JsonKey | str, "JsonValue"]] = (),
    ) -> None:
        self._members: dict[JsonKey, JsonValue] = {}
        self._parent: JsonArray | JsonObject | None = None
        self.update(members)

    @classmethod
    def _adopt(cls, members: dict[JsonKey, "JsonValue"]) -> "JsonObject":
        """Wraps a freshly built dict whose values are detached and valid."""
        obj = cls.__new__(cls)
        obj._members = members
        obj._parent = None
        _transfer(obj, (), members.values())
        return obj

    def __getitem__(self, key: JsonKey | str) -> "JsonValue":
        return self._members[_as_key(key)]

    def __setitem__(self, key: JsonKey | str, value: "JsonValue") -> None:
        key = _as_key(key)
        released = [self._members[key]] if key in self._members else []
        children = _claim_children(self, [value], released)
        self._members[key] = children[0]
        _transfer(self, released, children)

    def __delitem__(self, key: JsonKey | str) -> None:
        child = self._members.pop(_as_key(key))
        _transfer(self, [child], ())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, JsonKey | str):
            return False
        return _as_key(key) in self._members

    def __iter__(self) -> Iterator[JsonKey]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def get(self, key: object, default: Any = None) -> Any:
        if not isinstance(key, JsonKey | str):
            return default
        return self._members.get(_as_key(key), default)

    def insert(
        self, key: JsonKey | str, value: "JsonValue"
    ) -> "JsonValue | None":
        """Sets a member and returns the value it replaced, if any."""
        key = _as_key(key)
        previous = self._members.get(key)
        self[key] = value
        return previous

    def remove(self, key: JsonKey | str) -> "JsonValue":
        """Removes a member and returns its value; KeyError when absent."""
        value = self[key]
        del self[key]
        return value

    def copy(self) -> "JsonObject":
        """Returns a detached deep copy of this object."""
        return JsonObject._adopt(
            {key: _detached(value) for key, value in self._members.items()}
        )

    __copy__ = copy

    def __deepcopy__(self, memo: dict[int, Any]) -> "JsonObject":
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonObject):
            return NotImplemented
        return self._members == other._members

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        members = ", ".join(f"{k.name!r}: {v!r}" for k, v in self.items())
        return f"JsonObject({{{members}}})"

    def as_object(self) -> "JsonObject":
        return self

    def to_python(self) -> dict[str, Any]:
        return {key.name: value.to_python() for key, value in self.items()}



type JsonValue = JsonNull | JsonBool | JsonNumber | JsonString | JsonArray | JsonObject


def is_json_value(obj: object) -> bool:
    return isinstance(obj, _JsonValueBase)


def from_python(obj: Any) -> JsonValue:
    """
    Builds a value tree from plain Python data.

    Accepts None, bool, int, float, str, list, tuple and dict with str keys.
    JSON values already in the input are used as-is.
    """
    match obj:
        case _JsonValueBase():
            return obj  # type: ignore[return-value]
        case None:
            return NULL
        case bool():
            return TRUE if obj else FALSE
        case int():
            return JsonNumber.from_int(obj)
        case float():
            return JsonNumber.from_float(obj)
        case str():
            return JsonString(obj)
        case list() | tuple():
            return JsonArray(from_python(item) for item in obj)
        case dict():
            members: list[tuple[str | JsonKey, JsonValue]] = []
            for key, value in obj.items():
                if not isinstance(key, str | JsonKey):
                    msg = f"keys must be str, not {type(key).__name__}"
                    raise TypeError(msg)
                members.append((key, from_python(value)))
            return JsonObject(members)
        case _:
            msg = f"Object of type {type(obj).__name__} is not JSON serializable"
            raise TypeError(msg)

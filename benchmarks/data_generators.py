"""
Documents used by the benchmark suite.

Every generator is seeded so runs compare like with like. Documents are
built as plain Python data and encoded with the standard library, so the
benchmarks never depend on jsontree to produce their own input.
"""

import json
import random
import string
from collections.abc import Callable
from typing import Any

_SEED = 20240115
_ESCAPES = ['\\"', "\\\\", "\\/", "\\b", "\\f", "\\n", "\\r", "\\t", "\\u00e9"]


def _word(rng: random.Random, length: int) -> str:
    return "".join(rng.choices(string.ascii_letters, k=length))


def _small_object(rng: random.Random) -> Any:
    return {
        "id": 12345,
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "active": True,
        "balance": 1234.56,
        "tags": ["admin", "beta"],
        "metadata": {"created": "2024-01-15T10:30:00Z", "source": "api"},
    }


def _large_object(rng: random.Random) -> Any:
    return {
        "user_id": rng.randint(1_000_000, 9_999_999),
        "profile": {
            "first_name": _word(rng, 10),
            "last_name": _word(rng, 12),
            "language": rng.choice(["en", "es", "fr", "de", "zh"]),
            "notifications": {"email": True, "sms": False, "push": True},
        },
        "transactions": [
            {
                "id": f"txn_{i:06d}",
                "amount": round(rng.uniform(1.0, 1000.0), 2),
                "currency": rng.choice(["USD", "EUR", "GBP", "JPY"]),
                "description": f"Payment for {_word(rng, 20)}",
                "status": rng.choice(["completed", "pending", "failed"]),
            }
            for i in range(80)
        ],
    }


def _mixed_array(rng: random.Random) -> Any:
    makers: list[Callable[[], Any]] = [
        lambda: rng.randint(-1000, 1000),
        lambda: round(rng.uniform(-100.0, 100.0), 3),
        lambda: _word(rng, rng.randint(5, 30)),
        lambda: rng.choice([True, False]),
        lambda: None,
        lambda: {"value": _word(rng, 10), "score": rng.randint(0, 100)},
    ]
    return [rng.choice(makers)() for _ in range(300)]


def _nested_structure(rng: random.Random) -> Any:
    def level(depth: int) -> Any:
        if depth == 0:
            return {"value": _word(rng, 10)}
        return {
            "level": depth,
            "items": [level(depth - 1) for _ in range(3)],
        }

    return level(6)


def _string_heavy(rng: random.Random) -> str:
    # built as JSON text directly so the escapes reach the parser unchanged
    def escaped() -> str:
        return "".join(
            rng.choice(_ESCAPES)
            if rng.random() < 0.3
            else rng.choice(string.ascii_letters + " ")
            for _ in range(60)
        )

    strings = ", ".join(f'"{escaped()}"' for _ in range(150))
    return f'{{"strings": [{strings}], "path": "C:\\\\Users\\\\bench"}}'


_GENERATORS: dict[str, Callable[[random.Random], Any]] = {
    "small_object": _small_object,
    "large_object": _large_object,
    "mixed_array": _mixed_array,
    "nested_structure": _nested_structure,
}


def generate_test_data(data_type: str) -> str:
    """Returns the JSON text of the named benchmark document."""
    rng = random.Random(_SEED)
    if data_type == "string_heavy":
        return _string_heavy(rng)
    if data_type not in _GENERATORS:
        raise ValueError(f"Unknown data type: {data_type}")

    return json.dumps(_GENERATORS[data_type](rng))

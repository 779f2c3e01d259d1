"""Node identity: the string key every graph tier indexes nodes by.

A graph never compares node values with ==.  It asks an identity
function for a string and treats two values as the same node exactly
when those strings match.  Callers usually pass something cheap like
``lambda n: n.name``.  When they don't, structural_hash is used: it
canonicalizes the value into bytes and hashes them with SHA-1, so two
structurally equal values always land on the same identity.

Every field is tagged and length-prefixed, which makes the encoding
injective.  Without the type tags, the int 1 and the string "1" would
collide; without the length prefixes, ["ab", "c"] and ["a", "bc"]
would.

Values the encoder has no direct rule for (UUID, datetime, Decimal,
slotted classes) are encoded through their pickle reduction: the
qualified type name plus the constructor arguments and state that
__reduce_ex__ reports.  A container or object that refers back to one
of its own ancestors is encoded as a back-reference to that ancestor's
depth, so self-referencing structures hash instead of recursing
forever.
"""
from __future__ import annotations

import dataclasses
import enum
import hashlib
import struct
import types
from typing import Any, Callable, TypeAlias, TypeVar

T = TypeVar("T")

Identity: TypeAlias = str
IdentityFn: TypeAlias = Callable[[T], Identity]

HASH_ALGORITHM = "sha1"
PICKLE_PROTOCOL = 2

# One-byte type tags.  Never renumber these: identities computed by
# an older build would stop matching.
_TAG_NONE = b"N"
_TAG_TRUE = b"T"
_TAG_FALSE = b"F"
_TAG_INT = b"i"
_TAG_FLOAT = b"f"
_TAG_STR = b"s"
_TAG_BYTES = b"b"
_TAG_SEQ = b"l"
_TAG_SET = b"e"
_TAG_MAP = b"m"
_TAG_OBJ = b"o"
_TAG_ENUM = b"E"
_TAG_TYPE = b"t"
_TAG_REDUCED = b"r"
_TAG_BACKREF = b"R"

_UNHASHABLE = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
    types.GeneratorType,
)


def _lp(data: bytes) -> bytes:
    """Length-prefix a byte string with a 4-byte big-endian length."""
    return struct.pack("!I", len(data)) + data


def _canonicalize(value: Any, path: list[int]) -> bytes:
    """Canonical bytes for *value*.

    *path* holds the id() of every container currently being encoded,
    outermost first.
    """
    # bool before int: bool is an int subclass
    if value is None:
        return _TAG_NONE
    if value is True:
        return _TAG_TRUE
    if value is False:
        return _TAG_FALSE
    # enum before int/str: IntEnum and StrEnum members are both
    if isinstance(value, enum.Enum):
        return _TAG_ENUM + _lp(_qualname(type(value))) + _lp(value.name.encode("utf-8"))
    if isinstance(value, int):
        return _TAG_INT + _lp(str(value).encode("ascii"))
    if isinstance(value, float):
        return _TAG_FLOAT + _lp(repr(value).encode("ascii"))
    if isinstance(value, str):
        return _TAG_STR + _lp(value.encode("utf-8"))
    if isinstance(value, (bytes, bytearray)):
        return _TAG_BYTES + _lp(bytes(value))
    if isinstance(value, type):
        return _TAG_TYPE + _lp(_qualname(value))
    if isinstance(value, _UNHASHABLE):
        raise TypeError(
            f"Cannot derive a structural identity for {type(value).__name__!r}; "
            f"pass an explicit identity function"
        )

    if id(value) in path:
        depth = len(path) - path.index(id(value))
        return _TAG_BACKREF + _lp(str(depth).encode("ascii"))

    path.append(id(value))
    try:
        return _canonicalize_compound(value, path)
    finally:
        path.pop()


def _canonicalize_compound(value: Any, path: list[int]) -> bytes:
    if isinstance(value, (list, tuple)):
        body = b"".join(_lp(_canonicalize(v, path)) for v in value)
        return _TAG_SEQ + _lp(body)
    if isinstance(value, (set, frozenset)):
        members = sorted(_canonicalize(v, path) for v in value)
        return _TAG_SET + _lp(b"".join(_lp(m) for m in members))
    if isinstance(value, dict):
        return _TAG_MAP + _lp(_canonical_items(value.items(), path))
    if dataclasses.is_dataclass(value):
        fields = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        return (
            _TAG_OBJ
            + _lp(_qualname(type(value)))
            + _lp(_canonical_items(fields.items(), path))
        )
    if hasattr(value, "__dict__"):
        return (
            _TAG_OBJ
            + _lp(_qualname(type(value)))
            + _lp(_canonical_items(vars(value).items(), path))
        )
    return _canonicalize_reduced(value, path)


def _canonicalize_reduced(value: Any, path: list[int]) -> bytes:
    try:
        reduced = value.__reduce_ex__(PICKLE_PROTOCOL)
    except TypeError as exc:
        raise TypeError(
            f"Cannot derive a structural identity for {type(value).__name__!r}; "
            f"pass an explicit identity function"
        ) from exc

    if isinstance(reduced, str):
        # a module-level singleton, pickled by name
        parts: list[Any] = [reduced]
    else:
        # drop the reconstructor callable; the type name stands in for it
        parts = [list(part) if _is_iterator(part) else part for part in reduced[1:]]
    body = b"".join(_lp(_canonicalize(part, path)) for part in parts)
    return _TAG_REDUCED + _lp(_qualname(type(value))) + _lp(body)


def _is_iterator(value: Any) -> bool:
    return hasattr(value, "__next__") and hasattr(value, "__iter__")


def _canonical_items(items: Any, path: list[int]) -> bytes:
    pairs = sorted((_canonicalize(k, path), _canonicalize(v, path)) for k, v in items)
    return b"".join(_lp(k) + _lp(v) for k, v in pairs)


def _qualname(cls: type) -> bytes:
    return f"{cls.__module__}.{cls.__qualname__}".encode("utf-8")


def structural_hash(value: Any) -> Identity:
    """Default identity function: hex digest of the canonical encoding.

    Dict key order and set iteration order do not affect the result.
    Enum members hash by type and member name.  Raises TypeError for
    values with no structural form, such as functions and modules.
    """
    return hashlib.new(HASH_ALGORITHM, _canonicalize(value, [])).hexdigest()

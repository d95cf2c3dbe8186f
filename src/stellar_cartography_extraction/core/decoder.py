"""Decoder for serialized game-data blobs (Python pickles).

Game caches such as ``starmapcache.pickle`` or the localization tables are
pickled object graphs that reference classes from the game client. Those
classes are never imported here: every global the pickle names resolves to
an inert ``PickledObject`` subclass that simply records what the pickle
tried to build. The result is converted into plain JSON data with
``to_jsonable``.
"""

import copyreg
import io
import json
import math
import pickle
import struct
from codecs import encode as codecs_encode
from collections import OrderedDict, defaultdict
from pathlib import Path
from typing import Any

from .errors import DecodeError


class PickledObject:
    """Stand-in for an instance of a class referenced by a pickle.

    Subclasses are created on demand, one per ``module.name`` global, so
    that ``__new__``/``__setstate__``/``append``/``__setitem__`` calls made
    by the unpickler all land on this class.
    """

    pickled_module = ""
    pickled_name = ""

    def __new__(cls, *args, **kwargs):
        obj = super().__new__(cls)
        obj.args = args
        obj.kwargs = kwargs
        obj.state = None
        obj.items = []
        obj.dictitems = {}
        return obj

    def __init__(self, *args, **kwargs):
        pass

    def __setstate__(self, state):
        self.state = state

    def append(self, item):
        self.items.append(item)

    def extend(self, items):
        self.items.extend(items)

    def __setitem__(self, key, value):
        self.dictitems[key] = value

    @property
    def class_path(self) -> str:
        return f"{self.pickled_module}.{self.pickled_name}"

    def __repr__(self) -> str:
        return f"<PickledObject {self.class_path}>"


def _reconstruct(cls, base, state):
    """Replacement for ``copyreg._reconstructor`` (protocol 0/1 objects)."""
    if isinstance(cls, type) and issubclass(cls, PickledObject):
        if state is None:
            return cls.__new__(cls)
        return cls.__new__(cls, state)
    return copyreg._reconstructor(cls, base, state)


# Globals that are safe to resolve to the real object.
# Python 2 module names are listed too: a find_class override sees them unmapped.
SAFE_GLOBALS = {
    ("builtins", "set"): set,
    ("builtins", "frozenset"): frozenset,
    ("builtins", "list"): list,
    ("builtins", "dict"): dict,
    ("builtins", "tuple"): tuple,
    ("builtins", "object"): object,
    ("__builtin__", "set"): set,
    ("__builtin__", "frozenset"): frozenset,
    ("__builtin__", "list"): list,
    ("__builtin__", "dict"): dict,
    ("__builtin__", "tuple"): tuple,
    ("__builtin__", "object"): object,
    ("collections", "OrderedDict"): OrderedDict,
    ("collections", "defaultdict"): defaultdict,
    ("copyreg", "_reconstructor"): _reconstruct,
    ("copy_reg", "_reconstructor"): _reconstruct,
    ("_codecs", "encode"): codecs_encode,
}

# Exceptions the unpickler raises on malformed or truncated input
_DECODE_FAILURES = (
    pickle.UnpicklingError,
    EOFError,
    ValueError,
    TypeError,
    KeyError,
    IndexError,
    AttributeError,
    OverflowError,
    RecursionError,
    struct.error,
)


class GameDataUnpickler(pickle.Unpickler):
    """Unpickler that never imports the classes a pickle references."""

    def __init__(self, file, **kwargs):
        # Python 2 byte strings stay bytes; to_jsonable decodes them later.
        kwargs.setdefault("encoding", "bytes")
        super().__init__(file, **kwargs)
        self._placeholders: dict[tuple[str, str], type] = {}

    def find_class(self, module, name):
        safe = SAFE_GLOBALS.get((module, name))
        if safe is not None:
            return safe

        key = (module, name)
        if key not in self._placeholders:
            self._placeholders[key] = type(
                name,
                (PickledObject,),
                {"pickled_module": module, "pickled_name": name},
            )
        return self._placeholders[key]

    def persistent_load(self, pid):
        raise pickle.UnpicklingError(f"Unsupported persistent id: {pid!r}")


def decode_blob(data: bytes) -> Any:
    """Decode a serialized blob into Python objects.

    Args:
        data: Raw pickle bytes

    Returns:
        The unpickled object graph, with unknown classes as PickledObject

    Raises:
        DecodeError: If the data is truncated or malformed
    """
    if not data:
        raise DecodeError("Empty input")

    try:
        return GameDataUnpickler(io.BytesIO(data)).load()
    except _DECODE_FAILURES as e:
        raise DecodeError(f"{type(e).__name__}: {e}") from e


def decode_file(file_path: Path) -> Any:
    """Read and decode a serialized blob from disk."""
    return decode_blob(Path(file_path).read_bytes())


def _bytes_to_text(value: bytes) -> str:
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError:
        return value.hex()


def _json_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, (bytes, bytearray)):
        return _bytes_to_text(bytes(key))
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, tuple):
        return ",".join(_json_key(part) for part in key)
    if isinstance(key, PickledObject):
        return key.class_path
    return str(key)


def _object_to_jsonable(obj: PickledObject, path: set[int]) -> Any:
    state = obj.state
    if isinstance(state, tuple) and len(state) == 2 and isinstance(state[1], dict):
        # (dict_state, slot_state) form; merge the two
        state = {**(state[0] or {}), **state[1]}

    plain_state = state is None or isinstance(state, dict)

    if not obj.args and not obj.kwargs and plain_state:
        if obj.items and not obj.dictitems and not state:
            return [_to_jsonable(item, path) for item in obj.items]
        if not obj.items:
            merged = dict(state or {})
            merged.update(obj.dictitems)
            return {_json_key(k): _to_jsonable(v, path) for k, v in merged.items()}

    data: dict[str, Any] = {"__class__": obj.class_path}
    if obj.args:
        data["__args__"] = [_to_jsonable(arg, path) for arg in obj.args]
    if obj.kwargs:
        data["__kwargs__"] = _to_jsonable(obj.kwargs, path)
    if state is not None:
        data["__state__"] = _to_jsonable(state, path)
    if obj.items:
        data["__items__"] = [_to_jsonable(item, path) for item in obj.items]
    if obj.dictitems:
        data["__dictitems__"] = _to_jsonable(obj.dictitems, path)
    return data


def _container_to_jsonable(value: Any, path: set[int]) -> Any:
    if isinstance(value, dict):
        return {_json_key(k): _to_jsonable(v, path) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item, path) for item in value]
    if isinstance(value, (set, frozenset)):
        # Sets have no stable order; sort by serialized form
        items = [_to_jsonable(item, path) for item in value]
        return sorted(items, key=lambda item: json.dumps(item, sort_keys=True))
    return _object_to_jsonable(value, path)


def _to_jsonable(value: Any, path: set[int]) -> Any:
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, (bytes, bytearray)):
        return _bytes_to_text(bytes(value))
    if isinstance(value, (dict, list, tuple, set, frozenset, PickledObject)):
        # path holds the containers between the root and this value
        marker = id(value)
        if marker in path:
            raise DecodeError(f"Cyclic reference to {type(value).__name__} in decoded data")
        path.add(marker)
        try:
            return _container_to_jsonable(value, path)
        finally:
            path.discard(marker)
    if isinstance(value, type) and issubclass(value, PickledObject):
        return value.pickled_module + "." + value.pickled_name
    if isinstance(value, complex):
        return [value.real, value.imag]
    return repr(value)


def to_jsonable(value: Any) -> Any:
    """Convert a decoded object graph into JSON-compatible data.

    Mapping keys become strings, tuples and sets become lists, non-finite
    floats become null, and placeholder objects become dictionaries.
    Objects shared between branches are converted once per branch.

    Raises:
        DecodeError: If the graph contains a reference cycle
    """
    return _to_jsonable(value, set())


def convert_blob_to_json(blob_path: Path, json_path: Path) -> Any:
    """Decode a serialized blob file and write it out as indented JSON.

    Returns:
        The JSON-compatible data that was written

    Raises:
        DecodeError: If the blob cannot be decoded, contains a reference
            cycle or is nested too deeply to convert
        OSError: If either file cannot be read or written
    """
    try:
        data = to_jsonable(decode_file(blob_path))
        text = json.dumps(data, indent=2, ensure_ascii=False)
    except RecursionError as e:
        raise DecodeError(f"Decoded data in {blob_path} is nested too deeply: {e}") from e

    with Path(json_path).open("w", encoding="utf-8") as f:
        f.write(text)

    return data

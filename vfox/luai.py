"""Conversion between Python values and Lua-style tables.

Plugins exchange data as Lua tables. This module models Lua values
(``None`` for nil, ``bool``, ``float`` numbers, ``str``, :class:`LuaTable`
and :class:`LuaFunction`). It converts Python objects, including dataclasses
whose fields carry a ``luai`` name, to and from those values.
"""

from __future__ import annotations

import dataclasses
import inspect
import math
import types
from typing import Any, Callable, Iterator, Union, get_args, get_origin


def luai_field(name: str, **kwargs: Any) -> Any:
    """A dataclass field that is stored under ``name`` in a Lua table."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata["luai"] = name
    return dataclasses.field(metadata=metadata, **kwargs)


class LuaFunction:
    """A Python callable exposed as a Lua function."""

    def __init__(self, fn: Callable[..., Any]) -> None:
        self.fn = fn

    def __call__(self, *args: Any) -> Any:
        return self.fn(*args)

    def __repr__(self) -> str:
        return f"LuaFunction({self.fn!r})"


def _normalize_key(key: Any) -> Any:
    if key is None:
        raise ValueError("table index is nil")
    if isinstance(key, float):
        if math.isnan(key):
            raise ValueError("table index is NaN")
        if key.is_integer():
            return int(key)
    return key


class LuaTable:
    """A Lua table: array part first when iterated, then the other keys."""

    def __init__(self, entries: dict[Any, Any] | None = None) -> None:
        self._data: dict[Any, Any] = {}
        for key, value in (entries or {}).items():
            self.set(key, value)

    def get(self, key: Any) -> Any:
        """Return the value at ``key``, or None (nil) when absent."""
        if key is None:
            return None
        if isinstance(key, float) and math.isnan(key):
            return None
        return self._data.get(_normalize_key(key))

    def set(self, key: Any, value: Any) -> None:
        """Store ``value`` at ``key``; storing None removes the key."""
        key = _normalize_key(key)
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = value

    def _border(self) -> int:
        n = 0
        while (n + 1) in self._data:
            n += 1
        return n

    def items(self) -> Iterator[tuple[Any, Any]]:
        """Yield key/value pairs: indices 1..n in order, then the rest."""
        n = self._border()
        for i in range(1, n + 1):
            yield i, self._data[i]
        for key, value in list(self._data.items()):
            if isinstance(key, int) and not isinstance(key, bool) and 1 <= key <= n:
                continue
            yield key, value

    def __len__(self) -> int:
        return self._border()

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None

    def __iter__(self) -> Iterator[Any]:
        return (key for key, _ in self.items())

    def __repr__(self) -> str:
        return f"LuaTable({dict(self.items())!r})"


_KNOWN_NAMES: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "list": list,
    "dict": dict,
    "List": list,
    "Dict": dict,
    "Any": Any,
    "object": object,
    "None": type(None),
    "NoneType": type(None),
    "LuaTable": LuaTable,
    "LuaFunction": LuaFunction,
}


def _split_top(text: str, sep: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in text:
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
        elif ch == sep and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    parts.append("".join(current).strip())
    return parts


def _resolve(annotation: Any, namespace: dict[str, Any]) -> Any:
    """Turn a (possibly textual) annotation into a type object."""
    if not isinstance(annotation, str):
        return annotation
    text = annotation.strip().strip("'\"")
    members = _split_top(text, "|")
    if len(members) > 1:
        return Union[tuple(_resolve(m, namespace) for m in members)]
    if text.endswith("]") and "[" in text:
        head, _, inner = text[:-1].partition("[")
        head = head.strip().rpartition(".")[2]
        args = tuple(_resolve(a, namespace) for a in _split_top(inner, ","))
        if head == "Optional":
            return Union[args[0], None]
        if head == "Union":
            return Union[args]
        if head in ("list", "List", "Sequence") and args:
            return list[args[0]]
        if head in ("dict", "Dict", "Mapping") and len(args) == 2:
            return dict[args[0], args[1]]
        return Any
    name = text.rpartition(".")[2]
    if name in namespace:
        return namespace[name]
    return _KNOWN_NAMES.get(name, Any)


def _field_types(tp: type) -> dict[str, Any]:
    module = inspect.getmodule(tp)
    namespace: dict[str, Any] = dict(vars(module)) if module is not None else {}
    namespace.setdefault(tp.__name__, tp)
    return {f.name: _resolve(f.type, namespace) for f in dataclasses.fields(tp)}


def _number_str(number: float) -> str:
    if math.isfinite(number) and float(int(number)) == number:
        return str(int(number))
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "+Inf" if number > 0 else "-Inf"
    return repr(float(number))


def _tostring(value: Any) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _number_str(float(value))
    if isinstance(value, str):
        return value
    if isinstance(value, LuaTable):
        return f"table: {id(value):#x}"
    if isinstance(value, LuaFunction):
        return f"function: {id(value):#x}"
    return str(value)


def marshal(value: Any) -> Any:
    """Convert a Python value to a Lua value."""
    if value is None:
        return None
    if isinstance(value, (LuaTable, LuaFunction)):
        return value
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        table = LuaTable()
        for f in dataclasses.fields(value):
            item = getattr(value, f.name)
            if item is None:
                continue
            table.set(f.metadata.get("luai") or f.name, marshal(item))
        return table
    if isinstance(value, (list, tuple)):
        table = LuaTable()
        for index, item in enumerate(value, start=1):
            table.set(index, marshal(item))
        return table
    if isinstance(value, dict):
        table = LuaTable()
        for key, item in value.items():
            if isinstance(key, bool) or not isinstance(key, (str, int)):
                raise TypeError(f"marshal: unsupported type {type(key).__name__} for key")
            table.set(key, marshal(item))
        return table
    if callable(value) and not isinstance(value, type):
        return LuaFunction(value)
    raise TypeError(f"marshal: unsupported type {type(value).__name__}")


def _interface(value: Any) -> Any:
    """Convert a Lua value to plain Python data (dict, list, float, ...)."""
    if isinstance(value, LuaTable):
        if value.get(1) is not None:
            return [_interface(item) for _, item in value.items()]
        return {_tostring(key): _interface(item) for key, item in value.items()}
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    return None


def _zero(tp: Any) -> Any:
    if tp is Any or tp is object:
        return None
    origin = get_origin(tp)
    if origin in (Union, types.UnionType):
        return None
    if tp is str:
        return ""
    if tp is bool:
        return False
    if tp is int:
        return 0
    if tp is float:
        return 0.0
    if tp is list or origin is list:
        return []
    if tp is dict or origin is dict:
        return {}
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return _decode_dataclass(LuaTable(), tp)
    return None


def _decode_dataclass(value: LuaTable, tp: type) -> Any:
    hints = _field_types(tp)
    init_fields = [f for f in dataclasses.fields(tp) if f.init]
    by_name = {f.name: f for f in init_fields}
    by_tag = {f.metadata["luai"]: f for f in init_fields if "luai" in f.metadata}
    kwargs: dict[str, Any] = {}
    for key, item in value.items():
        name = _tostring(key)
        f = by_name.get(name) or by_tag.get(name)
        if f is None:
            continue
        kwargs[f.name] = _decode(item, hints.get(f.name, Any))
    for f in init_fields:
        if f.name in kwargs:
            continue
        if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            kwargs[f.name] = _zero(hints.get(f.name, Any))
    return tp(**kwargs)


def _decode_number(value: Any, tp: type) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"unmarshal: cannot store {_tostring(value)!r} in {tp.__name__}")
    return int(value) if tp is int else float(value)


def _decode(value: Any, tp: Any) -> Any:
    if tp is Any or tp is object:
        return _interface(value)
    origin = get_origin(tp)
    args = get_args(tp)

    if origin in (Union, types.UnionType):
        if value is None:
            return None
        members = [a for a in args if a is not type(None)]
        if len(members) == 1:
            return _decode(value, members[0])
        return _interface(value)

    if tp is LuaTable:
        return value if isinstance(value, LuaTable) else None
    if tp is LuaFunction:
        return value if isinstance(value, LuaFunction) else None

    if tp is list or origin is list:
        if not isinstance(value, LuaTable):
            return []
        elem = args[0] if args else Any
        return [_decode(item, elem) for _, item in value.items()]

    if tp is dict or origin is dict:
        key_type, elem = (args[0], args[1]) if args else (str, Any)
        if key_type is not str and key_type is not int:
            name = getattr(key_type, "__name__", str(key_type))
            raise TypeError(f"unmarshal: unsupported map key type {name}")
        if not isinstance(value, LuaTable):
            return {}
        result: dict[Any, Any] = {}
        for key, item in value.items():
            text = _tostring(key)
            if key_type is int:
                try:
                    result[int(text)] = _decode(item, elem)
                except ValueError:
                    continue
            else:
                result[text] = _decode(item, elem)
        return result

    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        if not isinstance(value, LuaTable):
            return _zero(tp)
        return _decode_dataclass(value, tp)

    if isinstance(value, LuaTable):
        return _zero(tp)

    if tp is str:
        return _tostring(value)
    if tp is bool:
        if not isinstance(value, bool):
            raise TypeError(f"unmarshal: cannot store {_tostring(value)!r} in bool")
        return value
    if tp is int or tp is float:
        return _decode_number(value, tp)

    raise TypeError(f"unmarshal: unsupported target type {tp!r}")


def unmarshal(value: Any, target_type: Any = Any) -> Any:
    """Convert a Lua value to a new value of ``target_type``."""
    return _decode(value, target_type)
from typing import Any, Dict, Mapping, Optional

_MISSING = object()

# Form controls sizes -> bootstrap column classes
SIZES: Dict[str, str] = {
    "1/12": "col-1",
    "2/12": "col-2",
    "3/12": "col-3",
    "4/12": "col-4",
    "5/12": "col-5",
    "6/12": "col-6",
    "7/12": "col-7",
    "8/12": "col-8",
    "9/12": "col-9",
    "10/12": "col-10",
    "11/12": "col-11",
    "12/12": "col-12",
    "12": "col-12",
}


def dot_get(data: Mapping, key: str, default: Any = None) -> Any:
    """Read ``key`` from ``data``, verbatim first and then as a dot path."""
    if key in data:
        return data[key]
    node: Any = data
    for segment in key.split("."):
        if not isinstance(node, Mapping) or segment not in node:
            return default
        node = node[segment]
    return node


def dot_has(data: Mapping, key: str) -> bool:
    return dot_get(data, key, _MISSING) is not _MISSING


def element_name(element: str) -> str:
    """Turn a dotted field key into a bracketed form field name.

    ``seo.title`` -> ``seo[title]``, ``a.b.c`` -> ``a[b][c]``. The dotted
    key is expanded to ``a][b][c]`` and the first ``]`` in that string is
    removed, so a ``]`` inside the first segment is the one that goes
    (``a]x.b`` -> ``ax][b]``). Keys without a dot are returned unchanged.
    """
    if "." not in element:
        return element
    name = element.replace(".", "][") + "]"
    return name.replace("]", "", 1)


class Registry:
    """Nested settings store addressed with dotted keys."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = data or {}

    def get(self, key: str, default: Any = None) -> Any:
        return dot_get(self._data, key, default)

    def has(self, key: str) -> bool:
        return dot_has(self._data, key)

    def set(self, key: str, value: Any) -> None:
        node = self._data
        *parents, last = key.split(".")
        for segment in parents:
            node = node.setdefault(segment, {})
        node[last] = value

    def __getitem__(self, key: str) -> Any:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

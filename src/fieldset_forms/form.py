"""Default HTML form-markup builder.

Every helper returns a plain string. Attribute values and text content go
through ``markupsafe.escape``; attributes set to ``None`` or ``False`` are
left out and ``True`` renders a bare attribute (``required``).
"""

from typing import Any, Mapping, Optional

from markupsafe import escape


class HtmlForm:
    def attributes(self, attributes: Optional[Mapping[str, Any]]) -> str:
        parts = []
        for key, value in (attributes or {}).items():
            if value is None or value is False:
                continue
            if value is True:
                parts.append(f" {escape(key)}")
            else:
                parts.append(f' {escape(key)}="{escape(value)}"')
        return "".join(parts)

    def open(
        self, action: Optional[str] = None, attributes: Optional[Mapping[str, Any]] = None
    ) -> str:
        attrs = {"action": action, "method": "post", "accept-charset": "utf-8"}
        attrs.update(attributes or {})
        return f"<form{self.attributes(attrs)}>"

    def close(self) -> str:
        return "</form>"

    def label(
        self, for_: str, text: str, attributes: Optional[Mapping[str, Any]] = None
    ) -> str:
        attrs = {"for": for_}
        attrs.update(attributes or {})
        return f"<label{self.attributes(attrs)}>{escape(text)}</label>"

    def input(
        self, name: str, value: Any = "", attributes: Optional[Mapping[str, Any]] = None
    ) -> str:
        extra = dict(attributes or {})
        attrs = {"type": extra.pop("type", "text"), "name": name, "value": value}
        attrs["id"] = extra.pop("id", name)
        attrs.update(extra)
        return f"<input{self.attributes(attrs)}>"

    def hidden(
        self, name: str, value: Any = "", attributes: Optional[Mapping[str, Any]] = None
    ) -> str:
        attrs = dict(attributes or {})
        attrs["type"] = "hidden"
        return self.input(name, value, attrs)

    def select(
        self,
        name: str,
        options: Optional[Mapping[Any, Any]] = None,
        selected: Any = None,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> str:
        extra = dict(attributes or {})
        attrs = {"name": name, "id": extra.pop("id", name)}
        attrs.update(extra)

        selected = "" if selected is None else str(selected)
        rows = []
        for value, text in (options or {}).items():
            option = {"value": value, "selected": str(value) == selected}
            rows.append(f"<option{self.attributes(option)}>{escape(text)}</option>")
        return f"<select{self.attributes(attrs)}>{''.join(rows)}</select>"

    def textarea(
        self, name: str, value: Any = "", attributes: Optional[Mapping[str, Any]] = None
    ) -> str:
        extra = dict(attributes or {})
        attrs = {"name": name, "id": extra.pop("id", name)}
        attrs.update(extra)
        return f"<textarea{self.attributes(attrs)}>{escape(value)}</textarea>"

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Callable, Dict, Mapping, Optional, Union

from loguru import logger
from markupsafe import escape

from .models import FieldProperty, FieldType, Fieldset
from .providers import (
    CsrfProvider,
    FormBuilder,
    MediaLister,
    SettingsLookup,
    TemplateLister,
    Translator,
)
from .utils import SIZES, dot_get, dot_has, element_name

HTML_EDITOR_CLASS = "js-html-editor"
VISIBILITY_STATES = ("draft", "visible", "hidden")
DEFAULT_VISIBILITY = "visible"
COMPACT_DATE_FORMATS = ("%Y%m%d", "%Y")


def _timestamp(value: Any) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(float(value), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


def parse_date(value: Any) -> Optional[datetime]:
    """Best effort parse of a stored date.

    Numbers, and digit strings longer than eight characters, are epoch
    seconds. Shorter digit strings are compact dates (``20240305``,
    ``2024``). Anything else is tried as ISO 8601, then RFC 2822.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _timestamp(value)

    text = str(value).strip()
    if not text:
        return None

    digits = text.lstrip("-").split(".", 1)[0]
    if digits.isdigit():
        if len(digits) > 8:
            return _timestamp(text)
        for fmt in COMPACT_DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                pass
        return None

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        return None


def stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


class ResolvedField:
    """A field property with every default filled in, ready to render."""

    def __init__(self, element: str, prop: FieldProperty, raw: Any, size: str, css_class: str):
        self.element = element
        self.raw = raw
        self.name = element_name(element)
        self.type = prop.field_type
        self.options = prop.options
        self.value = stringify(raw)
        self.size = size
        self.title = prop.title or None
        self.attributes = dict(prop.attributes)
        self.attributes["class"] = css_class


class FieldsetRenderer:
    """Render a fieldset schema into a tabbed admin form."""

    def __init__(
        self,
        form: FormBuilder,
        csrf: CsrfProvider,
        translate: Translator,
        templates: TemplateLister,
        media: MediaLister,
        registry: SettingsLookup,
        field_class: str = "form-control",
        sizes: Optional[Mapping[str, str]] = None,
    ):
        self.form = form
        self.csrf = csrf
        self.translate = translate
        self.templates = templates
        self.media = media
        self.registry = registry
        self.field_class = field_class
        self.sizes = dict(SIZES if sizes is None else sizes)

        self._renderers: Dict[FieldType, Callable[[ResolvedField, Any], str]] = {
            FieldType.TEXT: self.text_field,
            FieldType.TEXTAREA: self.textarea_field,
            FieldType.HIDDEN: self.hidden_field,
            FieldType.HTML: self.html_field,
            FieldType.SELECT: self.select_field,
            FieldType.TEMPLATE_SELECT: self.template_select_field,
            FieldType.VISIBILITY_SELECT: self.visibility_select_field,
            FieldType.TAGS: self.tags_field,
            FieldType.DATETIMEPICKER: self.date_field,
            FieldType.MEDIA_SELECT: self.media_select_field,
        }

    # ------------------------------------------------------------------- #
    def render(
        self,
        fieldset: Union[Fieldset, Mapping[str, Any]],
        values: Optional[Mapping[str, Any]] = None,
        request: Any = None,
    ) -> str:
        if not isinstance(fieldset, Fieldset):
            fieldset = Fieldset.model_validate(fieldset)
        values = values or {}

        form = self.form.open(None, {"id": "form"})
        form += self.csrf_hidden_fields()
        form += self.action_hidden_field()

        if fieldset.sections:
            form += '<ul class="nav nav-pills nav-justified" id="pills-tab" role="tablist">'
            for key, section in fieldset.sections.items():
                form += self._nav_item(key, section.title)
            form += "</ul>"

            form += '<div class="tab-content" id="pills-tabContent">'
            for key, section in fieldset.sections.items():
                active = " show active" if key == "main" else ""
                form += (
                    f'<div class="tab-pane fade{active}" id="pills-{escape(key)}" '
                    f'role="tabpanel" aria-labelledby="pills-{escape(key)}-tab">'
                )
                form += '<div class="row">'
                for element, prop in section.fields.items():
                    form += self.render_field(element, prop, values, request)
                form += "</div>"
                form += "</div>"
            form += "</div>"

        form += self.form.close()
        return form

    def _nav_item(self, key: str, title: str) -> str:
        is_main = key == "main"
        return (
            '<li class="nav-item">'
            f'<a class="nav-link{" active" if is_main else ""}" id="pills-{escape(key)}-tab" '
            f'data-toggle="pill" href="#pills-{escape(key)}" role="tab" '
            f'aria-controls="pills-{escape(key)}" '
            f'aria-selected="{"true" if is_main else "false"}">{escape(title)}</a>'
            "</li>"
        )

    def resolve(self, element: str, prop: FieldProperty, values: Mapping[str, Any]) -> ResolvedField:
        css_class = self.field_class
        if prop.attributes.get("class"):
            css_class = f"{self.field_class} {prop.attributes['class']}"

        size = self.sizes.get(prop.size or "12", self.sizes.get("12", "col-12"))

        value = dot_get(values, element) if dot_has(values, element) else prop.value
        return ResolvedField(element, prop, value, size, css_class)

    def render_field(
        self, element: str, prop: FieldProperty, values: Mapping[str, Any], request: Any = None
    ) -> str:
        field = self.resolve(element, prop, values)
        logger.debug(f"Rendering {field.type.value} field {element!r}")
        return self._renderers[field.type](field, request)

    # ------------------------------------------------------------------- #
    # Field renderers
    # ------------------------------------------------------------------- #
    def _group(self, field: ResolvedField, control: str) -> str:
        label = self.form.label(field.element, self.translate(field.title)) if field.title else ""
        return f'<div class="form-group {field.size}">{label}{control}</div>'

    def text_field(self, field: ResolvedField, request: Any = None) -> str:
        return self._group(field, self.form.input(field.name, field.value, field.attributes))

    def textarea_field(self, field: ResolvedField, request: Any = None) -> str:
        return self._group(field, self.form.textarea(field.name, field.value, field.attributes))

    def hidden_field(self, field: ResolvedField, request: Any = None) -> str:
        return self.form.hidden(field.name, field.value, field.attributes)

    def html_field(self, field: ResolvedField, request: Any = None) -> str:
        attributes = dict(field.attributes)
        attributes["class"] = f"{attributes['class']} {HTML_EDITOR_CLASS}"
        return self._group(field, self.form.textarea(field.name, field.value, attributes))

    def select_field(self, field: ResolvedField, request: Any = None) -> str:
        return self._group(
            field, self.form.select(field.name, field.options, field.value, field.attributes)
        )

    def template_select_field(self, field: ResolvedField, request: Any = None) -> str:
        theme = self.registry.get("settings.theme")
        options: Dict[str, str] = {}
        if theme:
            for template in self.templates.get_templates(theme):
                if template.type != "file" or template.extension != "html":
                    continue
                options[template.basename] = template.basename
        if not options:
            logger.warning(f"No html templates found for theme {theme!r}")
        return self._group(
            field, self.form.select(field.name, options, field.value, field.attributes)
        )

    def visibility_select_field(self, field: ResolvedField, request: Any = None) -> str:
        options = {state: self.translate(f"admin_entries_{state}") for state in VISIBILITY_STATES}
        selected = field.value or DEFAULT_VISIBILITY
        return self._group(
            field, self.form.select(field.name, options, selected, field.attributes)
        )

    def tags_field(self, field: ResolvedField, request: Any = None) -> str:
        attributes = {"class": self.field_class, "data-role": "tagsinput"}
        return self._group(field, self.form.input(field.name, field.value, attributes))

    def date_field(self, field: ResolvedField, request: Any = None) -> str:
        value = ""
        if field.value:
            parsed = parse_date(field.raw)
            if parsed is None:
                logger.warning(f"Cannot parse date {field.value!r} for {field.element!r}")
                value = field.value
            else:
                value = parsed.strftime(self.registry.get("settings.date_format", "%Y-%m-%d %H:%M"))

        control = (
            '<div class="input-group date" id="datetimepicker" data-target-input="nearest">'
            f'<input name="{escape(field.name)}" type="text" class="{escape(self.field_class)} datetimepicker-input" '
            f'data-target="#datetimepicker" value="{escape(value)}">'
            '<div class="input-group-append" data-target="#datetimepicker" data-toggle="datetimepicker">'
            '<div class="input-group-text"><i class="far fa-calendar-alt"></i></div>'
            "</div>"
            "</div>"
        )
        return self._group(field, control)

    def media_select_field(self, field: ResolvedField, request: Any = None) -> str:
        query_params = getattr(request, "query_params", None) or {}
        entry_id = query_params.get("id")
        if entry_id:
            options = self.media.get_media_list(entry_id, False)
        else:
            logger.warning(f"No entry id in request for media field {field.element!r}")
            options = {}
        return self._group(
            field, self.form.select(field.name, options, field.value, field.attributes)
        )

    # ------------------------------------------------------------------- #
    def csrf_hidden_fields(self) -> str:
        token = self.csrf.generate_token()
        return (
            f'<input type="hidden" name="{escape(token.name_key)}" value="{escape(token.name)}">'
            f'<input type="hidden" name="{escape(token.value_key)}" value="{escape(token.value)}">'
        )

    def action_hidden_field(self) -> str:
        return self.form.hidden("action", "save-form")

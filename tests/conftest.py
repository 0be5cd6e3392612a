from typing import Dict, List

import pytest
from bs4 import BeautifulSoup

from fieldset_forms.form import HtmlForm
from fieldset_forms.i18n import Catalog
from fieldset_forms.models import CsrfToken, TemplateItem
from fieldset_forms.renderer import FieldsetRenderer
from fieldset_forms.utils import Registry


class StaticCsrf:
    def generate_token(self) -> CsrfToken:
        return CsrfToken(name_key="csrf_name", name="csrf1", value_key="csrf_value", value="abc")


class StubTemplates:
    def __init__(self, items: List[TemplateItem]):
        self.items = items
        self.themes: List[str] = []

    def get_templates(self, theme: str) -> List[TemplateItem]:
        self.themes.append(theme)
        return self.items


class StubMedia:
    def __init__(self, files: Dict[str, str]):
        self.files = files
        self.calls = []

    def get_media_list(self, entry_id: str, path: bool = False) -> Dict[str, str]:
        self.calls.append((entry_id, path))
        return self.files


def template(basename: str, type_: str = "file") -> TemplateItem:
    stem, _, ext = basename.partition(".")
    return TemplateItem(type=type_, path=f"templates/{basename}", basename=basename, filename=stem, extension=ext)


@pytest.fixture
def templates():
    return StubTemplates([template("default.html"), template("blog.html"), template("readme.md"), template("partials.html", "dir")])


@pytest.fixture
def media():
    return StubMedia({"cover.jpg": "cover.jpg", "intro.png": "intro.png"})


@pytest.fixture
def catalog():
    return Catalog(
        {
            "admin_entries_draft": "Draft",
            "admin_entries_visible": "Visible",
            "admin_entries_hidden": "Hidden",
            "admin_title": "Title",
        }
    )


@pytest.fixture
def registry():
    return Registry({"settings": {"date_format": "%d.%m.%Y", "theme": "default"}})


@pytest.fixture
def renderer(templates, media, catalog, registry):
    return FieldsetRenderer(
        form=HtmlForm(),
        csrf=StaticCsrf(),
        translate=catalog,
        templates=templates,
        media=media,
        registry=registry,
    )


@pytest.fixture
def render(renderer):
    """Render a single ``main`` section holding ``fields`` and parse it."""

    def _render(fields, values=None, request=None):
        schema = {"sections": {"main": {"title": "Main", "fields": fields}}}
        return BeautifulSoup(renderer.render(schema, values or {}, request), "html.parser")

    return _render

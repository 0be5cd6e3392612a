"""Collaborator interfaces used by the renderer, plus filesystem-backed defaults."""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union

from loguru import logger

from .models import CsrfToken, TemplateItem


class FormBuilder(Protocol):
    def open(self, action: Optional[str] = None, attributes: Optional[Mapping[str, Any]] = None) -> str: ...

    def close(self) -> str: ...

    def label(self, for_: str, text: str, attributes: Optional[Mapping[str, Any]] = None) -> str: ...

    def input(self, name: str, value: Any = "", attributes: Optional[Mapping[str, Any]] = None) -> str: ...

    def hidden(self, name: str, value: Any = "", attributes: Optional[Mapping[str, Any]] = None) -> str: ...

    def select(
        self,
        name: str,
        options: Optional[Mapping[Any, Any]] = None,
        selected: Any = None,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> str: ...

    def textarea(self, name: str, value: Any = "", attributes: Optional[Mapping[str, Any]] = None) -> str: ...


class CsrfProvider(Protocol):
    def generate_token(self) -> CsrfToken: ...


class Translator(Protocol):
    def __call__(self, key: str) -> str: ...


class TemplateLister(Protocol):
    def get_templates(self, theme: str) -> List[TemplateItem]: ...


class MediaLister(Protocol):
    def get_media_list(self, entry_id: str, path: bool = False) -> Dict[str, str]: ...


class SettingsLookup(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...


# ------------------------------------------------------------------- #
def _inside(root: Path, target: Path) -> bool:
    try:
        target.resolve().relative_to(root.resolve())
        return True
    except ValueError:
        return False


class ThemeTemplates:
    """Lists ``<themes_dir>/<theme>/templates``."""

    def __init__(self, themes_dir: Union[str, Path]):
        self.themes_dir = Path(themes_dir)

    def get_templates(self, theme: str) -> List[TemplateItem]:
        templates_dir = self.themes_dir / theme / "templates"
        if not _inside(self.themes_dir, templates_dir):
            logger.warning(f"Refusing theme outside themes dir: {theme}")
            return []
        if not templates_dir.is_dir():
            logger.warning(f"Templates directory not found: {templates_dir}")
            return []

        items = []
        for entry in sorted(templates_dir.iterdir()):
            items.append(
                TemplateItem(
                    type="file" if entry.is_file() else "dir",
                    path=str(entry),
                    basename=entry.name,
                    filename=entry.stem,
                    extension=entry.suffix.lstrip("."),
                )
            )
        logger.debug(f"Found {len(items)} template entries for theme {theme}")
        return items


class EntryMedia:
    """Lists the files uploaded for an entry under ``<uploads_dir>/<entry_id>``."""

    def __init__(self, uploads_dir: Union[str, Path]):
        self.uploads_dir = Path(uploads_dir)

    def get_media_list(self, entry_id: str, path: bool = False) -> Dict[str, str]:
        entry_dir = self.uploads_dir / entry_id
        if not _inside(self.uploads_dir, entry_dir):
            logger.warning(f"Refusing media lookup outside uploads dir: {entry_id}")
            return {}
        if not entry_dir.is_dir():
            return {}

        files: Dict[str, str] = {}
        for entry in sorted(entry_dir.iterdir()):
            if not entry.is_file():
                continue
            files[entry.name] = str(entry) if path else entry.name
        return files

import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger
from tqdm import tqdm

from . import config
from .csrf import Guard
from .form import HtmlForm
from .i18n import Catalog
from .models import RequestContext
from .parser import find_values, list_fieldsets, load_fieldset, load_values
from .providers import EntryMedia, ThemeTemplates
from .renderer import FieldsetRenderer
from .utils import Registry


# ------------------------------------------------------------------- #
def build_renderer() -> FieldsetRenderer:
    registry = Registry(
        {"settings": {"date_format": config.DATE_FORMAT, "theme": config.THEME}}
    )
    translate = Catalog.from_file(config.LANG_FILE) if config.LANG_FILE else Catalog()
    return FieldsetRenderer(
        form=HtmlForm(),
        csrf=Guard(
            prefix=config.CSRF_PREFIX,
            storage_limit=config.CSRF_STORAGE_LIMIT,
            strength=config.CSRF_STRENGTH,
        ),
        translate=translate,
        templates=ThemeTemplates(config.THEMES_DIR),
        media=EntryMedia(config.UPLOADS_DIR),
        registry=registry,
        field_class=config.FIELD_CLASS,
    )


# ------------------------------------------------------------------- #
def render_file(
    renderer: FieldsetRenderer, path: Path, output_dir: Path, request: RequestContext
) -> Optional[Path]:
    try:
        fieldset = load_fieldset(path)
        values = load_values(find_values(config.VALUES_DIR, path.stem))
        html = renderer.render(fieldset, values, request)
        target = output_dir / f"{path.stem}.html"
        target.write_text(html, encoding="utf-8")
        return target
    except Exception as e:
        logger.error(f"Failed {path}: {e}")
        return None


def run() -> List[Path]:
    renderer = build_renderer()
    request = RequestContext(query_params={"id": config.ENTRY_ID} if config.ENTRY_ID else {})
    output_dir = Path(config.OUTPUT_DIR)
    output_dir.mkdir(parents=True, exist_ok=True)

    written: List[Path] = []
    for path in tqdm(list_fieldsets(config.FIELDSETS_DIR), desc="Fieldsets"):
        target = render_file(renderer, path, output_dir, request)
        if target is not None:
            written.append(target)

    logger.success(f"Rendered {len(written)} forms into {output_dir}")
    return written


def main():
    logger.remove()
    logger.add(sys.stderr, level=config.LOG_LEVEL)
    run()


if __name__ == "__main__":
    main()

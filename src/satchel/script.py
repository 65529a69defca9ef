"""Load script generation."""

import logging
import os
from pathlib import Path
from typing import List

import aiofiles
import jinja2

from .exceptions import ScriptWriteError, TemplateRenderError
from .models import Image

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
LOAD_SCRIPT_TEMPLATE = "load-images.sh.j2"
SCRIPT_MODE = 0o700


def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(TEMPLATE_DIR),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=jinja2.StrictUndefined,
    )


def render_load_script(output_file: str, images: List[Image]) -> str:
    """Render the shell script that loads and re-pushes the archived images.

    Every manifest image is listed, including public ones that were left out
    of the archive.

    Args:
        output_file: Archive file name baked into the script
        images: Manifest images, in manifest order

    Returns:
        Script text

    Raises:
        TemplateRenderError: If the template is missing or fails to render
    """
    try:
        template = _environment().get_template(LOAD_SCRIPT_TEMPLATE)
        return template.render(output_file=output_file, images=images)
    except jinja2.TemplateError as e:
        raise TemplateRenderError(f"Error generating load script: {e}") from e


def _executable_opener(path: str, flags: int) -> int:
    return os.open(path, flags, SCRIPT_MODE)


async def write_load_script(
    script_path: Path, output_file: str, images: List[Image]
) -> None:
    """Render the load script and write it as an executable file.

    Raises:
        TemplateRenderError: If rendering fails
        ScriptWriteError: If the file cannot be written
    """
    content = render_load_script(output_file, images)

    logger.info("Writing load script '%s'", script_path)
    try:
        async with aiofiles.open(
            script_path, "w", encoding="utf-8", opener=_executable_opener
        ) as f:
            await f.write(content)
        os.chmod(script_path, SCRIPT_MODE)
    except OSError as e:
        raise ScriptWriteError(f"Error writing load script {script_path}: {e}") from e

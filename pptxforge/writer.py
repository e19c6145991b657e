"""
Presentation Writer
===================

Turns a Presentation into a ``.pptx`` package.

Steps
-----
1. ``plan_write`` walks the model once and assigns media indices, chart
   indices and slide-local relationship ids (see ``encoders.relationships``).
2. Every part is staged as a file in a private temporary directory, which
   is removed on every exit path.
3. The staged tree is zipped into a temporary file next to the
   destination, ``[Content_Types].xml`` first, and then moved over the
   destination with ``os.replace``. A failed write never leaves a partial
   package at the destination and never touches a previous file there.

Media Handling
--------------
Image sources are copied into ``ppt/media``. An image whose source is not
an absolute path to a readable file is left out of the package while its
relationship stays declared; this is logged at WARNING. With
``WriterConfig(strict_media=True)`` the write fails with
ResourceUnavailableError instead.
"""

import logging
import os
import shutil
import tempfile
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pptxforge.data_types import Presentation
from pptxforge.encoders.chart_xml import generate_chart_rels, generate_chart_xml
from pptxforge.encoders.package_xml import (
    DEFAULT_CREATOR,
    generate_content_types_xml,
    generate_core_props_xml,
    generate_presentation_rels,
    generate_presentation_xml,
    generate_root_rels,
)
from pptxforge.encoders.relationships import (
    MediaAssignment,
    WritePlan,
    generate_relationships_xml,
    plan_write,
)
from pptxforge.encoders.slide_xml import generate_slide_xml
from pptxforge.encoders.theme_xml import (
    generate_slide_layout_rels,
    generate_slide_layout_xml,
    generate_slide_master_rels,
    generate_slide_master_xml,
    generate_theme_xml,
)
from pptxforge.exceptions import PackagingFailedError, ResourceUnavailableError

logger = logging.getLogger(__name__)

CONTENT_TYPES_PART = "[Content_Types].xml"


@dataclass(frozen=True)
class WriterConfig:
    """Settings for writing packages."""

    compression: int = zipfile.ZIP_DEFLATED
    creator: str = DEFAULT_CREATOR
    strict_media: bool = False


# Global configuration instance
_config = WriterConfig()


def configure_writer(
    compression: Optional[int] = None,
    creator: Optional[str] = None,
    strict_media: Optional[bool] = None,
) -> None:
    """Replace the default configuration used when no config is passed to a write."""
    global _config

    _config = WriterConfig(
        compression=compression if compression is not None else _config.compression,
        creator=creator or _config.creator,
        strict_media=(
            strict_media if strict_media is not None else _config.strict_media
        ),
    )


def get_writer_config() -> WriterConfig:
    return _config


##########
# Staging
##########


def _write_part(root: Path, part_name: str, content: str) -> None:
    path = root / part_name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _copy_media(root: Path, media: MediaAssignment, config: WriterConfig) -> None:
    source = Path(media.source_path) if media.source_path else None
    target = root / "ppt" / "media" / media.file_name

    if source is not None and source.is_absolute() and source.is_file():
        target.parent.mkdir(parents=True, exist_ok=True)
        try:
            shutil.copyfile(source, target)
            return
        except OSError as exc:
            if config.strict_media:
                raise ResourceUnavailableError(media.source_path, cause=exc) from exc
            logger.warning(f"Image file not readable, omitted: {media.source_path} ({exc})")
            return

    if config.strict_media:
        raise ResourceUnavailableError(media.source_path)
    logger.warning(
        f"Image file not found, omitted: {media.source_path!r} "
        f"(relationship {media.rel_id} on slide still declared)"
    )


def _stage_parts(
    presentation: Presentation, plan: WritePlan, root: Path, config: WriterConfig
) -> list[str]:
    """Write every part below ``root``; returns the part names in archive order."""
    parts: dict[str, str] = {}

    for chart in plan.charts:
        parts[f"ppt/charts/{chart.file_name}"] = generate_chart_xml(chart.chart)
        parts[f"ppt/charts/_rels/{chart.file_name}.rels"] = generate_chart_rels()

    parts["ppt/theme/theme1.xml"] = generate_theme_xml(presentation.theme)
    parts["ppt/slideMasters/slideMaster1.xml"] = generate_slide_master_xml()
    parts["ppt/slideMasters/_rels/slideMaster1.xml.rels"] = generate_slide_master_rels()
    parts["ppt/slideLayouts/slideLayout1.xml"] = generate_slide_layout_xml("blank")
    parts["ppt/slideLayouts/_rels/slideLayout1.xml.rels"] = generate_slide_layout_rels()

    for slide_plan, slide in zip(plan.slides, presentation.slides):
        name = f"slide{slide_plan.slide_number}.xml"
        parts[f"ppt/slides/{name}"] = generate_slide_xml(
            slide, presentation.slide_width, slide_plan.rel_ids
        )
        parts[f"ppt/slides/_rels/{name}.rels"] = generate_relationships_xml(
            slide_plan.relationships
        )

    parts["ppt/presentation.xml"] = generate_presentation_xml(presentation)
    parts["ppt/_rels/presentation.xml.rels"] = generate_presentation_rels(
        presentation.slide_count
    )
    parts[CONTENT_TYPES_PART] = generate_content_types_xml(
        presentation.slide_count, len(plan.charts), plan.image_extensions
    )
    parts["_rels/.rels"] = generate_root_rels()
    parts["docProps/core.xml"] = generate_core_props_xml(presentation.title, config.creator)

    for part_name, content in parts.items():
        _write_part(root, part_name, content)

    for media in plan.media:
        _copy_media(root, media, config)

    staged = [
        path.relative_to(root).as_posix()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    ]
    staged.remove(CONTENT_TYPES_PART)
    logger.debug(f"Staged {len(staged) + 1} parts for {presentation.slide_count} slides")
    return [CONTENT_TYPES_PART] + staged


############
# Archiving
############


def _archive(root: Path, part_names: list[str], destination: Path, config: WriterConfig) -> None:
    """Zip the staged parts into a sibling temporary file, then move it into place."""
    fd, temp_name = tempfile.mkstemp(
        prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
    )
    os.close(fd)
    try:
        with zipfile.ZipFile(temp_name, "w", compression=config.compression) as zf:
            for part_name in part_names:
                zf.write(root / part_name, arcname=part_name)
        os.replace(temp_name, destination)
    except BaseException:
        try:
            os.unlink(temp_name)
        except FileNotFoundError:
            pass
        raise


def write_presentation(
    presentation: Presentation,
    destination_path: str | os.PathLike,
    *,
    config: WriterConfig | None = None,
) -> str:
    """
    Write a presentation to ``destination_path`` as a .pptx package.

    Args:
        presentation: The model to write. It is not modified.
        destination_path: Target file; an existing file is replaced atomically.
        config: Writer settings. Defaults to the module configuration.

    Returns:
        The destination path as a string.

    Raises:
        PackagingFailedError: The parts could not be staged or archived.
        ResourceUnavailableError: An image source is missing and
            ``strict_media`` is enabled.
    """
    config = config or _config
    destination = Path(destination_path)
    logger.debug(f"Writing presentation [{presentation.title}] to {destination}")

    plan = plan_write(presentation)

    try:
        with tempfile.TemporaryDirectory(prefix="pptxforge_") as staging:
            root = Path(staging)
            part_names = _stage_parts(presentation, plan, root, config)
            _archive(root, part_names, destination, config)
    except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
        raise PackagingFailedError(str(destination), str(exc), cause=exc) from exc

    logger.debug(
        f"Wrote {destination}: {presentation.slide_count} slides, "
        f"{len(plan.media)} images, {len(plan.charts)} charts"
    )
    return str(destination)

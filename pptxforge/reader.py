"""
Presentation Reader
===================

Reads a ``.pptx`` package back into a Presentation.

The reader is a deliberate subset of the writer: it rebuilds text boxes
and slide backgrounds only. Pictures, preset shapes, tables and charts
are skipped, so a read-then-write cycle drops them.

The package is validated against ZIP-bomb heuristics and parsed in
memory; nothing is extracted to disk.

Slide Resolution
----------------
    ppt/presentation.xml          p:sldIdLst gives the order (r:id per slide)
    ppt/_rels/presentation.xml.rels
                                  maps r:id -> slides/slide{n}.xml

Relationships whose type is not exactly ``.../slide`` (masters, layouts,
notes slides) are ignored. Without a p:sldIdLst the relationship order is
used. A listed slide whose part is missing is skipped.
"""

import io
import logging
import os
import posixpath
from typing import List, Optional
from xml.etree import ElementTree as ET

from pptxforge.data_types import (
    GradientBackground,
    Position,
    Presentation,
    Slide,
    SlideBackground,
    SolidBackground,
    TextElement,
    normalize_alignment,
    normalize_vertical_alignment,
)
from pptxforge.exceptions import UnpackagingFailedError
from pptxforge.mime_types import NS_A, NS_DC, NS_P, NS_R, NS_RELATIONSHIPS
from pptxforge.themes import DEFAULT_THEME, THEME_PRESETS
from pptxforge.util.geometry import (
    WIDESCREEN_HEIGHT,
    WIDESCREEN_WIDTH,
    emu_to_inches,
    hundredths_to_points,
    rotation_to_degrees,
)
from pptxforge.util.zip_bomb import DEFAULT_ZIP_BOMB_LIMITS, ZipBombLimits
from pptxforge.util.zip_context import ZipContext

logger = logging.getLogger(__name__)

# XML Namespaces in ElementTree notation
P_NS = f"{{{NS_P}}}"
A_NS = f"{{{NS_A}}}"
R_NS = f"{{{NS_R}}}"
REL_NS = f"{{{NS_RELATIONSHIPS}}}"
DC_NS = f"{{{NS_DC}}}"

PRESENTATION_PART = "ppt/presentation.xml"
PRESENTATION_RELS_PART = "ppt/_rels/presentation.xml.rels"
CORE_PROPS_PART = "docProps/core.xml"
THEME_PART = "ppt/theme/theme1.xml"
DEFAULT_TITLE = "Untitled"
DEFAULT_GRADIENT_ANGLE = 270.0


class _PresentationContext:
    """
    Parsed package parts needed to rebuild a presentation.

    Required parts are parsed eagerly and raise MalformedDocumentError when
    missing or broken; optional parts degrade to None.
    """

    def __init__(self, zip_ctx: ZipContext):
        self.zip = zip_ctx
        self.presentation_root = zip_ctx.read_xml_root(PRESENTATION_PART)
        self.presentation_rels_root = zip_ctx.read_optional_xml_root(PRESENTATION_RELS_PART)
        self.core_root = zip_ctx.read_optional_xml_root(CORE_PROPS_PART)
        self.theme_root = zip_ctx.read_optional_xml_root(THEME_PART)

    def slide_size(self) -> tuple[int, int]:
        sld_sz = self.presentation_root.find(f"{P_NS}sldSz")
        if sld_sz is None:
            return WIDESCREEN_WIDTH, WIDESCREEN_HEIGHT
        return (
            _int_attr(sld_sz, "cx", WIDESCREEN_WIDTH),
            _int_attr(sld_sz, "cy", WIDESCREEN_HEIGHT),
        )

    def title(self) -> str:
        if self.core_root is None:
            return DEFAULT_TITLE
        title_elem = self.core_root.find(f"{DC_NS}title")
        if title_elem is not None and title_elem.text:
            return title_elem.text
        return DEFAULT_TITLE

    def theme_name(self) -> Optional[str]:
        if self.theme_root is None:
            return None
        return self.theme_root.get("name")

    def _slide_relationships(self) -> dict[str, str]:
        """r:id -> slide part path, in relationship order."""
        slides: dict[str, str] = {}
        if self.presentation_rels_root is None:
            return slides
        for rel in self.presentation_rels_root.iter(f"{REL_NS}Relationship"):
            rel_type = rel.get("Type") or ""
            rel_id = rel.get("Id")
            target = rel.get("Target")
            if not rel_id or not target:
                continue
            if rel_type.rsplit("/", 1)[-1] != "slide":
                continue
            slides[rel_id] = _resolve_target(target)
        return slides

    def slide_order(self) -> List[str]:
        slides = self._slide_relationships()
        ordered_ids = [
            sld_id.get(f"{R_NS}id")
            for sld_id in self.presentation_root.iter(f"{P_NS}sldId")
            if sld_id.get(f"{R_NS}id")
        ]
        if not ordered_ids:
            ordered_ids = list(slides)
        return [slides[rel_id] for rel_id in ordered_ids if rel_id in slides]


def _resolve_target(target: str) -> str:
    """Resolve a presentation relationship target to a package part name."""
    if target.startswith("/"):
        return target.lstrip("/")
    return posixpath.normpath(posixpath.join("ppt", target))


def _int_attr(elem: ET.Element, name: str, default: int) -> int:
    try:
        return int(elem.get(name, default))
    except (TypeError, ValueError):
        return default


def _float_attr(elem: ET.Element, name: str, default: float) -> float:
    try:
        return float(elem.get(name, default))
    except (TypeError, ValueError):
        return default


def _truthy(value: Optional[str]) -> bool:
    return value in ("1", "true", "on")


#######
# Text
#######


def _parse_position(xfrm: ET.Element) -> Optional[Position]:
    off = xfrm.find(f"{A_NS}off")
    ext = xfrm.find(f"{A_NS}ext")
    if off is None or ext is None:
        return None
    return Position(
        left=emu_to_inches(_float_attr(off, "x", 0.0)),
        top=emu_to_inches(_float_attr(off, "y", 0.0)),
        width=emu_to_inches(_float_attr(ext, "cx", 0.0)),
        height=emu_to_inches(_float_attr(ext, "cy", 0.0)),
    )


def _paragraph_text(paragraph: ET.Element) -> str:
    return "".join(
        t.text or ""
        for run in paragraph.findall(f"{A_NS}r")
        for t in run.findall(f"{A_NS}t")
    )


def _parse_text_element(sp: ET.Element) -> Optional[TextElement]:
    xfrm = next(sp.iter(f"{A_NS}xfrm"), None)
    tx_body = next(sp.iter(f"{P_NS}txBody"), None)
    if xfrm is None or tx_body is None:
        return None
    position = _parse_position(xfrm)
    if position is None:
        return None

    text = "\n".join(_paragraph_text(p) for p in tx_body.findall(f"{A_NS}p"))
    if not text.strip():
        return None

    element = TextElement(text=text, position=position)

    if xfrm.get("rot") is not None:
        element.rotation = rotation_to_degrees(_int_attr(xfrm, "rot", 0))

    body_pr = tx_body.find(f"{A_NS}bodyPr")
    if body_pr is not None:
        element.word_wrap = body_pr.get("wrap") != "none"
        element.vertical_alignment = normalize_vertical_alignment(body_pr.get("anchor"))

    r_pr = next(tx_body.iter(f"{A_NS}rPr"), None)
    if r_pr is not None:
        if r_pr.get("sz") is not None:
            element.font_size = hundredths_to_points(_float_attr(r_pr, "sz", 1800))
        element.bold = _truthy(r_pr.get("b"))
        element.italic = _truthy(r_pr.get("i"))
        element.underline = r_pr.get("u") not in (None, "none")
        color = next(r_pr.iter(f"{A_NS}srgbClr"), None)
        if color is not None and color.get("val"):
            element.font_color = color.get("val")
        latin = r_pr.find(f"{A_NS}latin")
        if latin is not None and latin.get("typeface"):
            element.font_face = latin.get("typeface")

    p_pr = tx_body.find(f"{A_NS}p/{A_NS}pPr")
    if p_pr is not None:
        element.alignment = normalize_alignment(p_pr.get("algn"))
        element.bullets = p_pr.find(f"{A_NS}buChar") is not None
        spacing = p_pr.find(f"{A_NS}lnSpc/{A_NS}spcPts")
        if spacing is not None and spacing.get("val") is not None:
            element.line_spacing = hundredths_to_points(_float_attr(spacing, "val", 0.0))

    return element


##############
# Backgrounds
##############


def _parse_background(slide_root: ET.Element) -> Optional[SlideBackground]:
    bg_pr = slide_root.find(f".//{P_NS}bg/{P_NS}bgPr")
    if bg_pr is None:
        return None

    solid = bg_pr.find(f"{A_NS}solidFill/{A_NS}srgbClr")
    if solid is not None and solid.get("val"):
        return SolidBackground(color=solid.get("val"))

    gradient = bg_pr.find(f"{A_NS}gradFill")
    if gradient is not None:
        colors = [c.get("val") for c in gradient.iter(f"{A_NS}srgbClr") if c.get("val")]
        if len(colors) >= 2:
            angle = DEFAULT_GRADIENT_ANGLE
            lin = gradient.find(f"{A_NS}lin")
            if lin is not None and lin.get("ang") is not None:
                angle = rotation_to_degrees(_int_attr(lin, "ang", 0))
            return GradientBackground(color1=colors[0], color2=colors[1], angle=angle)

    return None


#########
# Slides
#########


def _parse_slide(ctx: _PresentationContext, slide_path: str, slide_number: int) -> Slide:
    logger.debug(f"Processing slide [{slide_number}]: {slide_path}")
    root = ctx.zip.read_xml_root(slide_path)

    slide = Slide()
    for sp in root.iter(f"{P_NS}sp"):
        element = _parse_text_element(sp)
        if element is not None:
            slide.elements.append(element)

    slide.background = _parse_background(root)
    return slide


def read_presentation_stream(
    file_like: io.BytesIO,
    source: str | None = None,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
) -> Presentation:
    """Read a presentation from an in-memory package; see ``read_presentation``."""
    with ZipContext(file_like, source=source, limits=limits) as zip_ctx:
        ctx = _PresentationContext(zip_ctx)
        width, height = ctx.slide_size()
        theme_name = ctx.theme_name()
        presentation = Presentation(
            title=ctx.title(),
            theme=THEME_PRESETS.get((theme_name or "").lower(), DEFAULT_THEME),
            slide_width=width,
            slide_height=height,
            source_path=source,
        )

        slide_number = 0
        for slide_path in ctx.slide_order():
            if not zip_ctx.exists(slide_path):
                logger.warning(f"Slide not found: {slide_path}")
                continue
            slide_number += 1
            presentation.slides.append(_parse_slide(ctx, slide_path, slide_number))

    logger.info(
        "Read PPTX: %d slides, %d text elements",
        presentation.slide_count,
        sum(len(s.elements) for s in presentation.slides),
    )
    return presentation


def read_presentation(
    source_path: str | os.PathLike,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
) -> Presentation:
    """
    Read a .pptx file into a Presentation.

    Args:
        source_path: Path of the package to read.
        limits: ZIP-bomb thresholds applied before any part is decompressed.

    Returns:
        The presentation with text elements and backgrounds of every slide,
        slide size, title and, when the theme is a built-in one, the theme.
        ``source_path`` is set to the path read.

    Raises:
        UnpackagingFailedError: The file is missing or is not a ZIP archive.
        PresentationZipBombError: The archive trips the ZIP-bomb heuristics.
        MalformedDocumentError: ppt/presentation.xml or a slide part is
            missing or cannot be parsed.
    """
    source = os.fspath(source_path)
    logger.debug(f"Reading pptx: {source}")
    try:
        with open(source, "rb") as f:
            data = io.BytesIO(f.read())
    except OSError as exc:
        raise UnpackagingFailedError(
            source, f"Unzip failed: cannot open {source}: {exc}", cause=exc
        ) from exc
    return read_presentation_stream(data, source, limits=limits)

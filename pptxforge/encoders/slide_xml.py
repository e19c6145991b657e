"""
Slide Part Encoder
==================

Renders one ``ppt/slides/slide{n}.xml`` part from a Slide.

Shape ids: the group shape of the shape tree is id 1, elements are numbered
from 2 upwards in element order, one id per element whatever its type.
Element order is also the z-order of the rendered slide.

Images and charts are referenced through slide-local relationship ids that
come from the write plan (see ``encoders.relationships``); an image or chart
without an id in ``rel_ids`` is left out of the shape tree.
"""

import logging
from typing import Callable, Dict, Mapping

from pptxforge.data_types import (
    TEXT_ALIGNMENTS,
    VERTICAL_ALIGNMENTS,
    ChartElement,
    GradientBackground,
    ImageElement,
    Position,
    ShapeElement,
    Slide,
    SlideBackground,
    SolidBackground,
    TableElement,
    TextElement,
)
from pptxforge.mime_types import GRAPHIC_DATA_CHART, GRAPHIC_DATA_TABLE, NS_A, NS_C, NS_P, NS_R
from pptxforge.util.colors import srgb_color_xml
from pptxforge.util.escaping import xml_escape
from pptxforge.util.geometry import (
    EMU_PER_POINT,
    degrees_to_rotation,
    inches_to_emu,
    points_to_emu,
    points_to_hundredths,
)

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'

FIRST_SHAPE_ID = 2
TABLE_STYLE_ID = "{5C22544A-7EE6-4342-B048-85BDC9FD1C3A}"  # Medium Style 2 - Accent 1
TABLE_BODY_TEXT_COLOR = "333333"
TABLE_BODY_FILL_COLOR = "FFFFFF"
BULLET_CHAR = "&#x2022;"
BULLET_INDENT_EMU = 342900

GROUP_SHAPE_XML = (
    "<p:nvGrpSpPr>"
    '<p:cNvPr id="1" name=""/><p:cNvGrpSpPr/><p:nvPr/>'
    "</p:nvGrpSpPr>"
    "<p:grpSpPr><a:xfrm>"
    '<a:off x="0" y="0"/><a:ext cx="0" cy="0"/>'
    '<a:chOff x="0" y="0"/><a:chExt cx="0" cy="0"/>'
    "</a:xfrm></p:grpSpPr>"
)


def generate_slide_xml(
    slide: Slide, slide_width: int, rel_ids: Mapping[str, str] | None = None
) -> str:
    """
    Render a complete slide part.

    Args:
        slide: The slide to encode.
        slide_width: Presentation slide width in EMU, used for tables
            without an explicit width.
        rel_ids: element id -> relationship id for images and charts.

    Returns:
        The slide XML document as text.
    """
    rel_ids = rel_ids or {}
    shapes = []
    for shape_id, element in enumerate(slide.elements, start=FIRST_SHAPE_ID):
        encoder = _ELEMENT_ENCODERS.get(element.element_type)
        if encoder is None:
            raise TypeError(f"No encoder for element type: {element.element_type}")
        shapes.append(encoder(element, shape_id, rel_ids, slide_width))

    return (
        XML_DECLARATION
        + f'<p:sld xmlns:a="{NS_A}" xmlns:r="{NS_R}" xmlns:p="{NS_P}">\n'
        + "  <p:cSld>\n"
        + generate_background_xml(slide.background)
        + "    <p:spTree>\n"
        + f"      {GROUP_SHAPE_XML}\n"
        + "".join(shapes)
        + "    </p:spTree>\n"
        + "  </p:cSld>\n"
        + "  <p:clrMapOvr><a:masterClrMapping/></p:clrMapOvr>\n"
        + "</p:sld>\n"
    )


##############
# Backgrounds
##############


def generate_background_xml(background: SlideBackground | None) -> str:
    if background is None:
        return ""

    if isinstance(background, SolidBackground):
        fill = f"<a:solidFill>{srgb_color_xml(background.color)}</a:solidFill>"
    elif isinstance(background, GradientBackground):
        fill = (
            "<a:gradFill><a:gsLst>"
            f'<a:gs pos="0">{srgb_color_xml(background.color1)}</a:gs>'
            f'<a:gs pos="100000">{srgb_color_xml(background.color2)}</a:gs>'
            "</a:gsLst>"
            f'<a:lin ang="{degrees_to_rotation(background.angle)}" scaled="1"/>'
            "</a:gradFill>"
        )
    else:
        raise TypeError(f"Unsupported background: {type(background).__name__}")

    return f"    <p:bg><p:bgPr>{fill}<a:effectLst/></p:bgPr></p:bg>\n"


##########
# Helpers
##########


def _xfrm_xml(position: Position, rotation: float | None = None, width: int | None = None) -> str:
    rot = f' rot="{degrees_to_rotation(rotation)}"' if rotation is not None else ""
    cx = position.width_emu if width is None else width
    return (
        f"<a:xfrm{rot}>"
        f'<a:off x="{position.left_emu}" y="{position.top_emu}"/>'
        f'<a:ext cx="{cx}" cy="{position.height_emu}"/>'
        "</a:xfrm>"
    )


def _frame_xfrm_xml(position: Position, width: int) -> str:
    return (
        "<p:xfrm>"
        f'<a:off x="{position.left_emu}" y="{position.top_emu}"/>'
        f'<a:ext cx="{width}" cy="{position.height_emu}"/>'
        "</p:xfrm>"
    )


def _flag(value: bool) -> str:
    return "1" if value else "0"


#######
# Text
#######


def _text_paragraph_xml(text: TextElement, paragraph: str) -> str:
    spacing = ""
    if text.line_spacing is not None:
        spacing = (
            f'<a:lnSpc><a:spcPts val="{points_to_hundredths(text.line_spacing)}"/></a:lnSpc>'
        )

    if text.bullets:
        indent = f' marL="{BULLET_INDENT_EMU}" indent="-{BULLET_INDENT_EMU}"'
        bullet = f'<a:buChar char="{BULLET_CHAR}"/>'
    else:
        indent = ""
        bullet = "<a:buNone/>"

    face = xml_escape(text.font_face)
    return (
        "        <a:p>"
        f'<a:pPr algn="{TEXT_ALIGNMENTS[text.alignment]}"{indent}>{spacing}{bullet}</a:pPr>'
        "<a:r>"
        f'<a:rPr lang="en-US" sz="{points_to_hundredths(text.font_size)}"'
        f' b="{_flag(text.bold)}" i="{_flag(text.italic)}"'
        f' u="{"sng" if text.underline else "none"}" dirty="0">'
        f"<a:solidFill>{srgb_color_xml(text.font_color)}</a:solidFill>"
        f'<a:latin typeface="{face}"/><a:cs typeface="{face}"/>'
        "</a:rPr>"
        f"<a:t>{xml_escape(paragraph)}</a:t>"
        "</a:r>"
        "</a:p>\n"
    )


def _encode_text(
    text: TextElement, shape_id: int, rel_ids: Mapping[str, str], slide_width: int
) -> str:
    wrap = "square" if text.word_wrap else "none"
    anchor = VERTICAL_ALIGNMENTS[text.vertical_alignment]
    paragraphs = "".join(_text_paragraph_xml(text, p) for p in text.paragraphs)
    return (
        "      <p:sp>\n"
        "        <p:nvSpPr>"
        f'<p:cNvPr id="{shape_id}" name="TextBox {shape_id}"/>'
        '<p:cNvSpPr txBox="1"/><p:nvPr/>'
        "</p:nvSpPr>\n"
        "        <p:spPr>"
        f"{_xfrm_xml(text.position, text.rotation)}"
        '<a:prstGeom prst="rect"><a:avLst/></a:prstGeom><a:noFill/>'
        "</p:spPr>\n"
        "        <p:txBody>\n"
        f'        <a:bodyPr wrap="{wrap}" rtlCol="0" anchor="{anchor}"/><a:lstStyle/>\n'
        f"{paragraphs}"
        "        </p:txBody>\n"
        "      </p:sp>\n"
    )


########
# Image
########


def _encode_image(
    image: ImageElement, shape_id: int, rel_ids: Mapping[str, str], slide_width: int
) -> str:
    rel_id = rel_ids.get(image.element_id)
    if rel_id is None:
        logger.debug(f"Image {image.element_id} has no relationship id, skipped")
        return ""
    return (
        "      <p:pic>\n"
        "        <p:nvPicPr>"
        f'<p:cNvPr id="{shape_id}" name="Image {shape_id}"/>'
        '<p:cNvPicPr><a:picLocks noChangeAspect="1"/></p:cNvPicPr><p:nvPr/>'
        "</p:nvPicPr>\n"
        "        <p:blipFill>"
        f'<a:blip r:embed="{rel_id}"/><a:stretch><a:fillRect/></a:stretch>'
        "</p:blipFill>\n"
        "        <p:spPr>"
        f"{_xfrm_xml(image.position)}"
        '<a:prstGeom prst="rect"><a:avLst/></a:prstGeom>'
        "</p:spPr>\n"
        "      </p:pic>\n"
    )


########
# Shape
########


def _encode_shape(
    shape: ShapeElement, shape_id: int, rel_ids: Mapping[str, str], slide_width: int
) -> str:
    if shape.fill_color is not None:
        fill = f"<a:solidFill>{srgb_color_xml(shape.fill_color)}</a:solidFill>"
    else:
        fill = "<a:noFill/>"

    if shape.border_color is not None:
        line = (
            f'<a:ln w="{points_to_emu(shape.border_width)}">'
            f"<a:solidFill>{srgb_color_xml(shape.border_color)}</a:solidFill></a:ln>"
        )
    else:
        line = "<a:ln><a:noFill/></a:ln>"

    if shape.text is not None:
        body = (
            '<a:bodyPr wrap="square" rtlCol="0" anchor="ctr"/><a:lstStyle/>'
            '<a:p><a:pPr algn="ctr"/><a:r>'
            f'<a:rPr lang="en-US" sz="{points_to_hundredths(shape.text_size)}" dirty="0">'
            f"<a:solidFill>{srgb_color_xml(shape.text_color)}</a:solidFill>"
            "</a:rPr>"
            f"<a:t>{xml_escape(shape.text)}</a:t>"
            "</a:r></a:p>"
        )
    else:
        body = '<a:bodyPr rtlCol="0"/><a:lstStyle/><a:p><a:endParaRPr lang="en-US"/></a:p>'

    return (
        "      <p:sp>\n"
        "        <p:nvSpPr>"
        f'<p:cNvPr id="{shape_id}" name="Shape {shape_id}"/><p:cNvSpPr/><p:nvPr/>'
        "</p:nvSpPr>\n"
        "        <p:spPr>"
        f"{_xfrm_xml(shape.position, shape.rotation)}"
        f'<a:prstGeom prst="{shape.preset}"><a:avLst/></a:prstGeom>'
        f"{fill}{line}"
        "</p:spPr>\n"
        f"        <p:txBody>{body}</p:txBody>\n"
        "      </p:sp>\n"
    )


########
# Table
########


def table_width_emu(table: TableElement, slide_width: int) -> int:
    """Explicit table width, or the slide width less the left margin on both sides."""
    if table.position.width is not None:
        return table.position.width_emu
    return max(slide_width - 2 * table.position.left_emu, 0)


def table_column_widths(table: TableElement, width: int) -> list[int]:
    count = table.column_count
    if table.column_widths is not None and len(table.column_widths) == count:
        return [inches_to_emu(w) for w in table.column_widths]
    return [width // count] * count


def _table_cell_xml(table: TableElement, value: str, is_header: bool, fill: str, span: str) -> str:
    text_color = table.header_text_color if is_header else TABLE_BODY_TEXT_COLOR
    border = f"<a:solidFill>{srgb_color_xml(table.border_color)}</a:solidFill>"
    borders = "".join(
        f'<a:{side} w="{EMU_PER_POINT}">{border}</a:{side}>'
        for side in ("lnL", "lnR", "lnT", "lnB")
    )
    return (
        f"            <a:tc{span}>"
        "<a:txBody><a:bodyPr/><a:lstStyle/><a:p><a:r>"
        f'<a:rPr lang="en-US" sz="{points_to_hundredths(table.font_size)}"'
        f' b="{_flag(is_header)}" dirty="0">'
        f"<a:solidFill>{srgb_color_xml(text_color)}</a:solidFill>"
        f'<a:latin typeface="{xml_escape(table.font_face)}"/>'
        "</a:rPr>"
        f"<a:t>{xml_escape(value)}</a:t>"
        "</a:r></a:p></a:txBody>"
        f"<a:tcPr>{borders}<a:solidFill>{srgb_color_xml(fill)}</a:solidFill></a:tcPr>"
        "</a:tc>\n"
    )


MERGED_AWAY_CELL_XML = (
    '            <a:tc hMerge="1" vMerge="1">'
    '<a:txBody><a:bodyPr/><a:lstStyle/><a:p><a:endParaRPr lang="en-US"/></a:p></a:txBody>'
    "<a:tcPr/></a:tc>\n"
)


def _encode_table(
    table: TableElement, shape_id: int, rel_ids: Mapping[str, str], slide_width: int
) -> str:
    column_count = table.column_count
    if column_count == 0:
        logger.debug(f"Table {table.element_id} has no columns, skipped")
        return ""

    width = table_width_emu(table, slide_width)
    grid = "".join(
        f'<a:gridCol w="{w}"/>' for w in table_column_widths(table, width)
    )
    row_height = table.position.height_emu // len(table.rows)

    # merge anchors by (row, col) and every cell a merge swallows
    anchors = {(m.row, m.col): m for m in table.merged_cells}
    covered = {cell for m in table.merged_cells for cell in m.covered_cells()}

    rows = []
    for row_idx, row in enumerate(table.get_table()):
        is_header = table.has_header and row_idx == 0
        if is_header:
            fill = table.header_color
        elif row_idx % 2 == 1 and table.alternate_row_color is not None:
            fill = table.alternate_row_color
        else:
            fill = TABLE_BODY_FILL_COLOR

        cells = []
        for col_idx, value in enumerate(row):
            if (row_idx, col_idx) in covered:
                cells.append(MERGED_AWAY_CELL_XML)
                continue
            span = ""
            merge = anchors.get((row_idx, col_idx))
            if merge is not None:
                if merge.col_span > 1:
                    span += f' gridSpan="{merge.col_span}"'
                if merge.row_span > 1:
                    span += f' rowSpan="{merge.row_span}"'
            cells.append(_table_cell_xml(table, value, is_header, fill, span))

        rows.append(f'          <a:tr h="{row_height}">\n' + "".join(cells) + "          </a:tr>\n")

    return (
        "      <p:graphicFrame>\n"
        "        <p:nvGraphicFramePr>"
        f'<p:cNvPr id="{shape_id}" name="Table {shape_id}"/>'
        '<p:cNvGraphicFramePr><a:graphicFrameLocks noGrp="1"/></p:cNvGraphicFramePr><p:nvPr/>'
        "</p:nvGraphicFramePr>\n"
        f"        {_frame_xfrm_xml(table.position, width)}\n"
        f'        <a:graphic><a:graphicData uri="{GRAPHIC_DATA_TABLE}">\n'
        "        <a:tbl>\n"
        f'          <a:tblPr firstRow="{_flag(table.has_header)}" bandRow="1">'
        f"<a:tableStyleId>{TABLE_STYLE_ID}</a:tableStyleId></a:tblPr>\n"
        f"          <a:tblGrid>{grid}</a:tblGrid>\n"
        + "".join(rows)
        + "        </a:tbl>\n"
        "        </a:graphicData></a:graphic>\n"
        "      </p:graphicFrame>\n"
    )


########
# Chart
########


def _encode_chart(
    chart: ChartElement, shape_id: int, rel_ids: Mapping[str, str], slide_width: int
) -> str:
    rel_id = rel_ids.get(chart.element_id)
    if rel_id is None:
        logger.debug(f"Chart {chart.element_id} has no relationship id, skipped")
        return ""
    return (
        "      <p:graphicFrame>\n"
        "        <p:nvGraphicFramePr>"
        f'<p:cNvPr id="{shape_id}" name="Chart {shape_id}"/>'
        '<p:cNvGraphicFramePr><a:graphicFrameLocks noGrp="1"/></p:cNvGraphicFramePr><p:nvPr/>'
        "</p:nvGraphicFramePr>\n"
        f"        {_frame_xfrm_xml(chart.position, chart.position.width_emu)}\n"
        f'        <a:graphic><a:graphicData uri="{GRAPHIC_DATA_CHART}">'
        f'<c:chart xmlns:c="{NS_C}" xmlns:r="{NS_R}" r:id="{rel_id}"/>'
        "</a:graphicData></a:graphic>\n"
        "      </p:graphicFrame>\n"
    )


_ELEMENT_ENCODERS: Dict[str, Callable[..., str]] = {
    TextElement.element_type: _encode_text,
    ImageElement.element_type: _encode_image,
    ShapeElement.element_type: _encode_shape,
    TableElement.element_type: _encode_table,
    ChartElement.element_type: _encode_chart,
}

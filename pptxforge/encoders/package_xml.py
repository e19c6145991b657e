"""Package-level parts: presentation.xml and its rels, content types, root rels, core properties."""

import datetime
from typing import Iterable

from pptxforge.data_types import Presentation
from pptxforge.encoders.relationships import Relationship, generate_relationships_xml
from pptxforge.encoders.slide_xml import XML_DECLARATION
from pptxforge.mime_types import (
    CONTENT_TYPE_CHART,
    CONTENT_TYPE_CORE_PROPS,
    CONTENT_TYPE_PRESENTATION,
    CONTENT_TYPE_RELATIONSHIPS,
    CONTENT_TYPE_SLIDE,
    CONTENT_TYPE_SLIDE_LAYOUT,
    CONTENT_TYPE_SLIDE_MASTER,
    CONTENT_TYPE_THEME,
    CONTENT_TYPE_XML,
    NS_A,
    NS_CONTENT_TYPES,
    NS_CORE_PROPS,
    NS_DC,
    NS_DCTERMS,
    NS_P,
    NS_R,
    NS_XSI,
    REL_TYPE_CORE_PROPS,
    REL_TYPE_OFFICE_DOCUMENT,
    REL_TYPE_SLIDE,
    REL_TYPE_SLIDE_MASTER,
    REL_TYPE_THEME,
    image_content_type,
)
from pptxforge.util.escaping import xml_escape

FIRST_SLIDE_ID = 256
SLIDE_MASTER_ID = 2147483648
MASTER_REL_ID = "rIdMaster1"
THEME_REL_ID = "rIdTheme1"
DEFAULT_CREATOR = "pptxforge"


def slide_rel_id(slide_number: int) -> str:
    return f"rIdSlide{slide_number}"


def generate_presentation_xml(presentation: Presentation) -> str:
    slide_ids = "".join(
        f'    <p:sldId id="{FIRST_SLIDE_ID + number - 1}" r:id="{slide_rel_id(number)}"/>\n'
        for number, _ in presentation.numbered_slides()
    )
    # notesSz takes the slide dimensions swapped (portrait notes page)
    return (
        XML_DECLARATION
        + f'<p:presentation xmlns:a="{NS_A}" xmlns:r="{NS_R}" xmlns:p="{NS_P}"'
        ' saveSubsetFonts="1">\n'
        + "  <p:sldMasterIdLst>"
        f'<p:sldMasterId id="{SLIDE_MASTER_ID}" r:id="{MASTER_REL_ID}"/>'
        "</p:sldMasterIdLst>\n"
        + "  <p:sldIdLst>\n"
        + slide_ids
        + "  </p:sldIdLst>\n"
        + f'  <p:sldSz cx="{presentation.slide_width}" cy="{presentation.slide_height}"'
        ' type="custom"/>\n'
        + f'  <p:notesSz cx="{presentation.slide_height}" cy="{presentation.slide_width}"/>\n'
        + "</p:presentation>\n"
    )


def generate_presentation_rels(slide_count: int) -> str:
    rels = [
        Relationship(MASTER_REL_ID, REL_TYPE_SLIDE_MASTER, "slideMasters/slideMaster1.xml"),
        Relationship(THEME_REL_ID, REL_TYPE_THEME, "theme/theme1.xml"),
    ]
    rels.extend(
        Relationship(slide_rel_id(n), REL_TYPE_SLIDE, f"slides/slide{n}.xml")
        for n in range(1, slide_count + 1)
    )
    return generate_relationships_xml(rels)


def generate_content_types_xml(
    slide_count: int, chart_count: int, image_extensions: Iterable[str]
) -> str:
    """
    Render ``[Content_Types].xml``.

    Args:
        slide_count: Number of slide parts, numbered from 1.
        chart_count: Number of chart parts, numbered from 1 across the package.
        image_extensions: Media extensions in use; each gets one Default entry.
    """
    defaults = [
        ("rels", CONTENT_TYPE_RELATIONSHIPS),
        ("xml", CONTENT_TYPE_XML),
    ]
    seen = {"rels", "xml"}
    for ext in image_extensions:
        if ext not in seen:
            seen.add(ext)
            defaults.append((ext, image_content_type(ext)))

    overrides = [
        ("/ppt/presentation.xml", CONTENT_TYPE_PRESENTATION),
        ("/ppt/slideMasters/slideMaster1.xml", CONTENT_TYPE_SLIDE_MASTER),
        ("/ppt/slideLayouts/slideLayout1.xml", CONTENT_TYPE_SLIDE_LAYOUT),
        ("/ppt/theme/theme1.xml", CONTENT_TYPE_THEME),
        ("/docProps/core.xml", CONTENT_TYPE_CORE_PROPS),
    ]
    overrides += [(f"/ppt/slides/slide{n}.xml", CONTENT_TYPE_SLIDE) for n in range(1, slide_count + 1)]
    overrides += [(f"/ppt/charts/chart{n}.xml", CONTENT_TYPE_CHART) for n in range(1, chart_count + 1)]

    return (
        XML_DECLARATION
        + f'<Types xmlns="{NS_CONTENT_TYPES}">\n'
        + "".join(
            f'  <Default Extension="{ext}" ContentType="{content_type}"/>\n'
            for ext, content_type in defaults
        )
        + "".join(
            f'  <Override PartName="{part}" ContentType="{content_type}"/>\n'
            for part, content_type in overrides
        )
        + "</Types>\n"
    )


def generate_root_rels() -> str:
    return generate_relationships_xml(
        [
            Relationship("rId1", REL_TYPE_OFFICE_DOCUMENT, "ppt/presentation.xml"),
            Relationship("rId2", REL_TYPE_CORE_PROPS, "docProps/core.xml"),
        ]
    )


def w3cdtf(moment: datetime.datetime) -> str:
    """W3CDTF timestamp in UTC, e.g. 2024-01-31T12:00:00Z."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(datetime.timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def generate_core_props_xml(
    title: str,
    creator: str = DEFAULT_CREATOR,
    timestamp: datetime.datetime | None = None,
) -> str:
    """Core properties; created and modified both carry ``timestamp`` (default: now)."""
    if timestamp is None:
        timestamp = datetime.datetime.now(datetime.timezone.utc)
    stamp = w3cdtf(timestamp)
    return (
        XML_DECLARATION
        + f'<cp:coreProperties xmlns:cp="{NS_CORE_PROPS}" xmlns:dc="{NS_DC}"'
        f' xmlns:dcterms="{NS_DCTERMS}" xmlns:xsi="{NS_XSI}">\n'
        + f"  <dc:title>{xml_escape(title)}</dc:title>\n"
        + f"  <dc:creator>{xml_escape(creator)}</dc:creator>\n"
        + f'  <dcterms:created xsi:type="dcterms:W3CDTF">{stamp}</dcterms:created>\n'
        + f'  <dcterms:modified xsi:type="dcterms:W3CDTF">{stamp}</dcterms:modified>\n'
        + "</cp:coreProperties>\n"
    )

"""Theme, slide master and slide layout parts."""

from pptxforge.encoders.relationships import Relationship, generate_relationships_xml
from pptxforge.encoders.slide_xml import GROUP_SHAPE_XML, XML_DECLARATION
from pptxforge.mime_types import (
    NS_A,
    NS_P,
    NS_R,
    REL_TYPE_SLIDE_LAYOUT,
    REL_TYPE_SLIDE_MASTER,
    REL_TYPE_THEME,
)
from pptxforge.themes import Theme
from pptxforge.util.colors import srgb_color_xml
from pptxforge.util.escaping import xml_escape

MASTER_THEME_REL_ID = "rIdTheme1"
FIRST_LAYOUT_ID = 2147483649

# slide layout tag -> (OOXML layout type, display name)
LAYOUT_TYPES = {
    "blank": ("blank", "Blank"),
    "title": ("title", "Title Slide"),
    "title_content": ("obj", "Title and Content"),
    "section_header": ("secHead", "Section Header"),
    "two_content": ("twoObj", "Two Content"),
    "title_only": ("titleOnly", "Title Only"),
}

# Format scheme does not depend on the theme; every slot refers to the placeholder colour.
_FORMAT_SCHEME_BODY = """\
      <a:fillStyleLst>
        <a:solidFill><a:schemeClr val="phClr"/></a:solidFill>
        <a:gradFill rotWithShape="1">
          <a:gsLst>
            <a:gs pos="0"><a:schemeClr val="phClr"><a:tint val="50000"/><a:satMod val="300000"/></a:schemeClr></a:gs>
            <a:gs pos="35000"><a:schemeClr val="phClr"><a:tint val="37000"/><a:satMod val="300000"/></a:schemeClr></a:gs>
            <a:gs pos="100000"><a:schemeClr val="phClr"><a:tint val="15000"/><a:satMod val="350000"/></a:schemeClr></a:gs>
          </a:gsLst>
          <a:lin ang="16200000" scaled="1"/>
        </a:gradFill>
        <a:gradFill rotWithShape="1">
          <a:gsLst>
            <a:gs pos="0"><a:schemeClr val="phClr"><a:shade val="51000"/><a:satMod val="130000"/></a:schemeClr></a:gs>
            <a:gs pos="80000"><a:schemeClr val="phClr"><a:shade val="93000"/><a:satMod val="130000"/></a:schemeClr></a:gs>
            <a:gs pos="100000"><a:schemeClr val="phClr"><a:shade val="94000"/><a:satMod val="135000"/></a:schemeClr></a:gs>
          </a:gsLst>
          <a:lin ang="16200000" scaled="0"/>
        </a:gradFill>
      </a:fillStyleLst>
      <a:lnStyleLst>
        <a:ln w="9525" cap="flat" cmpd="sng" algn="ctr"><a:solidFill><a:schemeClr val="phClr"><a:shade val="95000"/><a:satMod val="105000"/></a:schemeClr></a:solidFill><a:prstDash val="solid"/></a:ln>
        <a:ln w="25400" cap="flat" cmpd="sng" algn="ctr"><a:solidFill><a:schemeClr val="phClr"/></a:solidFill><a:prstDash val="solid"/></a:ln>
        <a:ln w="38100" cap="flat" cmpd="sng" algn="ctr"><a:solidFill><a:schemeClr val="phClr"/></a:solidFill><a:prstDash val="solid"/></a:ln>
      </a:lnStyleLst>
      <a:effectStyleLst>
        <a:effectStyle><a:effectLst/></a:effectStyle>
        <a:effectStyle><a:effectLst/></a:effectStyle>
        <a:effectStyle><a:effectLst/></a:effectStyle>
      </a:effectStyleLst>
      <a:bgFillStyleLst>
        <a:solidFill><a:schemeClr val="phClr"/></a:solidFill>
        <a:gradFill rotWithShape="1">
          <a:gsLst>
            <a:gs pos="0"><a:schemeClr val="phClr"><a:tint val="40000"/><a:satMod val="350000"/></a:schemeClr></a:gs>
            <a:gs pos="40000"><a:schemeClr val="phClr"><a:tint val="45000"/><a:shade val="99000"/><a:satMod val="350000"/></a:schemeClr></a:gs>
            <a:gs pos="100000"><a:schemeClr val="phClr"><a:shade val="20000"/><a:satMod val="255000"/></a:schemeClr></a:gs>
          </a:gsLst>
          <a:path path="circle"><a:fillToRect l="50000" t="-80000" r="50000" b="180000"/></a:path>
        </a:gradFill>
        <a:gradFill rotWithShape="1">
          <a:gsLst>
            <a:gs pos="0"><a:schemeClr val="phClr"><a:tint val="80000"/><a:satMod val="300000"/></a:schemeClr></a:gs>
            <a:gs pos="100000"><a:schemeClr val="phClr"><a:shade val="30000"/><a:satMod val="200000"/></a:schemeClr></a:gs>
          </a:gsLst>
          <a:path path="circle"><a:fillToRect l="50000" t="50000" r="50000" b="50000"/></a:path>
        </a:gradFill>
      </a:bgFillStyleLst>
"""


def _color_slot(slot: str, color: str) -> str:
    return f"        <a:{slot}>{srgb_color_xml(color)}</a:{slot}>\n"


def generate_theme_xml(theme: Theme) -> str:
    """
    Render ``ppt/theme/theme1.xml``.

    Colour scheme mapping: dark 1 and 2 take the text colour, light 1 the
    background, accents 1-6 the primary, secondary and four accent colours.
    Hyperlinks reuse primary and secondary. Headings use the major font,
    body text the minor font.
    """
    name = xml_escape(theme.name)
    slots = [
        ("dk1", theme.text_color),
        ("lt1", theme.background_color),
        ("dk2", theme.text_color),
        ("lt2", "E7E6E6"),
        ("accent1", theme.primary_color),
        ("accent2", theme.secondary_color),
        ("accent3", theme.accent_color1),
        ("accent4", theme.accent_color2),
        ("accent5", theme.accent_color3),
        ("accent6", theme.accent_color4),
        ("hlink", theme.primary_color),
        ("folHlink", theme.secondary_color),
    ]
    return (
        XML_DECLARATION
        + f'<a:theme xmlns:a="{NS_A}" name="{name}">\n'
        + "  <a:themeElements>\n"
        + f'    <a:clrScheme name="{name}">\n'
        + "".join(_color_slot(slot, color) for slot, color in slots)
        + "    </a:clrScheme>\n"
        + f'    <a:fontScheme name="{name}">\n'
        + f'      <a:majorFont><a:latin typeface="{xml_escape(theme.font_heading)}"/>'
        '<a:ea typeface=""/><a:cs typeface=""/></a:majorFont>\n'
        + f'      <a:minorFont><a:latin typeface="{xml_escape(theme.font_body)}"/>'
        '<a:ea typeface=""/><a:cs typeface=""/></a:minorFont>\n'
        + "    </a:fontScheme>\n"
        + f'    <a:fmtScheme name="{name}">\n'
        + _FORMAT_SCHEME_BODY
        + "    </a:fmtScheme>\n"
        + "  </a:themeElements>\n"
        + "  <a:objectDefaults/>\n"
        + "  <a:extraClrSchemeLst/>\n"
        + "</a:theme>\n"
    )


def generate_slide_master_xml(layout_count: int = 1) -> str:
    """The master paints the theme background and lists ``layout_count`` layouts."""
    layout_ids = "".join(
        f'    <p:sldLayoutId id="{FIRST_LAYOUT_ID + i}" r:id="rId{i}"/>\n'
        for i in range(1, layout_count + 1)
    )
    return (
        XML_DECLARATION
        + f'<p:sldMaster xmlns:a="{NS_A}" xmlns:r="{NS_R}" xmlns:p="{NS_P}">\n'
        + "  <p:cSld>\n"
        + '    <p:bg><p:bgRef idx="1001"><a:schemeClr val="bg1"/></p:bgRef></p:bg>\n'
        + f"    <p:spTree>{GROUP_SHAPE_XML}</p:spTree>\n"
        + "  </p:cSld>\n"
        + '  <p:clrMap bg1="lt1" tx1="dk1" bg2="lt2" tx2="dk2" accent1="accent1"'
        ' accent2="accent2" accent3="accent3" accent4="accent4" accent5="accent5"'
        ' accent6="accent6" hlink="hlink" folHlink="folHlink"/>\n'
        + "  <p:sldLayoutIdLst>\n"
        + layout_ids
        + "  </p:sldLayoutIdLst>\n"
        + "</p:sldMaster>\n"
    )


def generate_slide_master_rels(layout_count: int = 1) -> str:
    rels = [
        Relationship(f"rId{i}", REL_TYPE_SLIDE_LAYOUT, f"../slideLayouts/slideLayout{i}.xml")
        for i in range(1, layout_count + 1)
    ]
    rels.append(Relationship(MASTER_THEME_REL_ID, REL_TYPE_THEME, "../theme/theme1.xml"))
    return generate_relationships_xml(rels)


def generate_slide_layout_xml(layout: str = "blank") -> str:
    """Render an empty layout; unknown layout tags are rendered as blank."""
    layout_type, display_name = LAYOUT_TYPES.get(layout, LAYOUT_TYPES["blank"])
    return (
        XML_DECLARATION
        + f'<p:sldLayout xmlns:a="{NS_A}" xmlns:r="{NS_R}" xmlns:p="{NS_P}"'
        f' type="{layout_type}" preserve="1">\n'
        + f'  <p:cSld name="{xml_escape(display_name)}">\n'
        + f"    <p:spTree>{GROUP_SHAPE_XML}</p:spTree>\n"
        + "  </p:cSld>\n"
        + "  <p:clrMapOvr><a:masterClrMapping/></p:clrMapOvr>\n"
        + "</p:sldLayout>\n"
    )


def generate_slide_layout_rels() -> str:
    return generate_relationships_xml(
        [Relationship("rId1", REL_TYPE_SLIDE_MASTER, "../slideMasters/slideMaster1.xml")]
    )

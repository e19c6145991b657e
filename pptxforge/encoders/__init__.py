"""
OOXML Part Encoders
===================

Pure functions that turn model values into the text of individual package
parts. None of them touch the filesystem; the writer decides where each
part lands.

Package Structure Written
-------------------------
    presentation.pptx/
    ├── [Content_Types].xml
    ├── _rels/.rels
    ├── docProps/core.xml
    └── ppt/
        ├── presentation.xml
        ├── _rels/presentation.xml.rels
        ├── theme/theme1.xml
        ├── slideMasters/slideMaster1.xml (+ _rels)
        ├── slideLayouts/slideLayout1.xml (+ _rels)
        ├── slides/slide{n}.xml (+ _rels)
        ├── charts/chart{n}.xml (+ empty _rels)
        └── media/image{n}.{ext}

Modules
-------
relationships:
    Write-pass id allocation and the ``.rels`` renderer.
theme_xml:
    Theme, slide master and slide layout scaffold.
slide_xml:
    One slide, one encoder per element variant.
chart_xml:
    Chart parts with their embedded data caches.
package_xml:
    presentation.xml, content types, root relationships, core properties.
"""

from pptxforge.encoders.chart_xml import generate_chart_xml
from pptxforge.encoders.relationships import generate_relationships_xml, plan_write
from pptxforge.encoders.slide_xml import generate_slide_xml
from pptxforge.encoders.theme_xml import generate_theme_xml

__all__ = [
    "generate_chart_xml",
    "generate_relationships_xml",
    "generate_slide_xml",
    "generate_theme_xml",
    "plan_write",
]

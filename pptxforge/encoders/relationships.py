"""
Write-pass identifier allocation.

Every write walks the presentation once, slide order then element order,
and hands out:

    - a global media index per image      -> ppt/media/image{n}.{ext}
    - a global chart index per chart      -> ppt/charts/chart{n}.xml
    - a slide-local relationship id       -> rIdImg{k} / rIdChart{k}

The result is a plain value consumed read-only by the encoders. Nothing is
stored on the model, so the ids cannot leak from one write into the next.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from pptxforge.data_types import ChartElement, ImageElement, Presentation
from pptxforge.mime_types import (
    NS_RELATIONSHIPS,
    REL_TYPE_CHART,
    REL_TYPE_IMAGE,
    REL_TYPE_SLIDE_LAYOUT,
)
from pptxforge.util.escaping import xml_escape

SLIDE_LAYOUT_REL_ID = "rId1"


@dataclass(frozen=True)
class Relationship:
    rel_id: str
    rel_type: str
    target: str


@dataclass(frozen=True)
class MediaAssignment:
    element_id: str
    rel_id: str
    media_index: int
    extension: str
    source_path: str

    @property
    def file_name(self) -> str:
        return f"image{self.media_index}.{self.extension}"


@dataclass(frozen=True)
class ChartAssignment:
    element_id: str
    rel_id: str
    chart_index: int
    chart: ChartElement

    @property
    def file_name(self) -> str:
        return f"chart{self.chart_index}.xml"


@dataclass
class SlidePlan:
    slide_number: int
    media: List[MediaAssignment] = field(default_factory=list)
    charts: List[ChartAssignment] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)

    @property
    def rel_ids(self) -> Dict[str, str]:
        """element id -> relationship id for every image and chart on the slide."""
        ids = {m.element_id: m.rel_id for m in self.media}
        ids.update({c.element_id: c.rel_id for c in self.charts})
        return ids


@dataclass
class WritePlan:
    slides: List[SlidePlan] = field(default_factory=list)

    @property
    def media(self) -> List[MediaAssignment]:
        return [m for slide in self.slides for m in slide.media]

    @property
    def charts(self) -> List[ChartAssignment]:
        return [c for slide in self.slides for c in slide.charts]

    @property
    def image_extensions(self) -> List[str]:
        """Distinct media extensions in first-use order."""
        seen: List[str] = []
        for m in self.media:
            if m.extension not in seen:
                seen.append(m.extension)
        return seen


def plan_write(presentation: Presentation) -> WritePlan:
    plan = WritePlan()
    media_index = 0
    chart_index = 0

    for slide_number, slide in presentation.numbered_slides():
        slide_plan = SlidePlan(slide_number=slide_number)
        slide_plan.relationships.append(
            Relationship(
                SLIDE_LAYOUT_REL_ID,
                REL_TYPE_SLIDE_LAYOUT,
                "../slideLayouts/slideLayout1.xml",
            )
        )
        image_count = 0
        chart_count = 0

        for element in slide.elements:
            if isinstance(element, ImageElement):
                media_index += 1
                image_count += 1
                assignment = MediaAssignment(
                    element_id=element.element_id,
                    rel_id=f"rIdImg{image_count}",
                    media_index=media_index,
                    extension=element.image_extension,
                    source_path=element.source_path,
                )
                slide_plan.media.append(assignment)
                slide_plan.relationships.append(
                    Relationship(
                        assignment.rel_id,
                        REL_TYPE_IMAGE,
                        f"../media/{assignment.file_name}",
                    )
                )
            elif isinstance(element, ChartElement):
                chart_index += 1
                chart_count += 1
                assignment = ChartAssignment(
                    element_id=element.element_id,
                    rel_id=f"rIdChart{chart_count}",
                    chart_index=chart_index,
                    chart=element,
                )
                slide_plan.charts.append(assignment)
                slide_plan.relationships.append(
                    Relationship(
                        assignment.rel_id,
                        REL_TYPE_CHART,
                        f"../charts/{assignment.file_name}",
                    )
                )

        plan.slides.append(slide_plan)

    return plan


def generate_relationships_xml(relationships: Iterable[Relationship]) -> str:
    """Render a ``.rels`` part; no relationships gives an empty, valid part."""
    lines = [
        f'  <Relationship Id="{rel.rel_id}" Type="{rel.rel_type}"'
        f' Target="{xml_escape(rel.target)}"/>\n'
        for rel in relationships
    ]
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
        f'<Relationships xmlns="{NS_RELATIONSHIPS}">\n'
        + "".join(lines)
        + "</Relationships>\n"
    )

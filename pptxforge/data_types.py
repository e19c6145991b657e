import re
import typing
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Iterator, List, Optional, Union

from pptxforge.exceptions import InvalidSlideNumberError
from pptxforge.themes import DEFAULT_THEME, Theme, get_theme
from pptxforge.util.geometry import (
    WIDESCREEN_HEIGHT,
    WIDESCREEN_WIDTH,
    inches_to_emu,
    parse_slide_size,
)


def _new_id() -> str:
    return uuid.uuid4().hex


###########
# Geometry
###########


@dataclass
class Position:
    """Element rectangle in inches. A ``width`` of None lets a table span the slide."""

    left: float = 1.0
    top: float = 1.0
    width: Optional[float] = 8.0
    height: float = 1.5

    @property
    def left_emu(self) -> int:
        return inches_to_emu(self.left)

    @property
    def top_emu(self) -> int:
        return inches_to_emu(self.top)

    @property
    def width_emu(self) -> int:
        return inches_to_emu(self.width) if self.width is not None else 0

    @property
    def height_emu(self) -> int:
        return inches_to_emu(self.height)


#######
# Text
#######

TEXT_ALIGNMENTS = {"left": "l", "center": "ctr", "right": "r", "justify": "just"}
VERTICAL_ALIGNMENTS = {"top": "t", "middle": "ctr", "bottom": "b"}

# Paragraph separators; the vertical tab is the soft line break of Office text
_LINE_BREAKS = re.compile(r"\r\n|[\r\n\x0b]")


def normalize_alignment(value: str | None) -> str:
    """Map user or OOXML spellings ("ctr", "Center", "just") to a TEXT_ALIGNMENTS key."""
    name = (value or "").strip().lower()
    if name in ("center", "ctr"):
        return "center"
    if name in ("right", "r"):
        return "right"
    if name in ("justify", "just"):
        return "justify"
    return "left"


def normalize_vertical_alignment(value: str | None) -> str:
    name = (value or "").strip().lower()
    if name in ("middle", "center", "ctr"):
        return "middle"
    if name in ("bottom", "b"):
        return "bottom"
    return "top"


@dataclass
class TextElement:
    element_type: ClassVar[str] = "text"

    text: str = ""
    position: Position = field(default_factory=lambda: Position(1.0, 1.0, 8.0, 1.5))
    font_size: float = 18
    font_face: str = "Calibri"
    font_color: str = "000000"
    bold: bool = False
    italic: bool = False
    underline: bool = False
    alignment: str = "left"
    vertical_alignment: str = "top"
    line_spacing: Optional[float] = None  # points
    bullets: bool = False
    word_wrap: bool = True
    rotation: Optional[float] = None  # degrees
    element_id: str = field(default_factory=_new_id)

    def __post_init__(self):
        self.alignment = normalize_alignment(self.alignment)
        self.vertical_alignment = normalize_vertical_alignment(self.vertical_alignment)

    @property
    def paragraphs(self) -> List[str]:
        return _LINE_BREAKS.split(self.text)


########
# Image
########


def normalize_image_extension(extension: str | None) -> str:
    ext = (extension or "png").strip().lower().lstrip(".")
    return "jpg" if ext == "jpeg" else ext


@dataclass
class ImageElement:
    element_type: ClassVar[str] = "image"

    source_path: str = ""
    position: Position = field(default_factory=lambda: Position(2.0, 2.0, 5.0, 3.5))
    image_extension: str = "png"
    element_id: str = field(default_factory=_new_id)

    def __post_init__(self):
        self.image_extension = normalize_image_extension(self.image_extension)

    @classmethod
    def from_path(
        cls, source_path: str | Path, position: Position | None = None
    ) -> "ImageElement":
        """Create an image element, taking the format from the file suffix."""
        path = Path(source_path)
        kwargs = {"position": position} if position is not None else {}
        return cls(source_path=str(path), image_extension=path.suffix, **kwargs)


########
# Shape
########

SHAPE_PRESETS = {
    "rect": "rect",
    "round_rect": "roundRect",
    "ellipse": "ellipse",
    "triangle": "triangle",
    "diamond": "diamond",
    "pentagon": "pentagon",
    "hexagon": "hexagon",
    "octagon": "octagon",
    "star4": "star4",
    "star5": "star5",
    "star6": "star6",
    "right_arrow": "rightArrow",
    "left_arrow": "leftArrow",
    "up_arrow": "upArrow",
    "down_arrow": "downArrow",
    "heart": "heart",
    "cloud": "cloud",
    "lightning": "lightningBolt",
    "line": "line",
    "parallelogram": "parallelogram",
    "trapezoid": "trapezoid",
}


@dataclass
class ShapeElement:
    element_type: ClassVar[str] = "shape"

    shape_type: str = "rect"
    position: Position = field(default_factory=lambda: Position(3.0, 2.0, 3.0, 2.0))
    fill_color: Optional[str] = None
    border_color: Optional[str] = None
    border_width: float = 1.0  # points
    text: Optional[str] = None
    text_color: str = "000000"
    text_size: float = 14
    rotation: Optional[float] = None  # degrees
    element_id: str = field(default_factory=_new_id)

    def __post_init__(self):
        if self.shape_type not in SHAPE_PRESETS:
            raise ValueError(
                f"Unknown shape type: {self.shape_type}. "
                f"Supported: {', '.join(SHAPE_PRESETS)}"
            )

    @property
    def preset(self) -> str:
        return SHAPE_PRESETS[self.shape_type]


########
# Table
########


@dataclass
class MergedCell:
    row: int
    col: int
    row_span: int = 1
    col_span: int = 1

    def __post_init__(self):
        if self.row < 0 or self.col < 0:
            raise ValueError(f"Merge anchor must not be negative: ({self.row}, {self.col})")
        if self.row_span < 1 or self.col_span < 1:
            raise ValueError(
                f"Merge spans must be at least 1: ({self.row_span}, {self.col_span})"
            )

    def covered_cells(self) -> Iterator[tuple[int, int]]:
        """Cells inside the merge region other than the anchor."""
        for r in range(self.row, self.row + self.row_span):
            for c in range(self.col, self.col + self.col_span):
                if (r, c) != (self.row, self.col):
                    yield r, c


@dataclass
class TableElement:
    element_type: ClassVar[str] = "table"

    rows: List[List[str]] = field(default_factory=list)
    position: Position = field(default_factory=lambda: Position(1.0, 1.5, None, 4.0))
    has_header: bool = True
    header_color: str = "4472C4"
    header_text_color: str = "FFFFFF"
    alternate_row_color: Optional[str] = "D9E2F3"
    border_color: str = "8EAADB"
    font_size: float = 12
    font_face: str = "Calibri"
    column_widths: Optional[List[float]] = None  # inches
    merged_cells: List[MergedCell] = field(default_factory=list)
    element_id: str = field(default_factory=_new_id)

    def __post_init__(self):
        if not self.rows:
            raise ValueError("Table must have at least one row")
        self.rows = [[str(cell) for cell in row] for row in self.rows]

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def get_table(self) -> list[list[str]]:
        """Rows padded with empty cells to the column count, one cell per grid column."""
        width = self.column_count
        return [row + [""] * (width - len(row)) for row in self.rows]


########
# Chart
########

CHART_TYPES = ("bar", "column", "line", "pie", "doughnut")


@dataclass
class ChartSeries:
    name: str
    values: List[float] = field(default_factory=list)
    color: Optional[str] = None

    def __post_init__(self):
        self.values = [float(v) for v in self.values]


@dataclass
class ChartElement:
    element_type: ClassVar[str] = "chart"

    chart_type: str = "column"
    series: List[ChartSeries] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    position: Position = field(default_factory=lambda: Position(1.5, 1.5, 8.0, 5.0))
    title: Optional[str] = None
    show_legend: bool = True
    show_data_labels: bool = False
    element_id: str = field(default_factory=_new_id)

    def __post_init__(self):
        if self.chart_type not in CHART_TYPES:
            raise ValueError(
                f"Unknown chart type: {self.chart_type}. Supported: {', '.join(CHART_TYPES)}"
            )
        if not self.series:
            raise ValueError("Chart must have at least one data series")
        if not self.categories:
            raise ValueError("Chart must have at least one category")
        self.categories = [str(c) for c in self.categories]


SlideElement = Union[TextElement, ImageElement, ShapeElement, TableElement, ChartElement]

ELEMENT_CLASSES: tuple[type, ...] = typing.get_args(SlideElement)


##############
# Backgrounds
##############


@dataclass
class SolidBackground:
    color: str


@dataclass
class GradientBackground:
    color1: str
    color2: str
    angle: float = 270.0  # degrees


SlideBackground = Union[SolidBackground, GradientBackground]


########
# Slide
########

SLIDE_LAYOUTS = (
    "blank",
    "title",
    "title_content",
    "section_header",
    "two_content",
    "title_only",
)


@dataclass
class Slide:
    layout: str = "blank"
    elements: List[SlideElement] = field(default_factory=list)
    background: Optional[SlideBackground] = None
    slide_id: str = field(default_factory=_new_id)

    def __post_init__(self):
        if self.layout not in SLIDE_LAYOUTS:
            raise ValueError(
                f"Unknown slide layout: {self.layout}. Supported: {', '.join(SLIDE_LAYOUTS)}"
            )
        seen = set()
        for element in self.elements:
            if element.element_id in seen:
                raise ValueError(f"Duplicate element id on slide: {element.element_id}")
            seen.add(element.element_id)

    def add_element(self, element: SlideElement) -> SlideElement:
        """Append an element on top of the z-order."""
        if not isinstance(element, ELEMENT_CLASSES):
            raise TypeError(f"Not a slide element: {type(element).__name__}")
        if self.find_element(element.element_id) is not None:
            raise ValueError(f"Duplicate element id on slide: {element.element_id}")
        self.elements.append(element)
        return element

    def find_element(self, element_id: str) -> SlideElement | None:
        for element in self.elements:
            if element.element_id == element_id:
                return element
        return None

    def remove_element(self, element_id: str) -> SlideElement:
        element = self.find_element(element_id)
        if element is None:
            raise KeyError(f"Element not found: {element_id}")
        self.elements.remove(element)
        return element

    def set_background(self, background: SlideBackground) -> None:
        if not isinstance(background, (SolidBackground, GradientBackground)):
            raise TypeError(f"Not a slide background: {type(background).__name__}")
        self.background = background

    def clear_background(self) -> None:
        self.background = None


###############
# Presentation
###############


@dataclass
class Presentation:
    title: str = "Untitled"
    slides: List[Slide] = field(default_factory=list)
    theme: Theme = DEFAULT_THEME
    slide_width: int = WIDESCREEN_WIDTH  # EMU
    slide_height: int = WIDESCREEN_HEIGHT  # EMU
    source_path: Optional[str] = None
    presentation_id: str = field(default_factory=_new_id)

    @classmethod
    def create(
        cls, title: str, layout: str | None = None, theme: str | None = None
    ) -> "Presentation":
        """
        Create an empty presentation.

        Args:
            title: Presentation title, stored in the core properties.
            layout: "16:9", "4:3" or "WxH" in inches. Defaults to 16:9.
            theme: Name of a built-in theme. Defaults to Modern.
        """
        width, height = parse_slide_size(layout)
        return cls(
            title=title,
            theme=get_theme(theme),
            slide_width=width,
            slide_height=height,
        )

    @property
    def slide_count(self) -> int:
        return len(self.slides)

    def numbered_slides(self) -> Iterator[tuple[int, Slide]]:
        """Slides with their 1-based numbers, in presentation order."""
        return enumerate(self.slides, start=1)

    def _check_slide_number(self, slide_number: int) -> None:
        if not 1 <= slide_number <= len(self.slides):
            raise InvalidSlideNumberError(slide_number, len(self.slides))

    def add_slide(self, layout: str = "blank") -> Slide:
        slide = Slide(layout=layout)
        self.slides.append(slide)
        return slide

    def get_slide(self, slide_number: int) -> Slide:
        self._check_slide_number(slide_number)
        return self.slides[slide_number - 1]

    def remove_slide(self, slide_number: int) -> Slide:
        """Remove a slide by 1-based number; later slides move up one place."""
        self._check_slide_number(slide_number)
        return self.slides.pop(slide_number - 1)

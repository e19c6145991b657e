"""
pptxforge: build, write and read PowerPoint .pptx packages.

A Python library that keeps a presentation as a plain dataclass model
(slides holding text boxes, images, preset shapes, tables and charts)
and converts it to and from the Office Open XML package format.
"""

import os

from pptxforge.data_types import (
    ChartElement,
    ChartSeries,
    GradientBackground,
    ImageElement,
    MergedCell,
    Position,
    Presentation,
    ShapeElement,
    Slide,
    SlideElement,
    SolidBackground,
    TableElement,
    TextElement,
)
from pptxforge.exceptions import (
    InvalidSlideNumberError,
    MalformedDocumentError,
    PackagingFailedError,
    PresentationError,
    PresentationZipBombError,
    ResourceUnavailableError,
    UnpackagingFailedError,
)
from pptxforge.themes import Theme, get_theme

__version__ = "0.1.0"


def write_presentation(presentation: Presentation, destination_path: str | os.PathLike) -> str:
    """Write a presentation to a .pptx file."""
    from pptxforge.writer import write_presentation as _write_presentation

    return _write_presentation(presentation, destination_path)


def read_presentation(source_path: str | os.PathLike) -> Presentation:
    """Read text boxes and backgrounds of a .pptx file into a Presentation."""
    from pptxforge.reader import read_presentation as _read_presentation

    return _read_presentation(source_path)


__all__ = [
    "ChartElement",
    "ChartSeries",
    "GradientBackground",
    "ImageElement",
    "InvalidSlideNumberError",
    "MalformedDocumentError",
    "MergedCell",
    "PackagingFailedError",
    "Position",
    "Presentation",
    "PresentationError",
    "PresentationZipBombError",
    "ResourceUnavailableError",
    "ShapeElement",
    "Slide",
    "SlideElement",
    "SolidBackground",
    "TableElement",
    "TextElement",
    "Theme",
    "UnpackagingFailedError",
    "get_theme",
    "read_presentation",
    "write_presentation",
]

import dataclasses
import io
import logging
import unittest
import zipfile
from pathlib import Path

import pytest

import pptxforge
from pptxforge.data_types import (
    ChartElement,
    ChartSeries,
    GradientBackground,
    ImageElement,
    Position,
    Presentation,
    ShapeElement,
    SolidBackground,
    TableElement,
    TextElement,
)
from pptxforge.exceptions import (
    MalformedDocumentError,
    PresentationZipBombError,
    UnpackagingFailedError,
)
from pptxforge.mime_types import NS_A, NS_P, NS_R, NS_RELATIONSHIPS
from pptxforge.reader import read_presentation, read_presentation_stream
from pptxforge.themes import DARK, MODERN
from pptxforge.util.geometry import STANDARD_HEIGHT, STANDARD_WIDTH, WIDESCREEN_HEIGHT, WIDESCREEN_WIDTH
from pptxforge.util.zip_bomb import ZipBombLimits
from pptxforge.writer import write_presentation

tc = unittest.TestCase()
tc.maxDiff = None

_REL_BASE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"


def _same_text(expected: TextElement, actual: TextElement) -> None:
    tc.assertEqual(expected, dataclasses.replace(actual, element_id=expected.element_id))


def _zip_bytes(files: dict[str, str | bytes]) -> io.BytesIO:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    buffer.seek(0)
    return buffer


def _slide_part(text: str) -> str:
    return (
        f'<p:sld xmlns:a="{NS_A}" xmlns:r="{NS_R}" xmlns:p="{NS_P}"><p:cSld><p:spTree>'
        "<p:sp><p:spPr><a:xfrm>"
        '<a:off x="914400" y="457200"/><a:ext cx="1828800" cy="914400"/>'
        "</a:xfrm></p:spPr>"
        f"<p:txBody><a:bodyPr/><a:p><a:r><a:t>{text}</a:t></a:r></a:p></p:txBody>"
        "</p:sp></p:spTree></p:cSld></p:sld>"
    )


def _rels_part(rels: list[tuple[str, str, str]]) -> str:
    body = "".join(
        f'<Relationship Id="{rel_id}" Type="{_REL_BASE}/{rel_type}" Target="{target}"/>'
        for rel_id, rel_type, target in rels
    )
    return f'<Relationships xmlns="{NS_RELATIONSHIPS}">{body}</Relationships>'


def _presentation_part(slide_rel_ids: list[str] | None = None, size: str = "") -> str:
    slide_list = ""
    if slide_rel_ids is not None:
        slide_list = "<p:sldIdLst>" + "".join(
            f'<p:sldId id="{256 + i}" r:id="{rel_id}"/>' for i, rel_id in enumerate(slide_rel_ids)
        ) + "</p:sldIdLst>"
    return (
        f'<p:presentation xmlns:a="{NS_A}" xmlns:r="{NS_R}" xmlns:p="{NS_P}">'
        f"{slide_list}{size}</p:presentation>"
    )


def test_round_trip_text_and_backgrounds(tmp_path: Path) -> None:
    presentation = Presentation.create("Round Trip", layout="4:3", theme="dark")
    styled = TextElement(
        text="Hello\nWorld",
        position=Position(1.0, 2.0, 4.0, 1.0),
        font_size=24,
        font_face="Arial",
        font_color="FF0000",
        bold=True,
        italic=True,
        underline=True,
        alignment="center",
        vertical_alignment="middle",
        line_spacing=28,
        bullets=True,
        word_wrap=False,
        rotation=45,
    )
    plain = TextElement(text="Plain & <simple>")
    first = presentation.add_slide()
    first.add_element(styled)
    first.add_element(plain)
    first.set_background(SolidBackground("00FF00"))

    second = presentation.add_slide()
    second.add_element(TextElement(text="Second"))
    second.set_background(GradientBackground("000000", "FFFFFF", angle=90))

    presentation.add_slide()

    destination = tmp_path / "round_trip.pptx"
    write_presentation(presentation, destination)
    restored = read_presentation(destination)

    tc.assertEqual("Round Trip", restored.title)
    tc.assertIs(DARK, restored.theme)
    tc.assertEqual((STANDARD_WIDTH, STANDARD_HEIGHT), (restored.slide_width, restored.slide_height))
    tc.assertEqual(str(destination), restored.source_path)
    tc.assertEqual(3, restored.slide_count)

    slide1, slide2, slide3 = restored.slides
    tc.assertEqual(2, len(slide1.elements))
    _same_text(styled, slide1.elements[0])
    _same_text(plain, slide1.elements[1])
    tc.assertEqual(SolidBackground("00FF00"), slide1.background)

    tc.assertEqual(["Second"], [e.text for e in slide2.elements])
    tc.assertEqual(GradientBackground("000000", "FFFFFF", 90.0), slide2.background)

    tc.assertEqual([], slide3.elements)
    tc.assertIsNone(slide3.background)


def test_non_text_elements_are_dropped(tmp_path: Path) -> None:
    image_path = tmp_path / "logo.png"
    image_path.write_bytes(b"\x89PNG\r\n\x1a\n")

    presentation = Presentation.create("Mixed")
    slide = presentation.add_slide()
    slide.add_element(ImageElement.from_path(image_path))
    slide.add_element(ShapeElement(shape_type="ellipse", fill_color="4472C4"))
    slide.add_element(TableElement(rows=[["a", "b"], ["c", "d"]]))
    slide.add_element(
        ChartElement(series=[ChartSeries("s", [1, 2])], categories=["x", "y"])
    )
    slide.add_element(TextElement(text="   "))
    slide.add_element(TextElement(text="kept"))

    destination = tmp_path / "mixed.pptx"
    write_presentation(presentation, destination)
    restored = read_presentation(destination)

    tc.assertEqual(1, restored.slide_count)
    tc.assertEqual(["kept"], [e.text for e in restored.slides[0].elements])
    tc.assertIsInstance(restored.slides[0].elements[0], TextElement)


def test_package_level_helpers(tmp_path: Path) -> None:
    presentation = Presentation.create("Helpers")
    presentation.add_slide().add_element(TextElement(text="via package"))
    destination = tmp_path / "helpers.pptx"

    tc.assertEqual(str(destination), pptxforge.write_presentation(presentation, destination))
    restored = pptxforge.read_presentation(destination)
    tc.assertEqual("via package", restored.get_slide(1).elements[0].text)


def test_line_breaks_and_control_characters_round_trip(tmp_path: Path) -> None:
    presentation = Presentation.create("Control Characters")
    slide = presentation.add_slide()
    slide.add_element(TextElement(text="line one\x0bline two"))
    slide.add_element(TextElement(text="A\r\nB"))
    slide.add_element(TextElement(text="bell\x07 and form\x0cfeed"))
    slide.add_element(ShapeElement(text="shape\x1btext"))
    slide.add_element(TableElement(rows=[["cell\x01", "ok"]]))

    destination = tmp_path / "control.pptx"
    write_presentation(presentation, destination)
    restored = read_presentation(destination)

    tc.assertEqual(
        ["line one\nline two", "A\nB", "bell and formfeed", "shapetext"],
        [element.text for element in restored.slides[0].elements],
    )


def test_relationship_order_without_slide_list() -> None:
    package = _zip_bytes(
        {
            "ppt/presentation.xml": _presentation_part(),
            "ppt/_rels/presentation.xml.rels": _rels_part(
                [
                    ("rId1", "slideMaster", "slideMasters/slideMaster1.xml"),
                    ("rId2", "slide", "slides/slide2.xml"),
                    ("rId3", "notesSlide", "notesSlides/notesSlide1.xml"),
                    ("rId4", "slide", "/ppt/slides/slide1.xml"),
                ]
            ),
            "ppt/slides/slide1.xml": _slide_part("first part"),
            "ppt/slides/slide2.xml": _slide_part("second part"),
            "ppt/notesSlides/notesSlide1.xml": _slide_part("notes"),
        }
    )

    restored = read_presentation_stream(package)

    tc.assertEqual("Untitled", restored.title)
    tc.assertIs(MODERN, restored.theme)
    tc.assertEqual((WIDESCREEN_WIDTH, WIDESCREEN_HEIGHT), (restored.slide_width, restored.slide_height))
    tc.assertIsNone(restored.source_path)
    tc.assertEqual(
        ["second part", "first part"],
        [slide.elements[0].text for slide in restored.slides],
    )

    element = restored.slides[0].elements[0]
    tc.assertEqual(Position(1.0, 0.5, 2.0, 1.0), element.position)
    tc.assertTrue(element.word_wrap)
    tc.assertEqual("top", element.vertical_alignment)
    tc.assertEqual("left", element.alignment)
    tc.assertIsNone(element.rotation)


def test_slide_list_order_and_missing_slides(caplog) -> None:
    package = _zip_bytes(
        {
            "ppt/presentation.xml": _presentation_part(
                ["rId3", "rId9", "rId2", "rId4"], size='<p:sldSz cx="9144000" cy="6858000"/>'
            ),
            "ppt/_rels/presentation.xml.rels": _rels_part(
                [
                    ("rId2", "slide", "slides/slide1.xml"),
                    ("rId3", "slide", "slides/slide2.xml"),
                    ("rId4", "slide", "slides/slide3.xml"),
                ]
            ),
            "ppt/slides/slide1.xml": _slide_part("one"),
            "ppt/slides/slide2.xml": _slide_part("two"),
        }
    )

    with caplog.at_level(logging.WARNING, logger="pptxforge.reader"):
        restored = read_presentation_stream(package, "deck.pptx")

    tc.assertEqual(["two", "one"], [s.elements[0].text for s in restored.slides])
    tc.assertEqual((9144000, 6858000), (restored.slide_width, restored.slide_height))
    tc.assertEqual("deck.pptx", restored.source_path)
    tc.assertIn("ppt/slides/slide3.xml", caplog.text)


def test_unknown_theme_falls_back_to_default() -> None:
    package = _zip_bytes(
        {
            "ppt/presentation.xml": _presentation_part([]),
            "ppt/theme/theme1.xml": f'<a:theme xmlns:a="{NS_A}" name="Office Theme"/>',
            "docProps/core.xml": (
                '<cp:coreProperties xmlns:cp="http://schemas.openxmlformats.org/package/2006/'
                'metadata/core-properties" xmlns:dc="http://purl.org/dc/elements/1.1/">'
                "<dc:title>From Core</dc:title></cp:coreProperties>"
            ),
        }
    )

    restored = read_presentation_stream(package)

    tc.assertIs(MODERN, restored.theme)
    tc.assertEqual("From Core", restored.title)
    tc.assertEqual(0, restored.slide_count)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(UnpackagingFailedError) as exc_info:
        read_presentation(tmp_path / "absent.pptx")
    tc.assertIn("absent.pptx", str(exc_info.value))


def test_not_a_zip_archive(tmp_path: Path) -> None:
    path = tmp_path / "notes.pptx"
    path.write_text("plain text, not a package")

    with pytest.raises(UnpackagingFailedError):
        read_presentation(path)


def test_missing_presentation_part() -> None:
    package = _zip_bytes({"docProps/core.xml": "<x/>"})

    with pytest.raises(MalformedDocumentError) as exc_info:
        read_presentation_stream(package)
    tc.assertEqual("ppt/presentation.xml", exc_info.value.part)


def test_unparseable_parts() -> None:
    with pytest.raises(MalformedDocumentError):
        read_presentation_stream(_zip_bytes({"ppt/presentation.xml": "<p:presentation"}))

    package = _zip_bytes(
        {
            "ppt/presentation.xml": _presentation_part(["rId1"]),
            "ppt/_rels/presentation.xml.rels": _rels_part([("rId1", "slide", "slides/slide1.xml")]),
            "ppt/slides/slide1.xml": "<p:sld><broken",
        }
    )
    with pytest.raises(MalformedDocumentError) as exc_info:
        read_presentation_stream(package)
    tc.assertEqual("ppt/slides/slide1.xml", exc_info.value.part)


def test_zip_bomb_limits(tmp_path: Path) -> None:
    destination = tmp_path / "deck.pptx"
    write_presentation(Presentation.create("Deck"), destination)

    with pytest.raises(PresentationZipBombError):
        read_presentation(destination, limits=ZipBombLimits(max_entries=3))

    # the bomb error is also an unpacking failure
    with pytest.raises(UnpackagingFailedError):
        read_presentation(destination, limits=ZipBombLimits(max_entries=3))

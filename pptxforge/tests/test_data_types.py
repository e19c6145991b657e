import unittest

import pytest

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
    SolidBackground,
    TableElement,
    TextElement,
)
from pptxforge.exceptions import InvalidSlideNumberError, PresentationError
from pptxforge.themes import CORPORATE, DARK, MODERN, get_theme
from pptxforge.util.geometry import STANDARD_HEIGHT, STANDARD_WIDTH, WIDESCREEN_WIDTH

tc = unittest.TestCase()
tc.maxDiff = None


def test_create_presentation() -> None:
    presentation = Presentation.create("Quarterly Review", layout="4:3", theme="Dark")
    tc.assertEqual("Quarterly Review", presentation.title)
    tc.assertIs(DARK, presentation.theme)
    tc.assertEqual(STANDARD_WIDTH, presentation.slide_width)
    tc.assertEqual(STANDARD_HEIGHT, presentation.slide_height)
    tc.assertEqual(0, presentation.slide_count)


def test_create_presentation_defaults() -> None:
    presentation = Presentation.create("Deck")
    tc.assertIs(MODERN, presentation.theme)
    tc.assertEqual(WIDESCREEN_WIDTH, presentation.slide_width)
    tc.assertIsNone(presentation.source_path)


def test_get_theme() -> None:
    tc.assertIs(CORPORATE, get_theme("CORPORATE"))
    tc.assertIs(CORPORATE, get_theme(" corporate "))
    tc.assertIs(MODERN, get_theme("no-such-theme"))
    tc.assertIs(MODERN, get_theme(None))


def test_slide_numbers_are_one_based() -> None:
    presentation = Presentation.create("Deck")
    first = presentation.add_slide()
    second = presentation.add_slide(layout="title")
    tc.assertEqual(2, presentation.slide_count)
    tc.assertIs(first, presentation.get_slide(1))
    tc.assertIs(second, presentation.get_slide(2))
    tc.assertEqual([1, 2], [n for n, _ in presentation.numbered_slides()])


def test_remove_slide_renumbers_later_slides() -> None:
    presentation = Presentation.create("Deck")
    slides = [presentation.add_slide() for _ in range(3)]

    removed = presentation.remove_slide(2)

    tc.assertIs(slides[1], removed)
    tc.assertEqual(2, presentation.slide_count)
    tc.assertIs(slides[2], presentation.get_slide(2))


def test_invalid_slide_number() -> None:
    presentation = Presentation.create("Deck")
    presentation.add_slide()
    presentation.add_slide()

    for bad in (0, 3, -1):
        with pytest.raises(InvalidSlideNumberError) as exc_info:
            presentation.get_slide(bad)
        tc.assertEqual(
            f"Invalid slide number: {bad}. Presentation has 2 slides.",
            str(exc_info.value),
        )

    with pytest.raises(IndexError):
        presentation.remove_slide(5)
    with pytest.raises(PresentationError):
        presentation.remove_slide(5)
    tc.assertEqual(2, presentation.slide_count)


def test_unknown_slide_layout() -> None:
    with pytest.raises(ValueError):
        Slide(layout="three_columns")


def test_add_and_remove_elements() -> None:
    slide = Slide()
    text = slide.add_element(TextElement(text="Hello"))
    shape = slide.add_element(ShapeElement(shape_type="ellipse"))

    tc.assertEqual([text, shape], slide.elements)
    tc.assertIs(shape, slide.find_element(shape.element_id))

    removed = slide.remove_element(text.element_id)
    tc.assertIs(text, removed)
    tc.assertEqual([shape], slide.elements)
    tc.assertIsNone(slide.find_element(text.element_id))


def test_element_ids_are_unique_per_slide() -> None:
    slide = Slide()
    slide.add_element(TextElement(text="one", element_id="fixed"))
    with pytest.raises(ValueError):
        slide.add_element(TextElement(text="two", element_id="fixed"))
    with pytest.raises(ValueError):
        Slide(elements=[TextElement(element_id="x"), ShapeElement(element_id="x")])


def test_remove_missing_element() -> None:
    with pytest.raises(KeyError):
        Slide().remove_element("missing")


def test_add_element_rejects_non_elements() -> None:
    with pytest.raises(TypeError):
        Slide().add_element("text")


def test_backgrounds() -> None:
    slide = Slide()
    slide.set_background(SolidBackground("FF0000"))
    tc.assertEqual(SolidBackground("FF0000"), slide.background)

    slide.set_background(GradientBackground("000000", "FFFFFF"))
    tc.assertEqual(270.0, slide.background.angle)

    slide.clear_background()
    tc.assertIsNone(slide.background)

    with pytest.raises(TypeError):
        slide.set_background("red")


def test_default_positions() -> None:
    tc.assertEqual(Position(1.0, 1.0, 8.0, 1.5), TextElement().position)
    tc.assertEqual(Position(2.0, 2.0, 5.0, 3.5), ImageElement().position)
    tc.assertEqual(Position(3.0, 2.0, 3.0, 2.0), ShapeElement().position)
    tc.assertEqual(Position(1.0, 1.5, None, 4.0), TableElement(rows=[["a"]]).position)
    chart = ChartElement(series=[ChartSeries("s", [1])], categories=["a"])
    tc.assertEqual(Position(1.5, 1.5, 8.0, 5.0), chart.position)


def test_position_emu() -> None:
    position = Position(left=1.0, top=0.5, width=None, height=2.0)
    tc.assertEqual(914400, position.left_emu)
    tc.assertEqual(457200, position.top_emu)
    tc.assertEqual(0, position.width_emu)
    tc.assertEqual(1828800, position.height_emu)


def test_text_alignment_is_normalized() -> None:
    tc.assertEqual("center", TextElement(alignment="ctr").alignment)
    tc.assertEqual("center", TextElement(alignment="Center").alignment)
    tc.assertEqual("justify", TextElement(alignment="just").alignment)
    tc.assertEqual("left", TextElement(alignment="sideways").alignment)
    tc.assertEqual("middle", TextElement(vertical_alignment="ctr").vertical_alignment)
    tc.assertEqual("bottom", TextElement(vertical_alignment="b").vertical_alignment)
    tc.assertEqual("top", TextElement(vertical_alignment="nowhere").vertical_alignment)


def test_text_paragraphs() -> None:
    tc.assertEqual(["one", "two", ""], TextElement(text="one\ntwo\n").paragraphs)


def test_image_extension() -> None:
    tc.assertEqual("jpg", ImageElement.from_path("/tmp/photo.JPEG").image_extension)
    tc.assertEqual("png", ImageElement.from_path("/tmp/chart.png").image_extension)
    tc.assertEqual("gif", ImageElement(image_extension=".GIF").image_extension)
    image = ImageElement.from_path("/tmp/a.png", position=Position(0, 0, 1, 1))
    tc.assertEqual("/tmp/a.png", image.source_path)
    tc.assertEqual(Position(0, 0, 1, 1), image.position)


def test_shape_presets() -> None:
    tc.assertEqual("lightningBolt", ShapeElement(shape_type="lightning").preset)
    tc.assertEqual("roundRect", ShapeElement(shape_type="round_rect").preset)
    with pytest.raises(ValueError):
        ShapeElement(shape_type="squircle")


def test_table_grid() -> None:
    table = TableElement(rows=[["a", "b", "c"], ["d"], [1, 2.5]])
    tc.assertEqual(3, table.column_count)
    tc.assertEqual(["1", "2.5"], table.rows[2])
    tc.assertEqual(
        [["a", "b", "c"], ["d", "", ""], ["1", "2.5", ""]],
        table.get_table(),
    )


def test_table_requires_rows() -> None:
    with pytest.raises(ValueError):
        TableElement(rows=[])


def test_merged_cell() -> None:
    merge = MergedCell(row=1, col=0, row_span=2, col_span=2)
    tc.assertEqual([(1, 1), (2, 0), (2, 1)], list(merge.covered_cells()))
    tc.assertEqual([], list(MergedCell(0, 0).covered_cells()))
    with pytest.raises(ValueError):
        MergedCell(row=0, col=0, row_span=0)
    with pytest.raises(ValueError):
        MergedCell(row=-1, col=0)


def test_chart_validation() -> None:
    series = [ChartSeries("Sales", [1, 2])]
    with pytest.raises(ValueError):
        ChartElement(chart_type="radar", series=series, categories=["a", "b"])
    with pytest.raises(ValueError):
        ChartElement(series=[], categories=["a"])
    with pytest.raises(ValueError):
        ChartElement(series=series, categories=[])

    chart = ChartElement(chart_type="pie", series=series, categories=[2023, 2024])
    tc.assertEqual(["2023", "2024"], chart.categories)
    tc.assertEqual([1.0, 2.0], chart.series[0].values)


def test_text_paragraphs_split_on_every_line_break() -> None:
    tc.assertEqual(["A", "B"], TextElement(text="A\r\nB").paragraphs)
    tc.assertEqual(["A", "B", "C"], TextElement(text="A\rB\nC").paragraphs)
    tc.assertEqual(["soft", "break"], TextElement(text="soft\x0bbreak").paragraphs)
    tc.assertEqual(["A", "", "B"], TextElement(text="A\n\nB").paragraphs)
    tc.assertEqual([""], TextElement(text="").paragraphs)


def test_table_grid_pads_short_rows() -> None:
    table = TableElement(rows=[["a", "b"], []])
    tc.assertEqual([["a", "b"], ["", ""]], table.get_table())

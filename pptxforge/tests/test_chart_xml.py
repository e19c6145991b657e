import unittest
from xml.etree import ElementTree as ET

from pptxforge.data_types import ChartElement, ChartSeries
from pptxforge.encoders.chart_xml import (
    DEFAULT_COLORS,
    column_letter,
    format_number,
    generate_chart_rels,
    generate_chart_xml,
)
from pptxforge.mime_types import NS_A, NS_C, NS_RELATIONSHIPS

tc = unittest.TestCase()
tc.maxDiff = None

NS = {"a": NS_A, "c": NS_C}


def _chart(chart_type: str = "column", **kwargs) -> ChartElement:
    kwargs.setdefault(
        "series",
        [ChartSeries("North", [1, 2.5, 3]), ChartSeries("South", [4, 5, 6.25])],
    )
    kwargs.setdefault("categories", ["Q1", "Q2", "Q3"])
    return ChartElement(chart_type=chart_type, **kwargs)


def _render(chart: ChartElement) -> ET.Element:
    return ET.fromstring(generate_chart_xml(chart).encode("utf-8"))


def test_column_letter() -> None:
    tc.assertEqual("A", column_letter(0))
    tc.assertEqual("B", column_letter(1))
    tc.assertEqual("Z", column_letter(25))
    tc.assertEqual("AA", column_letter(26))
    tc.assertEqual("AB", column_letter(27))


def test_format_number() -> None:
    tc.assertEqual("3", format_number(3.0))
    tc.assertEqual("-1", format_number(-1.0))
    tc.assertEqual("2.5", format_number(2.5))
    tc.assertEqual("0.1", format_number(0.1))


def test_column_chart_caches() -> None:
    root = _render(_chart())
    bar = root.find("c:chart/c:plotArea/c:barChart", NS)
    tc.assertEqual("col", bar.find("c:barDir", NS).get("val"))

    series = bar.findall("c:ser", NS)
    tc.assertEqual(2, len(series))

    tc.assertEqual(
        ["Sheet1!$B$1", "Sheet1!$C$1"],
        [s.find("c:tx/c:strRef/c:f", NS).text for s in series],
    )
    tc.assertEqual(
        ["North", "South"],
        [s.find("c:tx/c:strRef/c:strCache/c:pt/c:v", NS).text for s in series],
    )
    tc.assertEqual(
        "Sheet1!$A$2:$A$4", series[0].find("c:cat/c:strRef/c:f", NS).text
    )
    tc.assertEqual(
        ["Q1", "Q2", "Q3"],
        [v.text for v in series[0].findall("c:cat/c:strRef/c:strCache/c:pt/c:v", NS)],
    )
    tc.assertEqual(
        ["Sheet1!$B$2:$B$4", "Sheet1!$C$2:$C$4"],
        [s.find("c:val/c:numRef/c:f", NS).text for s in series],
    )
    tc.assertEqual(
        ["1", "2.5", "3"],
        [v.text for v in series[0].findall("c:val/c:numRef/c:numCache/c:pt/c:v", NS)],
    )
    tc.assertEqual(
        "3", series[0].find("c:val/c:numRef/c:numCache/c:ptCount", NS).get("val")
    )

    colors = [s.find("c:spPr/a:solidFill/a:srgbClr", NS).get("val") for s in series]
    tc.assertEqual(DEFAULT_COLORS[:2], colors)


def test_axis_ids_are_shared() -> None:
    root = _render(_chart())
    plot = root.find("c:chart/c:plotArea", NS)
    tc.assertEqual(
        ["111111111", "222222222"],
        [ax.get("val") for ax in plot.findall("c:barChart/c:axId", NS)],
    )
    tc.assertEqual("111111111", plot.find("c:catAx/c:axId", NS).get("val"))
    tc.assertEqual("222222222", plot.find("c:catAx/c:crossAx", NS).get("val"))
    tc.assertEqual("222222222", plot.find("c:valAx/c:axId", NS).get("val"))
    tc.assertEqual("111111111", plot.find("c:valAx/c:crossAx", NS).get("val"))
    tc.assertEqual("b", plot.find("c:catAx/c:axPos", NS).get("val"))


def test_bar_chart_is_horizontal() -> None:
    plot = _render(_chart("bar")).find("c:chart/c:plotArea", NS)
    tc.assertEqual("bar", plot.find("c:barChart/c:barDir", NS).get("val"))
    tc.assertEqual("l", plot.find("c:catAx/c:axPos", NS).get("val"))
    tc.assertEqual("b", plot.find("c:valAx/c:axPos", NS).get("val"))


def test_series_color_override() -> None:
    chart = _chart(series=[ChartSeries("Only", [1, 2, 3], color="#ff0000")])
    root = _render(chart)
    tc.assertEqual(
        "FF0000", root.find(".//c:ser/c:spPr/a:solidFill/a:srgbClr", NS).get("val")
    )


def test_line_chart() -> None:
    root = _render(_chart("line"))
    line = root.find("c:chart/c:plotArea/c:lineChart", NS)
    series = line.findall("c:ser", NS)
    tc.assertEqual(2, len(series))
    tc.assertEqual("circle", series[0].find("c:marker/c:symbol", NS).get("val"))
    tc.assertEqual("28575", series[0].find("c:spPr/a:ln", NS).get("w"))
    tc.assertEqual("0", series[0].find("c:smooth", NS).get("val"))
    tc.assertEqual("1", line.find("c:marker", NS).get("val"))


def test_pie_chart_uses_first_series_and_cycles_colors() -> None:
    values = list(range(1, 14))
    chart = _chart(
        "pie",
        series=[ChartSeries("First", values), ChartSeries("Ignored", values)],
        categories=[f"c{i}" for i in values],
        show_data_labels=True,
    )
    pie = _render(chart).find("c:chart/c:plotArea/c:pieChart", NS)

    tc.assertEqual("1", pie.find("c:varyColors", NS).get("val"))
    series = pie.findall("c:ser", NS)
    tc.assertEqual(1, len(series))

    points = series[0].findall("c:dPt", NS)
    tc.assertEqual(13, len(points))
    colors = [p.find("c:spPr/a:solidFill/a:srgbClr", NS).get("val") for p in points]
    tc.assertEqual(DEFAULT_COLORS + [DEFAULT_COLORS[0]], colors)

    labels = pie.find("c:dLbls", NS)
    tc.assertEqual("0", labels.find("c:showVal", NS).get("val"))
    tc.assertEqual("1", labels.find("c:showCatName", NS).get("val"))
    tc.assertEqual("1", labels.find("c:showPercent", NS).get("val"))

    tc.assertIsNone(_render(chart).find(".//c:catAx", NS))


def test_doughnut_chart() -> None:
    chart = _chart("doughnut", show_data_labels=True)
    doughnut = _render(chart).find("c:chart/c:plotArea/c:doughnutChart", NS)
    tc.assertEqual("50", doughnut.find("c:holeSize", NS).get("val"))
    tc.assertEqual(1, len(doughnut.findall("c:ser", NS)))
    tc.assertEqual("1", doughnut.find("c:dLbls/c:showVal", NS).get("val"))


def test_title_and_legend() -> None:
    root = _render(_chart(title="Revenue & Costs"))
    tc.assertEqual("Revenue & Costs", root.find("c:chart/c:title//a:t", NS).text)
    tc.assertEqual("1400", root.find("c:chart/c:title//a:rPr", NS).get("sz"))
    tc.assertEqual("0", root.find("c:chart/c:autoTitleDeleted", NS).get("val"))
    tc.assertEqual("b", root.find("c:chart/c:legend/c:legendPos", NS).get("val"))
    tc.assertEqual("1", root.find("c:chart/c:plotVisOnly", NS).get("val"))

    root = _render(_chart(show_legend=False))
    tc.assertIsNone(root.find("c:chart/c:title", NS))
    tc.assertEqual("1", root.find("c:chart/c:autoTitleDeleted", NS).get("val"))
    tc.assertIsNone(root.find("c:chart/c:legend", NS))


def test_category_escaping() -> None:
    xml = generate_chart_xml(_chart(categories=["R&D", "<ops>", "Q3"]))
    tc.assertIn("<c:v>R&amp;D</c:v>", xml)
    tc.assertIn("<c:v>&lt;ops&gt;</c:v>", xml)


def test_chart_rels_are_empty() -> None:
    root = ET.fromstring(generate_chart_rels().encode("utf-8"))
    tc.assertEqual(f"{{{NS_RELATIONSHIPS}}}Relationships", root.tag)
    tc.assertEqual(0, len(root))

"""
Chart Part Encoder
==================

Renders ``ppt/charts/chart{n}.xml``. The chart carries its data as string
and number caches that point into a notional ``Sheet1``:

    A2..A{n+1}   category names
    B1, C1, ...  series names
    B2..B{n+1}   values of the first series, C for the second, and so on

No embedded workbook is written, so the caches are the only copy of the
data and consumers render from them.

Pie and doughnut charts plot only the first series and colour every data
point from DEFAULT_COLORS; the other chart types colour each series.
"""

from typing import Callable, Dict, List

from pptxforge.data_types import ChartElement, ChartSeries
from pptxforge.encoders.relationships import generate_relationships_xml
from pptxforge.encoders.slide_xml import XML_DECLARATION
from pptxforge.mime_types import NS_A, NS_C, NS_R
from pptxforge.util.colors import srgb_color_xml
from pptxforge.util.escaping import xml_escape

DEFAULT_COLORS = [
    "4472C4",
    "ED7D31",
    "A5A5A5",
    "FFC000",
    "5B9BD5",
    "70AD47",
    "264478",
    "9B4A16",
    "636363",
    "997300",
    "335B82",
    "3F6B2B",
]

CATEGORY_AXIS_ID = 111111111
VALUE_AXIS_ID = 222222222
TITLE_FONT_SIZE = 1400
LINE_WIDTH_EMU = 28575  # 2.25pt
DOUGHNUT_HOLE_SIZE = 50


def default_color(index: int) -> str:
    return DEFAULT_COLORS[index % len(DEFAULT_COLORS)]


def column_letter(index: int) -> str:
    """Spreadsheet column name for a 0-based index: 0 -> A, 25 -> Z, 26 -> AA."""
    letters = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def format_number(value: float) -> str:
    """Cache values: integral floats print without a fractional part (3.0 -> "3")."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


##############
# Data caches
##############


def _series_name_xml(series: ChartSeries, series_index: int) -> str:
    column = column_letter(series_index + 1)
    return (
        f"<c:tx><c:strRef><c:f>Sheet1!${column}$1</c:f>"
        '<c:strCache><c:ptCount val="1"/>'
        f'<c:pt idx="0"><c:v>{xml_escape(series.name)}</c:v></c:pt>'
        "</c:strCache></c:strRef></c:tx>"
    )


def _category_ref_xml(categories: List[str]) -> str:
    points = "".join(
        f'<c:pt idx="{i}"><c:v>{xml_escape(cat)}</c:v></c:pt>'
        for i, cat in enumerate(categories)
    )
    return (
        f"<c:cat><c:strRef><c:f>Sheet1!$A$2:$A${len(categories) + 1}</c:f>"
        f'<c:strCache><c:ptCount val="{len(categories)}"/>{points}</c:strCache>'
        "</c:strRef></c:cat>"
    )


def _value_ref_xml(values: List[float], series_index: int, category_count: int) -> str:
    column = column_letter(series_index + 1)
    points = "".join(
        f'<c:pt idx="{i}"><c:v>{format_number(v)}</c:v></c:pt>' for i, v in enumerate(values)
    )
    return (
        f"<c:val><c:numRef><c:f>Sheet1!${column}$2:${column}${category_count + 1}</c:f>"
        f'<c:numCache><c:formatCode>General</c:formatCode><c:ptCount val="{len(values)}"/>'
        f"{points}</c:numCache></c:numRef></c:val>"
    )


def _flag(value: bool) -> str:
    return "1" if value else "0"


def _data_labels_xml(
    show_value: bool, show_category: bool = False, show_percent: bool = False
) -> str:
    return (
        "      <c:dLbls>"
        '<c:showLegendKey val="0"/>'
        f'<c:showVal val="{_flag(show_value)}"/>'
        f'<c:showCatName val="{_flag(show_category)}"/>'
        '<c:showSerName val="0"/>'
        f'<c:showPercent val="{_flag(show_percent)}"/>'
        '<c:showBubbleSize val="0"/>'
        "</c:dLbls>\n"
    )


def _axes_xml(category_position: str, value_position: str) -> str:
    return (
        "      <c:catAx>"
        f'<c:axId val="{CATEGORY_AXIS_ID}"/>'
        '<c:scaling><c:orientation val="minMax"/></c:scaling><c:delete val="0"/>'
        f'<c:axPos val="{category_position}"/>'
        f'<c:crossAx val="{VALUE_AXIS_ID}"/>'
        "</c:catAx>\n"
        "      <c:valAx>"
        f'<c:axId val="{VALUE_AXIS_ID}"/>'
        '<c:scaling><c:orientation val="minMax"/></c:scaling><c:delete val="0"/>'
        f'<c:axPos val="{value_position}"/>'
        f'<c:crossAx val="{CATEGORY_AXIS_ID}"/>'
        "</c:valAx>\n"
    )


_AXIS_IDS_XML = f'      <c:axId val="{CATEGORY_AXIS_ID}"/><c:axId val="{VALUE_AXIS_ID}"/>\n'


##############
# Plot bodies
##############


def _bar_plot_xml(chart: ChartElement) -> str:
    horizontal = chart.chart_type == "bar"
    series_xml = []
    for idx, series in enumerate(chart.series):
        color = series.color or default_color(idx)
        series_xml.append(
            "      <c:ser>"
            f'<c:idx val="{idx}"/><c:order val="{idx}"/>'
            f"{_series_name_xml(series, idx)}"
            f"<c:spPr><a:solidFill>{srgb_color_xml(color)}</a:solidFill></c:spPr>"
            f"{_category_ref_xml(chart.categories)}"
            f"{_value_ref_xml(series.values, idx, len(chart.categories))}"
            "</c:ser>\n"
        )
    return (
        "    <c:barChart>\n"
        f'      <c:barDir val="{"bar" if horizontal else "col"}"/>'
        '<c:grouping val="clustered"/><c:varyColors val="0"/>\n'
        + "".join(series_xml)
        + _data_labels_xml(chart.show_data_labels)
        + _AXIS_IDS_XML
        + "    </c:barChart>\n"
        + _axes_xml("l" if horizontal else "b", "b" if horizontal else "l")
    )


def _line_plot_xml(chart: ChartElement) -> str:
    series_xml = []
    for idx, series in enumerate(chart.series):
        color = series.color or default_color(idx)
        series_xml.append(
            "      <c:ser>"
            f'<c:idx val="{idx}"/><c:order val="{idx}"/>'
            f"{_series_name_xml(series, idx)}"
            f'<c:spPr><a:ln w="{LINE_WIDTH_EMU}">'
            f"<a:solidFill>{srgb_color_xml(color)}</a:solidFill></a:ln></c:spPr>"
            '<c:marker><c:symbol val="circle"/><c:size val="5"/></c:marker>'
            f"{_category_ref_xml(chart.categories)}"
            f"{_value_ref_xml(series.values, idx, len(chart.categories))}"
            '<c:smooth val="0"/>'
            "</c:ser>\n"
        )
    return (
        "    <c:lineChart>\n"
        '      <c:grouping val="standard"/><c:varyColors val="0"/>\n'
        + "".join(series_xml)
        + _data_labels_xml(chart.show_data_labels)
        + '      <c:marker val="1"/>\n'
        + _AXIS_IDS_XML
        + "    </c:lineChart>\n"
        + _axes_xml("b", "l")
    )


def _single_series_xml(chart: ChartElement) -> str:
    series = chart.series[0]
    points = "".join(
        f'<c:dPt><c:idx val="{idx}"/>'
        f"<c:spPr><a:solidFill>{srgb_color_xml(default_color(idx))}</a:solidFill></c:spPr>"
        "</c:dPt>"
        for idx in range(len(series.values))
    )
    return (
        "      <c:ser>"
        '<c:idx val="0"/><c:order val="0"/>'
        f"{_series_name_xml(series, 0)}"
        f"{points}"
        f"{_category_ref_xml(chart.categories)}"
        f"{_value_ref_xml(series.values, 0, len(chart.categories))}"
        "</c:ser>\n"
    )


def _pie_plot_xml(chart: ChartElement) -> str:
    if chart.show_data_labels:
        labels = _data_labels_xml(False, show_category=True, show_percent=True)
    else:
        labels = _data_labels_xml(False)
    return (
        "    <c:pieChart>\n"
        '      <c:varyColors val="1"/>\n'
        + _single_series_xml(chart)
        + labels
        + "    </c:pieChart>\n"
    )


def _doughnut_plot_xml(chart: ChartElement) -> str:
    return (
        "    <c:doughnutChart>\n"
        '      <c:varyColors val="1"/>\n'
        + _single_series_xml(chart)
        + _data_labels_xml(chart.show_data_labels)
        + f'      <c:holeSize val="{DOUGHNUT_HOLE_SIZE}"/>\n'
        + "    </c:doughnutChart>\n"
    )


_PLOT_ENCODERS: Dict[str, Callable[[ChartElement], str]] = {
    "bar": _bar_plot_xml,
    "column": _bar_plot_xml,
    "line": _line_plot_xml,
    "pie": _pie_plot_xml,
    "doughnut": _doughnut_plot_xml,
}


def _title_xml(title: str | None) -> str:
    if title is None:
        return '  <c:autoTitleDeleted val="1"/>\n'
    return (
        "  <c:title><c:tx><c:rich><a:bodyPr/><a:lstStyle/><a:p><a:r>"
        f'<a:rPr lang="en-US" sz="{TITLE_FONT_SIZE}" b="0"/>'
        f"<a:t>{xml_escape(title)}</a:t>"
        '</a:r></a:p></c:rich></c:tx><c:overlay val="0"/></c:title>\n'
        '  <c:autoTitleDeleted val="0"/>\n'
    )


def generate_chart_xml(chart: ChartElement) -> str:
    legend = ""
    if chart.show_legend:
        legend = '  <c:legend><c:legendPos val="b"/><c:overlay val="0"/></c:legend>\n'

    return (
        XML_DECLARATION
        + f'<c:chartSpace xmlns:c="{NS_C}" xmlns:a="{NS_A}" xmlns:r="{NS_R}">\n'
        + "<c:chart>\n"
        + _title_xml(chart.title)
        + "  <c:plotArea>\n"
        + "    <c:layout/>\n"
        + _PLOT_ENCODERS[chart.chart_type](chart)
        + "  </c:plotArea>\n"
        + legend
        + '  <c:plotVisOnly val="1"/>\n'
        + "</c:chart>\n"
        + "</c:chartSpace>\n"
    )


def generate_chart_rels() -> str:
    return generate_relationships_xml([])

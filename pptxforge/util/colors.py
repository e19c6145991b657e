DEFAULT_COLOR = "000000"


def normalize_hex_color(color: str) -> str:
    """
    Normalise a hex colour to six upper-case digits.

    "#ff0000" -> "FF0000", "abc" -> "AABBCC". Any other length, or a value
    that is not a string at all, degrades to black instead of raising; this
    is called for every colour an encoder emits.
    """
    if not isinstance(color, str):
        return DEFAULT_COLOR
    cleaned = color[1:] if color.startswith("#") else color
    if len(cleaned) == 6:
        return cleaned.upper()
    if len(cleaned) == 3:
        return "".join(ch * 2 for ch in cleaned).upper()
    return DEFAULT_COLOR


def srgb_color_xml(color: str, alpha: float | None = None) -> str:
    """Render an ``a:srgbClr`` element, with an ``a:alpha`` child for partial opacity."""
    value = normalize_hex_color(color)
    if alpha is not None and alpha < 1.0:
        alpha_val = int(alpha * 100000)
        return f'<a:srgbClr val="{value}"><a:alpha val="{alpha_val}"/></a:srgbClr>'
    return f'<a:srgbClr val="{value}"/>'

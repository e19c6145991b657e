from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    name: str
    primary_color: str
    secondary_color: str
    accent_color1: str
    accent_color2: str
    accent_color3: str
    accent_color4: str
    background_color: str
    text_color: str
    light_text_color: str
    font_heading: str
    font_body: str


MODERN = Theme(
    name="Modern",
    primary_color="4472C4",
    secondary_color="ED7D31",
    accent_color1="A5A5A5",
    accent_color2="FFC000",
    accent_color3="5B9BD5",
    accent_color4="70AD47",
    background_color="FFFFFF",
    text_color="333333",
    light_text_color="FFFFFF",
    font_heading="Calibri Light",
    font_body="Calibri",
)

CORPORATE = Theme(
    name="Corporate",
    primary_color="1F3864",
    secondary_color="2E75B6",
    accent_color1="BDD7EE",
    accent_color2="9DC3E6",
    accent_color3="2E75B6",
    accent_color4="1F3864",
    background_color="FFFFFF",
    text_color="1F3864",
    light_text_color="FFFFFF",
    font_heading="Georgia",
    font_body="Calibri",
)

CREATIVE = Theme(
    name="Creative",
    primary_color="E91E63",
    secondary_color="9C27B0",
    accent_color1="FF9800",
    accent_color2="4CAF50",
    accent_color3="2196F3",
    accent_color4="607D8B",
    background_color="FFFFFF",
    text_color="212121",
    light_text_color="FFFFFF",
    font_heading="Avenir Next",
    font_body="Avenir Next",
)

MINIMAL = Theme(
    name="Minimal",
    primary_color="333333",
    secondary_color="666666",
    accent_color1="999999",
    accent_color2="CCCCCC",
    accent_color3="E0E0E0",
    accent_color4="F5F5F5",
    background_color="FFFFFF",
    text_color="333333",
    light_text_color="FFFFFF",
    font_heading="Helvetica Neue",
    font_body="Helvetica Neue",
)

DARK = Theme(
    name="Dark",
    primary_color="BB86FC",
    secondary_color="03DAC6",
    accent_color1="CF6679",
    accent_color2="FF7043",
    accent_color3="FFD54F",
    accent_color4="81C784",
    background_color="121212",
    text_color="E0E0E0",
    light_text_color="FFFFFF",
    font_heading="SF Pro Display",
    font_body="SF Pro Text",
)

THEME_PRESETS = {
    "modern": MODERN,
    "corporate": CORPORATE,
    "creative": CREATIVE,
    "minimal": MINIMAL,
    "dark": DARK,
}

DEFAULT_THEME = MODERN


def get_theme(name: str | None) -> Theme:
    """Look up a preset by case-insensitive name; unknown names get the Modern theme."""
    if not name:
        return DEFAULT_THEME
    return THEME_PRESETS.get(name.strip().lower(), DEFAULT_THEME)

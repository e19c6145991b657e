"""OOXML namespaces, relationship types and content types used by the package parts."""

# Namespaces
NS_A = "http://schemas.openxmlformats.org/drawingml/2006/main"
NS_R = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
NS_P = "http://schemas.openxmlformats.org/presentationml/2006/main"
NS_C = "http://schemas.openxmlformats.org/drawingml/2006/chart"
NS_CONTENT_TYPES = "http://schemas.openxmlformats.org/package/2006/content-types"
NS_RELATIONSHIPS = "http://schemas.openxmlformats.org/package/2006/relationships"
NS_CORE_PROPS = (
    "http://schemas.openxmlformats.org/package/2006/metadata/core-properties"
)
NS_DC = "http://purl.org/dc/elements/1.1/"
NS_DCTERMS = "http://purl.org/dc/terms/"
NS_XSI = "http://www.w3.org/2001/XMLSchema-instance"

GRAPHIC_DATA_TABLE = "http://schemas.openxmlformats.org/drawingml/2006/table"
GRAPHIC_DATA_CHART = "http://schemas.openxmlformats.org/drawingml/2006/chart"

# Relationship types
_REL_BASE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
REL_TYPE_OFFICE_DOCUMENT = f"{_REL_BASE}/officeDocument"
REL_TYPE_CORE_PROPS = (
    "http://schemas.openxmlformats.org/package/2006/relationships/metadata/core-properties"
)
REL_TYPE_SLIDE = f"{_REL_BASE}/slide"
REL_TYPE_SLIDE_MASTER = f"{_REL_BASE}/slideMaster"
REL_TYPE_SLIDE_LAYOUT = f"{_REL_BASE}/slideLayout"
REL_TYPE_THEME = f"{_REL_BASE}/theme"
REL_TYPE_IMAGE = f"{_REL_BASE}/image"
REL_TYPE_CHART = f"{_REL_BASE}/chart"

# Content types
CONTENT_TYPE_PRESENTATION = (
    "application/vnd.openxmlformats-officedocument.presentationml.presentation.main+xml"
)
CONTENT_TYPE_SLIDE = "application/vnd.openxmlformats-officedocument.presentationml.slide+xml"
CONTENT_TYPE_SLIDE_MASTER = (
    "application/vnd.openxmlformats-officedocument.presentationml.slideMaster+xml"
)
CONTENT_TYPE_SLIDE_LAYOUT = (
    "application/vnd.openxmlformats-officedocument.presentationml.slideLayout+xml"
)
CONTENT_TYPE_THEME = "application/vnd.openxmlformats-officedocument.theme+xml"
CONTENT_TYPE_RELATIONSHIPS = "application/vnd.openxmlformats-package.relationships+xml"
CONTENT_TYPE_CORE_PROPS = "application/vnd.openxmlformats-package.core-properties+xml"
CONTENT_TYPE_CHART = "application/vnd.openxmlformats-officedocument.drawingml.chart+xml"
CONTENT_TYPE_XML = "application/xml"

IMAGE_CONTENT_TYPE_MAPPING = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "tiff": "image/tiff",
    "tif": "image/tiff",
    "svg": "image/svg+xml",
}


def image_content_type(extension: str) -> str:
    """Content type for a media extension; unknown extensions are declared as PNG."""
    return IMAGE_CONTENT_TYPE_MAPPING.get(extension.lower().lstrip("."), "image/png")

class PresentationError(Exception):
    """Base class for every error raised while writing or reading a presentation."""

    def __init__(self, message: str, *, cause: Exception = None):
        super().__init__(message)
        self.__cause__ = cause  # Optional chaining for debugging


class PackagingFailedError(PresentationError):
    """Raised when the staged parts could not be archived into a package."""

    def __init__(
        self,
        destination: str,
        diagnostic: str = "",
        message: str = None,
        *,
        cause: Exception = None,
    ):
        self.destination = destination
        self.diagnostic = diagnostic
        if message is None:
            message = f"ZIP packaging failed for {destination}: {diagnostic}"
        super().__init__(message, cause=cause)


class UnpackagingFailedError(PresentationError):
    """Raised when a package could not be opened as a ZIP archive."""

    def __init__(self, source: str, message: str = None, *, cause: Exception = None):
        self.source = source
        if message is None:
            message = f"Unzip failed: {source}"
        super().__init__(message, cause=cause)


class PresentationZipBombError(UnpackagingFailedError):
    """Raised when a package trips the ZIP-bomb heuristics."""

    def __init__(self, message: str, *, cause: Exception = None):
        super().__init__(source="", message=message, cause=cause)


class MalformedDocumentError(PresentationError):
    """Raised when a required part is missing or cannot be parsed."""

    def __init__(self, part: str, message: str = None, *, cause: Exception = None):
        self.part = part
        if message is None:
            message = f"Invalid PPTX file: missing or unreadable {part}"
        super().__init__(message, cause=cause)


class ResourceUnavailableError(PresentationError):
    """Raised when a referenced media file cannot be read at write time."""

    def __init__(self, path: str, message: str = None, *, cause: Exception = None):
        self.path = path
        if message is None:
            message = f"Image file not found: {path}"
        super().__init__(message, cause=cause)


class InvalidSlideNumberError(PresentationError, IndexError):
    """Raised when a 1-based slide number does not address an existing slide."""

    def __init__(self, slide_number: int, slide_count: int):
        self.slide_number = slide_number
        self.slide_count = slide_count
        super().__init__(
            f"Invalid slide number: {slide_number}. "
            f"Presentation has {slide_count} slides."
        )

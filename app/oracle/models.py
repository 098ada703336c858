from dataclasses import dataclass

PDF_MEDIA_TYPE = "application/pdf"
JPEG_MEDIA_TYPE = "image/jpeg"
PNG_MEDIA_TYPE = "image/png"


@dataclass(frozen=True)
class DocumentContent:
    """Raw document bytes sent to the oracle as a file or image part."""

    data: bytes
    media_type: str

    @property
    def is_pdf(self) -> bool:
        return self.media_type == PDF_MEDIA_TYPE


@dataclass(frozen=True)
class TextContent:
    """Plain text appended to the instruction."""

    text: str


OracleContent = DocumentContent | TextContent


def media_type_for(file_type: str) -> str:
    """Map an uploaded file type onto a media type the oracle accepts.

    PDFs are sent as documents; JPEG is kept; every other type is sent as PNG.
    """
    if "pdf" in file_type.lower():
        return PDF_MEDIA_TYPE
    if file_type.lower() == JPEG_MEDIA_TYPE:
        return JPEG_MEDIA_TYPE
    return PNG_MEDIA_TYPE

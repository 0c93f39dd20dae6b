"""Resume parser service - extracts text from PDF and DOCX files."""

import io
import logging
import re

import pdfplumber
from docx import Document

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

SUPPORTED_CONTENT_TYPES: dict[str, str] = {
    PDF_CONTENT_TYPE: "pdf",
    DOCX_CONTENT_TYPE: "docx",
}
SUPPORTED_EXTENSIONS: dict[str, str] = {
    "pdf": PDF_CONTENT_TYPE,
    "docx": DOCX_CONTENT_TYPE,
}


class UnsupportedFileTypeError(ValueError):
    """Raised when a file is neither a PDF nor a DOCX document."""


def parse_pdf(content: bytes) -> str:
    """Extract text from PDF bytes using pdfplumber.

    Args:
        content: Raw PDF file bytes.

    Returns:
        Extracted text with pages separated by newlines.

    Raises:
        ValueError: If the PDF is malformed, encrypted, or unreadable.
    """
    try:
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            pages_text = [
                text.strip()
                for page in pdf.pages
                if (text := page.extract_text())
            ]
    except Exception as exc:
        logger.error("Failed to parse PDF: %s", exc)
        raise ValueError(f"Failed to parse PDF file: {exc}") from exc

    return _clean_whitespace("\n\n".join(pages_text))


def parse_docx(content: bytes) -> str:
    """Extract text from DOCX bytes using python-docx.

    Args:
        content: Raw DOCX file bytes.

    Returns:
        Extracted text, one paragraph per line.

    Raises:
        ValueError: If the DOCX file is malformed or unreadable.
    """
    try:
        doc = Document(io.BytesIO(content))
        paragraphs_text = [para.text.rstrip() for para in doc.paragraphs]
    except Exception as exc:
        logger.error("Failed to parse DOCX: %s", exc)
        raise ValueError(f"Failed to parse DOCX file: {exc}") from exc

    return _clean_whitespace("\n".join(paragraphs_text))


def resolve_file_type(filename: str, content_type: str | None = None) -> str:
    """Return the canonical content type for an uploaded file.

    The declared content type wins when it is one we support; otherwise the
    filename extension decides.

    Raises:
        UnsupportedFileTypeError: If neither identifies a PDF or DOCX file.
    """
    if content_type in SUPPORTED_CONTENT_TYPES:
        return content_type

    extension = filename.rsplit(".", maxsplit=1)[-1].lower() if "." in filename else ""
    if extension in SUPPORTED_EXTENSIONS:
        return SUPPORTED_EXTENSIONS[extension]

    raise UnsupportedFileTypeError(
        f"Unsupported file type: '.{extension}'. Only PDF and DOCX files are accepted."
    )


def parse_resume(file_content: bytes, filename: str, content_type: str | None = None) -> str:
    """Parse a resume file and return extracted text.

    Determines the file type from the content type (or filename extension)
    and delegates to the appropriate parser.

    Raises:
        UnsupportedFileTypeError: If the file type is not PDF or DOCX.
        ValueError: If parsing fails.
    """
    file_type = resolve_file_type(filename, content_type)

    if file_type == PDF_CONTENT_TYPE:
        return parse_pdf(file_content)
    return parse_docx(file_content)


def _clean_whitespace(text: str) -> str:
    """Strip excessive whitespace while preserving section structure.

    Collapses runs of 3+ newlines down to 2 (keeping paragraph breaks)
    and trims trailing whitespace from each line.
    """
    text = "\n".join(line.rstrip() for line in text.splitlines())
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()

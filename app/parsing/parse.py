from __future__ import annotations

from io import BytesIO

from .models import ParsedDoc

PDF_MAGIC = b"%PDF-"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")
UTF16_BOMS = (b"\xff\xfe", b"\xfe\xff")

_EXTENSION_SOURCE_TYPES = {
    "txt": "txt",
    "md": "txt",
    "pdf": "pdf",
    "docx": "docx",
}
SUPPORTED_EXTENSIONS = tuple(sorted(_EXTENSION_SOURCE_TYPES))


def _extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def validate_upload_signature(filename: str, content: bytes) -> None:
    ext = _extension(filename)
    if ext == "pdf" and not content.startswith(PDF_MAGIC):
        raise ValueError("File content does not look like a PDF.")
    if ext == "docx" and not content.startswith(ZIP_MAGICS):
        raise ValueError("File content does not look like a Word (.docx) document.")
    if ext in {"txt", "md"} and b"\x00" in content[:4096] and not content.startswith(UTF16_BOMS):
        raise ValueError("Text file appears to contain binary data.")


def _parse_txt(content: bytes) -> tuple[str, int | None, list[str]]:
    if content.startswith(UTF16_BOMS):
        try:
            return content.decode("utf-16"), None, []
        except UnicodeDecodeError:
            return content.decode("utf-16", errors="replace"), None, ["Text decoded with replacement characters."]
    try:
        return content.decode("utf-8-sig"), None, []
    except UnicodeDecodeError:
        return content.decode("latin-1"), None, ["Text is not valid UTF-8; decoded as Latin-1."]


def _parse_pdf(content: bytes) -> tuple[str, int | None, list[str]]:
    warnings: list[str] = []

    try:
        from pypdf import PdfReader
    except Exception:
        warnings.append("pypdf is unavailable; returning empty text for PDF.")
        return "", None, warnings

    try:
        reader = PdfReader(BytesIO(content))
        text_parts: list[str] = []
        for page in reader.pages:
            page_text = (page.extract_text() or "").strip()
            if page_text:
                text_parts.append(page_text)
        if not text_parts:
            warnings.append("No extractable text found in PDF.")
        return "\n".join(text_parts), len(reader.pages), warnings
    except Exception as exc:
        warnings.append(f"PDF parsing failed: {exc}")
        return "", None, warnings


def _parse_docx(content: bytes) -> tuple[str, int | None, list[str]]:
    warnings: list[str] = []

    try:
        from docx import Document
    except Exception:
        warnings.append("python-docx is unavailable; returning empty text for DOCX.")
        return "", None, warnings

    try:
        document = Document(BytesIO(content))
        paragraphs = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
        if not paragraphs:
            warnings.append("No extractable text found in DOCX.")
        return "\n".join(paragraphs), None, warnings
    except Exception as exc:
        warnings.append(f"DOCX parsing failed: {exc}")
        return "", None, warnings


_PARSERS = {
    "txt": _parse_txt,
    "pdf": _parse_pdf,
    "docx": _parse_docx,
}


def source_type_for(filename: str) -> str:
    ext = _extension(filename)
    source_type = _EXTENSION_SOURCE_TYPES.get(ext)
    if source_type is None:
        raise ValueError(
            f"Unsupported file type '.{ext}'. Allowed: {', '.join('.' + e for e in SUPPORTED_EXTENSIONS)}."
        )
    return source_type


def extract_text(filename: str, content: bytes) -> ParsedDoc:
    source_type = source_type_for(filename)
    validate_upload_signature(filename, content)

    text, page_count, warnings = _PARSERS[source_type](content)
    return ParsedDoc(
        filename=filename,
        source_type=source_type,
        text=text,
        page_count=page_count,
        parsing_warnings=warnings,
    )

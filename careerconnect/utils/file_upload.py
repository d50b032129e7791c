"""
File Upload Utility - read uploads and pull plain text out of resumes.

Resume formats (ATS scans):
- .pdf  via PyPDF2
- .docx via python-docx (paragraphs, then table rows joined with " | ")
- .txt  decoded as utf-8, cp1252 or latin-1

Every upload is capped at 5MB (413 above that).
"""

import io
from typing import Iterator, Tuple
from fastapi import UploadFile, HTTPException
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError
from docx import Document


MAX_FILE_SIZE_MB = 5
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024
# latin-1 accepts any byte sequence, so it goes last
TEXT_ENCODINGS = ("utf-8", "cp1252", "latin-1")


def get_file_extension(filename: str) -> str:
    """'CV.PDF' -> '.pdf'; '' when there is no extension."""
    _, dot, ext = filename.rpartition(".")
    return f".{ext.lower()}" if dot else ""


async def read_upload(file: UploadFile) -> bytes:
    content = await file.read()
    if len(content) > MAX_FILE_SIZE_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {MAX_FILE_SIZE_MB}MB"
        )
    return content


def _pdf_text(content: bytes) -> str:
    try:
        pages = PdfReader(io.BytesIO(content)).pages
        return "\n".join(filter(None, (page.extract_text() for page in pages)))
    except (PdfReadError, ValueError, KeyError) as e:
        raise HTTPException(status_code=400, detail=f"Failed to parse PDF: {e}")


def _docx_lines(document) -> Iterator[str]:
    for paragraph in document.paragraphs:
        if paragraph.text.strip():
            yield paragraph.text
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                yield " | ".join(cells)


def _docx_text(content: bytes) -> str:
    try:
        document = Document(io.BytesIO(content))
    except Exception as e:
        # python-docx surfaces zip, xml and package errors with no common base
        raise HTTPException(status_code=400, detail=f"Error reading DOCX: {e}")
    return "\n".join(_docx_lines(document))


def _plain_text(content: bytes) -> str:
    for encoding in TEXT_ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise HTTPException(status_code=400, detail="Could not decode text file")


EXTRACTORS = {
    ".pdf": _pdf_text,
    ".docx": _docx_text,
    ".txt": _plain_text,
}


def extract_text(content: bytes, filename: str) -> str:
    """
    Text of a resume file.

    Raises:
        HTTPException 400 for unsupported types and files with no readable text
    """
    ext = get_file_extension(filename or "")
    extractor = EXTRACTORS.get(ext)
    if extractor is None:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{ext}'. Allowed: PDF, DOCX, TXT"
        )

    text = extractor(content)
    if not text.strip():
        raise HTTPException(
            status_code=400,
            detail="Could not extract text from file. File may be empty or corrupted."
        )
    return text


async def extract_text_from_file(file: UploadFile) -> Tuple[str, bytes]:
    """
    Returns (text, raw bytes); the bytes go on to media storage.
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")
    content = await read_upload(file)
    return extract_text(content, file.filename), content

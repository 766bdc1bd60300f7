import logging

from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status

from app.core.config import settings
from app.core.rate_limit import rate_limit
from app.features import analyze_ats
from app.parsing.models import ParsedDoc
from app.parsing.parse import extract_text, source_type_for
from app.schemas.ats import AnalyzeFileResponse, AnalyzeRequest, ATSReport, ExtractTextResponse

router = APIRouter()
logger = logging.getLogger(__name__)

_READ_CHUNK_BYTES = 1024 * 64


def _require_min_length(text: str) -> None:
    if len(text.strip()) < settings.ats_min_text_chars:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Resume text must be at least {settings.ats_min_text_chars} characters.",
        )


async def _read_upload(file: UploadFile) -> tuple[str, bytes]:
    filename = file.filename or "uploaded-file"
    try:
        source_type_for(filename)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(_READ_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File too large. Maximum allowed size is {settings.max_upload_bytes // (1024 * 1024)} MB.",
            )
        chunks.append(chunk)
    return filename, b"".join(chunks)


def _extract(filename: str, content: bytes) -> ParsedDoc:
    try:
        return extract_text(filename=filename, content=content)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def _extraction_response(parsed: ParsedDoc) -> ExtractTextResponse:
    return ExtractTextResponse(
        filename=parsed.filename,
        source_type=parsed.source_type,
        text=parsed.text,
        characters=parsed.characters,
        page_count=parsed.page_count,
        warnings=parsed.parsing_warnings,
    )


@router.post("/ats/analyze", response_model=ATSReport)
@rate_limit()
async def ats_analyze(request: Request, payload: AnalyzeRequest):
    _ = request
    _require_min_length(payload.text)
    return analyze_ats(payload.text)


@router.post("/ats/extract-text", response_model=ExtractTextResponse)
@rate_limit("20/minute")
async def ats_extract_text(request: Request, file: UploadFile = File(...)):
    _ = request
    filename, content = await _read_upload(file)
    parsed = _extract(filename, content)
    if parsed.parsing_warnings:
        logger.info("ats_extract_warnings file=%s warnings=%s", filename, len(parsed.parsing_warnings))
    return _extraction_response(parsed)


@router.post("/ats/analyze-file", response_model=AnalyzeFileResponse)
@rate_limit("20/minute")
async def ats_analyze_file(request: Request, file: UploadFile = File(...)):
    _ = request
    filename, content = await _read_upload(file)
    parsed = _extract(filename, content)
    _require_min_length(parsed.text)
    return AnalyzeFileResponse(extraction=_extraction_response(parsed), report=analyze_ats(parsed.text))

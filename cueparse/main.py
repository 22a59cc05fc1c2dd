"""FastAPI application for WebVTT parsing."""

from typing import Optional

from fastapi import FastAPI, File, Form, UploadFile, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .config import configure_logging, get_settings
from .errors import ParserError
from .models import Document, ParseOptions, ParseResponse, ParseTextRequest
from .parsing import parse_vtt
from .stats import summarize_document


settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title="WebVTT Cue Parser API",
    description="API for parsing WebVTT subtitle files into cues",
    version="1.0.0"
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _options(meta: Optional[bool], strict: Optional[bool]) -> ParseOptions:
    return ParseOptions(
        meta=settings.default_meta if meta is None else meta,
        strict=settings.default_strict if strict is None else strict,
    )


def _parse_or_422(content: str, options: ParseOptions) -> ParseResponse:
    try:
        document: Document = parse_vtt(content, options)
    except ParserError as e:
        logger.warning(f"Rejected document: {e.message}")
        raise HTTPException(
            status_code=422,
            detail={"kind": e.kind.value, "message": e.message, "cue_index": e.cue_index}
        )

    return ParseResponse(
        **document.model_dump(),
        stats=summarize_document(document),
    )


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "cueparse"}


@app.post("/api/parse", response_model=ParseResponse, response_model_exclude_none=True)
async def parse_file(
    file: UploadFile = File(...),
    meta: Optional[bool] = Form(default=None),
    strict: Optional[bool] = Form(default=None),
):
    """
    Parse an uploaded WebVTT file.

    Accepts multipart form data with the subtitle file and parse options.
    """
    # Validate file extension
    filename = file.filename or "subtitle.vtt"
    ext = filename.lower().split('.')[-1]

    if ext != 'vtt':
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file format: {ext}. Supported: vtt"
        )

    content = await file.read()
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large: {len(content)} bytes (max {settings.max_upload_bytes})"
        )

    try:
        file_content = content.decode('utf-8-sig')
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=400,
            detail="Could not decode file. Please use UTF-8 encoding."
        )

    logger.info(f"Parsing upload {filename} ({len(content)} bytes)")
    return _parse_or_422(file_content, _options(meta, strict))


@app.post("/api/parse/text", response_model=ParseResponse, response_model_exclude_none=True)
async def parse_text(request: ParseTextRequest):
    """Parse WebVTT content sent as JSON."""
    if len(request.content.encode('utf-8')) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Content too large (max {settings.max_upload_bytes} bytes)"
        )
    return _parse_or_422(request.content, _options(request.meta, request.strict))

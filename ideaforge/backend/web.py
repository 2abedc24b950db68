import logging
import math
import os
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .constants import MAX_REQUEST_BYTES
from .errors import GenerationError, ValidationError
from .llm_client import build_generation_client, load_llm_settings
from .models import (
    BuildPromptData,
    BuildPromptResponse,
    CodePromptData,
    CodePromptRequest,
    CodePromptResponse,
    GenerateRequest,
    GenerateResponse,
    HistoryResponse,
    Pagination,
    PitchDetail,
    PitchDetailResponse,
    PitchRecord,
    PitchResult,
    PitchSummary,
    isoformat_z,
    utc_now,
)
from .pitch_generator import PitchGenerator
from .prompt_generator import BuildPromptGenerator, CodePromptGenerator
from .storage import build_pitch_store


logger = logging.getLogger("uvicorn.error")

DEFAULT_HISTORY_LIMIT = 10
MAX_HISTORY_LIMIT = 50
GENERIC_FAILURE_MESSAGE = "Something went wrong while generating. Please try again later."

app = FastAPI(title="AI Startup Pitch Generator Backend")

llm_settings = load_llm_settings()
generation_client = build_generation_client(llm_settings)
pitch_generator = PitchGenerator(generation_client)
code_prompt_generator = CodePromptGenerator(generation_client)
build_prompt_generator = BuildPromptGenerator(generation_client)
pitch_store = build_pitch_store()

frontend_origins = os.getenv(
    "FRONTEND_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in frontend_origins.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def enforce_request_size(request, call_next):
    if request.method == "POST":
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                if int(content_length) > MAX_REQUEST_BYTES:
                    return JSONResponse(
                        status_code=413,
                        content={
                            "error": "Request too large",
                            "message": f"Max request size is {MAX_REQUEST_BYTES} bytes.",
                        },
                    )
            except ValueError:
                pass
    return await call_next(request)


@app.exception_handler(RequestValidationError)
async def malformed_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": ValidationError.label,
            "message": "Request body must be a JSON object.",
        },
    )


def _error_body(exc: GenerationError, *, with_success: bool) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": exc.label, "message": exc.message}
    if with_success:
        body = {"success": False, **body}
        if isinstance(exc, ValidationError):
            body["details"] = exc.details
    return body


def _unexpected_failure(label: str, *, with_success: bool) -> JSONResponse:
    body: Dict[str, Any] = {"error": label, "message": GENERIC_FAILURE_MESSAGE}
    if with_success:
        body = {"success": False, **body}
    return JSONResponse(status_code=500, content=body)


def _client_address(request: Request) -> str:
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def _save_pitch(idea: str, pitch: PitchResult, ip_address: str) -> None:
    record = PitchRecord(
        idea=idea,
        name=pitch.name,
        elevator=pitch.elevator,
        slides=list(pitch.slides),
        ip_address=ip_address,
    )
    try:
        pitch_id = pitch_store.save_pitch(record)
    except Exception as exc:
        logger.warning("pitch_save_failed storage=%s error=%s", pitch_store.storage_name, exc)
        return
    logger.info("pitch_saved pitch_id=%s storage=%s", pitch_id, pitch_store.storage_name)


def _parse_positive_int(value: Optional[str], default: int) -> int:
    try:
        parsed = int(value) if value is not None else default
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _summary(record: PitchRecord) -> PitchSummary:
    return PitchSummary(
        id=record.pitch_id or "",
        idea=record.idea,
        name=record.name,
        elevator=record.elevator,
        created_at=isoformat_z(record.created_at),
    )


@app.get("/health")
def health() -> dict:
    return {
        "status": "ok",
        "storage": pitch_store.storage_name,
        "llm_configured": llm_settings.is_configured,
    }


@app.post("/generate", response_model=GenerateResponse)
def generate_pitch(payload: GenerateRequest, request: Request):
    try:
        pitch = pitch_generator.generate_pitch(payload.idea)
    except GenerationError as exc:
        logger.warning("generate_pitch_failed error=%s status=%s", type(exc).__name__, exc.status_code)
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc, with_success=False))
    except Exception:
        logger.exception("generate_pitch_unexpected_error")
        return _unexpected_failure("Failed to generate pitch", with_success=False)

    _save_pitch(payload.idea.strip(), pitch, _client_address(request))
    return GenerateResponse(data=pitch)


@app.post("/code-prompt", response_model=CodePromptResponse)
def generate_code_prompt(payload: CodePromptRequest):
    try:
        result = code_prompt_generator.generate_code_prompt(payload.idea, payload.pitch_data)
    except GenerationError as exc:
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc, with_success=True))
    except Exception:
        logger.exception("code_prompt_unexpected_error")
        return _unexpected_failure("Generation failed", with_success=True)

    logger.info(
        "code_prompt_done tech=%s features=%s chars=%s",
        len(result.tech_stack),
        len(result.features),
        len(result.prompt),
    )
    return CodePromptResponse(
        data=CodePromptData(**result.model_dump(), generated_at=isoformat_z(utc_now())),
    )


@app.post("/buildprompt", response_model=BuildPromptResponse)
def generate_build_prompt(payload: CodePromptRequest):
    try:
        prompt = build_prompt_generator.generate_build_prompt(payload.idea, payload.pitch_data)
    except GenerationError as exc:
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc, with_success=True))
    except Exception:
        logger.exception("build_prompt_unexpected_error")
        return _unexpected_failure("Generation failed", with_success=True)

    return BuildPromptResponse(
        data=BuildPromptData(
            prompt=prompt,
            character_count=len(prompt),
            generated_at=isoformat_z(utc_now()),
        ),
    )


@app.get("/history", response_model=HistoryResponse)
def list_history(page: Optional[str] = None, limit: Optional[str] = None):
    page_number = _parse_positive_int(page, 1)
    page_size = min(_parse_positive_int(limit, DEFAULT_HISTORY_LIMIT), MAX_HISTORY_LIMIT)
    try:
        records, total = pitch_store.list_pitches(page=page_number, limit=page_size)
    except Exception:
        logger.exception("history_list_failed storage=%s", pitch_store.storage_name)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch history", "message": "History is unavailable right now."},
        )

    return HistoryResponse(
        data=[_summary(record) for record in records],
        pagination=Pagination(
            page=page_number,
            limit=page_size,
            total=total,
            pages=math.ceil(total / page_size),
        ),
    )


@app.get("/history/{pitch_id}", response_model=PitchDetailResponse)
def get_history_entry(pitch_id: str):
    try:
        record = pitch_store.get_pitch(pitch_id)
    except Exception:
        logger.exception("history_get_failed pitch_id=%s", pitch_id)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch pitch", "message": "History is unavailable right now."},
        )
    if record is None:
        return JSONResponse(status_code=404, content={"error": "Pitch not found"})

    summary = _summary(record)
    return PitchDetailResponse(data=PitchDetail(**summary.model_dump(), slides=record.slides))

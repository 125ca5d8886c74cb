"""FastAPI application exposing the extraction pipeline."""

from contextlib import asynccontextmanager

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from clip_manager.config import get_settings
from clip_manager.extraction import Extractor
from clip_manager.logging_config import configure_logging
from clip_manager.models.content import ExtractionRequest, ExtractionResult
from clip_manager.models.errors import ErrorKind, ExtractionError

_ERROR_STATUS = {
    ErrorKind.INVALID_URL: 400,
    ErrorKind.INSUFFICIENT_CONTENT: 422,
    ErrorKind.FETCH_FAILED: 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging, own one HTTP client for all requests."""
    settings = get_settings()
    configure_logging(settings.log_level)
    async with httpx.AsyncClient() as client:
        app.state.settings = settings
        app.state.extractor = Extractor(client, settings)
        yield


app = FastAPI(
    title="Clip Manager",
    lifespan=lifespan,
)


class ExtractBody(BaseModel):
    url: str
    language: str | None = None


def get_extractor(request: Request) -> Extractor:
    return request.app.state.extractor


@app.exception_handler(ExtractionError)
async def extraction_error_handler(request: Request, exc: ExtractionError) -> JSONResponse:
    """Terminal extraction errors become a short message the client can show
    next to a "save link anyway" option."""
    return JSONResponse(
        status_code=_ERROR_STATUS.get(exc.kind, 500),
        content={"error": exc.message, "kind": exc.kind.value},
    )


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "clip-manager",
        "version": "0.1.0",
    }


@app.post("/extract", response_model=ExtractionResult)
async def extract_endpoint(body: ExtractBody, extractor: Extractor = Depends(get_extractor)):
    """Extract title, content and metadata from a URL."""
    return await extractor.extract(ExtractionRequest(url=body.url, language=body.language))

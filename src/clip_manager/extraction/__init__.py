"""Content extraction: webpage, video, and social post retrieval.

Public API:
    Extractor(client, settings).extract(request) -> ExtractionResult
        Classifies the URL, runs the matching pipeline with its fallbacks,
        validates the result, and raises ExtractionError on terminal failure.
    extract_content(url, language=None) -> ExtractionResult
        Same, with a short-lived HTTP client.
"""

from clip_manager.extraction.orchestrator import Extractor, extract_content
from clip_manager.extraction.router import classify
from clip_manager.models.content import ContentKind
from clip_manager.models.errors import ErrorKind, ExtractionError

__all__ = [
    "ContentKind",
    "ErrorKind",
    "ExtractionError",
    "Extractor",
    "classify",
    "extract_content",
]

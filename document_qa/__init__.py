"""Typed question answering over documents with a chat-completion service."""

from document_qa.answers import parse_answer
from document_qa.client import CompletionClient
from document_qa.config import CompletionConfig, ExtractorConfig, OCRConfig, RunConfig
from document_qa.detector import DocumentDetector
from document_qa.exceptions import (
    DecodingError,
    DocumentQAError,
    ExtractionError,
    RunError,
    ServiceError,
    UnsupportedTypeError,
)
from document_qa.exporter import export_summaries, export_table
from document_qa.extractor import TextExtractor
from document_qa.models import (
    Answer,
    AnswerType,
    BooleanAnswer,
    ChoiceAnswer,
    Document,
    DocumentKind,
    ExtractedText,
    NumberAnswer,
    Question,
    ResultRow,
    RunRequest,
    TextAnswer,
)
from document_qa.orchestrator import Orchestrator
from document_qa.pipeline import (
    answer_documents,
    answer_documents_async,
    load_document,
    summarize_documents,
    summarize_documents_async,
)
from document_qa.prompts import build_prompt

__version__ = "0.1.0"

__all__ = [
    # High-level API
    "load_document",
    "answer_documents",
    "answer_documents_async",
    "summarize_documents",
    "summarize_documents_async",
    # Core components
    "Orchestrator",
    "TextExtractor",
    "CompletionClient",
    "DocumentDetector",
    "build_prompt",
    "parse_answer",
    "export_table",
    "export_summaries",
    # Data models
    "Document",
    "DocumentKind",
    "ExtractedText",
    "Question",
    "AnswerType",
    "Answer",
    "TextAnswer",
    "NumberAnswer",
    "BooleanAnswer",
    "ChoiceAnswer",
    "ResultRow",
    "RunRequest",
    # Configuration
    "OCRConfig",
    "ExtractorConfig",
    "CompletionConfig",
    "RunConfig",
    # Exceptions
    "DocumentQAError",
    "UnsupportedTypeError",
    "ExtractionError",
    "DecodingError",
    "ServiceError",
    "RunError",
]

"""High-level API for question answering over documents."""

import asyncio
import mimetypes
from pathlib import Path
from typing import Optional, Sequence

from document_qa.client import CompletionClient
from document_qa.config import RunConfig
from document_qa.detector import DocumentDetector
from document_qa.models import Document, Question, ResultRow
from document_qa.orchestrator import Orchestrator


def load_document(
    file_path: Optional[str] = None,
    file_bytes: Optional[bytes] = None,
    file_name: Optional[str] = None,
    mime_type: Optional[str] = None,
    detector: Optional[DocumentDetector] = None,
) -> Document:
    """Build a Document from a file path or raw bytes.

    Args:
        file_path: Path to document file (alternative to file_bytes)
        file_bytes: Raw document bytes (alternative to file_path)
        file_name: Original filename (required if using file_bytes)
        mime_type: Declared content type (optional, guessed from the name if missing)
        detector: Kind detector (optional, uses the default detector)

    Raises:
        ValueError: If neither or both of file_path and file_bytes are given,
            or file_bytes is given without file_name
        UnsupportedTypeError: If the declared type is neither text nor PDF

    Examples:
        >>> doc = load_document(file_path="report.pdf")
        >>> doc = load_document(file_bytes=b"The sky is blue.", file_name="a.txt")
    """
    if file_path and file_bytes is not None:
        raise ValueError("Provide either file_path or file_bytes, not both")

    if not file_path and file_bytes is None:
        raise ValueError("Must provide either file_path or file_bytes")

    if file_path:
        path = Path(file_path)
        if not path.exists():
            raise ValueError(f"File not found: {file_path}")

        file_bytes = path.read_bytes()
        file_name = path.name
        if not mime_type:
            mime_type, _ = mimetypes.guess_type(str(path))

    if not file_name:
        raise ValueError("file_name is required when using file_bytes")

    kind = (detector or DocumentDetector()).detect(file_bytes, mime_type, file_name)
    return Document(name=file_name, kind=kind, raw_bytes=file_bytes)


async def answer_documents_async(
    documents: Sequence[Document],
    questions: Sequence[Question],
    credential: str,
    config: Optional[RunConfig] = None,
) -> list[ResultRow]:
    config = config or RunConfig()
    async with CompletionClient(config.completion) as client:
        return await Orchestrator(client, config=config).run(documents, questions, credential)


def answer_documents(
    documents: Sequence[Document],
    questions: Sequence[Question],
    credential: str,
    config: Optional[RunConfig] = None,
) -> list[ResultRow]:
    """Run a full question batch and return one row per document.

    Raises:
        RunError: If any document or completion fails

    Examples:
        >>> questions = Question.from_texts(["What color is the sky?"])
        >>> rows = answer_documents([load_document(file_path="a.txt")], questions, api_key)
        >>> print(export_table(questions, rows))
    """
    return asyncio.run(answer_documents_async(documents, questions, credential, config))


async def summarize_documents_async(
    documents: Sequence[Document],
    credential: str,
    config: Optional[RunConfig] = None,
) -> list[ResultRow]:
    config = config or RunConfig()
    async with CompletionClient(config.completion) as client:
        return await Orchestrator(client, config=config).summarize(documents, credential)


def summarize_documents(
    documents: Sequence[Document],
    credential: str,
    config: Optional[RunConfig] = None,
) -> list[ResultRow]:
    """Summarize each document in about fifty words."""
    return asyncio.run(summarize_documents_async(documents, credential, config))

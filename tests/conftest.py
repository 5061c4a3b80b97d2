"""Shared fixtures for document-qa tests."""

import asyncio

import fitz
import pytest

from document_qa.models import AnswerType, Document, DocumentKind, Question


def run(coro):
    """Run a coroutine to completion from a sync test."""
    return asyncio.run(coro)


def make_pdf(pages: list[str]) -> bytes:
    """Build a PDF with one page per entry; empty strings give blank pages."""
    pdf = fitz.open()
    for text in pages:
        page = pdf.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = pdf.tobytes()
    pdf.close()
    return data


def text_document(name: str, text: str, size_bytes: int | None = None) -> Document:
    return Document(
        name=name,
        kind=DocumentKind.PLAIN_TEXT,
        raw_bytes=text.encode("utf-8"),
        size_bytes=size_bytes,
    )


class FakeCompletionBackend:
    """Answers from a callable and records every call."""

    def __init__(self, respond=None):
        self.respond = respond or (lambda system, prompt: "answer")
        self.calls: list[tuple[str, str, str]] = []

    async def complete(self, system_instruction: str, user_prompt: str, credential: str) -> str:
        self.calls.append((system_instruction, user_prompt, credential))
        await asyncio.sleep(0)
        return self.respond(system_instruction, user_prompt)


@pytest.fixture
def sky_document() -> Document:
    return text_document("a.txt", "The sky is blue.", size_bytes=1024)


@pytest.fixture
def mixed_questions() -> list[Question]:
    return [
        Question(id=0, text="What color is the sky?"),
        Question(id=1, text="How tall is the tower?", answer_type=AnswerType.NUMBER),
        Question(id=2, text="Is it raining?", answer_type=AnswerType.BOOLEAN),
        Question(
            id=3,
            text="Which season?",
            answer_type=AnswerType.CHOICE,
            choices=("Summer", "Winter"),
        ),
    ]

"""Concurrent question answering over a batch of documents.

A run extracts every document, then asks every question of every document.
Runs are all-or-nothing: the first failure of any task cancels the
remaining work and the caller gets a RunError with a generic message and no
rows. The cause is only logged and answers that already completed are
discarded.
"""

import asyncio
from typing import Awaitable, Optional, Sequence, TypeVar

from document_qa.answers import parse_answer
from document_qa.client import CompletionBackend
from document_qa.config import RunConfig
from document_qa.exceptions import RunError
from document_qa.extractor import TextExtractor
from document_qa.logger import Timer, get_logger, run_context
from document_qa.models import (
    Answer,
    Document,
    ExtractedText,
    Question,
    ResultRow,
    RunRequest,
    TextAnswer,
)
from document_qa.prompts import (
    QUESTION_SYSTEM_INSTRUCTION,
    SUMMARY_SYSTEM_INSTRUCTION,
    build_prompt,
    build_summary_message,
    build_user_message,
)

logger = get_logger(__name__)

T = TypeVar("T")


async def gather_or_fail(aws: Sequence[Awaitable[T]]) -> list[T]:
    """Await all awaitables, returning results in input order.

    On the first exception the unfinished ones are cancelled and that
    exception is raised.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []
    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        for task in tasks:
            if task in done and not task.cancelled() and task.exception() is not None:
                raise task.exception()
        return [task.result() for task in tasks]
    finally:
        unfinished = [task for task in tasks if not task.done()]
        for task in unfinished:
            task.cancel()
        if unfinished:
            await asyncio.gather(*unfinished, return_exceptions=True)


class Orchestrator:
    """Runs question-answering and summarization batches.

    Holds only its collaborators; every run's state lives in the call.
    """

    def __init__(
        self,
        client: CompletionBackend,
        extractor: Optional[TextExtractor] = None,
        config: Optional[RunConfig] = None,
    ):
        self.config = config or RunConfig()
        self.client = client
        self.extractor = extractor or TextExtractor(self.config.extractor)

    async def run(
        self,
        documents: Sequence[Document],
        questions: Sequence[Question],
        credential: str,
    ) -> list[ResultRow]:
        """Answer every question for every document.

        Returns one row per document in input order, each with one answer per
        question in question order.

        Raises:
            RunError: If any extraction or completion fails
        """
        request = RunRequest(
            documents=tuple(documents), questions=tuple(questions), credential=credential
        )
        with run_context():
            logger.info(
                "Starting question run",
                extra_data={
                    "document_count": len(request.documents),
                    "question_count": len(request.questions),
                },
            )

            with Timer("run") as timer:
                try:
                    rows = await self._answer_all(
                        request, asyncio.Semaphore(self.config.max_concurrency)
                    )
                except Exception:
                    logger.exception(
                        "Question run failed", extra_data={"elapsed_ms": timer.get_elapsed_ms()}
                    )
                    raise RunError() from None

            logger.info(
                "Question run completed",
                extra_data={"run_time_ms": timer.get_elapsed_ms(), "row_count": len(rows)},
            )
            return rows

    async def summarize(self, documents: Sequence[Document], credential: str) -> list[ResultRow]:
        """Summarize each document; every row holds a single text answer.

        Raises:
            RunError: If any extraction or completion fails
        """
        documents = tuple(documents)
        with run_context():
            logger.info("Starting summary run", extra_data={"document_count": len(documents)})

            semaphore = asyncio.Semaphore(self.config.max_concurrency)
            with Timer("summary_run") as timer:
                try:
                    answers = await gather_or_fail(
                        [self._summarize_one(doc, credential, semaphore) for doc in documents]
                    )
                except Exception:
                    logger.exception(
                        "Summary run failed", extra_data={"elapsed_ms": timer.get_elapsed_ms()}
                    )
                    raise RunError() from None

            logger.info(
                "Summary run completed",
                extra_data={"run_time_ms": timer.get_elapsed_ms(), "row_count": len(answers)},
            )
        return [
            ResultRow(document=doc, answers=(answer,)) for doc, answer in zip(documents, answers)
        ]

    async def _answer_all(self, request: RunRequest, semaphore: asyncio.Semaphore) -> list[ResultRow]:
        extracted = await gather_or_fail(
            [self._extract(doc, semaphore) for doc in request.documents]
        )

        question_count = len(request.questions)
        answers = await gather_or_fail(
            [
                self._answer(text, question, request.credential, semaphore)
                for text in extracted
                for question in request.questions
            ]
        )

        rows = []
        for i, doc in enumerate(request.documents):
            row_answers = tuple(answers[i * question_count:(i + 1) * question_count])
            rows.append(ResultRow(document=doc, answers=row_answers))
        return rows

    async def _extract(self, document: Document, semaphore: asyncio.Semaphore) -> ExtractedText:
        async with semaphore:
            return await self.extractor.extract_async(document)

    async def _answer(
        self,
        extracted: ExtractedText,
        question: Question,
        credential: str,
        semaphore: asyncio.Semaphore,
    ) -> Answer:
        prompt = build_prompt(question)
        async with semaphore:
            raw = await self.client.complete(
                QUESTION_SYSTEM_INSTRUCTION,
                build_user_message(prompt, extracted.text),
                credential,
            )
        logger.debug(
            "Question answered",
            extra_data={
                "file_name": extracted.document.name,
                "question_id": question.id,
                "answer_type": question.answer_type.value,
            },
        )
        return parse_answer(raw, question.answer_type, question.choices)

    async def _summarize_one(
        self, document: Document, credential: str, semaphore: asyncio.Semaphore
    ) -> TextAnswer:
        extracted = await self._extract(document, semaphore)
        async with semaphore:
            summary = await self.client.complete(
                SUMMARY_SYSTEM_INSTRUCTION, build_summary_message(extracted.text), credential
            )
        return TextAnswer(raw=summary)

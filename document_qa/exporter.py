"""Delimited-text export of result rows."""

import csv
import io
from typing import Sequence

from document_qa.models import Question, ResultRow

FIXED_HEADERS = ("File Name", "File Size")
SUMMARY_HEADER = "Summary"


def format_size(size_bytes: int) -> str:
    return f"{size_bytes / 1024:.2f} KB"


def question_label(index: int, question: Question) -> str:
    return f"Q{index}: {question.text}"


def _write_line(cells: Sequence[str], quoting: int) -> str:
    buffer = io.StringIO()
    csv.writer(buffer, quoting=quoting, lineterminator="\n").writerow(cells)
    return buffer.getvalue()[:-1]


def _join(header: Sequence[str], rows: Sequence[ResultRow]) -> str:
    # Header labels are quoted only when they contain a delimiter, quote or newline
    lines = [_write_line(header, csv.QUOTE_MINIMAL)]
    for row in rows:
        cells = [row.document.name, format_size(row.document.size_bytes)]
        cells += [answer.render() for answer in row.answers]
        lines.append(_write_line(cells, csv.QUOTE_ALL))
    return "\n".join(lines)


def export_table(questions: Sequence[Question], rows: Sequence[ResultRow]) -> str:
    """Serialize rows as comma-separated text.

    The header lists the file columns and one ``Q{n}: text`` label per
    question. Data cells are always quoted with embedded quotes doubled.
    """
    header = list(FIXED_HEADERS) + [
        question_label(i, question) for i, question in enumerate(questions, start=1)
    ]
    return _join(header, rows)


def export_summaries(rows: Sequence[ResultRow]) -> str:
    return _join(list(FIXED_HEADERS) + [SUMMARY_HEADER], rows)

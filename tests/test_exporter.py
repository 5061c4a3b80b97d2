"""Tests for delimited-text export."""

import csv
import io

import pytest
from conftest import text_document

from document_qa.exporter import export_summaries, export_table, format_size
from document_qa.models import (
    AnswerType,
    BooleanAnswer,
    ChoiceAnswer,
    NumberAnswer,
    Question,
    ResultRow,
    TextAnswer,
    format_number,
)


def test_single_question_scenario(sky_document):
    questions = [Question(id=0, text="What color is the sky?")]
    rows = [ResultRow(document=sky_document, answers=(TextAnswer(raw="Blue"),))]

    lines = export_table(questions, rows).split("\n")

    assert lines[0] == "File Name,File Size,Q1: What color is the sky?"
    assert lines[1] == '"a.txt","1.00 KB","Blue"'
    assert len(lines) == 2


def test_quotes_are_doubled(sky_document):
    questions = [Question(id=0, text="Quote?")]
    rows = [ResultRow(document=sky_document, answers=(TextAnswer(raw='He said "hi"'),))]

    assert export_table(questions, rows).split("\n")[1].endswith('"He said ""hi"""')


def test_renders_each_answer_type(sky_document, mixed_questions):
    rows = [
        ResultRow(
            document=sky_document,
            answers=(
                TextAnswer(raw="Blue"),
                NumberAnswer(value=42.0, unit="meters"),
                BooleanAnswer(normalized="no"),
                ChoiceAnswer(selected="Summer"),
            ),
        )
    ]

    header, row = export_table(mixed_questions, rows).split("\n")

    assert header == (
        "File Name,File Size,Q1: What color is the sky?,Q2: How tall is the tower?,"
        "Q3: Is it raining?,Q4: Which season?"
    )
    assert row == '"a.txt","1.00 KB","Blue","42 meters","no","Summer"'


def test_number_without_unit_keeps_separator(sky_document):
    questions = [Question(id=0, text="Pi?", answer_type=AnswerType.NUMBER)]
    rows = [ResultRow(document=sky_document, answers=(NumberAnswer(value=3.14, unit=""),))]

    assert export_table(questions, rows).split("\n")[1] == '"a.txt","1.00 KB","3.14 "'


def test_nan_number(sky_document):
    questions = [Question(id=0, text="Count?", answer_type=AnswerType.NUMBER)]
    rows = [ResultRow(document=sky_document, answers=(NumberAnswer(value=float("nan"), unit="x"),))]

    assert export_table(questions, rows).split("\n")[1] == '"a.txt","1.00 KB","NaN x"'


@pytest.mark.parametrize(
    "value,expected",
    [
        (42.0, "42"),
        (3.14, "3.14"),
        (0.5, "0.5"),
        (-2.0, "-2"),
        (0.0, "0"),
        (1e20, "100000000000000000000"),
        (1e21, "1e+21"),
        (1.5e22, "1.5e+22"),
        (0.000001, "0.000001"),
        (1e-7, "1e-7"),
        (-2.5e-8, "-2.5e-8"),
        (float("inf"), "Infinity"),
    ],
)
def test_number_rendering(value, expected):
    assert format_number(value) == expected


def test_export_is_deterministic(sky_document, mixed_questions):
    rows = [
        ResultRow(
            document=sky_document,
            answers=(
                TextAnswer(raw="Line one\nline two"),
                NumberAnswer(value=1.5, unit="kg"),
                BooleanAnswer(normalized="yes"),
                ChoiceAnswer(selected="Winter"),
            ),
        )
    ]
    assert export_table(mixed_questions, rows) == export_table(mixed_questions, rows)


def test_header_labels_with_commas_and_quotes_keep_columns_aligned(sky_document):
    questions = [
        Question(id=0, text="Is it red, or blue?"),
        Question(id=1, text='Say "hi"'),
    ]
    rows = [
        ResultRow(document=sky_document, answers=(TextAnswer(raw="x"), TextAnswer(raw="y")))
    ]

    exported = export_table(questions, rows)
    header, data = list(csv.reader(io.StringIO(exported)))

    assert exported.split("\n")[0] == (
        'File Name,File Size,"Q1: Is it red, or blue?","Q2: Say ""hi"""'
    )
    assert header == ["File Name", "File Size", "Q1: Is it red, or blue?", 'Q2: Say "hi"']
    assert len(header) == len(data)


def test_no_rows_gives_header_only():
    questions = [Question(id=0, text="Anything?")]
    assert export_table(questions, []) == "File Name,File Size,Q1: Anything?"


def test_format_size():
    assert format_size(1024) == "1.00 KB"
    assert format_size(1536) == "1.50 KB"
    assert format_size(0) == "0.00 KB"


def test_export_summaries():
    doc = text_document("notes.txt", "x" * 2048)
    rows = [ResultRow(document=doc, answers=(TextAnswer(raw="Short summary."),))]

    assert export_summaries(rows) == (
        'File Name,File Size,Summary\n"notes.txt","2.00 KB","Short summary."'
    )

"""Type-directed parsing of raw completion text into answers.

Parsing is permissive and never raises: boolean and choice answers are not
validated, and a number that cannot be read becomes NaN.
"""

import re
from typing import Sequence

from document_qa.models import (
    Answer,
    AnswerType,
    BooleanAnswer,
    ChoiceAnswer,
    NumberAnswer,
    TextAnswer,
)

# Longest leading decimal literal, the way a lenient float parser reads "42kg"
_NUMBER_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(token: str) -> float:
    match = _NUMBER_PREFIX.match(token.strip())
    if not match:
        return float("nan")
    literal = match.group(0)
    if literal.lstrip("+-") == "Infinity":
        return float(literal.replace("Infinity", "inf"))
    return float(literal)


def parse_answer(raw: str, answer_type: AnswerType, choices: Sequence[str] = ()) -> Answer:
    """Convert raw completion text into the answer variant for ``answer_type``.

    ``choices`` is accepted for symmetry with the question but not used to
    validate choice answers.
    """
    if answer_type is AnswerType.NUMBER:
        parts = raw.split(None, 1)
        if not parts:
            return NumberAnswer(value=float("nan"), unit="")
        unit = parts[1] if len(parts) > 1 else ""
        return NumberAnswer(value=parse_number(parts[0]), unit=unit)
    if answer_type is AnswerType.BOOLEAN:
        return BooleanAnswer(normalized=raw.lower())
    if answer_type is AnswerType.CHOICE:
        return ChoiceAnswer(selected=raw)
    return TextAnswer(raw=raw)

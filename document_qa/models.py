"""Data models for document-qa."""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Union


class DocumentKind(str, Enum):
    PLAIN_TEXT = "plain_text"
    PAGED_BINARY = "paged_binary"


class AnswerType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    CHOICE = "choice"


@dataclass(frozen=True)
class Document:
    """One uploaded file: raw bytes plus its kind."""

    name: str
    kind: DocumentKind
    raw_bytes: bytes = field(repr=False)
    size_bytes: Optional[int] = None

    def __post_init__(self) -> None:
        if self.size_bytes is None:
            object.__setattr__(self, "size_bytes", len(self.raw_bytes))


@dataclass(frozen=True)
class ExtractedText:
    """Plain text of a document, valid for one run."""

    document: Document = field(repr=False, compare=False)
    text: str


@dataclass(frozen=True)
class Question:
    """A typed question asked of every document in a run."""

    id: int
    text: str
    answer_type: AnswerType = AnswerType.TEXT
    choices: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "choices", tuple(self.choices))
        if self.answer_type is AnswerType.CHOICE and not self.choices:
            raise ValueError(f"Choice question {self.id} must define at least one choice")

    @classmethod
    def from_texts(cls, texts: Iterable[str]) -> list["Question"]:
        """Build free-text questions numbered by position."""
        return [cls(id=i, text=text) for i, text in enumerate(texts)]


def format_number(value: float) -> str:
    """Render a float with its shortest round-trip digits.

    Plain decimal notation is used for magnitudes in [1e-6, 1e21); outside
    that range the exponent form is ``1e-7`` / ``1.5e+21``. Integral values
    carry no fraction, so 42.0 renders as ``42``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    k = len(digits)
    # Position of the decimal point relative to the first digit
    n = exponent + k

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        body = "0." + "0" * -n + digits
    else:
        mantissa = digits[0] + (f".{digits[1:]}" if k > 1 else "")
        power = n - 1
        body = f"{mantissa}e{'+' if power >= 0 else '-'}{abs(power)}"
    return sign + body


@dataclass(frozen=True)
class TextAnswer:
    raw: str

    def render(self) -> str:
        return self.raw


@dataclass(frozen=True)
class NumberAnswer:
    value: float
    unit: str = ""

    def render(self) -> str:
        return f"{format_number(self.value)} {self.unit}"


@dataclass(frozen=True)
class BooleanAnswer:
    normalized: str

    def render(self) -> str:
        return self.normalized


@dataclass(frozen=True)
class ChoiceAnswer:
    selected: str

    def render(self) -> str:
        return self.selected


Answer = Union[TextAnswer, NumberAnswer, BooleanAnswer, ChoiceAnswer]


@dataclass(frozen=True)
class ResultRow:
    """Answers for one document, aligned with the run's question order."""

    document: Document
    answers: tuple[Answer, ...]


@dataclass(frozen=True)
class RunRequest:
    """Immutable input of a single run."""

    documents: tuple[Document, ...]
    questions: tuple[Question, ...]
    credential: str = field(repr=False)

"""Prompt construction for the completion service."""

from document_qa.models import AnswerType, Question

QUESTION_SYSTEM_INSTRUCTION = (
    "You are a helpful assistant that answers questions based on the given text."
)
SUMMARY_SYSTEM_INSTRUCTION = "You are a helpful assistant that summarizes text."

DEFAULT_SUMMARY_WORDS = 50

_FORMAT_INSTRUCTIONS = {
    AnswerType.TEXT: "Please provide a concise answer.",
    AnswerType.NUMBER: (
        "Please respond with a number and an optional unit, separated by a space, "
        "e.g. '42 meters' or '3.14'."
    ),
    AnswerType.BOOLEAN: "Please respond with only 'Yes', 'No', or 'Don't know'.",
}


def format_instruction(question: Question) -> str:
    if question.answer_type is AnswerType.CHOICE:
        return f"Please choose one of the following options: {', '.join(question.choices)}."
    return _FORMAT_INSTRUCTIONS[question.answer_type]


def build_prompt(question: Question) -> str:
    """Question text followed by the response-format instruction for its type."""
    return f"{question.text} {format_instruction(question)}"


def build_user_message(prompt: str, text: str) -> str:
    return f"Answer the following question based on the text below.\n\nQuestion: {prompt}\n\nText:\n{text}"


def build_summary_message(text: str, word_count: int = DEFAULT_SUMMARY_WORDS) -> str:
    return f"Please summarize the following text in about {word_count} words:\n\n{text}"

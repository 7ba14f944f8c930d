"""Utilities for importing question banks from a human-friendly text file.

File format (repeat blocks separated by blank lines or '---'):

    CATEGORY: EUROPE   (applies to every following block until the next one)
    Q: Question text (supports markdown). Additional lines until the
       next marker are treated as part of the question.
    IMAGE: https://...   (optional picture shown with the question)
    A: First option text
    B: Second option text
    C: Third option text
    D: Fourth option text
    CORRECT: A|B|C|D

A CATEGORY line may stand alone as its own block.

Example:

    CATEGORY: LANDMARKS

    Q: In which city does the Eiffel Tower stand?
    A: Lyon
    B: Paris
    C: Marseille
    D: Nice
    CORRECT: B
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from city_quiz.core.models import CityCategory, Question


class QuestionImportError(Exception):
    """Raised when a question bank definition cannot be parsed."""


@dataclass(slots=True)
class ImportedQuestionBank:
    """Container for an imported file and its questions per category."""

    source_path: Path | None
    questions: dict[CityCategory, list[Question]]

    def question_count(self) -> int:
        return sum(len(items) for items in self.questions.values())


_OPTION_ORDER = ["A", "B", "C", "D"]


def load_questions_from_file(file_path: Path) -> ImportedQuestionBank:
    text = file_path.read_text(encoding="utf-8")
    bank = parse_question_text(text)
    bank.source_path = file_path
    return bank


def parse_question_text(text: str) -> ImportedQuestionBank:
    questions: dict[CityCategory, list[Question]] = {}
    category: CityCategory | None = None
    for block in _split_blocks(text):
        category, question = _parse_block(block, category)
        if question is None:
            continue
        if category is None:
            raise QuestionImportError("Question defined before any CATEGORY line.")
        questions.setdefault(category, []).append(question)

    if not questions:
        raise QuestionImportError("Question file did not contain any questions.")
    return ImportedQuestionBank(source_path=None, questions=questions)


def _split_blocks(text: str) -> list[str]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped.startswith("#"):
            continue
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())
    return [block for block in blocks if block]


def _parse_category(raw_value: str) -> CityCategory:
    name = raw_value.strip().upper().replace(" ", "_")
    try:
        return CityCategory(name)
    except ValueError as exc:
        raise QuestionImportError(f"Unknown category '{raw_value.strip()}'.") from exc


def _parse_block(
    block: str,
    category: CityCategory | None,
) -> tuple[CityCategory | None, Question | None]:
    question_lines: list[str] = []
    options: dict[str, str] = {}
    correct_letter: str | None = None
    image_url: str | None = None
    current_section: str | None = None
    has_question_content = False

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("CATEGORY:"):
            if has_question_content:
                raise QuestionImportError("CATEGORY must come before the question it applies to.")
            category = _parse_category(line.split(":", 1)[1])
            current_section = None
            continue

        has_question_content = True
        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("CORRECT:"):
            correct_letter = line.split(":", 1)[1].strip().upper()
            current_section = None
            continue

        if upper.startswith("IMAGE:"):
            image_url = line.split(":", 1)[1].strip() or None
            current_section = None
            continue

        if len(line) > 2 and line[0].upper() in _OPTION_ORDER and line[1] == ":":
            letter = line[0].upper()
            options[letter] = line[2:].strip()
            current_section = letter
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section in _OPTION_ORDER:
            options[current_section] = options[current_section] + f" {line}"
        else:
            raise QuestionImportError(
                f"Encountered text outside of a known section: '{line}'."
            )

    if not has_question_content:
        return category, None

    if not question_lines:
        raise QuestionImportError("Question text missing (Q: ...)")
    if len(options) != 4:
        raise QuestionImportError("Each question must define exactly four options (A-D).")

    option_list = [options.get(letter, "").strip() for letter in _OPTION_ORDER]
    if any(not opt for opt in option_list):
        raise QuestionImportError("Option text cannot be empty.")

    if correct_letter is None:
        raise QuestionImportError("Each question needs a CORRECT line.")
    if correct_letter not in _OPTION_ORDER:
        raise QuestionImportError("CORRECT must be one of A, B, C, or D.")

    prompt = "\n".join(question_lines).strip()
    if not prompt:
        raise QuestionImportError("Question text cannot be empty.")

    return category, Question(
        prompt=prompt,
        options=option_list,
        correct_answer=option_list[_OPTION_ORDER.index(correct_letter)],
        image_url=image_url,
    )

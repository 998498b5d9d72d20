"""
CSV loading utilities for question records and candidate answer sheets.
"""

from pathlib import Path

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from exam_service.core.constants import UNANSWERED_CHAR, UNANSWERED_VALUE
from exam_service.core.data_models import QuestionRecord
from exam_service.core.schemas import QuestionRowSchema

REQUIRED_QUESTION_COLUMNS = ("ID", "Question")


def parse_answer_string(answer_string: str) -> list[int]:
    """Parse an answer string into option indices.

    A-Z maps to 0-25, UNANSWERED_CHAR maps to UNANSWERED_VALUE.
    """
    answers: list[int] = []
    for char in answer_string.upper():
        if char == UNANSWERED_CHAR:
            answers.append(UNANSWERED_VALUE)
        elif "A" <= char <= "Z":
            answers.append(ord(char) - ord("A"))
        else:
            raise ValueError(f"Invalid character in answer string: '{char}'")
    return answers


def load_csv_to_question_records(path: Path) -> list[QuestionRecord]:
    """Load a CSV export of question rows, preserving row order.

    Expected CSV columns:
        - ID, Question (required)
        - Subject, Option A..Option D, Correct, Is Sub Question,
          Parent Question ID, Sub Question Order (optional)

    Raises:
        ValueError: If required columns are missing or a row is invalid.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False)

    missing = [c for c in REQUIRED_QUESTION_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"CSV is missing required columns: {missing}")

    records: list[QuestionRecord] = []
    for row in df.to_dict(orient="records"):
        # Blank cells fall back to schema defaults
        fields = {k: v for k, v in row.items() if v.strip() != ""}
        records.append(QuestionRowSchema.model_validate(fields).to_domain())
    return records


def load_csv_to_answer_sheets(
    path: Path,
) -> tuple[list[str], NDArray[np.int8]]:
    """Load a CSV file of candidate answer sheets.

    Expected CSV columns:
        - candidate_id: unique identifier for each candidate
        - answer_string: one letter per question (e.g., "AB*D"), where
          UNANSWERED_CHAR marks an unanswered question

    Returns:
        Tuple of (candidate_ids, responses) where responses has shape
        (n_candidates, n_items).

    Raises:
        ValueError: If CSV format is invalid or data is inconsistent.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False)

    if "candidate_id" not in df.columns:
        raise ValueError("CSV must have 'candidate_id' column")
    if "answer_string" not in df.columns:
        raise ValueError("CSV must have 'answer_string' column")

    candidate_ids: list[str] = df["candidate_id"].tolist()
    answer_strings: list[str] = df["answer_string"].tolist()

    lengths = {len(s) for s in answer_strings}
    if len(lengths) > 1:
        raise ValueError(
            f"Inconsistent answer string lengths: {sorted(lengths)}"
        )

    n_items = lengths.pop() if lengths else 0
    responses = np.array(
        [parse_answer_string(s) for s in answer_strings], dtype=np.int8
    ).reshape(len(answer_strings), n_items)
    return candidate_ids, responses

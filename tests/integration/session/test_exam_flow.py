"""
End-to-end exam flow over the sample data: load records and exam
definitions, take the exam in a session, score and persist the result.
"""

from pathlib import Path

import pytest

from exam_service.core.data import (
    load_csv_to_answer_sheets,
    load_csv_to_question_records,
    parse_answer_string,
)
from exam_service.core.data_models import QuestionRecord
from exam_service.core.paths import get_project_root_dir
from exam_service.exams import QuestionBank, get_exam, load_exam_catalog
from exam_service.hierarchy import audit_hierarchy, passage_groups
from exam_service.results import (
    CandidateInfo,
    JsonlResultSink,
    build_submission,
)
from exam_service.scoring import score_answer_matrix
from exam_service.session import ExamSession, SessionStatus

SAMPLE_DIR = get_project_root_dir() / "data" / "sample"

# candidate_id -> (score, correct, wrong, skipped) on ENGLISH_01
EXPECTED_ENGLISH_SCORES = {
    "C0001": (2.5, 3, 2, 0),
    "C0002": (5.0, 5, 0, 0),
    "C0003": (0.0, 0, 0, 5),
    "C0004": (-1.25, 0, 5, 0),
}


@pytest.fixture(scope="module")
def english_records() -> list[QuestionRecord]:
    records = load_csv_to_question_records(SAMPLE_DIR / "questions.csv")
    catalog = load_exam_catalog(SAMPLE_DIR / "exams")
    return QuestionBank(records).records_for_exam(
        get_exam(catalog, "ENGLISH_01")
    )


class TestSampleData:
    def test_catalog(self) -> None:
        catalog = load_exam_catalog(SAMPLE_DIR / "exams")
        assert sorted(catalog) == ["ENGLISH_01", "MATH_BASICS_01", "MIXED_TEST_01"]
        assert not get_exam(catalog, "ENGLISH_01").is_expired()

    def test_english_hierarchy(
        self, english_records: list[QuestionRecord]
    ) -> None:
        assert [r.id for r in english_records] == [
            "Q0006",
            "P0001",
            "S0001",
            "S0002",
            "S0003",
            "Q0008",
        ]
        assert audit_hierarchy(english_records) == []
        groups = passage_groups(english_records)
        assert [g.indices for g in groups] == [(0,), (1, 2, 3, 4), (5,)]


class TestTakeExam:
    def test_session_matches_batch_scores(
        self, english_records: list[QuestionRecord], clock
    ) -> None:
        candidate_ids, responses = load_csv_to_answer_sheets(
            SAMPLE_DIR / "answer_sheets.csv"
        )
        batch = score_answer_matrix(english_records, responses)

        for ix, candidate_id in enumerate(candidate_ids):
            score, correct, wrong, skipped = EXPECTED_ENGLISH_SCORES[
                candidate_id
            ]
            assert batch.scores[ix] == score
            assert batch.correct[ix] == correct
            assert batch.wrong[ix] == wrong
            assert batch.skipped[ix] == skipped

            session = ExamSession(clock=clock)
            session.start(english_records, 10 * 60_000)
            for item_ix, option in enumerate(responses[ix].tolist()):
                session.select_answer(item_ix, option if option >= 0 else None)
                clock.advance(1_000)
            result = session.submit()

            assert result is not None
            assert result.score == score
            assert (result.correct, result.wrong, result.skipped) == (
                correct,
                wrong,
                skipped,
            )

    def test_numbers_shown_to_candidate(
        self, english_records: list[QuestionRecord], clock
    ) -> None:
        session = ExamSession(clock=clock)
        session.start(english_records, 60_000)
        assert [n.display for n in session.numbers] == [
            "1",
            "2",
            "2.1",
            "2.2",
            "2.3",
            "6",
        ]

    def test_result_saved_on_completion(
        self,
        english_records: list[QuestionRecord],
        clock,
        tmp_path: Path,
    ) -> None:
        sink = JsonlResultSink(tmp_path / "results.jsonl")
        candidate = CandidateInfo(name="Asha", mobile="")

        def on_complete(session: ExamSession, _result: object) -> None:
            sink.write(build_submission("ENGLISH_01", candidate, session))

        session = ExamSession(clock=clock, on_complete=on_complete)
        session.start(english_records, 10 * 60_000)
        for item_ix, option in enumerate(parse_answer_string("A*BB")):
            if option >= 0:
                session.select_answer(item_ix, option)

        # Candidate walks away; the deadline submits what was answered
        clock.advance(10 * 60_000)
        session.tick()

        assert session.status == SessionStatus.COMPLETED
        saved = sink.read_all()
        assert len(saved) == 1
        assert saved[0].timed_out is True
        assert saved[0].candidate.mobile == "Not provided"
        assert saved[0].answers == [0, None, 1, 1, None, None]
        # A, B correct and S0002 wrong
        assert saved[0].result.score == 1.75

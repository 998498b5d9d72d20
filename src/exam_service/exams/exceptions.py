class ExamNotFoundError(Exception):
    def __init__(self, exam_code: str) -> None:
        self.exam_code = exam_code
        super().__init__(f"Exam not found: {exam_code}")


class ExamExpiredError(Exception):
    def __init__(self, exam_code: str, expiry: str) -> None:
        self.exam_code = exam_code
        self.expiry = expiry
        super().__init__(f"Exam {exam_code} expired at {expiry}")

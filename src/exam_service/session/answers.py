class AnswerBuffer:
    """
    Selected option per question index; absent means unanswered.

    Writes are last-write-wins. The buffer does not validate option indices,
    that is the session's job.
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"size must be >= 0, got {size}")
        self._size = size
        self._answers: dict[int, int] = {}

    @property
    def size(self) -> int:
        return self._size

    def set(self, index: int, option_index: int | None) -> None:
        if not 0 <= index < self._size:
            raise IndexError(f"index {index} out of range for {self._size}")
        if option_index is None:
            self._answers.pop(index, None)
        else:
            self._answers[index] = option_index

    def get(self, index: int) -> int | None:
        return self._answers.get(index)

    def clear(self) -> None:
        self._answers.clear()

    def n_answered(self) -> int:
        return len(self._answers)

    def snapshot(self) -> list[int | None]:
        """Answers as a list aligned with the exam's records."""
        return [self._answers.get(ix) for ix in range(self._size)]

"""
ScoreSummary Model
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoreSummary:
    """Kết quả chấm điểm của một bài nộp"""
    total: int
    correct: int
    wrong: int
    unanswered: int
    percentage: int

    @property
    def score(self) -> str:
        """Điểm dạng phân số, ví dụ "7/10" """
        return f"{self.correct}/{self.total}"

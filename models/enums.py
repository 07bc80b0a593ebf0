"""
Enums dùng chung cho chấm điểm và báo cáo
"""

from enum import Enum


class SubmissionReason(str, Enum):
    """Lý do bài làm được nộp"""
    TIME_EXPIRED = "TimeExpired"
    TOO_MANY_LEAVES = "TooManyLeaves"
    MANUAL = "Manual"

    @property
    def label(self) -> str:
        return _REASON_LABELS[self]


_REASON_LABELS = {
    SubmissionReason.TIME_EXPIRED: "Time expired",
    SubmissionReason.TOO_MANY_LEAVES: "Too many page leaves",
    SubmissionReason.MANUAL: "Manual submission",
}


class QuestionStatus(str, Enum):
    CORRECT = "Correct"
    WRONG = "Wrong"
    UNANSWERED = "Unanswered"


class PerformanceBand(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    NEEDS_IMPROVEMENT = "Needs Improvement"

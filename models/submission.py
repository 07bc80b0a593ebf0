"""
Submission Model
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class QuestionAnswer:
    """Một câu hỏi trong bài nộp cùng lựa chọn của học sinh"""
    question: str
    options: List[str]
    correct: int
    selected: Optional[int] = None

    @property
    def is_answered(self) -> bool:
        return self.selected is not None

    @property
    def is_correct(self) -> bool:
        return self.selected is not None and self.selected == self.correct

    def option_text(self, index: int) -> Optional[str]:
        """
        Lấy nội dung phương án theo chỉ số

        Returns:
            Nội dung phương án, hoặc None nếu chỉ số không trỏ tới phương án nào
        """
        if 0 <= index < len(self.options):
            return self.options[index]
        return None


@dataclass
class Submission:
    """Bài làm đã hoàn thành của một học sinh"""
    student_name: str
    questions: List[QuestionAnswer] = field(default_factory=list)
    time_spent: int = 0
    time_left: int = 0
    leave_count: int = 0

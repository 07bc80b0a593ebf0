"""
Scoring Service
"""

from models.submission import Submission, QuestionAnswer
from models.score_summary import ScoreSummary
from models.enums import SubmissionReason, QuestionStatus, PerformanceBand

# Số lần rời trang tối đa trước khi bài bị coi là nộp do vi phạm
MAX_LEAVE_COUNT = 3

# Ngưỡng xếp loại, xét theo thứ tự giảm dần
PERFORMANCE_THRESHOLDS = [
    (80, PerformanceBand.EXCELLENT),
    (60, PerformanceBand.GOOD),
    (40, PerformanceBand.AVERAGE),
]


class ScoringService:
    """
    Service chấm điểm bài nộp

    Mỗi câu hỏi rơi vào đúng một trong ba nhóm:
    - Correct: đã chọn và lựa chọn trùng đáp án
    - Unanswered: chưa chọn
    - Wrong: còn lại
    """

    @staticmethod
    def question_status(question: QuestionAnswer) -> QuestionStatus:
        """Phân loại một câu hỏi (kiểm tra chưa trả lời trước)"""
        if not question.is_answered:
            return QuestionStatus.UNANSWERED
        if question.is_correct:
            return QuestionStatus.CORRECT
        return QuestionStatus.WRONG

    @staticmethod
    def round_percentage(correct: int, total: int) -> int:
        """
        Tính phần trăm làm tròn nửa lên (giống Math.round với số không âm)

        Dùng số học nguyên để tránh sai số dấu phẩy động ở các giá trị x.5

        Args:
            correct: Số câu đúng
            total: Tổng số câu

        Returns:
            Phần trăm nguyên trong khoảng [0, 100], 0 nếu total = 0
        """
        if total <= 0:
            return 0
        return (200 * correct + total) // (2 * total)

    @staticmethod
    def calculate_score(submission: Submission) -> ScoreSummary:
        """
        Chấm điểm bài nộp

        Args:
            submission: Bài nộp đã được validate

        Returns:
            ScoreSummary với total = correct + wrong + unanswered
        """
        questions = submission.questions
        total = len(questions)
        correct = sum(1 for q in questions if q.is_correct)
        unanswered = sum(1 for q in questions if not q.is_answered)
        wrong = total - correct - unanswered

        return ScoreSummary(
            total=total,
            correct=correct,
            wrong=wrong,
            unanswered=unanswered,
            percentage=ScoringService.round_percentage(correct, total),
        )

    @staticmethod
    def classify_reason(submission: Submission) -> SubmissionReason:
        """
        Xác định lý do nộp bài, theo thứ tự ưu tiên:
        1. Hết giờ (time_left <= 0)
        2. Rời trang quá nhiều lần (leave_count > 3)
        3. Nộp thủ công
        """
        if submission.time_left <= 0:
            return SubmissionReason.TIME_EXPIRED
        if submission.leave_count > MAX_LEAVE_COUNT:
            return SubmissionReason.TOO_MANY_LEAVES
        return SubmissionReason.MANUAL

    @staticmethod
    def performance_band(percentage: int) -> PerformanceBand:
        for threshold, band in PERFORMANCE_THRESHOLDS:
            if percentage >= threshold:
                return band
        return PerformanceBand.NEEDS_IMPROVEMENT

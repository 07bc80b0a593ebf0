"""
Report Service
Tạo báo cáo kết quả dạng Markdown (Telegram legacy Markdown) để gửi lên chat
"""

from datetime import datetime
from typing import List, Optional
import pytz
from models.submission import Submission, QuestionAnswer
from models.score_summary import ScoreSummary
from models.enums import SubmissionReason, QuestionStatus
from services.scoring_service import ScoringService

SEPARATOR = "═══════════════════════════════"
NOT_ANSWERED = "❌ *Not answered*"
INVALID_OPTION = "(invalid option)"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %Z"

STATUS_EMOJI = {
    QuestionStatus.CORRECT: "✅",
    QuestionStatus.WRONG: "❌",
    QuestionStatus.UNANSWERED: "⏭️",
}

# Ký tự đặc biệt của Telegram legacy Markdown
_MARKDOWN_SPECIAL = ("_", "*", "`", "[")


def escape_markdown(text: str) -> str:
    """Escape nội dung do người dùng nhập để không phá vỡ cú pháp Markdown"""
    for char in _MARKDOWN_SPECIAL:
        text = text.replace(char, "\\" + char)
    return text


def format_duration(seconds: Optional[int]) -> str:
    """
    Định dạng số giây thành "{phút}m {giây}s"

    Giá trị âm hoặc thiếu được coi là 0
    """
    minutes, secs = divmod(max(seconds or 0, 0), 60)
    return f"{minutes}m {secs}s"


def format_timestamp(moment: datetime, timezone_name: str = "UTC") -> str:
    """Chuyển thời điểm sang múi giờ hiển thị của báo cáo"""
    tz = pytz.timezone(timezone_name)
    if moment.tzinfo is None:
        moment = pytz.utc.localize(moment)
    return moment.astimezone(tz).strftime(TIMESTAMP_FORMAT)


class ReportService:
    """Service dựng báo cáo bài nộp"""

    def __init__(self, timezone_name: str = "UTC"):
        self.timezone_name = timezone_name

    def render_report(self,
                      submission: Submission,
                      summary: ScoreSummary,
                      reason: SubmissionReason,
                      submitted_at: datetime) -> str:
        """
        Tạo báo cáo gồm 3 phần theo thứ tự:
        header -> chi tiết từng câu (giữ nguyên thứ tự) -> tổng kết

        Args:
            submission: Bài nộp
            summary: Kết quả chấm điểm
            reason: Lý do nộp bài
            submitted_at: Thời điểm nhận bài

        Returns:
            Báo cáo dạng text
        """
        lines: List[str] = []
        lines.extend(self._render_header(submission, summary, reason, submitted_at))
        lines.append("*DETAILED RESULTS:*")
        lines.append(SEPARATOR)
        lines.append("")
        for index, question in enumerate(submission.questions, start=1):
            lines.extend(self._render_question(index, question))
        lines.extend(self._render_summary(submission, summary))
        return "\n".join(lines) + "\n"

    def _render_header(self, submission, summary, reason, submitted_at) -> List[str]:
        return [
            "🎓 *ENGLISH TEST SUBMISSION*",
            "",
            f"👤 *Student:* {escape_markdown(submission.student_name)}",
            f"⏱️ *Time Spent:* {format_duration(submission.time_spent)}",
            f"⏰ *Time Left:* {format_duration(submission.time_left)}",
            f"📊 *Score:* {summary.score} ({summary.percentage}%)",
            f"✅ *Correct:* {summary.correct}",
            f"❌ *Wrong:* {summary.wrong}",
            f"⏭️ *Unanswered:* {summary.unanswered}",
            f"🚪 *Page Leaves:* {submission.leave_count}",
            f"🎯 *Submission:* {reason.label}",
            f"📅 *Submitted:* {format_timestamp(submitted_at, self.timezone_name)}",
            "",
        ]

    @staticmethod
    def _render_option(question: QuestionAnswer, index: int) -> str:
        text = question.option_text(index)
        if text is None:
            return INVALID_OPTION
        return escape_markdown(text)

    def _render_question(self, index: int, question: QuestionAnswer) -> List[str]:
        status = ScoringService.question_status(question)
        if status == QuestionStatus.UNANSWERED:
            selected = NOT_ANSWERED
        else:
            selected = self._render_option(question, question.selected)

        return [
            f"{STATUS_EMOJI[status]} *Question {index}:* {escape_markdown(question.question)}",
            f"   *Student's Answer:* {selected}",
            f"   *Correct Answer:* {self._render_option(question, question.correct)}",
            f"   *Status:* {status.value}",
            "",
        ]

    @staticmethod
    def _render_summary(submission: Submission, summary: ScoreSummary) -> List[str]:
        band = ScoringService.performance_band(summary.percentage)
        return [
            SEPARATOR,
            "*SUMMARY*",
            f"🏆 *Final Score:* {summary.percentage}%",
            f"📈 *Performance:* {band.value}",
            f"⏱️ *Completion Time:* {format_duration(submission.time_spent)}",
        ]

"""
Models module - Các class định nghĩa dữ liệu
"""

from .submission import Submission, QuestionAnswer
from .score_summary import ScoreSummary
from .enums import SubmissionReason, QuestionStatus, PerformanceBand

__all__ = [
    'Submission',
    'QuestionAnswer',
    'ScoreSummary',
    'SubmissionReason',
    'QuestionStatus',
    'PerformanceBand'
]

"""
Services module - Business logic
"""

from .scoring_service import ScoringService
from .report_service import ReportService
from .telegram_service import TelegramNotifier, TelegramDeliveryError
from .submission_parser_service import SubmissionParserService, SubmissionValidationError

__all__ = [
    'ScoringService',
    'ReportService',
    'TelegramNotifier',
    'TelegramDeliveryError',
    'SubmissionParserService',
    'SubmissionValidationError'
]

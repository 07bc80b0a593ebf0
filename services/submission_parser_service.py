"""
Submission Parser Service
Giải mã body request và validate thành Submission có kiểu rõ ràng
"""

import json
from typing import Any, List, Optional, Union
from pydantic import ValidationError
from api.schemas import SubmissionRequest
from models.submission import Submission, QuestionAnswer

INVALID_JSON = "Invalid JSON data"
MISSING_FIELDS = "Missing required fields: studentName and questions are required"
INVALID_SUBMISSION = "Invalid submission data"


class SubmissionValidationError(Exception):
    """Body request không hợp lệ (trả về 400)"""

    def __init__(self, error: str, details: Optional[List[str]] = None, status_code: int = 400):
        super().__init__(error)
        self.error = error
        self.details = details
        self.status_code = status_code


class SubmissionParserService:
    """Service chuyển body request thành Submission"""

    @staticmethod
    def decode_body(body: Union[bytes, str, dict, None]) -> Any:
        """
        Giải mã body

        Body có thể đã được parse sẵn (dict) hoặc là chuỗi JSON thô.
        JSON mã hoá hai lần (kết quả là một chuỗi) được giải mã thêm một lần.

        Raises:
            SubmissionValidationError: Body không phải JSON hợp lệ
        """
        if isinstance(body, dict):
            return body

        try:
            if isinstance(body, bytes):
                body = body.decode("utf-8")
            data = json.loads(body)
            if isinstance(data, str):
                data = json.loads(data)
        except (TypeError, ValueError):
            raise SubmissionValidationError(INVALID_JSON)
        return data

    @staticmethod
    def check_required_fields(data: Any) -> None:
        if not isinstance(data, dict) or not data.get("studentName") or data.get("questions") is None:
            raise SubmissionValidationError(MISSING_FIELDS)

    @staticmethod
    def to_submission(request: SubmissionRequest) -> Submission:
        return Submission(
            student_name=request.studentName,
            questions=[
                QuestionAnswer(
                    question=q.question,
                    options=list(q.options),
                    correct=q.correct,
                    selected=q.selected,
                )
                for q in request.questions
            ],
            time_spent=request.timeSpent,
            time_left=request.timeLeft,
            leave_count=request.leaveCount,
        )

    @classmethod
    def parse(cls, body: Union[bytes, str, dict, None]) -> Submission:
        """
        Giải mã + kiểm tra trường bắt buộc + validate schema

        Returns:
            Submission đã validate

        Raises:
            SubmissionValidationError: Khi body sai định dạng hoặc thiếu dữ liệu
        """
        data = cls.decode_body(body)
        cls.check_required_fields(data)

        try:
            request = SubmissionRequest.model_validate(data)
        except ValidationError as e:
            details = [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise SubmissionValidationError(INVALID_SUBMISSION, details=details)

        return cls.to_submission(request)

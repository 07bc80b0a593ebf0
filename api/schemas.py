"""
API Schemas - Request/Response models
"""

from typing import List, Optional, Union
from pydantic import BaseModel, Field, field_validator


class QuestionItem(BaseModel):
    """Schema cho một câu hỏi trong bài nộp"""
    question: str = Field(..., description="Nội dung câu hỏi")
    options: List[str] = Field(..., description="Danh sách phương án")
    correct: int = Field(..., description="Chỉ số phương án đúng")
    selected: Optional[int] = Field(default=None, description="Chỉ số phương án học sinh chọn (null = chưa trả lời)")


class SubmissionRequest(BaseModel):
    """Request nộp bài"""
    studentName: str = Field(..., min_length=1, description="Tên học sinh")
    questions: List[QuestionItem] = Field(..., description="Danh sách câu hỏi theo thứ tự làm bài")
    timeSpent: int = Field(default=0, description="Thời gian đã làm (giây)")
    timeLeft: int = Field(default=0, description="Thời gian còn lại (giây)")
    leaveCount: int = Field(default=0, description="Số lần rời khỏi trang")

    @field_validator("timeSpent", "timeLeft", "leaveCount", mode="before")
    @classmethod
    def _none_as_zero(cls, value):
        return 0 if value is None else value

    class Config:
        json_schema_extra = {
            "example": {
                "studentName": "Ana",
                "questions": [
                    {"question": "Q1", "options": ["a", "b"], "correct": 0, "selected": 0},
                    {"question": "Q2", "options": ["a", "b"], "correct": 1},
                ],
                "timeSpent": 65,
                "timeLeft": 0,
                "leaveCount": 5,
            }
        }


class SubmissionResultData(BaseModel):
    """Kết quả trả về cho client sau khi nộp bài"""
    studentName: str
    score: str = Field(..., description="Điểm dạng correct/total")
    percentage: int = Field(..., ge=0, le=100)
    telegramSent: bool
    telegramError: Optional[str] = None


class SubmissionResponse(BaseModel):
    """Response nộp bài thành công"""
    success: bool = True
    message: str = "Test submitted successfully"
    data: SubmissionResultData

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "message": "Test submitted successfully",
                "data": {
                    "studentName": "Ana",
                    "score": "1/2",
                    "percentage": 50,
                    "telegramSent": False,
                    "telegramError": None,
                },
            }
        }


class ErrorResponse(BaseModel):
    """Response lỗi chung"""
    success: bool = False
    error: str
    details: Optional[Union[str, List[str]]] = None

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "error": "Missing required fields: studentName and questions are required",
            }
        }

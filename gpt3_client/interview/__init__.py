"""Interview-question generation from a job title and/or description."""

from .models import InterviewArgs, InterviewInput, InterviewQuestion, InterviewResponse
from .parsing import collect_questions, parse_interview_text, parse_question_text
from .prompt import format_interview_input, get_interview_prompt
from .service import build_interview_input, interview_questions

__all__ = [
    "InterviewArgs",
    "InterviewInput",
    "InterviewQuestion",
    "InterviewResponse",
    "build_interview_input",
    "interview_questions",
    "format_interview_input",
    "get_interview_prompt",
    "parse_question_text",
    "parse_interview_text",
    "collect_questions",
]

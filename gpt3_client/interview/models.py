"""Value objects for the interview-question feature."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional


@dataclass(frozen=True)
class InterviewArgs:
    """Caller input. At least one of ``job_title`` / ``job_description`` is required.

    ``cap`` limits the number of returned questions when set.
    """

    job_title: Optional[str] = None
    job_description: Optional[str] = None
    cap: Optional[int] = None


@dataclass(frozen=True)
class InterviewInput:
    """The resolved prompt and sampling parameters that were sent."""

    engine: str
    prompt: str
    max_tokens: int
    n: int
    temperature: float
    top_p: float
    presence_penalty: float
    frequency_penalty: float


@dataclass(frozen=True)
class InterviewQuestion:
    index: int
    question: str


@dataclass(frozen=True)
class InterviewResponse:
    input: InterviewInput
    duration: timedelta
    questions: List[InterviewQuestion] = field(default_factory=list)

    def has_questions(self) -> bool:
        return bool(self.questions)

    def question_text(self) -> str:
        """Questions joined by a blank line, in order."""
        return "\n\n".join(q.question for q in self.questions)


__all__ = ["InterviewArgs", "InterviewInput", "InterviewQuestion", "InterviewResponse"]

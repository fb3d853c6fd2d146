"""Interview-question generation on top of a completion call.

``interview_questions`` validates its input, builds the prompt, issues a
single non-streaming completion on the interview engine with fixed sampling
parameters, and parses the returned text into questions.
"""

from __future__ import annotations

import time
from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from ..base.cancellation import CancellationToken
from ..base.constants import MISSING_INTERVIEW_INPUT_ERROR
from ..base.dto import CompletionRequest
from ..base.errors import ValidationError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..config.defaults import INTERVIEW_ENGINE
from .models import InterviewArgs, InterviewInput, InterviewResponse
from .parsing import collect_questions
from .prompt import get_interview_prompt

if TYPE_CHECKING:
    from ..client import Gpt3Client

# One choice holds the whole list; 175 tokens is roughly a dozen questions.
INTERVIEW_MAX_TOKENS = 175
INTERVIEW_N = 1
INTERVIEW_TEMPERATURE = 1.0
INTERVIEW_TOP_P = 0.85
INTERVIEW_PRESENCE_PENALTY = 0.7
INTERVIEW_FREQUENCY_PENALTY = 0.75

_logger = get_logger("gpt3.interview")


def _trimmed(value: Optional[str]) -> str:
    return value.strip() if value else ""


def build_interview_input(args: InterviewArgs) -> InterviewInput:
    """Validate ``args`` and resolve the prompt and sampling parameters.

    Raises:
        ValidationError: Neither a job title nor a description was given, or
            ``cap`` is negative.
    """
    job_title = _trimmed(args.job_title)
    job_description = _trimmed(args.job_description)
    if not job_title and not job_description:
        raise ValidationError(MISSING_INTERVIEW_INPUT_ERROR)
    if args.cap is not None and args.cap < 0:
        raise ValidationError(f"cap must not be negative, got {args.cap}")
    return InterviewInput(
        engine=INTERVIEW_ENGINE,
        prompt=get_interview_prompt(job_title, job_description),
        max_tokens=INTERVIEW_MAX_TOKENS,
        n=INTERVIEW_N,
        temperature=INTERVIEW_TEMPERATURE,
        top_p=INTERVIEW_TOP_P,
        presence_penalty=INTERVIEW_PRESENCE_PENALTY,
        frequency_penalty=INTERVIEW_FREQUENCY_PENALTY,
    )


def interview_questions(
    client: "Gpt3Client",
    args: InterviewArgs,
    *,
    cancel: Optional[CancellationToken] = None,
) -> InterviewResponse:
    """Generate interview questions through ``client``.

    Returns the ordered (possibly empty) questions together with the resolved
    input and the elapsed wall-clock time. Validation happens before any
    network call.
    """
    start = time.perf_counter()
    resolved = build_interview_input(args)
    request = CompletionRequest(
        prompt=[resolved.prompt],
        max_tokens=resolved.max_tokens,
        n=resolved.n,
        temperature=resolved.temperature,
        top_p=resolved.top_p,
        presence_penalty=resolved.presence_penalty,
        frequency_penalty=resolved.frequency_penalty,
    )
    response = client.completion_with_engine(resolved.engine, request, cancel=cancel)
    questions = collect_questions(response.choices, args.cap)
    duration = timedelta(seconds=time.perf_counter() - start)
    normalized_log_event(
        _logger,
        "interview.end",
        LogContext(operation="interview_questions", engine=resolved.engine),
        phase="finalize",
        emitted=len(questions),
        usage=response.usage,
        duration_ms=round(duration.total_seconds() * 1000.0, 3),
    )
    return InterviewResponse(input=resolved, duration=duration, questions=questions)


__all__ = [
    "INTERVIEW_MAX_TOKENS",
    "INTERVIEW_N",
    "INTERVIEW_TEMPERATURE",
    "INTERVIEW_TOP_P",
    "INTERVIEW_PRESENCE_PENALTY",
    "INTERVIEW_FREQUENCY_PENALTY",
    "build_interview_input",
    "interview_questions",
]

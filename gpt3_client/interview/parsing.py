"""Extraction of questions from completion text.

Completions come back as a loose list, e.g.::

    1) What is your experience?
    - Why this role?
    Not a question.

Only lines ending in ``?`` are kept. A leading bullet (``-``, ``*``, ``•``)
and a leading ``N) `` number (one or two digits) are removed.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from ..base.dto import CompletionResponseChoice
from .models import InterviewQuestion

_BULLETS = ("-", "*", "•")
_NUMBER_MARKER = re.compile(r"^\d{1,2}\) ")
_LINE_BREAK = re.compile(r"\r?\n")


def parse_question_text(line: str) -> str:
    question = line.strip()
    if question.startswith(_BULLETS):
        question = question[1:].lstrip()
    question = _NUMBER_MARKER.sub("", question, count=1)
    return question.strip()


def parse_interview_text(text: str) -> List[InterviewQuestion]:
    """Return the questions in ``text`` numbered from 1, in order."""
    questions: List[InterviewQuestion] = []
    for line in _LINE_BREAK.split(text):
        line = line.strip()
        # The final line may be cut off by max_tokens.
        if not line.endswith("?"):
            continue
        question = parse_question_text(line)
        if question:
            questions.append(InterviewQuestion(index=len(questions) + 1, question=question))
    return questions


def collect_questions(choices: Iterable[CompletionResponseChoice], cap: Optional[int] = None) -> List[InterviewQuestion]:
    """Questions from every choice, renumbered across choices and capped."""
    result: List[InterviewQuestion] = []
    for choice in choices:
        for q in parse_interview_text(choice.text):
            if cap is not None and len(result) >= cap:
                return result
            result.append(InterviewQuestion(index=len(result) + 1, question=q.question))
    return result


__all__ = ["parse_question_text", "parse_interview_text", "collect_questions"]

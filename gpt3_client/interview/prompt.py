"""Prompt construction for interview questions."""

from __future__ import annotations

import re

_NEWLINES = re.compile(r"\r?\n")
# Bullet glyph, raw and as UTF-8 read back through cp1252.
_STRAY_BULLETS = ("•", "â€¢")

PROMPT_PREFIX = "Create a list of questions for my interview with a"


def format_interview_input(text: str) -> str:
    """Collapse line breaks to spaces and drop pasted bullet glyphs."""
    output = _NEWLINES.sub(" ", text)
    for glyph in _STRAY_BULLETS:
        output = output.replace(glyph, "")
    return output


def get_interview_prompt(job_title: str, job_description: str) -> str:
    """Build the instruction prompt; returns ``""`` when both inputs are empty."""
    if job_title and job_description:
        return f"{PROMPT_PREFIX} {format_interview_input(job_title)}, {format_interview_input(job_description)}"
    if job_title:
        return f"{PROMPT_PREFIX} {format_interview_input(job_title)}"
    if job_description:
        return f"{PROMPT_PREFIX} job description of {format_interview_input(job_description)}"
    return ""


__all__ = ["format_interview_input", "get_interview_prompt"]

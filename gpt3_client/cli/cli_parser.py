"""CLI parser construction for gpt3-cli.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ..config.defaults import (
    CLI_DEFAULT_MAX_TOKENS,
    CLI_DEFAULT_PROMPT,
    GPT3_DOT_5_TURBO,
    TEXT_DAVINCI_EDIT_001,
)

COMMANDS = ("engines", "engine", "complete", "search", "edits", "chat", "interview")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser and subcommands.

    Performs no I/O. Connection options are shared by every subcommand and
    fall back to the layered configuration when omitted.
    """
    p = argparse.ArgumentParser(prog="gpt3-cli", description="Command line demo for the GPT-3 client")
    p.add_argument("--api-key", default=None, help="API key (default: OPENAI_API_KEY)")
    p.add_argument("--base-url", default=None)
    p.add_argument("--engine", default=None, help="Engine for engine-addressed commands")
    p.add_argument("--timeout", type=float, default=None, dest="timeout_seconds", help="per-phase HTTP timeout in seconds")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    p.add_argument("--log-file", default=None, help="Also write JSON logs to this rotating file")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("engines", help="List available engines")

    p_engine = sub.add_parser("engine", help="Show one engine")
    p_engine.add_argument("engine_id")

    p_complete = sub.add_parser("complete", help="Complete a prompt")
    p_complete.add_argument("--prompt", default=CLI_DEFAULT_PROMPT)
    p_complete.add_argument("--max-tokens", type=int, default=CLI_DEFAULT_MAX_TOKENS)
    p_complete.add_argument("--temperature", type=float, default=None)
    p_complete.add_argument("--stream", action="store_true", help="Print tokens as they arrive")

    p_search = sub.add_parser("search", help="Rank documents against a query")
    p_search.add_argument("--query", required=True)
    p_search.add_argument("documents", nargs="+")

    p_edits = sub.add_parser("edits", help="Edit text following an instruction")
    p_edits.add_argument("--model", default=TEXT_DAVINCI_EDIT_001)
    p_edits.add_argument("--input", default="")
    p_edits.add_argument("--instruction", required=True)

    p_chat = sub.add_parser("chat", help="Single-turn chat completion")
    p_chat.add_argument("--model", default=GPT3_DOT_5_TURBO)
    p_chat.add_argument("--system", default=None)
    p_chat.add_argument("--stream", action="store_true")
    p_chat.add_argument("message")

    p_interview = sub.add_parser("interview", help="Generate interview questions")
    p_interview.add_argument("--job-title", default=None)
    p_interview.add_argument("--job-description", default=None)
    p_interview.add_argument("--cap", type=int, default=None)

    return p


__all__ = ["COMMANDS", "build_parser"]

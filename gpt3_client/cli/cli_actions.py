"""CLI subcommand handlers.

Each ``handle_*`` function takes the parsed arguments and a ready client,
prints its result to stdout and returns an exit code. Errors are printed as
JSON to stderr by :func:`run`; the process exits non-zero on any failure.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Callable, Dict, Optional

import pydantic

from ..base.dto import (
    ChatCompletionRequest,
    ChatCompletionRequestMessage,
    ChatCompletionStreamResponse,
    CompletionRequest,
    CompletionResponse,
    EditsRequest,
    SearchRequest,
)
from ..base.constants import MISSING_API_KEY_ERROR
from ..base.errors import ErrorCode, Gpt3Error
from ..base.logging import LogContext, configure_logger, get_logger, normalized_log_event
from ..client import Gpt3Client
from ..config.env import get_env_var_candidates
from ..interview import InterviewArgs

Handler = Callable[[argparse.Namespace, Gpt3Client], int]


def make_client(args: argparse.Namespace) -> Gpt3Client:
    """Build the client from connection flags; unset flags use the layered config."""
    overrides: Dict[str, Any] = {
        "base_url": args.base_url,
        "default_engine": args.engine,
        "timeout_seconds": args.timeout_seconds,
    }
    return Gpt3Client(args.api_key, **{k: v for k, v in overrides.items() if v is not None})


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def handle_engines(args: argparse.Namespace, client: Gpt3Client) -> int:
    resp = client.engines()
    for engine in resp.data:
        print(f"{engine.id}\t{engine.owner or '-'}\t{'ready' if engine.ready else 'not ready'}")
    return 0


def handle_engine(args: argparse.Namespace, client: Gpt3Client) -> int:
    _print_json(client.engine(args.engine_id).model_dump())
    return 0


def handle_complete(args: argparse.Namespace, client: Gpt3Client) -> int:
    request = CompletionRequest(prompt=[args.prompt], max_tokens=args.max_tokens, temperature=args.temperature)
    if not args.stream:
        resp = client.completion(request)
        print(resp.choices[0].text if resp.choices else "")
        return 0

    def _on_data(event: CompletionResponse) -> None:
        if event.choices:
            sys.stdout.write(event.choices[0].text)
            sys.stdout.flush()

    client.completion_stream(request, _on_data)
    print()
    return 0


def handle_search(args: argparse.Namespace, client: Gpt3Client) -> int:
    resp = client.search(SearchRequest(documents=args.documents, query=args.query))
    for item in sorted(resp.data, key=lambda d: d.score, reverse=True):
        print(f"{item.score:.3f}\t{args.documents[item.document]}")
    return 0


def handle_edits(args: argparse.Namespace, client: Gpt3Client) -> int:
    resp = client.edits(EditsRequest(model=args.model, input=args.input, instruction=args.instruction))
    print(resp.choices[0].text if resp.choices else "")
    return 0


def handle_chat(args: argparse.Namespace, client: Gpt3Client) -> int:
    messages = []
    if args.system:
        messages.append(ChatCompletionRequestMessage(role="system", content=args.system))
    messages.append(ChatCompletionRequestMessage(role="user", content=args.message))
    request = ChatCompletionRequest(model=args.model, messages=messages)
    if not args.stream:
        resp = client.chat_completion(request)
        print(resp.choices[0].message.content if resp.choices else "")
        return 0

    def _on_data(event: ChatCompletionStreamResponse) -> None:
        for choice in event.choices:
            if choice.delta.content:
                sys.stdout.write(choice.delta.content)
        sys.stdout.flush()

    client.chat_completion_stream(request, _on_data)
    print()
    return 0


def handle_interview(args: argparse.Namespace, client: Gpt3Client) -> int:
    resp = client.interview_questions(
        InterviewArgs(job_title=args.job_title, job_description=args.job_description, cap=args.cap)
    )
    if not resp.has_questions():
        print("no questions returned", file=sys.stderr)
        return 0
    for q in resp.questions:
        print(f"{q.index}. {q.question}")
    return 0


HANDLERS: Dict[str, Handler] = {
    "engines": handle_engines,
    "engine": handle_engine,
    "complete": handle_complete,
    "search": handle_search,
    "edits": handle_edits,
    "chat": handle_chat,
    "interview": handle_interview,
}


def run(args: argparse.Namespace, client_factory: Optional[Callable[[argparse.Namespace], Gpt3Client]] = None) -> int:
    """Dispatch ``args.cmd`` and map failures to exit codes.

    Returns:
        ``0`` on success, ``2`` when the client cannot be configured (for
        example no API key), ``1`` on any client error or
        request argument the API models reject (printed as JSON to stderr).
    """
    if args.log_level or args.log_file:
        configure_logger(level=args.log_level, file_path=args.log_file)
    logger = get_logger("gpt3.cli")
    ctx = LogContext(operation=f"cli.{args.cmd}")
    factory = client_factory or make_client
    try:
        client = factory(args)
    except Gpt3Error as e:
        hint: Dict[str, Any] = {"error": e.message, "code": e.code.value}
        if e.message == MISSING_API_KEY_ERROR:
            hint["set_one_of_env"] = list(get_env_var_candidates("api_key"))
        print(json.dumps(hint), file=sys.stderr)
        return 2
    try:
        return HANDLERS[args.cmd](args, client)
    except Gpt3Error as e:
        normalized_log_event(logger, "cli.error", ctx, phase="finalize", error_code=e.code.value, error=str(e))
        print(json.dumps({"error": str(e), "code": e.code.value, "type": type(e).__name__}), file=sys.stderr)
        return 1
    except pydantic.ValidationError as e:
        errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        normalized_log_event(logger, "cli.error", ctx, phase="request", error_code=ErrorCode.VALIDATION.value, error=str(e))
        print(json.dumps({"error": "; ".join(errors), "code": ErrorCode.VALIDATION.value, "type": "ValidationError"}), file=sys.stderr)
        return 1


__all__ = [
    "HANDLERS",
    "make_client",
    "run",
    "handle_engines",
    "handle_engine",
    "handle_complete",
    "handle_search",
    "handle_edits",
    "handle_chat",
    "handle_interview",
]

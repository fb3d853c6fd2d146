from __future__ import annotations

import json

import httpx
import pytest

from gpt3_client import Gpt3Client
from gpt3_client.cli import main
from gpt3_client.cli import cli_actions
from gpt3_client.cli.cli_parser import COMMANDS, build_parser
from gpt3_client.tests.utils import TEST_BASE_URL, completion_event, sse


@pytest.fixture()
def serve(monkeypatch):
    """Route CLI clients to a mock transport; returns the served requests."""
    served = []

    def _install(handler):
        def _factory(args):
            def _record(request):
                request.read()
                served.append(request)
                return handler(request)

            return Gpt3Client(
                args.api_key or "sk-cli",
                base_url=TEST_BASE_URL,
                http_client=httpx.Client(transport=httpx.MockTransport(_record)),
            )

        monkeypatch.setattr(cli_actions, "make_client", _factory)
        return served

    return _install


def test_parser_knows_every_command():
    parser = build_parser()
    for cmd in COMMANDS:
        assert parser.parse_args(["--api-key", "k", cmd] + _required(cmd)).cmd == cmd  # nosec B101


def _required(cmd):
    return {
        "engine": ["ada"],
        "search": ["--query", "q", "doc"],
        "edits": ["--instruction", "fix"],
        "chat": ["hello"],
    }.get(cmd, [])


def test_missing_key_exit_code_and_hint(capsys):
    code = main(["engines"])
    assert code == 2  # nosec B101
    err = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert "OPENAI_API_KEY" in err["set_one_of_env"]  # nosec B101


def test_engines_command(serve, capsys):
    served = serve(
        lambda request: httpx.Response(
            200, json={"data": [{"id": "ada", "owner": "openai", "ready": True}], "object": "list"}
        )
    )
    assert main(["engines"]) == 0  # nosec B101
    assert capsys.readouterr().out.strip() == "ada\topenai\tready"  # nosec B101
    assert served[0].url.path == "/v1/engines"  # nosec B101


def test_complete_stream_command(serve, capsys):
    served = serve(lambda request: httpx.Response(200, content=sse(completion_event("Hi"), completion_event(" there"))))
    assert main(["complete", "--prompt", "Say hi", "--stream"]) == 0  # nosec B101
    assert capsys.readouterr().out == "Hi there\n"  # nosec B101
    assert json.loads(served[0].content)["stream"] is True  # nosec B101


def test_api_error_exits_non_zero(serve, capsys):
    serve(lambda request: httpx.Response(401, json={"error": {"message": "bad key", "type": "invalid_request_error"}}))
    assert main(["complete"]) == 1  # nosec B101
    err = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert err["type"] == "APIError" and err["code"] == "auth"  # nosec B101
    assert "bad key" in err["error"]  # nosec B101


def test_interview_validation_exits_non_zero(serve, capsys):
    served = serve(lambda request: httpx.Response(200, json={}))
    assert main(["interview"]) == 1  # nosec B101
    assert served == []  # nosec B101
    err = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert err["code"] == "validation"  # nosec B101


def test_interview_command_prints_numbered_questions(serve, capsys):
    text = "1) Why Python?\n2) What is a generator?"
    serve(
        lambda request: httpx.Response(
            200, json={"choices": [{"text": text, "index": 0}], "model": "text-davinci-001"}
        )
    )
    assert main(["interview", "--job-title", "Developer", "--cap", "1"]) == 0  # nosec B101
    assert capsys.readouterr().out.strip() == "1. Why Python?"  # nosec B101


def test_search_command_orders_by_score(serve, capsys):
    serve(
        lambda request: httpx.Response(
            200,
            json={"data": [{"document": 0, "score": 1.0}, {"document": 1, "score": 9.5}], "object": "list"},
        )
    )
    assert main(["search", "--query", "capital", "Paris", "Tokyo"]) == 0  # nosec B101
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == ["9.500\tTokyo", "1.000\tParis"]  # nosec B101


def test_make_client_applies_flags():
    args = build_parser().parse_args(
        ["--api-key", "sk-flag", "--base-url", "https://alt.test/v1", "--engine", "curie", "--timeout", "3", "engines"]
    )
    client = cli_actions.make_client(args)
    assert client.config.api_key == "sk-flag"  # nosec B101
    assert client.config.base_url == "https://alt.test/v1"  # nosec B101
    assert client.config.default_engine == "curie" and client.config.timeout_seconds == 3.0  # nosec B101


def test_rejected_request_argument_is_json_error_without_request(serve, capsys):
    served = serve(lambda request: httpx.Response(200, json={}))
    assert main(["complete", "--prompt", "Say hi", "--max-tokens", "0"]) == 1  # nosec B101
    err = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert err["code"] == "validation" and err["type"] == "ValidationError"  # nosec B101
    assert "max_tokens" in err["error"] and served == []  # nosec B101

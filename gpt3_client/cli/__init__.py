"""gpt3-cli: command line demo for the client (package entrypoint).

Argument parsing lives in ``cli_parser``; subcommand handlers in
``cli_actions``.
"""

from __future__ import annotations

import sys
from typing import List, Optional

from .cli_actions import run
from .cli_parser import build_parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, non-zero on error).
    """
    args = build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))
    return run(args)


__all__ = ["main"]

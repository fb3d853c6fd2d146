"""gpt3_client.config.defaults
==========================

Central place for the small, stable default values used across the client.
These can be overridden through the config file, environment variables or
explicit ``ClientConfig`` overrides, but provide sensible fallbacks.

Only plain constants live here; this module imports nothing from the rest of
the package so it can be used from any layer without cycles.
"""

from __future__ import annotations

# ---- Engines ----
ADA_ENGINE = "ada"
BABBAGE_ENGINE = "babbage"
CURIE_ENGINE = "curie"
DAVINCI_ENGINE = "davinci"
DAVINCI_INSTRUCT_ENGINE = "davinci-instruct-beta"
DEFAULT_ENGINE = DAVINCI_ENGINE

# Engine used by the interview-question feature.
INTERVIEW_ENGINE = "text-davinci-001"

# Models for the model-addressed endpoints (/edits, /chat/completions).
TEXT_DAVINCI_EDIT_001 = "text-davinci-edit-001"
GPT3_DOT_5_TURBO = "gpt-3.5-turbo"

# ---- HTTP ----
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_USER_AGENT = "gpt3-client"
DEFAULT_TIMEOUT_SECONDS = 30.0
ORGANIZATION_HEADER = "OpenAI-Organization"

# ---- Streaming wire format ----
STREAM_DATA_PREFIX = "data: "
STREAM_DONE_SENTINEL = "[DONE]"

# ---- CLI ----
CLI_DEFAULT_PROMPT = "One thing that you should know about python"
CLI_DEFAULT_MAX_TOKENS = 20


__all__ = [
    "ADA_ENGINE",
    "BABBAGE_ENGINE",
    "CURIE_ENGINE",
    "DAVINCI_ENGINE",
    "DAVINCI_INSTRUCT_ENGINE",
    "DEFAULT_ENGINE",
    "INTERVIEW_ENGINE",
    "TEXT_DAVINCI_EDIT_001",
    "GPT3_DOT_5_TURBO",
    "DEFAULT_BASE_URL",
    "DEFAULT_USER_AGENT",
    "DEFAULT_TIMEOUT_SECONDS",
    "ORGANIZATION_HEADER",
    "STREAM_DATA_PREFIX",
    "STREAM_DONE_SENTINEL",
    "CLI_DEFAULT_PROMPT",
    "CLI_DEFAULT_MAX_TOKENS",
]

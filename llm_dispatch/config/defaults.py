"""llm_dispatch.config.defaults
============================

Central place for small, stable default values used across the package.
Values can be overridden via environment variables where noted; this module
performs no I/O and imports nothing from the rest of the package.
"""

from __future__ import annotations

# ---- Application ----
APP_NAME = "llm_dispatch"
CLI_PROG = "llm-dispatch"

# ---- Credential file ----
# Explicit path override for the persisted credential record.
CREDENTIALS_FILE_ENV = "LLM_DISPATCH_CREDENTIALS_FILE"
CREDENTIALS_FILE_NAME = "credentials.json"
# Owner read/write only.
CREDENTIALS_FILE_MODE = 0o600

# ---- Logging ----
LOG_LEVEL_ENV = "LLM_DISPATCH_LOG_LEVEL"
# Quiet by default so CLI stdout/stderr carries only chat output.
DEFAULT_LOG_LEVEL = "WARNING"

# ---- HTTP ----
HTTP_TIMEOUT_ENV = "LLM_DISPATCH_HTTP_TIMEOUT_SECONDS"
STREAM_TIMEOUT_ENV = "LLM_DISPATCH_STREAM_TIMEOUT_SECONDS"
DEFAULT_HTTP_TIMEOUT_SECONDS = 60.0
DEFAULT_STREAM_TIMEOUT_SECONDS = 120.0

# ---- Provider base URLs (override with <PROVIDER>_BASE_URL) ----
CEREBRAS_DEFAULT_BASE_URL = "https://api.cerebras.ai/v1"
GROQ_DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEEPSEEK_DEFAULT_BASE_URL = "https://api.deepseek.com/v1"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
XAI_DEFAULT_BASE_URL = "https://api.x.ai/v1"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com"


__all__ = [
    "APP_NAME",
    "CLI_PROG",
    "CREDENTIALS_FILE_ENV",
    "CREDENTIALS_FILE_NAME",
    "CREDENTIALS_FILE_MODE",
    "LOG_LEVEL_ENV",
    "DEFAULT_LOG_LEVEL",
    "HTTP_TIMEOUT_ENV",
    "STREAM_TIMEOUT_ENV",
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "DEFAULT_STREAM_TIMEOUT_SECONDS",
    "CEREBRAS_DEFAULT_BASE_URL",
    "GROQ_DEFAULT_BASE_URL",
    "DEEPSEEK_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "XAI_DEFAULT_BASE_URL",
    "GEMINI_DEFAULT_BASE_URL",
    "OPENAI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_BASE_URL",
]

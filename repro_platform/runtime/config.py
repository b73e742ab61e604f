"""
Configuration constants for the repro-tracker system.
"""

import os

# Summarizer models with their API identifiers, provider, and token limits
AVAILABLE_MODELS = {
    # --- Anthropic / Claude ---
    "sonnet":   {"id": "claude-sonnet-4-5-20250929",  "provider": "anthropic", "max_tokens": 4096, "label": "Sonnet 4.5 (balanced)"},
    "haiku":    {"id": "claude-haiku-4-5-20251001",   "provider": "anthropic", "max_tokens": 4096, "label": "Haiku 4.5 (fast & cheap)"},
    # --- OpenAI ---
    "gpt-4o":      {"id": "gpt-4o",      "provider": "openai", "max_tokens": 4096, "label": "GPT-4o (balanced)"},
    "gpt-4o-mini": {"id": "gpt-4o-mini", "provider": "openai", "max_tokens": 4096, "label": "GPT-4o Mini (fast & cheap)"},
}

DEFAULT_MODEL = "haiku"

# Environment variable names for API keys, keyed by provider
API_KEY_ENV_VARS = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai":    "OPENAI_API_KEY",
}

_SUMMARY_TIMEOUT_SECONDS_ENV = "REPRO_TRACKER_SUMMARY_TIMEOUT_SECONDS"
_SUMMARY_MODEL_ENV = "REPRO_TRACKER_SUMMARY_MODEL"

_DEFAULT_SUMMARY_TIMEOUT_SECONDS = 60

# Seconds a connection waits on a locked database before giving up.
DB_BUSY_TIMEOUT_SECONDS = 10.0

DB_FILE = ".repro-tracker.db"


def _to_int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def summary_timeout_seconds() -> int:
    """Return the wall-clock budget for a single summarizer call."""
    return _to_int_env(_SUMMARY_TIMEOUT_SECONDS_ENV, _DEFAULT_SUMMARY_TIMEOUT_SECONDS)


def default_summary_model() -> str:
    """Return the summarizer model short name, honouring the env override."""
    name = os.environ.get(_SUMMARY_MODEL_ENV, "").strip()
    return name if name in AVAILABLE_MODELS else DEFAULT_MODEL


def resolve_model(name: str) -> dict:
    """Resolve a model short name to its config dict.

    Returns dict with keys: id, provider, max_tokens, label
    Raises ValueError if name is not recognised.
    """
    if name not in AVAILABLE_MODELS:
        valid = ", ".join(AVAILABLE_MODELS.keys())
        raise ValueError(f"Unknown model '{name}'. Available models: {valid}")
    return AVAILABLE_MODELS[name]


def resolve_api_key(provider: str, explicit_key: str | None = None) -> str:
    """Get the API key for a provider.

    Priority:
        1. ``explicit_key`` if provided (e.g. from CLI ``--api-key``).
        2. The provider's environment variable (``ANTHROPIC_API_KEY`` or ``OPENAI_API_KEY``).

    Raises ValueError if no key is found.
    """
    if explicit_key:
        return explicit_key

    env_var = API_KEY_ENV_VARS.get(provider)
    if env_var:
        key = os.environ.get(env_var)
        if key:
            return key

    raise ValueError(
        f"No API key for provider '{provider}'. "
        f"Pass --api-key or set the {API_KEY_ENV_VARS.get(provider, '???')} environment variable."
    )

"""
Cuisinons - Prompt Logger.

Writes each LLM extraction call to `prompt_logs/<session>/NN_<source>.md` so
a bad import can be replayed by hand. Off unless CUISINONS_LOG_PROMPTS=1 or
the CLI's --log-prompts flag.
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Any

LOG_PROMPTS = os.getenv("CUISINONS_LOG_PROMPTS", "0") == "1"
LOG_DIR = Path("prompt_logs")

_session_id: str | None = None
_call_counter: int = 0


def enable_prompt_logging(enabled: bool = True) -> None:
    global LOG_PROMPTS
    LOG_PROMPTS = enabled
    if enabled:
        LOG_DIR.mkdir(exist_ok=True)


def _session_dir() -> Path:
    global _session_id
    if _session_id is None:
        _session_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    session_dir = LOG_DIR / _session_id
    session_dir.mkdir(parents=True, exist_ok=True)
    return session_dir


def _render(
    source: str,
    model: str,
    system_prompt: str,
    user_prompt: str,
    response: str | None,
    error: str | None,
    config: dict[str, Any] | None,
) -> str:
    header = [f"# LLM Call: {source}", "", f"**Time:** {datetime.now().isoformat()}", f"**Model:** {model}"]
    if config:
        header.append("**Config:** " + ", ".join(f"{k}={v}" for k, v in config.items()))

    if error:
        reply = f"**ERROR:** {error}"
    elif response:
        reply = f"```\n{response}\n```"
    else:
        reply = "(No response)"

    sections = [
        "\n".join(header),
        f"## System Prompt\n\n```\n{system_prompt}\n```",
        f"## User Prompt\n\n```\n{user_prompt}\n```",
        f"## Response\n\n{reply}",
    ]
    return "\n\n---\n\n".join(sections) + "\n"


def log_prompt(
    *,
    source: str,
    model: str,
    system_prompt: str,
    user_prompt: str,
    response: str | None = None,
    error: str | None = None,
    config: dict[str, Any] | None = None,
) -> Path | None:
    """
    Write one call to the session directory.

    Args:
        source: Calling component, used in the file name
        config: Sampling parameters (max_tokens, temperature)

    Returns:
        Path to the written file, or None when logging is off
    """
    if not LOG_PROMPTS:
        return None

    global _call_counter
    _call_counter += 1

    filepath = _session_dir() / f"{_call_counter:02d}_{source}.md"
    filepath.write_text(
        _render(source, model, system_prompt, user_prompt, response, error, config),
        encoding="utf-8",
    )
    return filepath


def get_session_log_dir() -> Path | None:
    """Current session directory, or None when logging is off."""
    if not LOG_PROMPTS:
        return None
    return _session_dir()


def reset_session() -> None:
    """Start a new session directory and restart numbering."""
    global _session_id, _call_counter
    _session_id = None
    _call_counter = 0

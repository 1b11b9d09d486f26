"""Configuration loading for smartcal.

Reads settings from environment variables (with .env support via python-dotenv).
Everything has a default except the Gemini API key, which is only required
when the Gemini scorer is selected.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

SCORERS: tuple[str, ...] = ("random", "gemini")
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        log_level: Logging level (default ``"INFO"``).
        scorer: Confidence scorer used by the resolver, ``"random"`` or
            ``"gemini"`` (default ``"random"``).
        gemini_api_key: API key for Google Gemini, or ``None``.
        gemini_model: Gemini model identifier.
        scoring_timeout: Seconds to wait for a remote scorer reply.
    """

    log_level: str = "INFO"
    scorer: str = "random"
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.0-flash"
    scoring_timeout: float = 10.0

    def __repr__(self) -> str:
        key = "'***'" if self.gemini_api_key else "None"
        return (
            f"Settings(log_level={self.log_level!r}, "
            f"scorer={self.scorer!r}, "
            f"gemini_api_key={key}, "
            f"gemini_model={self.gemini_model!r}, "
            f"scoring_timeout={self.scoring_timeout!r})"
        )


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the project root
    is picked up automatically.  Blank values count as unset.

    Returns:
        A validated :class:`Settings` instance.

    Raises:
        ConfigError: If ``LOG_LEVEL`` is not a logging level name,
            ``SMARTCAL_SCORER`` names an unknown scorer,
            ``SCORING_TIMEOUT`` is not a positive number, or the Gemini
            scorer is selected without ``GEMINI_API_KEY``.  The message
            names **all** offending variables.
    """
    load_dotenv()

    def _env(name: str) -> str:
        return os.environ.get(name, "").strip()

    values: dict[str, object] = {}
    problems: list[str] = []

    if log_level := _env("LOG_LEVEL").upper():
        if log_level not in LOG_LEVELS:
            problems.append(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)} (got {log_level!r})")
        else:
            values["log_level"] = log_level

    if gemini_model := _env("GEMINI_MODEL"):
        values["gemini_model"] = gemini_model

    if api_key := _env("GEMINI_API_KEY"):
        values["gemini_api_key"] = api_key

    scorer = _env("SMARTCAL_SCORER").lower()
    if scorer:
        if scorer not in SCORERS:
            problems.append(
                f"SMARTCAL_SCORER must be one of {', '.join(SCORERS)} (got {scorer!r})"
            )
        else:
            values["scorer"] = scorer

    raw_timeout = _env("SCORING_TIMEOUT")
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            timeout = 0.0
        if timeout <= 0:
            problems.append(
                f"SCORING_TIMEOUT must be a positive number of seconds (got {raw_timeout!r})"
            )
        else:
            values["scoring_timeout"] = timeout

    if values.get("scorer") == "gemini" and not api_key:
        problems.append("GEMINI_API_KEY is required when SMARTCAL_SCORER=gemini")

    if problems:
        raise ConfigError("Invalid configuration: " + "; ".join(problems))

    return Settings(**values)  # type: ignore[arg-type]

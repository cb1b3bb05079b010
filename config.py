"""Settings for the Vibe content analysis pipeline.

Everything is read from the process environment by ``Config.load()``;
unset variables fall back to the dataclass defaults below.

Environment Variables:
    Credentials:
        OPENAI_API_KEY: Key for the analysis models. Not needed when both
            models point at a local OpenAI-compatible server

    Models ('provider:model', or 'openai:{name}@{base_url}' for local servers):
        ANALYZER_MODEL: Sentiment, category, video, document, multi-modal and trend analyses
        VIBE_MODEL: Creative vibe summary
        ANALYZER_TEMPERATURE / VIBE_TEMPERATURE: Sampling temperatures
        ANALYZER_RETRIES: Structured-output retries inside each agent

    Batching:
        BATCH_SIZE: Records analyzed concurrently per chunk
        BATCH_DELAY_SECONDS: Pause between chunks (rate limit backoff)

    Content Classification:
        VIDEO_RATIO_THRESHOLD: Video share above which a record is 'video'
        DOCUMENT_RATIO_THRESHOLD: Long-text share above which a record is 'document'
        DOCUMENT_MIN_CHARS: Caption length above which a post counts as long text

    Output:
        REPORTS_DIR: Where the CLI writes JSON reports
        LOG_DIR, LOG_LEVEL, LOG_FORMAT ('text' | 'json'),
        LOG_BACKUP_COUNT, LOG_MAX_BYTES (0 rotates daily instead of by size)

    Tracing:
        ENABLE_LOGFIRE, LOGFIRE_TOKEN: Optional Logfire spans (pip install logfire)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _env(key: str, default: str = "") -> str:
    """Raw string value of an environment variable."""
    return os.environ.get(key, default)


def _env_int(key: str, default: int) -> int:
    """Integer environment variable; empty or unset gives the default.

    Raises:
        ValueError: If the variable holds something that is not an integer
    """
    raw = os.environ.get(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got '{raw}'") from None


def _env_float(key: str, default: float) -> float:
    """Float environment variable; empty or unset gives the default.

    Raises:
        ValueError: If the variable holds something that is not a number
    """
    raw = os.environ.get(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got '{raw}'") from None


def _env_bool(key: str, default: bool = False) -> bool:
    """Boolean environment variable (1/true/yes/on, 0/false/no/off)."""
    raw = os.environ.get(key, "").strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    return default


def is_local_model(model_str: str) -> bool:
    """Return True for local OpenAI-compatible model strings ('openai:name@url')."""
    return model_str.startswith("openai:") and "@" in model_str


@dataclass
class Config:
    """Pipeline settings.

    Example:
        >>> config = Config.load()
        >>> if problem := config.validate():
        ...     sys.exit(f"Configuration error: {problem}")
    """

    # === Credentials ===
    openai_api_key: str = ""  # OPENAI_API_KEY

    # === AI Models ===
    analyzer_model: str = "openai:gpt-4o"  # ANALYZER_MODEL
    vibe_model: str = "openai:gpt-4o"  # VIBE_MODEL
    analyzer_temperature: float = 0.3  # ANALYZER_TEMPERATURE
    vibe_temperature: float = 0.7  # VIBE_TEMPERATURE
    analyzer_retries: int = 2  # ANALYZER_RETRIES

    # === Batching ===
    batch_size: int = 5  # BATCH_SIZE
    batch_delay_seconds: float = 1.0  # BATCH_DELAY_SECONDS

    # === Content Classification ===
    video_ratio_threshold: float = 0.7  # VIDEO_RATIO_THRESHOLD
    document_ratio_threshold: float = 0.7  # DOCUMENT_RATIO_THRESHOLD
    document_min_chars: int = 500  # DOCUMENT_MIN_CHARS

    # === Output ===
    reports_dir: Path = field(default_factory=lambda: Path("reports"))  # REPORTS_DIR
    log_dir: Path = field(default_factory=lambda: Path("log"))  # LOG_DIR
    log_level: str = "INFO"  # LOG_LEVEL
    log_format: str = "text"  # LOG_FORMAT
    log_backup_count: int = 30  # LOG_BACKUP_COUNT
    log_max_bytes: int = 0  # LOG_MAX_BYTES

    # === Tracing (pip install logfire) ===
    enable_logfire: bool = False  # ENABLE_LOGFIRE
    logfire_token: str = ""  # LOGFIRE_TOKEN

    @classmethod
    def load(cls) -> "Config":
        """Build a Config from the current environment."""
        return cls(
            openai_api_key=_env("OPENAI_API_KEY"),
            analyzer_model=_env("ANALYZER_MODEL", "openai:gpt-4o"),
            vibe_model=_env("VIBE_MODEL", "openai:gpt-4o"),
            analyzer_temperature=_env_float("ANALYZER_TEMPERATURE", 0.3),
            vibe_temperature=_env_float("VIBE_TEMPERATURE", 0.7),
            analyzer_retries=_env_int("ANALYZER_RETRIES", 2),
            batch_size=_env_int("BATCH_SIZE", 5),
            batch_delay_seconds=_env_float("BATCH_DELAY_SECONDS", 1.0),
            video_ratio_threshold=_env_float("VIDEO_RATIO_THRESHOLD", 0.7),
            document_ratio_threshold=_env_float("DOCUMENT_RATIO_THRESHOLD", 0.7),
            document_min_chars=_env_int("DOCUMENT_MIN_CHARS", 500),
            reports_dir=Path(_env("REPORTS_DIR", "reports")),
            log_dir=Path(_env("LOG_DIR", "log")),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
            log_format=_env("LOG_FORMAT", "text").lower(),
            log_backup_count=_env_int("LOG_BACKUP_COUNT", 30),
            log_max_bytes=_env_int("LOG_MAX_BYTES", 0),
            enable_logfire=_env_bool("ENABLE_LOGFIRE"),
            logfire_token=_env("LOGFIRE_TOKEN"),
        )

    def validate(self) -> str | None:
        """Check settings before any model is called.

        Returns:
            A message describing the first problem found, or None
        """
        all_local = is_local_model(self.analyzer_model) and is_local_model(self.vibe_model)
        if not self.openai_api_key and not all_local:
            return "OPENAI_API_KEY environment variable is required"

        for name, value in (
            ("ANALYZER_TEMPERATURE", self.analyzer_temperature),
            ("VIBE_TEMPERATURE", self.vibe_temperature),
        ):
            if not 0.0 <= value <= 2.0:
                return f"{name} must be between 0 and 2"
        for name, value in (
            ("VIDEO_RATIO_THRESHOLD", self.video_ratio_threshold),
            ("DOCUMENT_RATIO_THRESHOLD", self.document_ratio_threshold),
        ):
            if not 0.0 <= value < 1.0:
                return f"{name} must be in [0, 1)"

        if self.batch_size < 1:
            return "BATCH_SIZE must be positive"
        for name, value in (
            ("ANALYZER_RETRIES", self.analyzer_retries),
            ("BATCH_DELAY_SECONDS", self.batch_delay_seconds),
            ("DOCUMENT_MIN_CHARS", self.document_min_chars),
            ("LOG_BACKUP_COUNT", self.log_backup_count),
            ("LOG_MAX_BYTES", self.log_max_bytes),
        ):
            if value < 0:
                return f"{name} must be non-negative"

        if self.log_level not in _LOG_LEVELS:
            return f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got '{self.log_level}'"
        if self.log_format not in ("text", "json"):
            return f"LOG_FORMAT must be 'text' or 'json', got '{self.log_format}'"
        return None

# =============================================================================
# CONFIGURATION - learnkit client
# =============================================================================
# Centralized settings read from the environment (and an optional .env file)
# =============================================================================

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

DEFAULT_API_BASE = "http://localhost:5000"
DEFAULT_FEEDBACK_DELAY = 2.5

# -----------------------------------------------------------------------------
# Backend endpoints
# -----------------------------------------------------------------------------

DEFAULT_CHAT_PATH = "/api/ai/chat"
DEFAULT_WORKFLOW_PATH = "/api/role/workflow"
DEFAULT_STAGE_DETAIL_PATH = "/api/role/stage-detail"


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(
            message=f"{name} must be a number",
            details={"name": name, "value": raw[:20]},
        )
    if value < 0:
        raise ConfigurationError(
            message=f"{name} must not be negative",
            details={"name": name, "value": raw[:20]},
        )
    return value


@dataclass
class ClientConfig:
    """Settings for the backend client and the interactive engines.

    Attributes:
        api_base: Base URL of the generative backend
        timeout: Request timeout in seconds; None means no deadline
        feedback_delay: Seconds the quiz feedback stays visible
        chat_path: Path of the GenerateContent operation
        workflow_path: Path of the GenerateWorkflow operation
        stage_detail_path: Path of the GetStageDetail operation
        log_level: Level name passed to configure_logging
    """

    api_base: str = DEFAULT_API_BASE
    timeout: Optional[float] = None
    feedback_delay: float = DEFAULT_FEEDBACK_DELAY
    chat_path: str = DEFAULT_CHAT_PATH
    workflow_path: str = DEFAULT_WORKFLOW_PATH
    stage_detail_path: str = DEFAULT_STAGE_DETAIL_PATH
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "ClientConfig":
        """Build a config from LEARNKIT_* environment variables.

        Args:
            load_dotenv_file: Load a .env file first (existing variables win)

        Returns:
            ClientConfig populated from the environment

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed
        """
        if load_dotenv_file:
            load_dotenv(override=False)

        return cls(
            api_base=os.getenv("LEARNKIT_API_BASE", DEFAULT_API_BASE).rstrip("/"),
            timeout=_env_float("LEARNKIT_TIMEOUT", None),
            feedback_delay=_env_float("LEARNKIT_FEEDBACK_DELAY", DEFAULT_FEEDBACK_DELAY),
            chat_path=os.getenv("LEARNKIT_CHAT_PATH", DEFAULT_CHAT_PATH),
            workflow_path=os.getenv("LEARNKIT_WORKFLOW_PATH", DEFAULT_WORKFLOW_PATH),
            stage_detail_path=os.getenv("LEARNKIT_STAGE_DETAIL_PATH", DEFAULT_STAGE_DETAIL_PATH),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


_config: Optional[ClientConfig] = None


def get_config() -> ClientConfig:
    """Return the cached config, reading the environment on first use."""
    global _config
    if _config is None:
        _config = ClientConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads the env."""
    global _config
    _config = None

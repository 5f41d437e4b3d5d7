import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

import dotenv

from schemas.log_schemas import PipelineConfig

ENV_PREFIX = "LOGBEACON_"


def _split_sentences(value: str) -> List[str]:
    return [sentence for sentence in value.split("|") if sentence.strip()]


@dataclass
class Settings:
    app_name: str = "logbeacon"
    log_endpoint: str = "http://localhost:5341/api/events/raw"
    environment: str = "development"
    first_party_marker: str = "/src/app/"
    warning_sentences: List[str] = field(default_factory=list)
    resolve_timeout: Optional[float] = None  # seconds; None waits for the resolver indefinitely
    verbose: str = "normal"

    def to_pipeline_config(self) -> PipelineConfig:
        return PipelineConfig(
            app_name=self.app_name,
            log_endpoint=self.log_endpoint,
            environment=self.environment
        )


def load_settings(environ: Optional[Mapping[str, str]] = None, load_env_file: bool = True) -> Settings:
    """
    Build Settings from ``LOGBEACON_*`` environment variables.

    Args:
        environ: Mapping to read instead of ``os.environ``
        load_env_file: Whether to load a ``.env`` file into the environment first

    Returns:
        Settings with defaults for anything unset

    Raises:
        ValueError: If LOGBEACON_RESOLVE_TIMEOUT is not a number
    """
    if load_env_file:
        dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))
    if environ is None:
        environ = os.environ

    def get(name: str, default: str) -> str:
        return environ.get(ENV_PREFIX + name, default)

    timeout_raw = get("RESOLVE_TIMEOUT", "").strip()
    try:
        resolve_timeout = float(timeout_raw) if timeout_raw else None
    except ValueError as e:
        raise ValueError(f"LOGBEACON_RESOLVE_TIMEOUT must be a number of seconds, got {timeout_raw!r}") from e

    return Settings(
        app_name=get("APP_NAME", Settings.app_name),
        log_endpoint=get("LOG_ENDPOINT", Settings.log_endpoint),
        environment=get("ENVIRONMENT", Settings.environment),
        first_party_marker=get("FIRST_PARTY_MARKER", Settings.first_party_marker),
        warning_sentences=_split_sentences(get("WARNING_SENTENCES", "")),
        resolve_timeout=resolve_timeout,
        verbose=get("VERBOSE", Settings.verbose)
    )

# podcast_studio/config.py
import os
import logging
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from .errors import ConfigError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

OddLengthPolicy = Literal["error", "truncate", "pad"]


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Runtime settings. Built from the environment (and .env) by ``from_env``."""

    api_key: Optional[str] = None
    use_vertex: bool = False
    project_id: Optional[str] = None
    region: str = "us-central1"
    sa_file: Optional[str] = None

    script_model: str = "gemini-2.5-pro"
    suggestion_model: str = "gemini-2.5-flash"
    tts_model: str = "gemini-2.5-flash-preview-tts"
    image_model: str = "imagen-4.0-generate-001"

    fallback_cover_art: str = "/Podcast.avif"
    placeholder_cover_base: str = "https://via.placeholder.com/512/8B5CF6/FFFFFF"
    output_dir: str = "outputs/podcasts/wav"
    odd_length_policy: OddLengthPolicy = "error"
    parallel_cover_art: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()

        defaults = cls()
        try:
            return cls(
                api_key=os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"),
                use_vertex=_env_flag("GOOGLE_GENAI_USE_VERTEXAI", False),
                project_id=os.getenv("VERTEX_AI_PROJECT_ID"),
                region=os.getenv("VERTEX_AI_REGION", defaults.region),
                sa_file=os.getenv("VERTEX_AI_SERVICE_ACCOUNT_FILE"),
                script_model=os.getenv("PODCAST_SCRIPT_MODEL", defaults.script_model),
                suggestion_model=os.getenv("PODCAST_SUGGESTION_MODEL", defaults.suggestion_model),
                tts_model=os.getenv("PODCAST_TTS_MODEL", defaults.tts_model),
                image_model=os.getenv("PODCAST_IMAGE_MODEL", defaults.image_model),
                fallback_cover_art=os.getenv("PODCAST_FALLBACK_COVER", defaults.fallback_cover_art),
                output_dir=os.getenv("PODCAST_OUTPUT_DIR", defaults.output_dir),
                odd_length_policy=os.getenv("PODCAST_ODD_PCM_POLICY", defaults.odd_length_policy),
                parallel_cover_art=_env_flag("PODCAST_PARALLEL_COVER_ART", defaults.parallel_cover_art),
                log_level=os.getenv("LOG_LEVEL", defaults.log_level),
            )
        except ValidationError as e:
            raise ConfigError(f"Invalid settings in environment: {e}") from e

    def validate_credentials(self) -> None:
        if self.use_vertex:
            if not self.project_id:
                raise ConfigError("VERTEX_AI_PROJECT_ID must be set when GOOGLE_GENAI_USE_VERTEXAI is on")
        elif not self.api_key:
            raise ConfigError("GEMINI_API_KEY (or GOOGLE_API_KEY) must be set")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)

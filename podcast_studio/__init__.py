"""
Podcast Studio: topic in, podcast out.

Gemini writes the title and script, Gemini TTS voices it (converted locally
from raw PCM to WAV) and Imagen draws the cover.
"""

from .config import Settings
from .errors import (
    AudioDecodeError,
    BackendError,
    ConfigError,
    MalformedResponseError,
    NoAudioDataError,
    PodcastGenerationError,
    PodcastStudioError,
)
from .models import (
    CoverArtSet,
    GenerationConfig,
    PodcastFormat,
    PodcastResult,
    ScriptResult,
    Suggestions,
    apply_suggestions,
)
from .langgraph_pipeline.podcast import run_podcast_generation
from .utils.audio_store import AudioArtifact, AudioStore, create_audio_url

__version__ = "1.0.0"

__all__ = [
    "Settings",
    "AudioDecodeError",
    "BackendError",
    "ConfigError",
    "MalformedResponseError",
    "NoAudioDataError",
    "PodcastGenerationError",
    "PodcastStudioError",
    "CoverArtSet",
    "GenerationConfig",
    "PodcastFormat",
    "PodcastResult",
    "ScriptResult",
    "Suggestions",
    "apply_suggestions",
    "run_podcast_generation",
    "AudioArtifact",
    "AudioStore",
    "create_audio_url",
]

# podcast_studio/langgraph_pipeline/podcast/tts_service.py
import logging
from typing import Any, Dict, Optional

from ...config import Settings
from ...errors import NoAudioDataError
from ...models import CO_HOST_SPEAKER, HOST_SPEAKER, GenerationConfig
from ...services.backend import GenerativeBackend
from ...utils.audio_store import AudioArtifact, AudioStore, create_audio_url

logger = logging.getLogger(__name__)


def extract_inline_audio(response: Any) -> Optional[str | bytes]:
    """candidates[0].content.parts[0].inline_data.data, or None if any hop is missing."""
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None)
    if not parts:
        return None
    inline_data = getattr(parts[0], "inline_data", None)
    data = getattr(inline_data, "data", None)
    return data or None


def speaker_voices(config: GenerationConfig) -> Dict[str, str]:
    return {HOST_SPEAKER: config.speaker1, CO_HOST_SPEAKER: config.speaker2}


class TTSService:
    """Audio stage: the whole script in one multi-speaker request."""

    def __init__(
        self,
        backend: GenerativeBackend,
        settings: Optional[Settings] = None,
        store: Optional[AudioStore] = None,
    ):
        self.backend = backend
        self.settings = settings or Settings()
        self.store = store

    async def generate_audio(self, script: str, config: GenerationConfig) -> AudioArtifact:
        voices = speaker_voices(config)
        logger.info(f"TTS start - {HOST_SPEAKER}: {config.speaker1}, {CO_HOST_SPEAKER}: {config.speaker2}")

        response = await self.backend.generate_speech(
            script, model=self.settings.tts_model, speaker_voices=voices
        )

        payload = extract_inline_audio(response)
        if payload is None:
            logger.error("TTS response carried no inline audio")
            raise NoAudioDataError()

        artifact = create_audio_url(
            payload, store=self.store, odd_length_policy=self.settings.odd_length_policy
        )
        logger.info(f"TTS done: {artifact.duration_seconds:.1f}s of audio")
        return artifact

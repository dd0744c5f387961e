# podcast_studio/services/gemini_backend.py
import os
import logging
from typing import Any, Dict, List, Optional, Type

from google import genai
from google.genai import errors, types
from google.oauth2 import service_account
from pydantic import BaseModel

from ..config import Settings
from ..errors import BackendError, ConfigError
from .backend import GenerativeBackend

logger = logging.getLogger(__name__)

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"


def _load_credentials(sa_file: Optional[str]):
    """Service account credentials, or None to fall back to ADC."""
    if not sa_file:
        return None
    if not os.path.exists(sa_file):
        logger.warning(f"Service account file not found: {sa_file}")
        return None
    try:
        return service_account.Credentials.from_service_account_file(
            sa_file, scopes=[CLOUD_PLATFORM_SCOPE]
        )
    except Exception as e:
        raise ConfigError(f"Could not load service account file {sa_file}: {e}") from e


def build_client(settings: Settings) -> genai.Client:
    settings.validate_credentials()
    if settings.use_vertex:
        logger.info(f"Using Vertex AI: {settings.project_id} / {settings.region}")
        return genai.Client(
            vertexai=True,
            project=settings.project_id,
            location=settings.region,
            credentials=_load_credentials(settings.sa_file),
        )
    return genai.Client(api_key=settings.api_key)


class GeminiBackend(GenerativeBackend):
    """google-genai implementation (Gemini text/TTS, Imagen images)."""

    def __init__(self, client: genai.Client):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiBackend":
        return cls(build_client(settings))

    async def generate_text(
        self,
        prompt: str,
        *,
        model: str,
        schema: Optional[Type[BaseModel]] = None,
    ) -> str:
        config = None
        if schema is not None:
            config = types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            )

        try:
            response = await self.client.aio.models.generate_content(
                model=model, contents=prompt, config=config
            )
        except errors.APIError as e:
            raise BackendError(f"{model} text generation failed: {e}") from e

        return response.text or ""

    async def generate_image(
        self,
        prompt: str,
        *,
        model: str,
        number_of_images: int = 4,
        aspect_ratio: str = "1:1",
        mime_type: str = "image/jpeg",
    ) -> List[bytes]:
        try:
            response = await self.client.aio.models.generate_images(
                model=model,
                prompt=prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=number_of_images,
                    output_mime_type=mime_type,
                    aspect_ratio=aspect_ratio,
                ),
            )
        except errors.APIError as e:
            raise BackendError(f"{model} image generation failed: {e}") from e

        return [
            img.image.image_bytes
            for img in (response.generated_images or [])
            if img.image and img.image.image_bytes
        ]

    async def generate_speech(
        self,
        text: str,
        *,
        model: str,
        speaker_voices: Dict[str, str],
    ) -> Any:
        speaker_configs = [
            types.SpeakerVoiceConfig(
                speaker=speaker,
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice)
                ),
            )
            for speaker, voice in speaker_voices.items()
        ]
        config = types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                multi_speaker_voice_config=types.MultiSpeakerVoiceConfig(
                    speaker_voice_configs=speaker_configs
                )
            ),
        )

        try:
            return await self.client.aio.models.generate_content(
                model=model,
                contents=[types.Content(role="user", parts=[types.Part(text=text)])],
                config=config,
            )
        except errors.APIError as e:
            raise BackendError(f"{model} speech generation failed: {e}") from e

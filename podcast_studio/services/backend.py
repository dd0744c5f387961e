# podcast_studio/services/backend.py
"""
Capability interface over the generative API.

The pipeline only needs three things from a backend: structured text, images
and multi-speaker speech. ``GeminiBackend`` implements them with google-genai;
tests plug in fakes.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel


class GenerativeBackend(ABC):

    @abstractmethod
    async def generate_text(
        self,
        prompt: str,
        *,
        model: str,
        schema: Optional[Type[BaseModel]] = None,
    ) -> str:
        """Return the model's text. With ``schema`` the text is JSON for that schema."""

    @abstractmethod
    async def generate_image(
        self,
        prompt: str,
        *,
        model: str,
        number_of_images: int = 4,
        aspect_ratio: str = "1:1",
        mime_type: str = "image/jpeg",
    ) -> List[bytes]:
        """Return the raw bytes of each generated image."""

    @abstractmethod
    async def generate_speech(
        self,
        text: str,
        *,
        model: str,
        speaker_voices: Dict[str, str],
    ) -> Any:
        """
        Synthesize ``text`` with one prebuilt voice per speaker label.

        Returns the raw response; the audio payload lives at
        ``candidates[0].content.parts[0].inline_data.data``.
        """

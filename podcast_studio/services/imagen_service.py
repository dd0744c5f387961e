# podcast_studio/services/imagen_service.py
import base64
import random
import logging
from typing import List, Literal, Optional
from urllib.parse import quote

from ..config import Settings
from ..models import CoverArtSet
from .backend import GenerativeBackend

logger = logging.getLogger(__name__)

COVER_ART_COUNT = 4
COVER_ART_MIME_TYPE = "image/jpeg"

SelectionMode = Literal["first", "random"]


def build_cover_art_prompt(theme: str, series_title: str) -> str:
    return (
        f'Crea una carátula de podcast minimalista y llamativa. Tema del podcast: "{series_title}". '
        f'Tema del episodio: "{theme}". '
        f"Estilo: arte digital, abstracto, colores vibrantes, sin texto."
    )


def to_data_url(image_bytes: bytes, mime_type: str = COVER_ART_MIME_TYPE) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(image_bytes).decode('ascii')}"


def decode_data_url(url: str) -> Optional[bytes]:
    """Image bytes of a ``data:...;base64,`` URL; None for any other reference."""
    if not url.startswith("data:") or ";base64," not in url:
        return None
    return base64.b64decode(url.split(";base64,", 1)[1])


def placeholder_cover_url(text: str, base_url: str) -> str:
    """Text placeholder used when no cover art exists at all."""
    return f"{base_url}?text={quote(text, safe='')}"


def choose_cover_art(options: List[str], mode: SelectionMode = "first") -> Optional[str]:
    """Explicit generation keeps the first option; background generation picks one at random."""
    if not options:
        return None
    if mode == "random":
        return random.choice(options)
    return options[0]


class ImagenService:
    """Cover art generation. Never raises: failures degrade to placeholders."""

    def __init__(self, backend: GenerativeBackend, settings: Optional[Settings] = None):
        self.backend = backend
        self.settings = settings or Settings()

    def fallback_cover_art(self) -> CoverArtSet:
        return CoverArtSet(images=[self.settings.fallback_cover_art] * COVER_ART_COUNT, is_fallback=True)

    async def generate_cover_art_set(self, theme: str, series_title: str) -> CoverArtSet:
        prompt = build_cover_art_prompt(theme, series_title)
        logger.info(f"Generating {COVER_ART_COUNT} cover art options for '{series_title}'")

        try:
            images = await self.backend.generate_image(
                prompt,
                model=self.settings.image_model,
                number_of_images=COVER_ART_COUNT,
                aspect_ratio="1:1",
                mime_type=COVER_ART_MIME_TYPE,
            )
        except Exception as e:
            # rate limits included
            logger.error(f"Cover art generation failed, using placeholder images: {e}")
            return self.fallback_cover_art()

        urls = [to_data_url(img) for img in images[:COVER_ART_COUNT]]
        logger.info(f"Cover art ready: {len(urls)} images")
        return CoverArtSet(images=urls)

    async def generate_cover_art(self, theme: str, series_title: str) -> List[str]:
        return (await self.generate_cover_art_set(theme, series_title)).images

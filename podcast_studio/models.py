# podcast_studio/models.py
"""
Domain models shared by the pipeline stages and the CLI.

Format labels, durations and the default audience are the Spanish values the
wizard shows to users; they are embedded verbatim in the prompts.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .errors import ConfigError

# Fixed presenter labels. The TTS voice mapping binds these to speaker1/speaker2.
HOST_SPEAKER = "Joe"
CO_HOST_SPEAKER = "Jane"
SPEAKERS = (HOST_SPEAKER, CO_HOST_SPEAKER)

VOICES = {
    "Kore": "Kore (Voz Femenina, Clara)",
    "Puck": "Puck (Voz Masculina, Amistosa)",
    "Zephyr": "Zephyr (Voz Femenina, Calmada)",
    "Charon": "Charon (Voz Masculina, Profunda)",
    "Fenrir": "Fenrir (Voz Masculina, Energética)",
}

DURATIONS = ["2 minutos", "5 minutos", "10 minutos"]

MIN_THEME_LENGTH = 5


class PodcastFormat(str, Enum):
    DYNAMIC = "Conversación Dinámica"
    INTERVIEW = "Entrevista (Jane entrevista a Joe)"
    MONOLOGUE = "Monólogo Narrativo (Joe)"
    DEBATE = "Debate Estructurado"

    @property
    def slug(self) -> str:
        return _FORMAT_SLUGS[self]

    @classmethod
    def parse(cls, value: "str | PodcastFormat") -> "PodcastFormat":
        """Accept a label (as shown in the wizard) or a slug like ``monologue``."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for fmt in cls:
            if text == fmt.value or text.lower() == fmt.slug:
                return fmt
        raise ValueError(f"Unknown podcast format: {value!r}")


_FORMAT_SLUGS = {
    PodcastFormat.DYNAMIC: "dynamic-conversation",
    PodcastFormat.INTERVIEW: "interview",
    PodcastFormat.MONOLOGUE: "monologue",
    PodcastFormat.DEBATE: "structured-debate",
}


class GenerationConfig(BaseModel):
    """Everything the wizard collects before production."""

    theme: str
    series_title: str = ""
    speaker1: str = "Kore"
    speaker2: str = "Puck"
    duration: str = "5 minutos"
    aspects: List[str] = Field(default_factory=list)
    tones: List[str] = Field(default_factory=list)
    audience: str = "Público general"
    ai_suggestions: List[str] = Field(default_factory=list)
    cover_art_url: Optional[str] = None
    user_idea: str = ""
    podcast_format: str = PodcastFormat.DYNAMIC.value

    def ensure_theme(self) -> None:
        if len(self.theme.strip()) < MIN_THEME_LENGTH:
            raise ConfigError(
                f"Theme must be at least {MIN_THEME_LENGTH} characters to ask for suggestions"
            )

    def ensure_ready(self) -> None:
        """Checks the caller runs before production (not enforced by the pipeline)."""
        self.ensure_theme()
        if not self.aspects:
            raise ConfigError("Select at least one key aspect")
        if not self.tones:
            raise ConfigError("Select at least one tone")

    @property
    def cover_art_text(self) -> str:
        return self.series_title or self.theme


class ScriptResult(BaseModel):
    """Structured output of the script stage (also the response schema)."""

    title: str
    script: str


class Suggestions(BaseModel):
    """Structured output of the suggestion stage (also the response schema)."""

    suggestions: List[str] = Field(default_factory=list, description="12 ideas de contenido breves y atractivas.")
    aspects: List[str] = Field(default_factory=list, description="4 aspectos clave únicos y relevantes.")
    tones: List[str] = Field(default_factory=list, description="4 tonos específicos para el tema.")

    @property
    def is_empty(self) -> bool:
        return not (self.suggestions or self.aspects or self.tones)


class CoverArtSet(BaseModel):
    """Up to four candidate covers, none selected yet."""

    images: List[str] = Field(default_factory=list)
    is_fallback: bool = False


class PodcastResult(BaseModel):
    title: str
    script: str
    audio_url: str
    cover_art_url: str
    cover_art_options: List[str] = Field(default_factory=list)
    degraded_stages: List[str] = Field(default_factory=list)


def apply_suggestions(config: GenerationConfig, suggestions: Suggestions) -> GenerationConfig:
    """Seed a config from the suggestion stage the way the wizard does.

    The series title falls back to the theme and the first two aspects and
    tones are preselected. Returns a new config; the input is not mutated.
    """
    return config.model_copy(
        update={
            "series_title": config.series_title or config.theme,
            "aspects": suggestions.aspects[:2],
            "tones": suggestions.tones[:2],
        }
    )

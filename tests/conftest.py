import base64
import json
from types import SimpleNamespace

import pytest

from podcast_studio.config import Settings
from podcast_studio.models import GenerationConfig, ScriptResult
from podcast_studio.services.backend import GenerativeBackend
from podcast_studio.utils.audio_store import AudioStore

PCM = bytes(range(256)) * 4
PCM_B64 = base64.b64encode(PCM).decode("ascii")

SCRIPT = "Joe: Bienvenidos a Mentes Digitales.\nJane: Hoy hablamos de ética en la IA.\nJoe: Empecemos."
SCRIPT_JSON = json.dumps({"title": "Ética de la IA", "script": SCRIPT}, ensure_ascii=False)

SUGGESTIONS_JSON = json.dumps(
    {
        "suggestions": [f"Idea {i}" for i in range(1, 13)],
        "aspects": ["Debate Ético", "Innovación Tecnológica", "Regulación", "Impacto Social"],
        "tones": ["Optimista", "Crítico", "Nostálgico", "Conspirativo"],
    },
    ensure_ascii=False,
)

IMAGES = [b"\xff\xd8jpeg-1", b"\xff\xd8jpeg-2", b"\xff\xd8jpeg-3", b"\xff\xd8jpeg-4"]


def speech_response(data):
    """Response shaped like google-genai's: candidates[0].content.parts[0].inline_data.data"""
    part = SimpleNamespace(
        text=None,
        inline_data=SimpleNamespace(mime_type="audio/L16;codec=pcm;rate=24000", data=data),
    )
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


class FakeBackend(GenerativeBackend):
    """Scripted backend. Any outcome given as an exception is raised instead."""

    def __init__(self, script=SCRIPT_JSON, suggestions=SUGGESTIONS_JSON, images=None, speech=None):
        self.script = script
        self.suggestions = suggestions
        self.images = list(IMAGES) if images is None else images
        self.speech = speech_response(PCM_B64) if speech is None else speech
        self.calls = []

    @staticmethod
    def _outcome(value):
        if isinstance(value, BaseException):
            raise value
        return value

    def calls_of(self, kind):
        return [call for call in self.calls if call["kind"] == kind]

    async def generate_text(self, prompt, *, model, schema=None):
        self.calls.append({"kind": "text", "prompt": prompt, "model": model, "schema": schema})
        return self._outcome(self.script if schema is ScriptResult else self.suggestions)

    async def generate_image(self, prompt, *, model, number_of_images=4, aspect_ratio="1:1", mime_type="image/jpeg"):
        self.calls.append(
            {
                "kind": "image",
                "prompt": prompt,
                "model": model,
                "number_of_images": number_of_images,
                "aspect_ratio": aspect_ratio,
                "mime_type": mime_type,
            }
        )
        return self._outcome(self.images)

    async def generate_speech(self, text, *, model, speaker_voices):
        self.calls.append({"kind": "speech", "text": text, "model": model, "speaker_voices": speaker_voices})
        return self._outcome(self.speech)


@pytest.fixture
def settings():
    return Settings(api_key="test-key")


@pytest.fixture
def store():
    return AudioStore()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def config():
    return GenerationConfig(
        theme="AI ethics",
        series_title="Mentes Digitales",
        aspects=["Debate Ético", "Regulación"],
        tones=["Optimista", "Crítico"],
        ai_suggestions=["Entrevistar a un pionero del campo"],
    )

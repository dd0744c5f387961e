import json
import logging

import pytest

from podcast_studio.errors import BackendError, MalformedResponseError
from podcast_studio.langgraph_pipeline.podcast.script_generator import (
    ScriptGenerator,
    extract_json_from_llm,
    speaker_labels,
)
from podcast_studio.models import ScriptResult

from .conftest import SCRIPT, SCRIPT_JSON, FakeBackend


@pytest.mark.asyncio
async def test_generate_script(settings, config):
    backend = FakeBackend()
    result = await ScriptGenerator(backend, settings).generate_script(config)

    assert result == ScriptResult(title="Ética de la IA", script=SCRIPT)
    [call] = backend.calls_of("text")
    assert call["model"] == settings.script_model
    assert call["schema"] is ScriptResult
    assert "AI ethics" in call["prompt"]


@pytest.mark.asyncio
async def test_fenced_json_is_accepted(settings, config):
    backend = FakeBackend(script=f"```json\n{SCRIPT_JSON}\n```")
    result = await ScriptGenerator(backend, settings).generate_script(config)
    assert result.title == "Ética de la IA"


@pytest.mark.asyncio
async def test_script_whitespace_is_normalized(settings, config):
    raw = json.dumps({"title": "  T  ", "script": "\n\nJoe: uno\n\n\n\nJane: dos\n"})
    result = await ScriptGenerator(FakeBackend(script=raw), settings).generate_script(config)

    assert result.title == "T"
    assert result.script == "Joe: uno\n\nJane: dos"


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "Lo siento, no puedo ayudar con eso.",
        json.dumps({"title": "Sin guion"}),
        json.dumps({"title": "Vacío", "script": "   "}),
        json.dumps({"title": "   ", "script": "Joe: hola"}),
        json.dumps(["Joe: hola"]),
    ],
)
@pytest.mark.asyncio
async def test_malformed_response(settings, config, raw):
    with pytest.raises(MalformedResponseError):
        await ScriptGenerator(FakeBackend(script=raw), settings).generate_script(config)


@pytest.mark.asyncio
async def test_backend_error_propagates(settings, config):
    backend = FakeBackend(script=BackendError("quota exceeded"))
    with pytest.raises(BackendError, match="quota"):
        await ScriptGenerator(backend, settings).generate_script(config)


@pytest.mark.asyncio
async def test_monologue_with_jane_is_logged(settings, config, caplog):
    raw = json.dumps({"title": "Solo", "script": "Joe: hola\nJane: ¿puedo hablar?"})
    config = config.model_copy(update={"podcast_format": "Monólogo Narrativo (Joe)"})

    with caplog.at_level(logging.WARNING):
        result = await ScriptGenerator(FakeBackend(script=raw), settings).generate_script(config)

    assert "Jane" in speaker_labels(result.script)
    assert "Monologue script contains Jane turns" in caplog.text


def test_extract_json_from_surrounding_text():
    assert extract_json_from_llm('Aquí está:\n{"title": "A", "script": "Joe: b"}\nFin') == {
        "title": "A",
        "script": "Joe: b",
    }


def test_speaker_labels():
    assert speaker_labels("Joe: hola\nJane: qué tal\n\n  Joe : bien\nsin etiqueta") == ["Joe", "Jane", "Joe"]


@pytest.mark.asyncio
async def test_blank_title_is_rejected(settings, config):
    raw = json.dumps({"title": "  \n ", "script": "Joe: hola\nJane: hola"})
    with pytest.raises(MalformedResponseError, match="empty title"):
        await ScriptGenerator(FakeBackend(script=raw), settings).generate_script(config)

from types import SimpleNamespace

import pytest

from podcast_studio.config import Settings
from podcast_studio.errors import AudioDecodeError, BackendError, NoAudioDataError
from podcast_studio.langgraph_pipeline.podcast.tts_service import TTSService, extract_inline_audio

from .conftest import PCM, SCRIPT, FakeBackend, speech_response


@pytest.mark.asyncio
async def test_generate_audio(settings, store, config):
    backend = FakeBackend()
    artifact = await TTSService(backend, settings, store=store).generate_audio(SCRIPT, config)

    wav = store.resolve(artifact.url)
    assert wav[:4] == b"RIFF"
    assert wav[44:] == PCM

    [call] = backend.calls_of("speech")
    assert call["text"] == SCRIPT
    assert call["model"] == settings.tts_model
    assert call["speaker_voices"] == {"Joe": "Kore", "Jane": "Puck"}


@pytest.mark.asyncio
async def test_voice_mapping_follows_config(settings, store, config):
    backend = FakeBackend()
    config = config.model_copy(update={"speaker1": "Charon", "speaker2": "Zephyr"})

    await TTSService(backend, settings, store=store).generate_audio(SCRIPT, config)

    assert backend.calls_of("speech")[0]["speaker_voices"] == {"Joe": "Charon", "Jane": "Zephyr"}


@pytest.mark.parametrize(
    "response",
    [
        SimpleNamespace(candidates=[]),
        SimpleNamespace(candidates=None),
        SimpleNamespace(candidates=[SimpleNamespace(content=None)]),
        SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[]))]),
        speech_response(None),
        speech_response(""),
    ],
)
@pytest.mark.asyncio
async def test_missing_audio(settings, store, config, response):
    service = TTSService(FakeBackend(speech=response), settings, store=store)

    with pytest.raises(NoAudioDataError, match="no audio data produced"):
        await service.generate_audio(SCRIPT, config)
    assert len(store) == 0


@pytest.mark.asyncio
async def test_raw_bytes_payload(settings, store, config):
    artifact = await TTSService(FakeBackend(speech=speech_response(PCM)), settings, store=store).generate_audio(
        SCRIPT, config
    )
    assert artifact.read()[44:] == PCM


@pytest.mark.asyncio
async def test_invalid_payload(settings, store, config):
    service = TTSService(FakeBackend(speech=speech_response("***")), settings, store=store)
    with pytest.raises(AudioDecodeError):
        await service.generate_audio(SCRIPT, config)


@pytest.mark.asyncio
async def test_odd_length_policy_from_settings(store, config):
    settings = Settings(api_key="test-key", odd_length_policy="truncate")
    service = TTSService(FakeBackend(speech=speech_response(b"\x01\x02\x03")), settings, store=store)

    artifact = await service.generate_audio(SCRIPT, config)

    assert artifact.read()[44:] == b"\x01\x02"


@pytest.mark.asyncio
async def test_backend_error_propagates(settings, store, config):
    service = TTSService(FakeBackend(speech=BackendError("429")), settings, store=store)
    with pytest.raises(BackendError):
        await service.generate_audio(SCRIPT, config)


def test_extract_inline_audio():
    assert extract_inline_audio(speech_response("AAAA")) == "AAAA"
    assert extract_inline_audio(object()) is None

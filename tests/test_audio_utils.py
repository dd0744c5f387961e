import base64
import struct

import pytest

from podcast_studio.errors import AudioDecodeError
from podcast_studio.utils.audio_utils import (
    WAV_HEADER_SIZE,
    align_pcm,
    base64_to_bytes,
    pcm_duration_seconds,
    pcm_to_wav,
    transcode,
)

HEADER_FORMAT = "<4sI4s4sIHHIIHH4sI"


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


@pytest.mark.parametrize("length", [0, 2, 480, 48000])
def test_wav_layout(length):
    pcm = bytes(i % 251 for i in range(length))
    wav = transcode(_b64(pcm))

    assert len(wav) == length + WAV_HEADER_SIZE
    (riff, chunk_size, wave, fmt, fmt_size, audio_format, channels, sample_rate,
     byte_rate, block_align, bits, data_marker, data_size) = struct.unpack(HEADER_FORMAT, wav[:44])

    assert riff == b"RIFF"
    assert chunk_size == 36 + length
    assert wave == b"WAVE"
    assert fmt == b"fmt "
    assert fmt_size == 16
    assert audio_format == 1
    assert channels == 1
    assert sample_rate == 24000
    assert byte_rate == 24000 * 1 * 2
    assert block_align == 2
    assert bits == 16
    assert data_marker == b"data"
    assert data_size == length
    assert wav[44:] == pcm


def test_transcode_is_deterministic():
    payload = _b64(b"\x01\x02" * 1000)
    assert transcode(payload) == transcode(payload)


def test_invalid_base64_raises():
    with pytest.raises(AudioDecodeError):
        transcode("this is *not* base64!")


def test_decode_error_is_value_error():
    with pytest.raises(ValueError):
        base64_to_bytes("@@@@")


def test_missing_padding_is_restored():
    assert base64_to_bytes("AAE") == b"\x00\x01"


def test_bytes_payload_passes_through():
    assert base64_to_bytes(b"\x00\x01\x02\x03") == b"\x00\x01\x02\x03"
    assert transcode(b"\x00\x01")[44:] == b"\x00\x01"


def test_odd_length_errors_by_default():
    with pytest.raises(AudioDecodeError, match="odd length"):
        transcode(_b64(b"\x01\x02\x03"))


def test_odd_length_truncate():
    wav = transcode(_b64(b"\x01\x02\x03"), odd_length_policy="truncate")
    assert wav[44:] == b"\x01\x02"
    assert struct.unpack("<I", wav[40:44])[0] == 2


def test_odd_length_pad():
    wav = transcode(_b64(b"\x01\x02\x03"), odd_length_policy="pad")
    assert wav[44:] == b"\x01\x02\x03\x00"


def test_unknown_policy_rejected():
    with pytest.raises(ValueError, match="policy"):
        align_pcm(b"\x00\x00", "drop")


def test_pcm_to_wav_custom_rate():
    wav = pcm_to_wav(b"\x00" * 4, sample_rate=16000)
    assert struct.unpack("<I", wav[24:28])[0] == 16000
    assert struct.unpack("<I", wav[28:32])[0] == 32000


def test_duration():
    assert pcm_duration_seconds(48000) == 1.0

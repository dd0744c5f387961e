# podcast_studio/utils/audio_utils.py
"""
Raw TTS audio -> WAV.

The speech backend returns headerless little-endian 16-bit mono PCM at
24 kHz, base64-encoded. ``transcode`` turns that into a playable WAV byte
stream: a 44-byte RIFF header followed by the untouched PCM payload.
"""

import base64
import binascii
import logging
import struct

from ..errors import AudioDecodeError

logger = logging.getLogger(__name__)

SAMPLE_RATE = 24000
NUM_CHANNELS = 1
BITS_PER_SAMPLE = 16
WAV_HEADER_SIZE = 44

ODD_LENGTH_POLICIES = ("error", "truncate", "pad")


def base64_to_bytes(base64_string: str | bytes) -> bytes:
    """Decode a base64 payload. Bytes are assumed to be decoded already."""
    if isinstance(base64_string, (bytes, bytearray)):
        return bytes(base64_string)

    data = base64_string.strip()
    missing_padding = len(data) % 4
    if missing_padding:
        data += "=" * (4 - missing_padding)

    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise AudioDecodeError(f"Invalid base64 audio payload: {e}") from e


def pcm_to_wav(
    pcm_data: bytes,
    sample_rate: int = SAMPLE_RATE,
    num_channels: int = NUM_CHANNELS,
    bits_per_sample: int = BITS_PER_SAMPLE,
) -> bytes:
    """Prefix 16-bit signed PCM with a canonical 44-byte WAV header."""
    byte_rate = sample_rate * num_channels * bits_per_sample // 8
    block_align = num_channels * bits_per_sample // 8
    subchunk2_size = len(pcm_data)
    chunk_size = 36 + subchunk2_size

    wav_header = b"RIFF"
    wav_header += struct.pack("<I", chunk_size)
    wav_header += b"WAVE"
    wav_header += b"fmt "
    wav_header += struct.pack("<I", 16)
    wav_header += struct.pack("<H", 1)
    wav_header += struct.pack("<H", num_channels)
    wav_header += struct.pack("<I", sample_rate)
    wav_header += struct.pack("<I", byte_rate)
    wav_header += struct.pack("<H", block_align)
    wav_header += struct.pack("<H", bits_per_sample)
    wav_header += b"data"
    wav_header += struct.pack("<I", subchunk2_size)

    return wav_header + pcm_data


def align_pcm(pcm_data: bytes, policy: str = "error") -> bytes:
    """Make the payload a whole number of 16-bit samples."""
    if policy not in ODD_LENGTH_POLICIES:
        raise ValueError(f"Unknown odd-length policy: {policy}")
    if len(pcm_data) % 2 == 0:
        return pcm_data

    if policy == "truncate":
        logger.warning(f"Odd PCM length ({len(pcm_data)} bytes); dropping final byte")
        return pcm_data[:-1]
    if policy == "pad":
        logger.warning(f"Odd PCM length ({len(pcm_data)} bytes); padding one zero byte")
        return pcm_data + b"\x00"
    raise AudioDecodeError(
        f"PCM payload has odd length ({len(pcm_data)} bytes); expected 16-bit samples"
    )


def transcode(payload: str | bytes, odd_length_policy: str = "error") -> bytes:
    """base64 PCM payload -> complete WAV bytes. Pure; same input, same output."""
    pcm = align_pcm(base64_to_bytes(payload), odd_length_policy)
    return pcm_to_wav(pcm)


def pcm_duration_seconds(pcm_length: int, sample_rate: int = SAMPLE_RATE) -> float:
    return pcm_length / (sample_rate * NUM_CHANNELS * BITS_PER_SAMPLE // 8)

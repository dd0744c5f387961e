# podcast_studio/utils/audio_store.py
"""
Session-scoped handles for generated audio.

Each transcoded WAV is registered under a fresh ``blob:`` URL. Handles live
until ``revoke`` or process exit; nothing is written to disk unless the
caller asks for it with ``save_audio``.
"""

import os
import re
import uuid
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .audio_utils import WAV_HEADER_SIZE, pcm_duration_seconds, transcode

logger = logging.getLogger(__name__)

URL_PREFIX = "blob:podcast-studio/"
WAV_MIME_TYPE = "audio/wav"
DEFAULT_FILENAME_STEM = "podcast"


class AudioStore:
    """In-process registry of URL -> WAV bytes."""

    def __init__(self):
        self._blobs: Dict[str, bytes] = {}
        self._lock = threading.Lock()

    def register(self, data: bytes) -> str:
        url = f"{URL_PREFIX}{uuid.uuid4()}"
        with self._lock:
            self._blobs[url] = data
        return url

    def resolve(self, url: str) -> bytes:
        with self._lock:
            try:
                return self._blobs[url]
            except KeyError:
                raise KeyError(f"Unknown or revoked audio URL: {url}") from None

    def revoke(self, url: str) -> bool:
        with self._lock:
            return self._blobs.pop(url, None) is not None

    def __contains__(self, url: str) -> bool:
        with self._lock:
            return url in self._blobs

    def __len__(self) -> int:
        with self._lock:
            return len(self._blobs)


default_store = AudioStore()


@dataclass(frozen=True)
class AudioArtifact:
    url: str
    size: int
    mime_type: str = WAV_MIME_TYPE
    store: AudioStore = field(default=default_store, repr=False, compare=False)

    @property
    def duration_seconds(self) -> float:
        return pcm_duration_seconds(self.size - WAV_HEADER_SIZE)

    def read(self) -> bytes:
        return self.store.resolve(self.url)

    def revoke(self) -> bool:
        return self.store.revoke(self.url)


def create_audio_url(
    payload: str | bytes,
    store: Optional[AudioStore] = None,
    odd_length_policy: str = "error",
) -> AudioArtifact:
    """Transcode a TTS payload and register it under a new URL."""
    store = store if store is not None else default_store
    wav_bytes = transcode(payload, odd_length_policy=odd_length_policy)
    url = store.register(wav_bytes)
    logger.info(f"Audio registered: {url} ({len(wav_bytes)} bytes)")
    return AudioArtifact(url=url, size=len(wav_bytes), store=store)


def filename_stem(title: str) -> str:
    """Whitespace runs and path separators become ``_``; blank titles fall back to ``podcast``."""
    separators = {"/", "\\", os.sep} | ({os.altsep} if os.altsep else set())
    stem = re.sub(r"\s+", "_", title.strip())
    for sep in separators:
        stem = stem.replace(sep, "_")
    if not stem.strip("._"):
        return DEFAULT_FILENAME_STEM
    return stem


def download_filename(title: str) -> str:
    return f"{filename_stem(title)}.wav"


def save_audio(
    audio_url: str,
    title: str,
    output_dir: str | Path,
    store: Optional[AudioStore] = None,
) -> Path:
    """Write the WAV behind ``audio_url`` to ``output_dir/<Title_With_Underscores>.wav``."""
    store = store if store is not None else default_store
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / download_filename(title)
    output_file.write_bytes(store.resolve(audio_url))
    logger.info(f"Audio saved: {output_file}")
    return output_file

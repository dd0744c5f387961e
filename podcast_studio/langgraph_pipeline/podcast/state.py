# podcast_studio/langgraph_pipeline/podcast/state.py

from dataclasses import dataclass
from operator import add
from typing import List, TypedDict

from typing_extensions import Annotated

from ...models import GenerationConfig
from ...utils.audio_store import AudioArtifact


@dataclass
class StageFailure:
    """A fatal stage error, kept with the stage that raised it."""
    stage: str
    error: BaseException


class PodcastState(TypedDict, total=False):
    """State of the podcast generation workflow"""

    # 1. input
    config: GenerationConfig
    cover_art_enabled: bool

    # 2. stage outputs
    title: str
    script: str
    audio: AudioArtifact
    cover_art_options: List[str]
    cover_art_url: str

    # 3. outcome
    failures: Annotated[List[StageFailure], add]   # fatal, aborts the run
    degraded: Annotated[List[str], add]            # stages that fell back
    current_step: str

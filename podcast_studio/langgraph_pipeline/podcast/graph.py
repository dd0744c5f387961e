# podcast_studio/langgraph_pipeline/podcast/graph.py

import logging
from typing import Optional

from langgraph.graph import END, START, StateGraph

from ...config import Settings
from ...errors import AudioDecodeError, PodcastGenerationError
from ...models import GenerationConfig, PodcastResult
from ...services.backend import GenerativeBackend
from ...services.imagen_service import ImagenService, choose_cover_art, placeholder_cover_url
from ...utils.audio_store import AudioStore
from .script_generator import ScriptGenerator
from .state import PodcastState, StageFailure
from .tts_service import TTSService

logger = logging.getLogger(__name__)

SCRIPT_STAGE = "generate_script"
AUDIO_STAGE = "generate_audio"
COVER_ART_STAGE = "generate_cover_art"
ASSEMBLE_STAGE = "assemble"


def _route_on_failure(state: PodcastState) -> str:
    return "error" if state.get("failures") else "continue"


class PodcastWorkflow:
    """
    Graph nodes. Script and audio are fatal stages: a failure is recorded
    and the run ends. Cover art degrades to placeholders and never fails.
    """

    def __init__(
        self,
        backend: GenerativeBackend,
        settings: Optional[Settings] = None,
        store: Optional[AudioStore] = None,
    ):
        self.settings = settings or Settings()
        self.script_generator = ScriptGenerator(backend, self.settings)
        self.tts = TTSService(backend, self.settings, store=store)
        self.imagen = ImagenService(backend, self.settings)

    async def generate_script_node(self, state: PodcastState) -> dict:
        """Node 1: title + script"""
        logger.info("Generating script...")
        try:
            result = await self.script_generator.generate_script(state["config"])
        except Exception as e:
            logger.error(f"Script stage failed: {e}")
            return {"failures": [StageFailure(SCRIPT_STAGE, e)], "current_step": "error"}

        return {"title": result.title, "script": result.script, "current_step": "script_complete"}

    async def generate_audio_node(self, state: PodcastState) -> dict:
        """Node 2: TTS -> WAV artifact"""
        logger.info("Generating audio...")
        try:
            artifact = await self.tts.generate_audio(state["script"], state["config"])
        except Exception as e:
            logger.error(f"Audio stage failed: {e}")
            return {"failures": [StageFailure(AUDIO_STAGE, e)], "current_step": "error"}

        return {"audio": artifact, "current_step": "audio_complete"}

    async def generate_cover_art_node(self, state: PodcastState) -> dict:
        """Node 3: cover art options (skipped when the caller already picked one)"""
        config = state["config"]
        if config.cover_art_url or not state.get("cover_art_enabled", True):
            logger.info("Cover art generation skipped")
            return {"cover_art_options": []}

        art = await self.imagen.generate_cover_art_set(config.theme, config.cover_art_text)
        update = {"cover_art_options": art.images}
        if art.is_fallback:
            update["degraded"] = [COVER_ART_STAGE]
        return update

    async def assemble_node(self, state: PodcastState) -> dict:
        """Node 4: pick the cover and finish"""
        if state.get("failures"):
            return {}

        config = state["config"]
        cover_art_url = (
            config.cover_art_url
            or choose_cover_art(state.get("cover_art_options") or [])
            or placeholder_cover_url(config.cover_art_text, self.settings.placeholder_cover_base)
        )
        return {"cover_art_url": cover_art_url, "current_step": "complete"}


def create_podcast_graph(
    backend: GenerativeBackend,
    settings: Optional[Settings] = None,
    store: Optional[AudioStore] = None,
    parallel_cover_art: Optional[bool] = None,
):
    """LangGraph workflow: script -> audio, with cover art alongside or after."""
    settings = settings or Settings()
    if parallel_cover_art is None:
        parallel_cover_art = settings.parallel_cover_art

    nodes = PodcastWorkflow(backend, settings, store)
    workflow = StateGraph(PodcastState)

    workflow.add_node(SCRIPT_STAGE, nodes.generate_script_node)
    workflow.add_node(AUDIO_STAGE, nodes.generate_audio_node)
    workflow.add_node(COVER_ART_STAGE, nodes.generate_cover_art_node)
    workflow.add_node(ASSEMBLE_STAGE, nodes.assemble_node)

    workflow.add_edge(START, SCRIPT_STAGE)
    workflow.add_conditional_edges(
        SCRIPT_STAGE, _route_on_failure, {"continue": AUDIO_STAGE, "error": END}
    )

    if parallel_cover_art:
        # cover art has no data dependency on script/audio
        workflow.add_edge(START, COVER_ART_STAGE)
        workflow.add_edge([AUDIO_STAGE, COVER_ART_STAGE], ASSEMBLE_STAGE)
    else:
        workflow.add_conditional_edges(
            AUDIO_STAGE, _route_on_failure, {"continue": COVER_ART_STAGE, "error": END}
        )
        workflow.add_edge(COVER_ART_STAGE, ASSEMBLE_STAGE)

    workflow.add_edge(ASSEMBLE_STAGE, END)
    return workflow.compile()


async def run_podcast_generation(
    config: GenerationConfig,
    backend: Optional[GenerativeBackend] = None,
    settings: Optional[Settings] = None,
    store: Optional[AudioStore] = None,
    generate_cover_art: bool = True,
    parallel_cover_art: Optional[bool] = None,
) -> PodcastResult:
    """
    Run the full pipeline and return the assembled podcast.

    Raises PodcastGenerationError (``stage`` + original ``cause``) when the
    script or audio stage fails. AudioDecodeError from the transcoder is
    re-raised as is. No partial result is returned.
    """
    settings = settings or Settings.from_env()
    if backend is None:
        from ...services.gemini_backend import GeminiBackend
        backend = GeminiBackend.from_settings(settings)

    logger.info(f"Podcast generation start - theme: {config.theme!r}, format: {config.podcast_format}")

    app = create_podcast_graph(backend, settings, store, parallel_cover_art)
    initial_state: PodcastState = {
        "config": config,
        "cover_art_enabled": generate_cover_art,
        "failures": [],
        "degraded": [],
        "current_step": "start",
    }
    final_state = await app.ainvoke(initial_state)

    failures = final_state.get("failures") or []
    if failures:
        failure = failures[0]
        logger.error(f"Podcast generation failed at {failure.stage}: {failure.error}")
        if isinstance(failure.error, AudioDecodeError):
            raise failure.error
        raise PodcastGenerationError(failure.stage, failure.error) from failure.error

    if final_state.get("degraded"):
        logger.warning(f"Degraded stages: {final_state['degraded']}")

    return PodcastResult(
        title=final_state["title"],
        script=final_state["script"],
        audio_url=final_state["audio"].url,
        cover_art_url=final_state["cover_art_url"],
        cover_art_options=final_state.get("cover_art_options", []),
        degraded_stages=final_state.get("degraded", []),
    )

# podcast_studio/langgraph_pipeline/podcast/__init__.py

from .graph import run_podcast_generation, create_podcast_graph, PodcastWorkflow
from .state import PodcastState, StageFailure

from .prompt_service import PromptTemplateService
from .script_generator import ScriptGenerator, speaker_labels
from .suggestion_generator import SuggestionGenerator
from .tts_service import TTSService

__all__ = [
    'run_podcast_generation',
    'create_podcast_graph',
    'PodcastWorkflow',
    'PodcastState',
    'StageFailure',
    'PromptTemplateService',
    'ScriptGenerator',
    'speaker_labels',
    'SuggestionGenerator',
    'TTSService',
]

# podcast_studio/langgraph_pipeline/podcast/suggestion_generator.py
import logging
from typing import Optional

from ...config import Settings
from ...models import Suggestions
from ...services.backend import GenerativeBackend
from .prompt_service import PromptTemplateService
from .script_generator import extract_json_from_llm

logger = logging.getLogger(__name__)


class SuggestionGenerator:
    """Ideas, key aspects and tones for a theme. Never raises."""

    def __init__(self, backend: GenerativeBackend, settings: Optional[Settings] = None):
        self.backend = backend
        self.settings = settings or Settings()

    async def generate_suggestions(self, theme: str, podcast_format: str) -> Suggestions:
        prompt = PromptTemplateService.suggestion_prompt(theme, podcast_format)
        logger.info(f"Requesting suggestions for '{theme}' ({podcast_format})")

        try:
            raw_text = await self.backend.generate_text(
                prompt, model=self.settings.suggestion_model, schema=Suggestions
            )
            suggestions = Suggestions.model_validate(extract_json_from_llm(raw_text))
        except Exception as e:
            logger.error(f"Suggestion generation failed, continuing without suggestions: {e}")
            return Suggestions()

        logger.info(
            f"Suggestions ready: {len(suggestions.suggestions)} ideas, "
            f"{len(suggestions.aspects)} aspects, {len(suggestions.tones)} tones"
        )
        return suggestions

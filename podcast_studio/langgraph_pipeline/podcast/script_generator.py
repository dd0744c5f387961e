# podcast_studio/langgraph_pipeline/podcast/script_generator.py

import json
import re
import logging
from typing import List, Optional

from pydantic import ValidationError

from ...config import Settings
from ...errors import MalformedResponseError
from ...models import CO_HOST_SPEAKER, GenerationConfig, PodcastFormat, ScriptResult
from ...services.backend import GenerativeBackend
from .prompt_service import PromptTemplateService

logger = logging.getLogger(__name__)

SPEAKER_LABEL_RE = re.compile(r"^[ \t]*(\w{1,30})[ \t]*:", re.MULTILINE)


def extract_json_from_llm(text: str) -> dict:
    """
    Pull the JSON object out of an LLM reply.
    - strips ```json fences
    - falls back to the outermost {...} block
    """
    cleaned = re.sub(r"```json|```", "", text, flags=re.IGNORECASE).strip()

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        match = re.search(r"\{.*\}", cleaned, re.DOTALL)
        if not match:
            raise MalformedResponseError("No JSON object found in model output")
        try:
            data = json.loads(match.group())
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"Model output is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponseError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def speaker_labels(script: str) -> List[str]:
    """Speaker prefixes (``Joe`` in ``Joe: hola``) in line order."""
    return [m.group(1).strip() for m in SPEAKER_LABEL_RE.finditer(script)]


class ScriptGenerator:
    """Script stage: one structured request returning a title and a script."""

    def __init__(self, backend: GenerativeBackend, settings: Optional[Settings] = None):
        self.backend = backend
        self.settings = settings or Settings()

    async def generate_script(self, config: GenerationConfig) -> ScriptResult:
        model_name = self.settings.script_model
        logger.info(f"Script model: {model_name} / format: {config.podcast_format} / duration: {config.duration}")

        prompt = PromptTemplateService.script_prompt(config)
        raw_text = await self.backend.generate_text(prompt, model=model_name, schema=ScriptResult)

        if not raw_text or not raw_text.strip():
            raise MalformedResponseError("Model returned an empty script response")

        data = extract_json_from_llm(raw_text)
        try:
            result = ScriptResult.model_validate(data)
        except ValidationError as e:
            logger.error(f"Script response missing fields. Preview:\n{raw_text[:500]}")
            raise MalformedResponseError(f"Script response missing title/script: {e}") from e

        result = ScriptResult(title=result.title.strip(), script=self._clean_script(result.script))
        if not result.title:
            raise MalformedResponseError("Model returned an empty title")
        if not result.script:
            raise MalformedResponseError("Model returned an empty script")

        self._check_format(result.script, config.podcast_format)
        logger.info(f"Title: {result.title}")
        logger.info(f"Script length: {len(result.script)} chars")
        return result

    def _clean_script(self, script_text: str) -> str:
        script_text = re.sub(r"```[a-z]*|```", "", script_text, flags=re.IGNORECASE)
        script_text = re.sub(r"\n{3,}", "\n\n", script_text)
        return script_text.strip()

    def _check_format(self, script: str, podcast_format: str) -> None:
        """Format rules are prompt-level only; deviations are logged, not rejected."""
        labels = speaker_labels(script)
        if not labels:
            logger.warning("Script does not start with a speaker label")
            return
        fmt = PromptTemplateService.resolve_format(podcast_format)
        if fmt is PodcastFormat.MONOLOGUE and CO_HOST_SPEAKER in labels:
            logger.warning(f"Monologue script contains {CO_HOST_SPEAKER} turns")

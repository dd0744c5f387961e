# podcast_studio/langgraph_pipeline/podcast/prompt_service.py
import logging
from typing import Dict

from ...models import CO_HOST_SPEAKER, HOST_SPEAKER, SPEAKERS, GenerationConfig, PodcastFormat

logger = logging.getLogger(__name__)

FORMAT_INSTRUCTIONS: Dict[PodcastFormat, str] = {
    PodcastFormat.DYNAMIC: (
        f"El guion debe ser una conversación natural y fluida entre {' y '.join(SPEAKERS)}."
    ),
    PodcastFormat.INTERVIEW: (
        f"El guion debe ser una entrevista donde {CO_HOST_SPEAKER} es la entrevistadora y "
        f"{HOST_SPEAKER} es el experto invitado. {CO_HOST_SPEAKER} debe hacer preguntas "
        f"perspicaces y {HOST_SPEAKER} debe proporcionar respuestas detalladas."
    ),
    PodcastFormat.MONOLOGUE: (
        f"El guion debe ser un monólogo narrativo entregado en su totalidad por {HOST_SPEAKER}. "
        f"{CO_HOST_SPEAKER} no debe hablar en absoluto. "
        f'Todas las líneas deben comenzar con "{HOST_SPEAKER}:".'
    ),
    PodcastFormat.DEBATE: (
        f"El guion debe ser un debate estructurado entre {HOST_SPEAKER} y {CO_HOST_SPEAKER}. "
        f"Deben presentar argumentos claros, contraargumentos y llegar a una conclusión "
        f"o resumir sus puntos de vista."
    ),
}


class PromptTemplateService:
    """Prompt templates for the script and suggestion stages."""

    @staticmethod
    def resolve_format(podcast_format: str) -> PodcastFormat:
        """Unknown formats fall back to a dynamic conversation."""
        try:
            return PodcastFormat.parse(podcast_format)
        except ValueError:
            logger.warning(f"Unknown podcast format '{podcast_format}', using {PodcastFormat.DYNAMIC.value}")
            return PodcastFormat.DYNAMIC

    @classmethod
    def format_instruction(cls, podcast_format: str) -> str:
        return FORMAT_INSTRUCTIONS[cls.resolve_format(podcast_format)]

    @classmethod
    def script_prompt(cls, config: GenerationConfig) -> str:
        speakers = " y ".join(SPEAKERS)
        user_idea = f"- Idea Específica del Usuario: {config.user_idea}\n" if config.user_idea.strip() else ""

        return (
            "Eres un guionista y productor de podcasts de clase mundial. Crea el contenido para un "
            "episodio de podcast basado en la siguiente configuración. La respuesta debe ser un JSON.\n"
            "\n"
            "Configuración:\n"
            f"- Título de la Serie: {config.series_title}\n"
            f"- Tema del Episodio: {config.theme}\n"
            f"- Formato del Episodio: {config.podcast_format}. {cls.format_instruction(config.podcast_format)}\n"
            f"- Duración: {config.duration}\n"
            f"- Público Objetivo: {config.audience}\n"
            f"- Aspectos Clave a Cubrir: {', '.join(config.aspects)}\n"
            f"- Tono General: {', '.join(config.tones)}\n"
            f"- Ideas Adicionales a Incorporar: {', '.join(config.ai_suggestions)}\n"
            f"{user_idea}"
            f"- Presentadores: {speakers}.\n"
            "\n"
            "Instrucciones:\n"
            '1. Escribe un título atractivo y conciso para el episodio en un campo llamado "title".\n'
            '2. Escribe un guion completo en un campo llamado "script", siguiendo las directrices del formato del episodio.\n'
            f'3. El guion DEBE comenzar con el nombre de uno de los presentadores seguido de dos puntos (ej: "{HOST_SPEAKER}:").\n'
            '4. No incluyas texto introductorio como "Aquí está el guion:". Simplemente el diálogo.\n'
            "5. Incorpora los aspectos, tono e ideas de forma orgánica en la conversación.\n"
            "6. Ajusta la longitud del guion a la duración especificada.\n"
            "7. El guion debe centrarse exclusivamente en el diálogo. No incluyas anotaciones de producción, "
            "efectos de sonido o texto entre paréntesis, ya que serán leídos en voz alta.\n"
        )

    @staticmethod
    def suggestion_prompt(theme: str, podcast_format: str) -> str:
        return (
            "Eres un productor de podcasts experto y creativo. "
            f'Para un podcast sobre el tema "{theme}" con el formato de "{podcast_format}", '
            "genera ideas para mejorarlo. Proporciona la respuesta en formato JSON.\n"
            "\n"
            "Necesito exactamente:\n"
            '1. Un array llamado "suggestions" con 12 ideas de contenido breves y atractivas '
            '(ej: "Explorar el impacto en la cultura pop", "Entrevistar a un pionero del campo").\n'
            '2. Un array llamado "aspects" con 4 "aspectos clave" únicos y relevantes para el tema '
            '(ej: "Debate Ético", "Innovación Tecnológica").\n'
            '3. Un array llamado "tones" con 4 "tonos" específicos que encajarían bien con el tema '
            '(ej: "Conspirativo", "Optimista", "Nostálgico").'
        )

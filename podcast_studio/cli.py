# podcast_studio/cli.py
import sys
import json
import asyncio
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from .config import Settings, configure_logging
from .errors import AudioDecodeError, ConfigError, PodcastGenerationError
from .models import DURATIONS, VOICES, GenerationConfig, PodcastFormat, apply_suggestions
from .services.backend import GenerativeBackend
from .services.imagen_service import ImagenService, decode_data_url
from .langgraph_pipeline.podcast import SuggestionGenerator, run_podcast_generation
from .utils.audio_store import default_store, filename_stem, save_audio
from .utils.vertex_env_patch import patch_vertex_ai_env

logger = logging.getLogger(__name__)

FORMAT_CHOICES = [fmt.slug for fmt in PodcastFormat]
GENERATION_FAILED_MESSAGE = "There was an error generating the podcast. Please try again."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="podcast-studio", description="AI podcast generator")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("voices", help="List available voices")

    suggest = sub.add_parser("suggest", help="Ideas, key aspects and tones for a theme")
    suggest.add_argument("--theme", required=True)
    suggest.add_argument("--format", choices=FORMAT_CHOICES, default="dynamic-conversation")

    cover = sub.add_parser("cover-art", help="Generate cover art options")
    cover.add_argument("--theme", required=True)
    cover.add_argument("--series-title", default="")
    cover.add_argument("--output-dir", default=None)

    gen = sub.add_parser("generate", help="Generate a full podcast episode")
    gen.add_argument("--theme", required=True)
    gen.add_argument("--series-title", default="")
    gen.add_argument("--format", choices=FORMAT_CHOICES, default="dynamic-conversation")
    gen.add_argument("--duration", choices=DURATIONS, default="5 minutos")
    gen.add_argument("--audience", default="Público general")
    gen.add_argument("--speaker1", choices=sorted(VOICES), default="Kore", help="Voice for Joe")
    gen.add_argument("--speaker2", choices=sorted(VOICES), default="Puck", help="Voice for Jane")
    gen.add_argument("--aspect", action="append", default=[], dest="aspects")
    gen.add_argument("--tone", action="append", default=[], dest="tones")
    gen.add_argument("--idea", action="append", default=[], dest="ideas", help="Extra idea to work in")
    gen.add_argument("--user-idea", default="")
    gen.add_argument("--cover-art", default=None, help="Use this cover image reference")
    gen.add_argument("--no-cover-art", action="store_true", help="Skip cover art generation")
    gen.add_argument("--auto-suggest", action="store_true", help="Seed aspects/tones from suggestions")
    gen.add_argument("--output-dir", default=None)
    return parser


def _create_backend(settings: Settings) -> GenerativeBackend:
    from .services.gemini_backend import GeminiBackend
    return GeminiBackend.from_settings(settings)


def _write_cover(cover_url: str, output_dir: Path, stem: str) -> Optional[Path]:
    image = decode_data_url(cover_url)
    if image is None:
        return None
    path = output_dir / f"{stem}_cover.jpg"
    path.write_bytes(image)
    return path


async def _suggest(args, settings: Settings, backend: GenerativeBackend) -> int:
    fmt = PodcastFormat.parse(args.format)
    suggestions = await SuggestionGenerator(backend, settings).generate_suggestions(args.theme, fmt.value)
    print(json.dumps(suggestions.model_dump(), ensure_ascii=False, indent=2))
    return 0


async def _cover_art(args, settings: Settings, backend: GenerativeBackend) -> int:
    series_title = args.series_title or args.theme
    art = await ImagenService(backend, settings).generate_cover_art_set(args.theme, series_title)
    output_dir = Path(args.output_dir or settings.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    stem = filename_stem(series_title)
    for i, url in enumerate(art.images, 1):
        path = _write_cover(url, output_dir, f"{stem}_{i}")
        print(path or url)
    return 0


async def _generate(args, settings: Settings, backend: GenerativeBackend) -> int:
    config = GenerationConfig(
        theme=args.theme,
        series_title=args.series_title,
        speaker1=args.speaker1,
        speaker2=args.speaker2,
        duration=args.duration,
        aspects=args.aspects,
        tones=args.tones,
        audience=args.audience,
        ai_suggestions=args.ideas,
        cover_art_url=args.cover_art,
        user_idea=args.user_idea,
        podcast_format=PodcastFormat.parse(args.format).value,
    )

    if args.auto_suggest:
        config.ensure_theme()
        suggestions = await SuggestionGenerator(backend, settings).generate_suggestions(
            config.theme, config.podcast_format
        )
        seeded = apply_suggestions(config, suggestions)
        config = seeded.model_copy(
            update={
                "aspects": config.aspects or seeded.aspects,
                "tones": config.tones or seeded.tones,
            }
        )

    config.ensure_ready()

    result = await run_podcast_generation(
        config,
        backend=backend,
        settings=settings,
        store=default_store,
        generate_cover_art=not args.no_cover_art,
    )

    output_dir = Path(args.output_dir or settings.output_dir)
    wav_path = save_audio(result.audio_url, result.title, output_dir, store=default_store)
    stem = wav_path.stem
    cover_path = _write_cover(result.cover_art_url, output_dir, stem)

    sidecar = output_dir / f"{stem}.json"
    sidecar.write_text(
        json.dumps(
            {
                "title": result.title,
                "script": result.script,
                "audio_file": wav_path.name,
                "cover_art": cover_path.name if cover_path else result.cover_art_url,
                "degraded_stages": result.degraded_stages,
            },
            ensure_ascii=False,
            indent=2,
        ),
        encoding="utf-8",
    )

    print(f"Title: {result.title}")
    print(f"Audio: {wav_path}")
    print(f"Script: {sidecar}")
    return 0


COMMANDS = {
    "suggest": _suggest,
    "cover-art": _cover_art,
    "generate": _generate,
}


def main(argv: Optional[List[str]] = None, backend: Optional[GenerativeBackend] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "voices":
        for voice_id, name in VOICES.items():
            print(f"{voice_id}\t{name}")
        return 0

    patch_vertex_ai_env()

    try:
        settings = Settings.from_env()
        configure_logging(args.log_level or settings.log_level)
        backend = backend or _create_backend(settings)
        return asyncio.run(COMMANDS[args.command](args, settings, backend))
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except PodcastGenerationError as e:
        logger.error(f"{e.stage} failed", exc_info=e.cause)
        print(GENERATION_FAILED_MESSAGE, file=sys.stderr)
        return 1
    except AudioDecodeError as e:
        logger.error("Audio payload could not be decoded", exc_info=e)
        print(GENERATION_FAILED_MESSAGE, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

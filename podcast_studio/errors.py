# podcast_studio/errors.py


class PodcastStudioError(Exception):
    """Base class for every error raised by podcast_studio."""


class ConfigError(PodcastStudioError):
    """Missing or inconsistent settings / generation config."""


class BackendError(PodcastStudioError):
    """Network, auth or quota failure reported by a generation backend."""


class MalformedResponseError(PodcastStudioError):
    """The backend answered, but without the fields we asked for."""


class NoAudioDataError(MalformedResponseError):
    def __init__(self, message: str = "no audio data produced"):
        super().__init__(message)


class AudioDecodeError(PodcastStudioError, ValueError):
    """Inline audio payload is not valid base64 / 16-bit PCM."""


class PodcastGenerationError(PodcastStudioError):
    """A fatal pipeline stage failed. ``cause`` is the original exception."""

    def __init__(self, stage: str, cause: BaseException):
        self.stage = stage
        self.cause = cause
        super().__init__(f"{stage} failed: {cause}")

from .text import TextGenerationClient, CallLog
from .image import ImageGenerationClient, GeminiImageBackend, ProxyImageBackend
from .parsing import (
    CHARACTER_DB_SEPARATOR,
    EpisodeResponseParser,
    parse_panel_batch,
    split_episode_script,
    strip_code_fence,
)

__all__ = [
    "TextGenerationClient",
    "CallLog",
    "ImageGenerationClient",
    "GeminiImageBackend",
    "ProxyImageBackend",
    "CHARACTER_DB_SEPARATOR",
    "EpisodeResponseParser",
    "parse_panel_batch",
    "split_episode_script",
    "strip_code_fence",
]

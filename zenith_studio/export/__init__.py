from .exporter import (
    comic_to_markdown,
    episode_to_markdown,
    dump_json,
    load_json,
    export_filename,
    export_work,
)

__all__ = [
    "comic_to_markdown",
    "episode_to_markdown",
    "dump_json",
    "load_json",
    "export_filename",
    "export_work",
]

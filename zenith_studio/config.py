import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field


class GeminiConfig(BaseModel):
    api_key: str = Field(default="")
    text_model: str = Field(default="gemini-2.5-pro")
    panel_model: str = Field(default="gemini-2.5-flash")
    temperature: Optional[float] = Field(default=None, ge=0, le=2)


class ImageConfig(BaseModel):
    backend: Literal["gemini", "proxy"] = Field(default="gemini")
    model: str = Field(default="gemini-2.5-flash-image-preview")
    proxy_url: str = Field(
        default="https://api-inference.huggingface.co/models/stabilityai/stable-diffusion-xl-base-1.0"
    )
    proxy_token: str = Field(default="")
    timeout: float = Field(default=120.0, gt=0)


class StorageConfig(BaseModel):
    data_dir: Path = Field(default=Path("data"))
    comics_key: str = Field(default="zenith_comics", min_length=1)
    episodes_key: str = Field(default="zenith_episodes", min_length=1)
    drafts_key: str = Field(default="zenith_drafts", min_length=1)


class EpisodeConfig(BaseModel):
    # "previous" restores the phase held before the failed attempt.
    failure_phase: Literal["arc_proposal_review", "previous"] = Field(
        default="arc_proposal_review"
    )


class UIConfig(BaseModel):
    dark_mode: bool = Field(default=False)


class Config(BaseModel):
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    image: ImageConfig = Field(default_factory=ImageConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    episodes: EpisodeConfig = Field(default_factory=EpisodeConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    log_level: str = Field(default="INFO")
    log_file: Optional[Path] = Field(default=None)

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, path: Path):
        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)

    def with_env_credentials(self) -> "Config":
        """Fill empty credentials from the environment."""
        config = self.model_copy(deep=True)
        if not config.gemini.api_key:
            config.gemini.api_key = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY", "")
        if not config.image.proxy_token:
            config.image.proxy_token = os.environ.get("HUGGINGFACE_TOKEN", "")
        return config

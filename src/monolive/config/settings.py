"""Configuration management for monolive.

Loads settings from an optional YAML configuration file. Command-line
flags are applied on top by the CLI. Environment variables are not
consulted: the only settings source is the data passed in.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from monolive.domain.models import BackendKind

logger = logging.getLogger(__name__)

DEFAULT_TRAJECTORY_PATH = "KeyFrameTrajectory.txt"


class CaptureConfig(BaseModel):
    backend: BackendKind = Field(default=BackendKind.DEVICE_INDEX)
    device_index: int = Field(default=0, ge=0, description="V4L2 device index")
    width: int = Field(default=640, gt=0)
    height: int = Field(default=480, gt=0)
    fps: int = Field(default=30, gt=0)
    pipeline_source: str = Field(
        default="libcamerasrc",
        description="GStreamer source element for the named-pipeline backend",
    )


class NormalizationConfig(BaseModel):
    force_grayscale: bool = Field(default=False)


class EngineConfig(BaseModel):
    name: Literal["orbslam3", "null"] = Field(default="orbslam3")
    use_viewer: bool = Field(default=True)
    null_image_scale: float = Field(
        default=1.0, gt=0, description="Scale reported by the dry-run engine"
    )


class PreviewConfig(BaseModel):
    enabled: bool = Field(default=True)
    window_title: str = Field(default="monolive")
    quit_keys: list[str] = Field(default_factory=lambda: ["q", "esc"])


class ExportConfig(BaseModel):
    trajectory_path: str = Field(default=DEFAULT_TRAJECTORY_PATH)


class FeedConfig(BaseModel):
    log_interval: int = Field(default=300, gt=0, description="Frames between progress logs")
    max_frames: int | None = Field(default=None, gt=0)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for the monolive feed.

    Only explicit init data is used as a settings source, so a run is
    fully determined by the YAML file and the command line.
    """

    model_config = {"extra": "ignore"}

    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from a YAML file, or defaults when no path is given.

    An explicitly given path that does not exist is a user error and
    raises FileNotFoundError.
    """
    if config_path is None:
        return Settings()

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file {path} not found")

    with open(path) as f:
        yaml_data = yaml.safe_load(f) or {}
    logger.info("Loaded configuration from %s", path)

    return Settings(**yaml_data)

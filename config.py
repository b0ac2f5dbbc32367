"""
Configuration loader for the bilingual subtitle aligner.
Loads from config.yaml and allows CLI argument overrides.
"""

import yaml
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

from subalign.aligner import validate_options

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


@dataclass
class AlignConfig:
    strategy: str = "paired"
    max_gap_seconds: float = 1.0
    search_window: int = 10
    backtrack: int = 2

    def validate(self):
        """Raise InvalidConfiguration for out-of-range options."""
        validate_options(self)


@dataclass
class InputConfig:
    # Document layouts (kr / ch)
    language1: str = "kr"
    language2: str = "ch"
    # Batch filename suffixes: <name>-<suffix>.xml
    suffix1: str = "kr"
    suffix2: str = "ch"


@dataclass
class OutputConfig:
    directory: str = "output"
    name: str = "combined"
    write_srt: bool = True
    write_txt: bool = True


@dataclass
class ThreadingConfig:
    mode: str = "sequential"
    max_workers: int = 4


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""
    align: AlignConfig = field(default_factory=AlignConfig)
    input: InputConfig = field(default_factory=InputConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    threading: ThreadingConfig = field(default_factory=ThreadingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def threading_mode(self) -> str:
        return self.threading.mode

    def update_from_args(self, args):
        """Override config values from CLI arguments."""
        if getattr(args, "strategy", None):
            self.align.strategy = args.strategy
        if getattr(args, "max_gap", None) is not None:
            self.align.max_gap_seconds = args.max_gap
        if getattr(args, "search_window", None) is not None:
            self.align.search_window = args.search_window
        if getattr(args, "backtrack", None) is not None:
            self.align.backtrack = args.backtrack
        if getattr(args, "output", None):
            self.output.directory = str(args.output)
        if getattr(args, "parallel", False):
            self.threading.mode = "parallel"
        if getattr(args, "workers", None):
            self.threading.max_workers = args.workers


def _dict_to_dataclass(cls, data: dict):
    """Recursively convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load configuration from a YAML file.
    Falls back to defaults if file is missing.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.warning(f"Config file not found at {path}, using defaults.")
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    config = AppConfig(
        align=_dict_to_dataclass(AlignConfig, raw.get("align")),
        input=_dict_to_dataclass(InputConfig, raw.get("input")),
        output=_dict_to_dataclass(OutputConfig, raw.get("output")),
        threading=_dict_to_dataclass(ThreadingConfig, raw.get("threading")),
        logging=_dict_to_dataclass(LoggingConfig, raw.get("logging")),
    )

    logger.info(f"Configuration loaded from {path}")
    return config

"""Runner configuration.

Settings come from the defaults below, optionally overlaid with a YAML file
and ``key=value`` overrides (OmegaConf dot-list syntax, e.g.
``instructions_per_frame=20``).
"""

import dataclasses
from typing import Any, Dict, Iterable, Optional

import yaml
from flax.struct import dataclass
from omegaconf import OmegaConf

from chipvm.constants import FRAMES_PER_SECOND, INSTRUCTIONS_PER_FRAME
from chipvm.rendering import COLOR_SCHEMES

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class RunnerConfig:
    """Immutable settings for the frame loop and its front-ends."""
    instructions_per_frame: int = INSTRUCTIONS_PER_FRAME
    fps: int = FRAMES_PER_SECOND
    scale: int = 16
    color_scheme: str = "classic"
    seed: int = 0
    stack_limit: Optional[int] = None
    halt_on_fault: bool = True
    log_level: str = "INFO"
    log_interval: int = 600


def config_to_dict(config: RunnerConfig) -> Dict[str, Any]:
    return {field.name: getattr(config, field.name) for field in dataclasses.fields(config)}


def validate_config(config: RunnerConfig) -> RunnerConfig:
    """Raise ValueError for out-of-range settings, return the config otherwise."""
    if config.instructions_per_frame < 1:
        raise ValueError(f"instructions_per_frame must be at least 1, got {config.instructions_per_frame}")
    if config.fps < 0:
        raise ValueError(f"fps must be non-negative, got {config.fps}")
    if config.scale < 1:
        raise ValueError(f"scale must be at least 1, got {config.scale}")
    if config.color_scheme not in COLOR_SCHEMES:
        raise ValueError(
            f"Unknown color scheme '{config.color_scheme}'. Available: {list(COLOR_SCHEMES.keys())}"
        )
    if config.stack_limit is not None and config.stack_limit < 1:
        raise ValueError(f"stack_limit must be positive or null, got {config.stack_limit}")
    if config.log_level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level '{config.log_level}'. Available: {list(LOG_LEVELS)}")
    if config.log_interval < 0:
        raise ValueError(f"log_interval must be non-negative, got {config.log_interval}")
    return config


def _coerce(name: str, value: Any, default: Any) -> Any:
    if value is None:
        if name == "stack_limit":
            return None
        raise ValueError(f"{name} may not be null")
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ValueError(f"{name} must be a boolean, got {value!r}")
        return value
    if isinstance(default, int) or name == "stack_limit":
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{name} must be an integer, got {value!r}")
        return value
    if name == "log_level":
        return str(value).upper()
    return str(value)


def load_config(path: Optional[str] = None, overrides: Iterable[str] = ()) -> RunnerConfig:
    """Build a RunnerConfig from defaults, an optional YAML file and dot-list overrides."""
    defaults = config_to_dict(RunnerConfig())
    sources = [OmegaConf.create(defaults)]
    if path is not None:
        try:
            sources.append(OmegaConf.load(path))
        except yaml.YAMLError as e:
            raise ValueError(f"Could not parse {path}: {e}") from e
    overrides = list(overrides)
    if overrides:
        sources.append(OmegaConf.from_dotlist(overrides))

    merged = OmegaConf.to_container(OmegaConf.merge(*sources), resolve=True)

    unknown = sorted(set(merged) - set(defaults))
    if unknown:
        raise ValueError(f"Unknown configuration keys: {unknown}. Available: {sorted(defaults)}")

    values = {name: _coerce(name, merged[name], defaults[name]) for name in defaults}
    return validate_config(RunnerConfig(**values))

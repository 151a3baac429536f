"""Configuration loading utilities."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from pgpartition.constants import DEFAULT_MAGIC, DEFAULT_SEED
from pgpartition.errors import InvalidPartitionCount
from pgpartition.partition.indexer import KeyType
from pgpartition.partition.levels import HashPartitionScheme
from pgpartition.utils.logger import get_logger

logger = get_logger(__name__)

CONFIG_KEYS = {"key_type", "levels", "seed", "magic"}


def load_config(config_path: Path) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Dictionary containing configuration parameters

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    logger.debug("Loaded config from %s", config_path)

    if config is None:
        return {}

    return config


def _parse_uint64(name: str, value: Any) -> int:
    """Accept ints or numeric strings (``"0x7A5B..."``) in the uint64 range."""
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, str):
        try:
            value = int(value, 0)
        except ValueError:
            raise ValueError(f"{name} must be an integer, got {value!r}") from None
    if not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not (0 <= value < 2**64):
        raise ValueError(f"{name} must be uint64, got {value}")
    return value


@dataclass(frozen=True)
class PartitionConfig:
    """Validated partitioning configuration.

    Attributes:
        key_type: Declared type of the partition key
        levels: Partition counts per level, outermost first
        seed: 64-bit hash seed
        magic: 64-bit constant added before reduction
    """

    key_type: KeyType = KeyType.INT8
    levels: tuple[int, ...] = field(default=(1,))
    seed: int = DEFAULT_SEED
    magic: int = DEFAULT_MAGIC

    def __post_init__(self) -> None:
        """Validate parameters."""
        object.__setattr__(self, "key_type", KeyType.parse(self.key_type))
        object.__setattr__(self, "seed", _parse_uint64("seed", self.seed))
        object.__setattr__(self, "magic", _parse_uint64("magic", self.magic))

        levels = self.levels
        if isinstance(levels, int) and not isinstance(levels, bool):
            levels = (levels,)
        if not isinstance(levels, (list, tuple)) or not levels:
            raise ValueError(f"levels must be a non-empty list of partition counts, got {self.levels!r}")
        for n in levels:
            if isinstance(n, bool) or not isinstance(n, int):
                raise ValueError(f"partition counts must be integers, got {n!r}")
            if n <= 0:
                raise InvalidPartitionCount(n)
        object.__setattr__(self, "levels", tuple(levels))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PartitionConfig":
        """Build a config from a parsed YAML mapping.

        Raises:
            ValueError: On unknown keys or invalid values
        """
        if not isinstance(data, dict):
            raise ValueError(f"config must be a mapping, got {type(data).__name__}")
        unknown = set(data) - CONFIG_KEYS
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def load(cls, config_path: Path) -> "PartitionConfig":
        """Load and validate a YAML config file."""
        return cls.from_dict(load_config(config_path))

    def scheme(self) -> HashPartitionScheme:
        """Hash partitioning scheme described by this config."""
        return HashPartitionScheme(
            levels=self.levels,
            key_type=self.key_type,
            seed=self.seed,
            magic=self.magic,
        )

"""nbtstorage configuration."""

from typing import Optional
import os

from nbtstorage.exceptions import ConfigurationException


MAX_DEPTH = 512
MAX_SNBT_DEPTH = 256
DEFAULT_COMPRESSION_LEVEL = 9


class CodecConfig:
    """Configuration for the binary codec.

    Args:
        max_depth: Deepest compound/list nesting accepted when decoding.
        size_limit: Byte budget for a single decode, or None for no limit.
        compression_level: gzip level used by compressed writes (0-9).
    """

    def __init__(
        self,
        max_depth: int = MAX_DEPTH,
        size_limit: Optional[int] = None,
        compression_level: int = DEFAULT_COMPRESSION_LEVEL,
    ):
        self._max_depth = max_depth
        self._size_limit = size_limit
        self._compression_level = compression_level
        self._validate()

    def _validate(self) -> None:
        if self._max_depth < 1 or self._max_depth > MAX_DEPTH:
            raise ConfigurationException(
                f"max_depth must be between 1 and {MAX_DEPTH}"
            )
        if self._size_limit is not None and self._size_limit <= 0:
            raise ConfigurationException("size_limit must be positive")
        if self._compression_level < 0 or self._compression_level > 9:
            raise ConfigurationException("compression_level must be between 0 and 9")

    @property
    def max_depth(self) -> int:
        """Get the maximum decode nesting depth."""
        return self._max_depth

    @max_depth.setter
    def max_depth(self, value: int) -> None:
        self._max_depth = value
        self._validate()

    @property
    def size_limit(self) -> Optional[int]:
        """Get the decode byte budget, None meaning unlimited."""
        return self._size_limit

    @size_limit.setter
    def size_limit(self, value: Optional[int]) -> None:
        self._size_limit = value
        self._validate()

    @property
    def compression_level(self) -> int:
        """Get the gzip compression level."""
        return self._compression_level

    @compression_level.setter
    def compression_level(self, value: int) -> None:
        self._compression_level = value
        self._validate()

    @classmethod
    def from_dict(cls, data: dict) -> "CodecConfig":
        """Create CodecConfig from a dictionary."""
        return cls(
            max_depth=data.get("max_depth", MAX_DEPTH),
            size_limit=data.get("size_limit"),
            compression_level=data.get("compression_level", DEFAULT_COMPRESSION_LEVEL),
        )


class ParserConfig:
    """Configuration for the SNBT parser.

    Args:
        max_input_length: Longest text the parser accepts, or None.
        max_depth: Deepest compound/list nesting the parser accepts.
    """

    def __init__(
        self, max_input_length: Optional[int] = None, max_depth: int = MAX_SNBT_DEPTH
    ):
        self._max_input_length = max_input_length
        self._max_depth = max_depth
        self._validate()

    def _validate(self) -> None:
        if self._max_input_length is not None and self._max_input_length <= 0:
            raise ConfigurationException("max_input_length must be positive")
        if self._max_depth < 1 or self._max_depth > MAX_SNBT_DEPTH:
            raise ConfigurationException(
                f"max_depth must be between 1 and {MAX_SNBT_DEPTH}"
            )

    @property
    def max_input_length(self) -> Optional[int]:
        """Get the input length ceiling."""
        return self._max_input_length

    @max_input_length.setter
    def max_input_length(self, value: Optional[int]) -> None:
        self._max_input_length = value
        self._validate()

    @property
    def max_depth(self) -> int:
        """Get the nesting ceiling."""
        return self._max_depth

    @max_depth.setter
    def max_depth(self, value: int) -> None:
        self._max_depth = value
        self._validate()

    @classmethod
    def from_dict(cls, data: dict) -> "ParserConfig":
        """Create ParserConfig from a dictionary."""
        return cls(
            max_input_length=data.get("max_input_length"),
            max_depth=data.get("max_depth", MAX_SNBT_DEPTH),
        )


class StorageConfig:
    """Root configuration for nbtstorage.

    Attributes:
        codec: Binary codec settings.
        parser: SNBT parser settings.

    Example:
        From YAML::

            nbtstorage:
              codec:
                size_limit: 2097152
                compression_level: 6
              parser:
                max_input_length: 65536

        ::

            config = StorageConfig.from_yaml("nbtstorage.yml")
    """

    def __init__(self):
        self._codec: CodecConfig = CodecConfig()
        self._parser: ParserConfig = ParserConfig()

    @property
    def codec(self) -> CodecConfig:
        """Get the codec configuration."""
        return self._codec

    @codec.setter
    def codec(self, value: CodecConfig) -> None:
        self._codec = value

    @property
    def parser(self) -> ParserConfig:
        """Get the parser configuration."""
        return self._parser

    @parser.setter
    def parser(self, value: ParserConfig) -> None:
        self._parser = value

    @classmethod
    def from_dict(cls, data: dict) -> "StorageConfig":
        """Create StorageConfig from a dictionary."""
        config = cls()

        if "codec" in data:
            config.codec = CodecConfig.from_dict(data["codec"] or {})

        if "parser" in data:
            config.parser = ParserConfig.from_dict(data["parser"] or {})

        return config

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "StorageConfig":
        """Load configuration from a YAML file.

        Args:
            yaml_path: Path to the YAML configuration file.

        Returns:
            StorageConfig instance.

        Raises:
            ConfigurationException: If the file cannot be read or parsed.
        """
        try:
            import yaml
        except ImportError:
            raise ConfigurationException(
                "PyYAML is required for YAML configuration loading. "
                "Install it with: pip install pyyaml"
            )

        if not os.path.exists(yaml_path):
            raise ConfigurationException(f"Configuration file not found: {yaml_path}")

        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}")
        except IOError as e:
            raise ConfigurationException(f"Failed to read configuration file: {e}")

        return cls._from_loaded(data)

    @classmethod
    def from_yaml_string(cls, yaml_content: str) -> "StorageConfig":
        """Load configuration from a YAML string.

        Args:
            yaml_content: YAML configuration as a string.

        Returns:
            StorageConfig instance.

        Raises:
            ConfigurationException: If the YAML cannot be parsed.
        """
        try:
            import yaml
        except ImportError:
            raise ConfigurationException(
                "PyYAML is required for YAML configuration loading. "
                "Install it with: pip install pyyaml"
            )

        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}")

        return cls._from_loaded(data)

    @classmethod
    def _from_loaded(cls, data) -> "StorageConfig":
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ConfigurationException("Configuration root must be a mapping")

        if "nbtstorage" in data:
            data = data["nbtstorage"] or {}

        return cls.from_dict(data)

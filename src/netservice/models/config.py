"""Pydantic configuration models for netservice."""

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class ByteSize(int):
    """
    Custom type that parses human-readable byte sizes.

    Accepts:
        - Integers (bytes)
        - Strings like '200kb', '1mb', '5gb'

    Examples:
        >>> ByteSize._parse('200kb')
        204800
        >>> ByteSize._parse('1mb')
        1048576
        >>> ByteSize._parse(1024)
        1024
    """

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> Any:
        from pydantic_core import core_schema

        return core_schema.no_info_plain_validator_function(cls._parse)

    @classmethod
    def _parse(cls, v: Any) -> int:
        if isinstance(v, int) and not isinstance(v, bool):
            return v
        if isinstance(v, str):
            v = v.lower().strip()
            # Order matters: check longer suffixes first
            units = [("gb", 1024**3), ("mb", 1024**2), ("kb", 1024), ("b", 1)]
            for unit, mult in units:
                if v.endswith(unit):
                    num_str = v[: -len(unit)].strip()
                    try:
                        return int(float(num_str) * mult)
                    except ValueError as err:
                        raise ValueError(f"Invalid number in byte size: {v}") from err
            try:
                return int(v)
            except ValueError:
                pass
        raise ValueError(f"Invalid byte size: {v}. Use format like '200kb', '1mb', or integer bytes.")


def _expand_env_var(value: Optional[str]) -> Optional[str]:
    """Expand environment variable references in a string.

    Supports $VAR and ${VAR} syntax. Returns original value if
    the env var is not set.
    """
    import os
    import re

    if value is None:
        return None

    pattern = r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)"

    def replace(match: re.Match) -> str:
        var_name = match.group(1) or match.group(2)
        return os.environ.get(var_name, match.group(0))

    return re.sub(pattern, replace, value)


class NetworkConfig(BaseModel):
    """
    Configuration for NetworkService and its default transport.

    Example:
        config = NetworkConfig(
            user_agent="inventory-app/1.4",
            default_headers={"Authorization": "Bearer ${API_TOKEN}"},
            read_timeout=15,
        )

    YAML format:
        user_agent: inventory-app/1.4
        read_timeout: 15
        max_content_size: 5mb
        default_headers:
          Accept: application/json
    """

    user_agent: Optional[str] = Field(None, description="Custom User-Agent header")
    proxy: Optional[str] = Field(None, description="HTTP/HTTPS proxy URL")
    connect_timeout: float = Field(10.0, gt=0, description="Connection timeout in seconds")
    read_timeout: float = Field(30.0, gt=0, description="Read timeout in seconds")
    max_content_size: ByteSize = Field(
        ByteSize(50 * 1024 * 1024),
        description="Maximum response size (e.g., '200kb', '50mb')",
    )
    default_headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers sent with every request; $VAR and ${VAR} are expanded",
    )
    allowed_schemes: Optional[set[str]] = Field(
        None,
        description="URL schemes to accept (None = any scheme)",
    )
    marshal_failures: bool = Field(
        False,
        description="Deliver failures on the callback loop as well as successes",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    @field_validator("default_headers")
    @classmethod
    def _expand_header_values(cls, value: dict[str, str]) -> dict[str, str]:
        return {name: _expand_env_var(header) or "" for name, header in value.items()}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "NetworkConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "NetworkConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())

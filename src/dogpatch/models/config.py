"""Pydantic configuration models for dogpatch."""

from pathlib import Path
from typing import Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator


class NetworkConfig(BaseModel):
    """Configuration for the HTTP transport."""

    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds")
    user_agent: Optional[str] = Field(None, description="Custom User-Agent string")
    headers: dict[str, str] = Field(default_factory=dict, description="Extra headers sent with every request")
    max_workers: int = Field(4, ge=1, description="Worker threads for the requests transport")

    model_config = {"extra": "forbid"}


class ClientConfig(BaseModel):
    """
    Root configuration model for dogpatch.

    Example:
        config = ClientConfig(
            base_url="https://example.com/api/v1/",
            network=NetworkConfig(timeout=10.0),
        )

    YAML format:
        base_url: https://example.com/api/v1/
        network:
          timeout: 10
          user_agent: my-app/1.0
        log_level: DEBUG
    """

    base_url: str = Field(..., description="API root; request paths are resolved against it")
    network: NetworkConfig = Field(default_factory=NetworkConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"base_url must be an absolute http(s) URL, got {v!r}")
        return v

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ClientConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str)
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "ClientConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())

"""Application configuration."""
import os
from dataclasses import dataclass


@dataclass
class AppConfig:
    """Path generator configuration."""

    spec_dir: str = "./spec"
    gen_dir: str = "./gen"
    default_input: str = "openapi.yaml"
    default_group: str = "default"
    max_depth: int = 10
    http_timeout: int = 30

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load config from environment variables."""
        return cls(
            spec_dir=os.getenv("PATHGEN_SPEC_DIR", "./spec"),
            gen_dir=os.getenv("PATHGEN_GEN_DIR", "./gen"),
            default_input=os.getenv("PATHGEN_DEFAULT_INPUT", "openapi.yaml"),
            default_group=os.getenv("PATHGEN_DEFAULT_GROUP", "default"),
            max_depth=int(os.getenv("PATHGEN_MAX_DEPTH", "10")),
            http_timeout=int(os.getenv("PATHGEN_HTTP_TIMEOUT", "30")),
        )


# Global instance
app_config = AppConfig()

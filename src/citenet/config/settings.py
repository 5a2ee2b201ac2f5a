"""Configuration management using Pydantic Settings.

Only the command line layer reads these values. The analysis functions in
:mod:`citenet.analysis` take every tunable as an explicit argument and never
consult the global settings object.
"""

from pathlib import Path
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CITENET_",
        case_sensitive=False,
        extra="ignore",
    )

    # Influence ranking
    damping_factor: float = Field(0.85, ge=0.0, le=1.0)
    pagerank_iterations: int = Field(100, ge=0)
    top_n: int = Field(50, ge=1, description="Default size of ranked paper lists")
    seminal_min_age: int = Field(10, ge=0, description="Minimum age in years for seminal papers")

    # Bridge papers / centrality
    bridge_top_n: int = Field(20, ge=1)
    centrality_timeout: Optional[float] = Field(
        None,
        gt=0,
        description="Seconds before betweenness centrality is abandoned (None = no limit)",
    )

    # Trends
    trend_window_years: int = Field(5, ge=0)

    # Community detection
    randomized_communities: bool = Field(
        False,
        description="Shuffle label propagation order instead of the reproducible default",
    )
    random_seed: Optional[int] = Field(None, description="Seed for randomized label propagation")

    # Output
    output_dir: Path = Field(Path("output"))

    # Logging
    log_level: str = Field("INFO")
    log_format: str = Field("text", pattern="^(json|text)$")


# Instantiate global settings
settings = Settings()

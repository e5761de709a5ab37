"""Run context and output directory management."""

from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RunContext(BaseSettings):
    """
    Owns the output directory of one analysis run so that every artifact
    of the run is saved together.

    Usage:
        run = RunContext(name="lda_k2")
        run.create()
        output_path = run.output_dir  # e.g., data/processed/20240131_143022_lda_k2/
        run.save_config({"num_topics": 2, "sweeps": 1000})
    """
    model_config = SettingsConfigDict(
        arbitrary_types_allowed=True,
        validate_default=True
    )

    name: str = Field(..., description="Name identifier for this run")
    base_dir: Optional[Path] = Field(
        default=None,
        description="Base directory for run outputs. Defaults to paths.output_dir"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="Timestamp for this run"
    )

    def model_post_init(self, __context) -> None:
        """Set default base_dir after settings are available."""
        if self.base_dir is None:
            # Import here to avoid circular dependency
            from policy_topics.config import settings
            object.__setattr__(self, 'base_dir', settings.paths.output_dir)

    @property
    def run_id(self) -> str:
        """Run ID from timestamp."""
        return self.timestamp.strftime("%Y%m%d_%H%M%S")

    @property
    def output_dir(self) -> Path:
        return self.base_dir / f"{self.run_id}_{self.name}"

    def create(self) -> "RunContext":
        """Create the run directory."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self

    def save_config(self, config: Dict) -> Path:
        """
        Save the configuration used for this run.

        Returns:
            Path to the saved config file
        """
        self.create()
        config_path = self.output_dir / "run_config.yaml"
        with open(config_path, 'w') as f:
            yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)
        return config_path

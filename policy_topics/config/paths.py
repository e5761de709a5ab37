"""Project path configuration."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PathsConfig(BaseSettings):
    """
    Project path configuration.
    All paths are computed from project_root.
    """
    model_config = SettingsConfigDict(
        env_prefix='PATHS_',
        case_sensitive=False
    )

    # Project root directory (computed)
    project_root: Path = Field(default_factory=lambda: Path(__file__).parent.parent.parent)

    @property
    def data_dir(self) -> Path:
        return self.project_root / "data"

    @property
    def raw_data_dir(self) -> Path:
        """Extracted statement text, one .txt file per document"""
        return self.data_dir / "raw"

    @property
    def dictionary_dir(self) -> Path:
        """Directory containing sentiment lexicon resources"""
        return self.data_dir / "dictionary"

    @property
    def lexicon_path(self) -> Path:
        """Default sentiment lexicon CSV (word, sentiment)."""
        return self.dictionary_dir / "sentiment_lexicon.csv"

    @property
    def dates_path(self) -> Path:
        """Default document publication dates CSV (document, date)."""
        return self.data_dir / "document_dates.csv"

    @property
    def output_dir(self) -> Path:
        """Root directory for exported analysis runs"""
        return self.data_dir / "processed"

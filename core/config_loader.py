import yaml
import os
from typing import Optional
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///resume_ranker.db"


class ExtractionServiceConfig(BaseModel):
    """Skill-extraction service endpoint (resume and JD parsing)."""
    url: Optional[str] = None
    request_timeout_seconds: int = 60
    max_attempts: int = 3
    retry_wait_seconds: float = 2.0


class SimilarityServiceConfig(BaseModel):
    """Semantic similarity (embedding ranking) service endpoint."""
    url: Optional[str] = None
    request_timeout_seconds: int = 60
    max_attempts: int = 3
    retry_wait_seconds: float = 2.0


class RankingConfig(BaseModel):
    """
    Configuration for the ranking workflow.

    Only operational knobs live here. The score weights, the experience
    fallback and the gap tiers are fixed constants in core.scorer.
    """
    enabled: bool = True
    # Outbound enrichment calls in flight at once (extraction fan-out)
    max_concurrent_enrichments: int = Field(default=3, ge=1, le=5)
    # Pause between extraction batches, for rate-limited services
    inter_batch_pause_seconds: float = Field(default=0.0, ge=0)
    # Maximum persisted matches read back after a ranking run
    matches_reload_limit: int = Field(default=100, ge=1)


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    extraction: ExtractionServiceConfig = Field(default_factory=ExtractionServiceConfig)
    similarity: SimilarityServiceConfig = Field(default_factory=SimilarityServiceConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from another cwd), try the project root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    with open(config_path, "r") as f:
        data = yaml.safe_load(f) or {}

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        data.setdefault('database', {})
        data['database']['url'] = env_db_url

    # Allow env var override for the extraction service
    env_extraction_url = os.environ.get("EXTRACTION_SERVICE_URL")
    if env_extraction_url:
        if not data.get('extraction'):
            data['extraction'] = {}
        data['extraction']['url'] = env_extraction_url

    # Allow env var override for the similarity service
    env_similarity_url = os.environ.get("SIMILARITY_SERVICE_URL")
    if env_similarity_url:
        if not data.get('similarity'):
            data['similarity'] = {}
        data['similarity']['url'] = env_similarity_url

    return AppConfig(**data)

"""Skill-extraction service client."""

import logging

from pydantic import ValidationError

from core.config_loader import ExtractionServiceConfig
from core.enrichment.http_base import ServiceClient
from core.enrichment.interfaces import SkillExtractor
from core.enrichment.schemas import ExtractionResult
from core.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)


class ExtractionClient(ServiceClient, SkillExtractor):
    """
    Client for the skill-extraction endpoint.

    POST /extract-skills {"text": ..., "type": "JD"|"RESUME"}
    """

    service_name = "extraction service"

    @classmethod
    def from_config(cls, config: ExtractionServiceConfig) -> "ExtractionClient":
        return cls(
            base_url=config.url,
            request_timeout_seconds=config.request_timeout_seconds,
            max_attempts=config.max_attempts,
            retry_wait_seconds=config.retry_wait_seconds
        )

    def extract(self, text: str, doc_type: str = "RESUME") -> ExtractionResult:
        if not text or not text.strip():
            logger.warning(f"Skipping extraction for empty {doc_type} text")
            return ExtractionResult()

        data = self._post_json("/extract-skills", {"text": text, "type": doc_type})
        try:
            result = ExtractionResult.model_validate(data)
        except ValidationError as e:
            raise UpstreamServiceError(f"Malformed extraction response: {e}") from e

        logger.debug(f"Extracted {len(result.skills)} skills from {doc_type}")
        return result

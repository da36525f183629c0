"""Semantic similarity (embedding ranking) service client."""

import logging
from typing import Dict

from pydantic import ValidationError

from core.config_loader import SimilarityServiceConfig
from core.enrichment.http_base import ServiceClient
from core.enrichment.interfaces import SimilarityScorer
from core.enrichment.schemas import SimilarityResult
from core.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)


class SimilarityClient(ServiceClient, SimilarityScorer):
    """
    Client for the batch ranking endpoint.

    POST /rank-resumes {"jdText": ..., "resumeData": {resume_id: text}}
    -> {"results": [{"id": ..., "score": 0..1}]}
    """

    service_name = "similarity service"

    @classmethod
    def from_config(cls, config: SimilarityServiceConfig) -> "SimilarityClient":
        return cls(
            base_url=config.url,
            request_timeout_seconds=config.request_timeout_seconds,
            max_attempts=config.max_attempts,
            retry_wait_seconds=config.retry_wait_seconds
        )

    def rank(self, jd_text: str, resume_texts: Dict[str, str]) -> SimilarityResult:
        if not resume_texts:
            return SimilarityResult()

        data = self._post_json("/rank-resumes", {"jdText": jd_text, "resumeData": resume_texts})
        try:
            result = SimilarityResult.model_validate(data)
        except ValidationError as e:
            raise UpstreamServiceError(f"Malformed similarity response: {e}") from e

        logger.info(f"Similarity service scored {len(result.results)}/{len(resume_texts)} resumes")
        return result

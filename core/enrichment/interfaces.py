"""
Enrichment Interfaces - Abstract bases for the upstream services.

The ranking core consumes two collaborators:
- SkillExtractor: document text -> skills and parsed details
- SimilarityScorer: JD text + resume texts -> per-resume similarity
"""
from abc import ABC, abstractmethod
from typing import Dict

from core.enrichment.schemas import ExtractionResult, SimilarityResult


class SkillExtractor(ABC):
    """
    Abstract interface for skill-extraction services.
    """

    @abstractmethod
    def extract(self, text: str, doc_type: str = "RESUME") -> ExtractionResult:
        """
        Extract skills and structured details from one document.

        Args:
            text: Full document text
            doc_type: "RESUME" or "JD"

        Raises:
            UpstreamServiceError: if the service cannot produce a result
        """
        pass


class SimilarityScorer(ABC):
    """
    Abstract interface for semantic similarity services.
    """

    @abstractmethod
    def rank(self, jd_text: str, resume_texts: Dict[str, str]) -> SimilarityResult:
        """
        Score every resume text against the JD text.

        Args:
            jd_text: Job description text
            resume_texts: Mapping of resume identity -> resume text

        Raises:
            UpstreamServiceError: if the service cannot produce a result
        """
        pass

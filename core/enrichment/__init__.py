"""Enrichment Module - clients and typed results for the upstream services."""
from core.enrichment.schemas import (
    ExtractionResult, ParsedDetails, ParsedProject, EmploymentGaps,
    SimilarityItem, SimilarityResult
)
from core.enrichment.interfaces import SkillExtractor, SimilarityScorer
from core.enrichment.extraction_client import ExtractionClient
from core.enrichment.similarity_client import SimilarityClient

__all__ = [
    'SkillExtractor', 'SimilarityScorer',
    'ExtractionClient', 'SimilarityClient',
    'ExtractionResult', 'ParsedDetails', 'ParsedProject', 'EmploymentGaps',
    'SimilarityItem', 'SimilarityResult',
]

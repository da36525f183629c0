"""Pipeline execution modules for the resume ranker."""

from .runner import RankingPipeline, RankingRunResult

__all__ = ['RankingPipeline', 'RankingRunResult']

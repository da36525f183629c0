#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from typing import List, Dict, Any
from dataclasses import dataclass, field


@dataclass
class SkillMatchResult:
    """Required-skill coverage of one resume."""
    skill_match_score: float = 0.0
    matched_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    extra_skills: List[str] = field(default_factory=list)
    total_required: int = 0
    total_matched: int = 0


@dataclass
class RelevantProject:
    """A resume project using at least one required technology."""
    name: str
    all_technologies: List[str] = field(default_factory=list)
    matching_technologies: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'allTech': list(self.all_technologies),
            'matchingTechs': list(self.matching_technologies),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "RelevantProject":
        if isinstance(data, str):
            return cls(name=data)
        return cls(
            name=data.get('name', ''),
            all_technologies=list(data.get('allTech') or []),
            matching_technologies=list(data.get('matchingTechs') or [])
        )


@dataclass
class ProjectRelevanceResult:
    """Project corroboration of the required skills."""
    project_score: float = 0.0
    corroborated_skills: List[str] = field(default_factory=list)
    relevant_projects: List[RelevantProject] = field(default_factory=list)


@dataclass
class ScoredResume:
    """Complete scored result for one (job, resume) pair."""
    resume_id: str

    final_score: int = 0

    skill_match_score: float = 0.0
    experience_score: float = 0.0
    project_score: float = 0.0
    semantic_score: float = 0.0
    gap_penalty: float = 0.0

    matched_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    extra_skills: List[str] = field(default_factory=list)
    relevant_projects: List[RelevantProject] = field(default_factory=list)
    components: Dict[str, Any] = field(default_factory=dict)

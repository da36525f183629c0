#!/usr/bin/env python3
"""
Skill Normalization - tolerant equivalence between skill tokens.

Upstream extraction produces inconsistent granularity ("React" vs
"React.js"), so two skills are equivalent when, after case folding and
trimming, they are equal or one contains the other. Containment is
binary; there is no similarity threshold.
"""

from typing import Iterable, List


def normalize_skill(skill) -> str:
    """Canonical form of a skill token (trimmed, case-folded)."""
    if skill is None:
        return ""
    return str(skill).strip().casefold()


def skills_match(skill_a, skill_b) -> bool:
    """True if the two skills are equal or one contains the other (case-insensitive)."""
    a = normalize_skill(skill_a)
    b = normalize_skill(skill_b)
    # An empty token is contained in everything; it matches nothing.
    if not a or not b:
        return False
    return a == b or a in b or b in a


def matches_any(skill, candidates: Iterable[str]) -> bool:
    return any(skills_match(skill, c) for c in candidates)


def dedupe_skills(skills: Iterable[str]) -> List[str]:
    """
    Drop empty and duplicate skills by normalized form.

    Keeps the first spelling of each skill in original order.
    """
    seen = set()
    result = []
    for skill in skills or []:
        key = normalize_skill(skill)
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(str(skill).strip())
    return result

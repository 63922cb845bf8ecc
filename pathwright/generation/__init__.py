"""Candidate generation — parameter synthesis, drafts, and complete solutions."""

from pathwright.generation.builder import SolutionBuilder
from pathwright.generation.generator import CandidateDraft, CandidateGenerator, candidate_id
from pathwright.generation.synthesizer import default_material, synthesize_parameters

__all__ = [
    "CandidateDraft",
    "CandidateGenerator",
    "SolutionBuilder",
    "candidate_id",
    "default_material",
    "synthesize_parameters",
]

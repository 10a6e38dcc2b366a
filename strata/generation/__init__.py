"""
Strata - Generation Package
Contains all generation passes and the main pipeline.
"""

from strata.generation.pipeline import GenerationPipeline, create_pipeline, generate
from strata.generation.structures import place_structure

__all__ = [
    "GenerationPipeline",
    "create_pipeline",
    "generate",
    "place_structure",
]

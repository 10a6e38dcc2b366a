"""
Strata - Generation Pipeline
Main orchestrator for procedural terrain generation.
Executes all generation passes in sequence.
"""

import logging
import time
from datetime import datetime, timezone
from types import ModuleType
from typing import Callable, Dict, Optional

from strata.config import GENERATION_PASSES, PASS_WEIGHTS, GenerationSettings, TerrainStatus
from strata.errors import GenerationError
from strata.models.terrain import Terrain

logger = logging.getLogger(__name__)


class GenerationPipeline:
    """
    Runs every registered pass over one terrain.
    Manages progress tracking, timings and failure bookkeeping.
    """

    def __init__(
        self,
        terrain: Terrain,
        progress_callback: Optional[Callable[[str, float], None]] = None
    ):
        """
        Initialize generation pipeline.

        Args:
            terrain: Freshly constructed terrain to populate
            progress_callback: Optional callback for progress updates (pass_name, percent)
        """
        self.terrain = terrain
        self.settings = terrain.settings
        self.metadata = terrain.metadata
        self.progress_callback = progress_callback

        # Pass registry - populated with pass modules
        self.pass_registry: Dict[str, ModuleType] = {}

    def register_pass(self, pass_name: str, pass_module: ModuleType):
        """Register a generation pass module"""
        self.pass_registry[pass_name] = pass_module

    def generate(self) -> Terrain:
        """
        Execute the complete generation pipeline.

        Returns:
            The populated terrain

        Raises:
            GenerationError: if the terrain was already generated
        """
        if self.metadata.status != TerrainStatus.PENDING:
            raise GenerationError(
                f"Terrain {self.metadata.terrain_id} is {self.metadata.status}, expected pending"
            )

        missing = [name for name in GENERATION_PASSES if name not in self.pass_registry]
        if missing:
            raise GenerationError(f"Passes not registered: {', '.join(missing)}")

        self.metadata.status = TerrainStatus.GENERATING
        start_time = time.perf_counter()

        logger.info(
            f"Starting terrain generation: seed={self.terrain.seed!r} "
            f"size={self.terrain.width}x{self.terrain.height}"
        )

        try:
            # Calculate total weight for progress
            total_weight = sum(PASS_WEIGHTS[name] for name in GENERATION_PASSES)
            accumulated_weight = 0

            for pass_name in GENERATION_PASSES:
                pass_start = time.perf_counter()
                self.metadata.current_pass = pass_name

                progress = (accumulated_weight / total_weight) * 100
                self.metadata.progress_percent = progress
                logger.info(f"[{progress:5.1f}%] Executing {pass_name}...")

                self.pass_registry[pass_name].execute(self.terrain, self.settings)

                pass_duration = time.perf_counter() - pass_start
                self.metadata.pass_timings[pass_name] = pass_duration
                logger.info(f"        Completed {pass_name} in {pass_duration:.3f}s")

                accumulated_weight += PASS_WEIGHTS[pass_name]

                if self.progress_callback:
                    self.progress_callback(pass_name, (accumulated_weight / total_weight) * 100)

            self.metadata.status = TerrainStatus.READY
            self.metadata.current_pass = None
            self.metadata.progress_percent = 100.0
            self.metadata.completed_at = datetime.now(timezone.utc)

            total_time = time.perf_counter() - start_time
            logger.info(f"Terrain generation complete in {total_time:.3f}s")

            for pass_name, duration in self.metadata.pass_timings.items():
                percentage = (duration / total_time) * 100 if total_time > 0 else 0.0
                logger.debug(f"  {pass_name:30s} {duration:8.3f}s ({percentage:5.1f}%)")

            return self.terrain

        except Exception as e:
            self.metadata.status = TerrainStatus.FAILED
            self.metadata.error_message = str(e)
            logger.error(f"Generation failed during {self.metadata.current_pass}: {e}")
            raise


def create_pipeline(
    terrain: Terrain,
    progress_callback: Optional[Callable[[str, float], None]] = None,
) -> GenerationPipeline:
    """
    Factory function to create a fully configured generation pipeline.

    Args:
        terrain: Terrain to populate
        progress_callback: Optional callback for progress updates

    Returns:
        Configured GenerationPipeline ready to execute
    """
    pipeline = GenerationPipeline(terrain, progress_callback)

    # Import and register all passes
    from strata.generation import pass_01_surface
    from strata.generation import pass_02_smoothing
    from strata.generation import pass_03_strata
    from strata.generation import pass_04_ores
    from strata.generation import pass_05_grass
    from strata.generation import pass_06_middle
    from strata.generation import pass_07_trees
    from strata.generation import pass_08_decor
    from strata.generation import pass_09_textures
    from strata.generation import pass_10_walkability

    pipeline.register_pass("pass_01_surface", pass_01_surface)
    pipeline.register_pass("pass_02_smoothing", pass_02_smoothing)
    pipeline.register_pass("pass_03_strata", pass_03_strata)
    pipeline.register_pass("pass_04_ores", pass_04_ores)
    pipeline.register_pass("pass_05_grass", pass_05_grass)
    pipeline.register_pass("pass_06_middle", pass_06_middle)
    pipeline.register_pass("pass_07_trees", pass_07_trees)
    pipeline.register_pass("pass_08_decor", pass_08_decor)
    pipeline.register_pass("pass_09_textures", pass_09_textures)
    pipeline.register_pass("pass_10_walkability", pass_10_walkability)

    return pipeline


def generate(
    seed: Optional[str] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
    settings: Optional[GenerationSettings] = None,
    progress_callback: Optional[Callable[[str, float], None]] = None,
) -> Terrain:
    """
    Build and populate a terrain in one call.

    Omitted arguments fall back to Terrain's defaults.
    """
    kwargs = {}
    if width is not None:
        kwargs["width"] = width
    if height is not None:
        kwargs["height"] = height

    terrain = Terrain(seed, settings=settings, **kwargs)
    return create_pipeline(terrain, progress_callback).generate()

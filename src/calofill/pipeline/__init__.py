"""Pipeline modules.

- processor: Per-run dead tower interpolation module
- orchestrator: Event loop over a tower dataset
"""

from calofill.pipeline.processor import DeadTowerInterpProcessor, CycleResult
from calofill.pipeline.orchestrator import (
    PipelineOrchestrator,
    InterpolationRunResult,
    RunAborted,
)

__all__ = [
    "DeadTowerInterpProcessor",
    "CycleResult",
    "PipelineOrchestrator",
    "InterpolationRunResult",
    "RunAborted",
]

"""`calofill` - dead tower interpolation for segmented calorimeters.

Subpackages:
- calo: Tower keys, geometry, dead maps, tower containers, interpolation
- pipeline: Per-run processor and event orchestrator
- schemas: Pydantic configuration
- contracts: Fail-fast stage invariants
"""

__version__ = "0.1.0"

"""Service layer for business logic.

Services orchestrate operations between the provider layer and the curation
engine, keeping the CLI thin.
"""

from .curation_service import CurationRunResult, open_source, list_candidates, run_curation
from .playback_service import play_tracks

__all__ = [
    "CurationRunResult",
    "open_source",
    "list_candidates",
    "run_curation",
    "play_tracks",
]

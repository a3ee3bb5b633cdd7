"""
Offseason cycle.

Twelve ordered phases driven by ``offseason.offseason_orchestrator``:
SeasonEnd, CoachingDecisions, ContractManagement, Combine, FreeAgency,
Draft, UDFA, OTAs, TrainingCamp, Preseason, FinalCuts, SeasonStart.

Only the leaf models are re-exported here; import the orchestrator from
its module (it depends on the league snapshot, which depends on these
models).
"""

from offseason.offseason_phases import OffseasonPhase, PHASE_ORDER
from offseason.offseason_data import OffseasonData, OffseasonState

__all__ = [
    'OffseasonPhase',
    'PHASE_ORDER',
    'OffseasonData',
    'OffseasonState',
]

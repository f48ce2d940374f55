"""Router session state, commands and the simulated run loop."""

from .history import RunRecord, HISTORY_CAPACITY, push_record
from .state import AppState
from .commands import (
    SetWeights,
    ApplyPreset,
    SelectModel,
    ClearSelection,
    SetPrompt,
    SetTokenCounts,
    SetRulesName,
    ImportSettings,
    RecordRun,
    RunPrompt,
    chosen_model,
    reduce,
)
from .router import RouterSession, DashboardRow

__all__ = [
    'RunRecord',
    'HISTORY_CAPACITY',
    'push_record',
    'AppState',
    'SetWeights',
    'ApplyPreset',
    'SelectModel',
    'ClearSelection',
    'SetPrompt',
    'SetTokenCounts',
    'SetRulesName',
    'ImportSettings',
    'RecordRun',
    'RunPrompt',
    'chosen_model',
    'reduce',
    'RouterSession',
    'DashboardRow',
]

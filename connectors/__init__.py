from .base import BackendConnector, LLMConnector, ConnectorError, InvocationError, RunCancelled
from .clock import SystemClock
from .simulated import SimulatedConnector

__all__ = [
    'BackendConnector',
    'LLMConnector',
    'ConnectorError',
    'InvocationError',
    'RunCancelled',
    'SystemClock',
    'SimulatedConnector',
]

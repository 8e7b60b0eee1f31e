"""
Force-directed layout.
"""

from .forces import Body, Link, SimulationState, build_state, step
from .simulation import LayoutSimulator, SimulationStatus

__all__ = [
    "Body", "Link", "SimulationState", "build_state", "step",
    "LayoutSimulator", "SimulationStatus",
]

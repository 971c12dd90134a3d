"""Wheel sectors and spin sequencing."""

from .sectors import Sector, SectorLayout
from .session import SpinPhase, SpinResult, SpinStep, WheelSession

__all__ = ["Sector", "SectorLayout", "SpinPhase", "SpinResult", "SpinStep", "WheelSession"]

"""Runtime services: settings and telemetry."""

from . import telemetry
from .config import EngineSettings

__all__ = ["EngineSettings", "telemetry"]

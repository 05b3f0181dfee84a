"""Public exports for completion alarm components."""

from .config import AlarmConfig, AlarmConfigurationError
from .errors import AlarmError
from .service import AlarmService
from .tone import synthesize_chime

__all__ = [
    "AlarmConfig",
    "AlarmConfigurationError",
    "AlarmError",
    "AlarmService",
    "synthesize_chime",
]

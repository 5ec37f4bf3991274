"""
🔧 Core Module
Configuration et logging partagés par le moteur génétique
"""

__version__ = "0.1.0"

from .config import Settings, get_settings
from .logger import get_logger, get_simulation_logger, setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "get_logger",
    "get_simulation_logger",
    "setup_logging"
]

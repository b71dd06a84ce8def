"""
Configuration management for safety scoring and safer-route planning.
"""

from .safety_config import (
    SafetyConfig,
    SAFETY_CONFIG,
    get_incident_severity,
    get_incident_penalty,
    get_incident_emoji,
)
from .settings import AppSettings

__all__ = [
    'SafetyConfig',
    'SAFETY_CONFIG',
    'get_incident_severity',
    'get_incident_penalty',
    'get_incident_emoji',
    'AppSettings'
]

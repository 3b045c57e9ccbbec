"""
Configuration: pydantic models and the YAML loader.
"""

from .loader import ConfigLoader, expand_placeholders
from .settings import AppConfig

__all__ = ['ConfigLoader', 'expand_placeholders', 'AppConfig']

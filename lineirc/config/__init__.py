"""Configuration package exports."""

from .loader import load_config, load_raw
from .model import ClientConfig

__all__ = ["ClientConfig", "load_config", "load_raw"]

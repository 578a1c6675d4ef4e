"""Configuration management for the intel exchange."""

from .config import ExchangeConfig, load_config, save_config

__all__ = ['ExchangeConfig', 'load_config', 'save_config']

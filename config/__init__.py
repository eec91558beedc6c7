"""Configuration package for the mock interview service."""
from .loader import AppConfig, FlowSettings, LlmRoute, TokenBudgets, load_config, resolve_registry
from .rounds import DEFAULT_ROUNDS, RoundDefinition, RoundTable, default_round_table
from .settings import Settings, settings

__all__ = [
    "AppConfig",
    "FlowSettings",
    "LlmRoute",
    "TokenBudgets",
    "load_config",
    "resolve_registry",
    "DEFAULT_ROUNDS",
    "RoundDefinition",
    "RoundTable",
    "default_round_table",
    "Settings",
    "settings",
]

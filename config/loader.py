"""Application configuration loaded from app_config.json."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Literal

from pydantic import BaseModel, Field

from .rounds import DEFAULT_ROUNDS, RoundDefinition, RoundTable


class LlmRoute(BaseModel):
    """LLM endpoint configuration."""

    name: str
    base_url: str
    endpoint: str
    model: str
    timeout_s: float = Field(default=60.0, ge=0.1)
    temperature: float = Field(default=0.4, ge=0.0, le=2.0)
    api_key_env: str | None = None
    extra_headers: Dict[str, str] = Field(default_factory=dict)


class TokenBudgets(BaseModel):
    """Max output tokens requested per stage."""

    profile: int = Field(default=800, ge=1)
    questions: int = Field(default=700, ge=1)
    evaluation: int = Field(default=600, ge=1)
    round_summary: int = Field(default=400, ge=1)
    final_report: int = Field(default=700, ge=1)


class FlowSettings(BaseModel):
    """Interview flow configuration."""

    questions_per_round: int = Field(default=5, ge=1)
    scoring_mode: Literal["strict", "lenient"] = "strict"
    token_budgets: TokenBudgets = Field(default_factory=TokenBudgets)


class AppConfig(BaseModel):
    """Application configuration root."""

    llm_routes: Dict[str, LlmRoute]
    registry: Dict[str, str]
    rounds: List[RoundDefinition] = Field(default_factory=lambda: list(DEFAULT_ROUNDS))
    flow: FlowSettings = Field(default_factory=FlowSettings)

    def round_table(self) -> RoundTable:
        return RoundTable(self.rounds)


def load_config(path: Path) -> AppConfig:
    """Load configuration from disk."""

    data = path.read_text(encoding="utf-8")
    return AppConfig.model_validate_json(data)


def resolve_registry(cfg: AppConfig, targets: Iterable[str]) -> Dict[str, LlmRoute]:
    """Map every stage key in ``targets`` to its configured route.

    Raises:
        KeyError: If a stage has no registry entry or points at an unknown route.
    """

    resolved: Dict[str, LlmRoute] = {}
    for target in targets:
        if target not in cfg.registry:
            raise KeyError(f"Registry entry missing for '{target}'")
        route_id = cfg.registry[target]
        if route_id not in cfg.llm_routes:
            raise KeyError(f"Route '{route_id}' missing for '{target}'")
        resolved[target] = cfg.llm_routes[route_id]
    return resolved

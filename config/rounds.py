"""Static interview round table."""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


logger = logging.getLogger(__name__)


class RoundDefinition(BaseModel):  # One configured interview round
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    ordinal: int = Field(ge=1)
    name: str = Field(min_length=1)
    difficulty: str = Field(min_length=1)
    pass_threshold: float = Field(ge=0.0, le=10.0)
    description: str = ""
    default_theme: str = "core fundamentals"


DEFAULT_ROUNDS: Tuple[RoundDefinition, ...] = (
    RoundDefinition(
        ordinal=1,
        name="Foundation",
        difficulty="easy",
        pass_threshold=6,
        description="Core knowledge and fundamentals of the candidate's field",
        default_theme="core fundamentals",
    ),
    RoundDefinition(
        ordinal=2,
        name="Application",
        difficulty="medium",
        pass_threshold=7,
        description="Real-world scenarios and experience-based questions",
        default_theme="real-world application",
    ),
    RoundDefinition(
        ordinal=3,
        name="Strategy",
        difficulty="hard",
        pass_threshold=8,
        description="Advanced problem-solving, leadership, and strategic thinking",
        default_theme="advanced strategy and leadership",
    ),
)


class RoundTable:
    """Read-only ordinal -> RoundDefinition lookup built once at startup.

    Ordinals must be contiguous starting at 1. Thresholds are expected to be
    non-decreasing; a violation is only logged.
    """

    def __init__(self, rounds: Iterable[RoundDefinition]) -> None:
        ordered = tuple(sorted(rounds, key=lambda item: item.ordinal))
        if not ordered:
            raise ValueError("Round table requires at least one round")
        expected = tuple(range(1, len(ordered) + 1))
        actual = tuple(item.ordinal for item in ordered)
        if actual != expected:
            raise ValueError(f"Round ordinals must be contiguous from 1, got {list(actual)}")
        for previous, current in zip(ordered, ordered[1:]):
            if current.pass_threshold < previous.pass_threshold:
                logger.warning(
                    "Round %d threshold %.1f is lower than round %d threshold %.1f",
                    current.ordinal,
                    current.pass_threshold,
                    previous.ordinal,
                    previous.pass_threshold,
                )
        self._rounds = ordered
        self._by_ordinal: Mapping[int, RoundDefinition] = MappingProxyType(
            {item.ordinal: item for item in ordered}
        )

    def get(self, ordinal: int) -> Optional[RoundDefinition]:
        return self._by_ordinal.get(ordinal)

    @property
    def last_ordinal(self) -> int:
        return self._rounds[-1].ordinal

    def is_last(self, ordinal: int) -> bool:
        return ordinal == self.last_ordinal

    def __iter__(self) -> Iterator[RoundDefinition]:
        return iter(self._rounds)

    def __len__(self) -> int:
        return len(self._rounds)

    def __contains__(self, ordinal: object) -> bool:
        return ordinal in self._by_ordinal


def default_round_table() -> RoundTable:  # Reference three-round configuration
    return RoundTable(DEFAULT_ROUNDS)


__all__ = ["DEFAULT_ROUNDS", "RoundDefinition", "RoundTable", "default_round_table"]

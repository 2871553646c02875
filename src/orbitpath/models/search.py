import math
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class SearchState:
    g: float = 0.0
    h: float = 0.0
    predecessor: Optional[str] = None
    expanded: bool = False

    @property
    def f(self) -> float:
        return self.g + self.h


@dataclass(frozen=True)
class PathResult:
    found: bool
    hops: list[str] = field(default_factory=list)
    cost: float = math.inf
    expanded: int = 0

    @classmethod
    def not_found(cls, expanded: int = 0) -> "PathResult":
        return cls(found=False, hops=[], cost=math.inf, expanded=expanded)

    def format_hops(self, separator: str = ",") -> str:
        return separator.join(self.hops)

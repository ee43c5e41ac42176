"""Result variants returned by the engine's boundary operations. Expected outcomes such as an unsolvable board or a missing hint are values callers branch on, not exceptions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from types_sudoku import Grid, Hint, LogicalStep, Mask, SolveStep


class Status(str, Enum):
    OK = "ok"
    UNSOLVABLE = "unsolvable"
    NO_HINT = "no_hint"
    INVALID_SIZE = "invalid_size"
    MALFORMED_BOARD = "malformed_board"
    INVALID_BOARD = "invalid_board"
    INVALID_DIFFICULTY = "invalid_difficulty"
    BUSY = "busy"
    STOPPED = "stopped"


@dataclass
class Outcome:
    status: Status = Status.OK
    issues: list[dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is Status.OK


@dataclass
class GenerationResult(Outcome):
    solution: Optional[Grid] = None
    strategy: str = ""  # 'template', 'random' or 'pattern'


@dataclass
class CarveResult(Outcome):
    board: Optional[Grid] = None
    prefilled: Optional[Mask] = None
    removed: int = 0
    target: int = 0


@dataclass
class SolveResult(Outcome):
    solution: Optional[Grid] = None
    steps: list[SolveStep] = field(default_factory=list)


@dataclass
class StepResult(Outcome):
    step: Optional[LogicalStep] = None
    board: Optional[Grid] = None  # copy of the input with the step applied


@dataclass
class HintResult(Outcome):
    hint: Optional[Hint] = None


def rejected(status: Status, issues: list[dict[str, Any]], cls=Outcome):
    """Build an outcome of type `cls` that carries only a failure status and its issues."""
    return cls(status=status, issues=list(issues))


def status_for_issues(issues: list[dict[str, Any]]) -> Status:
    if any(i.get("type") == "invalid_size" for i in issues):
        return Status.INVALID_SIZE
    return Status.MALFORMED_BOARD

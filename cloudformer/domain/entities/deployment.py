"""
Deployment Module

Architectural Intent:
- Typed results for every stack operation so callers branch on a tag, not on
  provider error text
- DeployOutcome is the single verdict of an apply call
- OperationResult is what a create/update submission returns
- InstanceActionReport aggregates best-effort per-instance actions; one failing
  instance never hides the others
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class DeployOutcome(Enum):
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    NO_UPDATES = "NoUpdates"


class OperationResultKind(Enum):
    APPLIED = "applied"
    NO_CHANGES = "no_changes"
    REJECTED = "rejected"


@dataclass(frozen=True)
class OperationResult:
    kind: OperationResultKind
    reason: str = ""

    @staticmethod
    def applied() -> OperationResult:
        return OperationResult(OperationResultKind.APPLIED)

    @staticmethod
    def no_changes(reason: str = "") -> OperationResult:
        return OperationResult(OperationResultKind.NO_CHANGES, reason)

    @staticmethod
    def rejected(reason: str) -> OperationResult:
        return OperationResult(OperationResultKind.REJECTED, reason)

    @property
    def is_applied(self) -> bool:
        return self.kind is OperationResultKind.APPLIED


class InstanceAction(Enum):
    START = "start"
    STOP = "stop"


@dataclass(frozen=True)
class InstanceActionReport:
    action: InstanceAction
    deployed: bool = True
    successes: tuple[str, ...] = ()
    failures: tuple[tuple[str, str], ...] = ()

    @staticmethod
    def not_deployed(action: InstanceAction) -> InstanceActionReport:
        return InstanceActionReport(action=action, deployed=False)

    @property
    def ok(self) -> bool:
        return self.deployed and not self.failures

    def __str__(self) -> str:
        if not self.deployed:
            return f"{self.action.value}: stack not up"
        return (
            f"{self.action.value}: {len(self.successes)} succeeded, "
            f"{len(self.failures)} failed"
        )

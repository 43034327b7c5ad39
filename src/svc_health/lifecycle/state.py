"""Lifecycle – LifecycleState enum."""
from __future__ import annotations
from enum import Enum


class LifecycleState(str, Enum):
    CREATED = "CREATED"
    LISTENING = "LISTENING"
    SHUTTING_DOWN = "SHUTTING_DOWN"
    STOPPED = "STOPPED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (LifecycleState.STOPPED, LifecycleState.FAILED)


__all__ = ["LifecycleState"]

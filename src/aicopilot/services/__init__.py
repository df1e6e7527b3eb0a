"""Completion services: trigger gate, orchestration and the inbound entry point."""

from __future__ import annotations

from aicopilot.services.copilot import CopilotService
from aicopilot.services.orchestrator import CompletionOrchestrator
from aicopilot.services.trigger_policy import TriggerDecision, TriggerPolicy, TriggerReason

__all__ = [
    "CopilotService",
    "CompletionOrchestrator",
    "TriggerPolicy",
    "TriggerDecision",
    "TriggerReason",
]

"""
Peppa Advisory Service.

Best-effort move and pass suggestions for computer players, always backed
by the local heuristic.
"""

from src.advisory.client import (
    AdvisoryClient,
    AdvisoryDisabled,
    AdvisoryError,
    AdvisoryTimeout,
    MalformedProposal,
)
from src.advisory.outcomes import (
    Failure,
    Outcome,
    Proposal,
    Timeout,
    attempt,
    choose_move_with_advice,
    choose_pass_with_advice,
)

__all__ = [
    "AdvisoryClient",
    "AdvisoryDisabled",
    "AdvisoryError",
    "AdvisoryTimeout",
    "Failure",
    "MalformedProposal",
    "Outcome",
    "Proposal",
    "Timeout",
    "attempt",
    "choose_move_with_advice",
    "choose_pass_with_advice",
]

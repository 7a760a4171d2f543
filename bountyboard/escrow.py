"""Bounty escrow: locking task bounties and paying them out to claimers."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .models import Task

logger = logging.getLogger(__name__)

DENOM = "microSERVDR"
DEFAULT_BALANCE = "1000000"
_ESCROW_ADDRESS = "serv1escrow000000000000000000000000000000"


def escrow_address() -> str:
    """Return the fixed address that holds bounties in escrow."""
    return _ESCROW_ADDRESS


@dataclass(frozen=True)
class TokenDistribution:
    """A single token transfer between two addresses."""

    from_address: str
    to_address: str
    amount: str
    denom: str = DENOM
    tx_hash: str = ""


class Escrow:
    """Moves task bounties into escrow and releases them on completion.

    Transfers are recorded locally rather than submitted to a chain, and
    every address reports the same fixed balance.
    """

    def __init__(self, denom: str = DENOM) -> None:
        self.denom = denom

    @property
    def address(self) -> str:
        """The escrow address used for every task."""
        return escrow_address()

    def distribute_tokens(self, task: Task) -> TokenDistribution:
        """Release the task's bounty from escrow to its claimer."""
        logger.info(
            "Distributing %s %s tokens to %s for task %s",
            task.bounty,
            self.denom,
            task.claimer,
            task.id,
        )
        return TokenDistribution(
            from_address=self.address,
            to_address=task.claimer,
            amount=task.bounty,
            denom=self.denom,
        )

    def lock_task_bounty(self, task: Task) -> TokenDistribution:
        """Move the task's bounty from its creator into escrow."""
        logger.info(
            "Locking %s %s tokens from %s in escrow for task %s",
            task.bounty,
            self.denom,
            task.creator,
            task.id,
        )
        return TokenDistribution(
            from_address=task.creator,
            to_address=self.address,
            amount=task.bounty,
            denom=self.denom,
        )

    def get_token_balance(self, address: str) -> str:
        """Return the token balance of address."""
        return DEFAULT_BALANCE
"""In-memory ledger of bounty tasks, wallet addresses and administrators."""

from __future__ import annotations

import logging
from dataclasses import replace

from .address import address_from_seed
from .models import Task, TaskStatus

logger = logging.getLogger(__name__)

ADMIN_SEED = "admin-1"


class LedgerError(Exception):
    """Raised when a ledger operation is rejected."""


class Ledger:
    """Keeps tasks, generated wallet addresses and admin rights in memory.

    A fresh ledger holds a single administrator whose address is derived
    from a fixed seed, so it is the same on every start.
    """

    chain_id = "mock-chain"
    rpc_endpoint = "mock://localhost:26657"
    rest_endpoint = "mock://localhost:1317"

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._admins: set[str] = set()
        self._wallet_seeds: dict[str, str] = {}
        admin = self.generate_test_address(ADMIN_SEED)
        self._admins.add(admin)
        self._admin_address = admin
        logger.info("Created admin wallet: %s", admin)

    @property
    def admin_address(self) -> str:
        """The address of the administrator created with the ledger."""
        return self._admin_address

    def generate_test_address(self, seed: str) -> str:
        """Derive an address from seed and remember it as a known wallet."""
        address = address_from_seed(seed)
        self._wallet_seeds[address] = seed
        logger.info("Generated address from seed '%s': %s", seed, address)
        return address

    def create_task(self, task: Task) -> None:
        """Store a task; its id, title and bounty must all be set."""
        if not (task.id and task.title and task.bounty):
            raise LedgerError("invalid task parameters")
        self._tasks[task.id] = replace(task)
        logger.info("Created task: %s", task)

    def list_tasks(self) -> list[Task]:
        """Return copies of all stored tasks."""
        return [replace(task) for task in self._tasks.values()]

    def get_task(self, task_id: str) -> Task | None:
        """Return a copy of the task with this id, or None if there is none."""
        task = self._tasks.get(task_id)
        return replace(task) if task is not None else None

    def claim_task(self, task_id: str, claimer: str, proof: str) -> None:
        """Mark an open task as claimed by claimer with the given proof."""
        task = self._tasks.get(task_id)
        if task is None:
            raise LedgerError("task not found")
        if task.status != TaskStatus.OPEN.value:
            raise LedgerError("task is not open for claiming")
        self._tasks[task_id] = replace(
            task, status=TaskStatus.CLAIMED.value, claimer=claimer, proof=proof
        )
        logger.info("Task %s claimed by %s", task_id, claimer)

    def approve_task(self, task: Task, approver: str) -> None:
        """Complete a claimed task; only an administrator may approve."""
        if not self.is_admin(approver):
            raise LedgerError("only admins can approve tasks")
        existing = self._tasks.get(task.id)
        if existing is None:
            raise LedgerError("task not found")
        if existing.status != TaskStatus.CLAIMED.value:
            raise LedgerError("task must be claimed before approval")
        self._tasks[task.id] = replace(existing, status=TaskStatus.COMPLETED.value)
        logger.info("Task %s approved by admin %s", task.id, approver)

    def is_admin(self, address: str) -> bool:
        """Tell whether address holds admin rights."""
        return address in self._admins

    def validate_address(self, address: str) -> bool:
        """Tell whether address was generated by this ledger."""
        return address in self._wallet_seeds

    def list_addresses(self) -> list[str]:
        """Return every address generated so far."""
        return list(self._wallet_seeds)

    def add_admin(self, address: str, requestor: str) -> None:
        """Grant admin rights to address on behalf of an existing admin."""
        if not self.is_admin(requestor):
            raise LedgerError("only admins can add new admins")
        self._admins.add(address)

    def remove_admin(self, address: str, requestor: str) -> None:
        """Revoke admin rights from address, never leaving no admin at all."""
        if not self.is_admin(requestor):
            raise LedgerError("only admins can remove admins")
        if len(self._admins) <= 1:
            raise LedgerError("cannot remove last admin")
        self._admins.discard(address)

    def list_admins(self) -> list[str]:
        """Return every address with admin rights."""
        return list(self._admins)
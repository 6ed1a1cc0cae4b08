"""Abstract repository: the only persistence surface the lifecycle core depends on.

The repository owns no business rules: it performs point lookups, inserts,
updates and the handful of filtered list queries the core needs. Transaction
boundaries are exposed through :meth:`ContractRepository.transaction`, which is
re-entrant so that one core operation may delegate to another (``restore`` →
``record_edit``) while still committing exactly once.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date
from typing import Iterator, List, Optional

from contract_lifecycle.models import (
    ActivityLog,
    Contract,
    ContractApproval,
    ContractStatus,
    ContractTemplate,
    ContractVersion,
    User,
    UserRole,
)


class ContractRepository(ABC):

    def __init__(self):
        self._tx_depth = 0

    # ----------------------------------------------------------- transactions
    @contextmanager
    def transaction(self) -> Iterator["ContractRepository"]:
        """All-or-nothing unit of work. Nested blocks join the outermost one."""
        outermost = self._tx_depth == 0
        self._tx_depth += 1
        try:
            yield self
            if outermost:
                self._commit()
        except Exception:
            if outermost:
                self._rollback()
            raise
        finally:
            self._tx_depth -= 1

    @property
    def in_transaction(self) -> bool:
        return self._tx_depth > 0

    @abstractmethod
    def _commit(self) -> None:
        """Make every pending change durable."""

    @abstractmethod
    def _rollback(self) -> None:
        """Discard every pending change."""

    @abstractmethod
    def save(self, entity) -> None:
        """Persist changes made to an already-loaded entity."""

    # ------------------------------------------------------------------ users
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        """Case-insensitive username lookup."""

    @abstractmethod
    def add_user(self, user: User) -> User:
        """Insert a user."""

    @abstractmethod
    def list_users(self, role: Optional[UserRole] = None) -> List[User]:
        """List users, optionally filtered by role, in id order."""

    # -------------------------------------------------------------- templates
    @abstractmethod
    def get_template(self, template_id: int) -> Optional[ContractTemplate]:
        """Get template by ID."""

    @abstractmethod
    def get_template_by_name(self, name: str) -> Optional[ContractTemplate]:
        """Case-insensitive template name lookup."""

    @abstractmethod
    def add_template(self, template: ContractTemplate) -> ContractTemplate:
        """Insert a template."""

    @abstractmethod
    def list_templates(self) -> List[ContractTemplate]:
        """List templates in id order."""

    # -------------------------------------------------------------- contracts
    @abstractmethod
    def get_contract(self, contract_id: int, for_update: bool = False) -> Optional[Contract]:
        """Get contract by ID. ``for_update`` locks the row and refreshes it from storage."""

    @abstractmethod
    def add_contract(self, contract: Contract) -> Contract:
        """Insert a contract."""

    @abstractmethod
    def list_contracts(
        self,
        *,
        status: Optional[ContractStatus] = None,
        created_by: Optional[int] = None,
        query: Optional[str] = None,
    ) -> List[Contract]:
        """List contracts newest first, filtered by status, creator and/or free-text query."""

    @abstractmethod
    def list_executed_expiring_before(self, cutoff: date) -> List[Contract]:
        """Executed contracts whose expiry date is earlier than ``cutoff``."""

    # --------------------------------------------------------------- versions
    @abstractmethod
    def add_version(self, version: ContractVersion) -> ContractVersion:
        """Insert a version snapshot."""

    @abstractmethod
    def get_version(self, version_id: int) -> Optional[ContractVersion]:
        """Get version by ID."""

    @abstractmethod
    def list_versions(self, contract_id: int) -> List[ContractVersion]:
        """Versions of a contract, newest first."""

    # -------------------------------------------------------------- approvals
    @abstractmethod
    def add_approval(self, approval: ContractApproval) -> ContractApproval:
        """Insert an approval request."""

    @abstractmethod
    def get_approval(self, approval_id: int, for_update: bool = False) -> Optional[ContractApproval]:
        """Get approval by ID."""

    @abstractmethod
    def list_approvals(
        self,
        contract_id: int,
        approval_round: Optional[int] = None,
        fresh: bool = False,
    ) -> List[ContractApproval]:
        """Approval rows of a contract (optionally one round). ``fresh`` bypasses any cache."""

    @abstractmethod
    def list_open_approvals_for_approver(self, approver_id: int) -> List[ContractApproval]:
        """Every Pending row of ``approver_id``, newest request first."""

    # --------------------------------------------------------------- activity
    @abstractmethod
    def add_activity(self, entry: ActivityLog) -> ActivityLog:
        """Append an activity entry."""

    @abstractmethod
    def list_recent_activity(self, limit: int) -> List[ActivityLog]:
        """Most recent entries, timestamp descending, ties by insertion order descending."""

    @abstractmethod
    def list_activity_by_contract(self, contract_id: int) -> List[ActivityLog]:
        """Entries of a contract, same ordering as :meth:`list_recent_activity`."""

    @abstractmethod
    def list_activity_by_user(self, user_id: int) -> List[ActivityLog]:
        """Entries of a user, same ordering as :meth:`list_recent_activity`."""

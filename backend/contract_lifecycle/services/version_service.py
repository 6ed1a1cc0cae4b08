"""계약 본문 버전 이력(수정 전 스냅샷) 저장/조회/복원 기능을 제공하는 도메인 서비스입니다."""

import logging
from typing import Callable, List, Optional

from contract_lifecycle.exceptions import NotFoundError
from contract_lifecycle.models import Contract, ContractVersion
from contract_lifecycle.repositories.base import ContractRepository
from contract_lifecycle.services import transition_rules
from contract_lifecycle.services.actor import Actor
from contract_lifecycle.utils.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

RecordEdit = Callable[[int, Actor, str, Optional[str]], Contract]


def restore_description(version: ContractVersion) -> str:
    return f"Restored from version created on {version.changed_at:%Y-%m-%d %H:%M:%S}"


class VersionTracker:
    """Undo log of contract content.

    Each row holds what the content *used to be* before an accepted edit; the
    current text always lives on the contract itself. Deciding whether an edit
    needs a snapshot belongs to the lifecycle engine, not to this class.
    """

    def __init__(
        self,
        repo: ContractRepository,
        clock: Clock | None = None,
        record_edit: RecordEdit | None = None,
    ):
        self.repo = repo
        self.clock = clock or SystemClock()
        self._record_edit = record_edit

    def snapshot(
        self,
        contract_id: int,
        actor_id: int,
        pre_edit_content: str,
        description: Optional[str] = None,
    ) -> ContractVersion:
        if self.repo.get_contract(contract_id) is None:
            raise NotFoundError("계약을 찾을 수 없습니다.")
        version = self.repo.add_version(
            ContractVersion(
                contract_id=contract_id,
                content=pre_edit_content,
                changed_by=actor_id,
                changed_at=self.clock.now(),
                change_description=description,
            )
        )
        logger.info("snapshot contract=%s version=%s by=%s", contract_id, version.version_id, actor_id)
        return version

    def list_versions(self, contract_id: int) -> List[ContractVersion]:
        if self.repo.get_contract(contract_id) is None:
            raise NotFoundError("계약을 찾을 수 없습니다.")
        return self.repo.list_versions(contract_id)

    def restore(self, contract_id: int, actor: Actor, version_id: int) -> Contract:
        if self._record_edit is None:
            raise RuntimeError("VersionTracker.restore requires a record_edit delegate")
        with self.repo.transaction():
            contract = self.repo.get_contract(contract_id)
            if contract is None:
                raise NotFoundError("계약을 찾을 수 없습니다.")
            transition_rules.ensure_can_restore(contract)
            version = self.repo.get_version(version_id)
            if version is None or version.contract_id != contract_id:
                raise NotFoundError("버전 이력을 찾을 수 없습니다.")
            return self._record_edit(contract_id, actor, version.content, restore_description(version))

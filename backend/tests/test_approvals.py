"""Approval Coordinator 검토 기록, 합의 판정, 재상신 라운드 동작을 검증합니다."""

from datetime import datetime

import pytest

from contract_lifecycle.exceptions import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from contract_lifecycle.models import ContractApproval
from contract_lifecycle.models.enums import ApprovalStatus, ContractStatus, UserRole
from contract_lifecycle.schemas.user import UserCreate
from contract_lifecycle.services import user_service
from contract_lifecycle.services.actor import Actor
from contract_lifecycle.services.approval_service import ApprovalCoordinator
from tests.conftest import TestingSession


def _rows_by_approver(repo, contract_id):
    contract = repo.get_contract(contract_id)
    return {row.approver_id: row for row in repo.list_approvals(contract_id, contract.approval_round)}


@pytest.fixture
def submitted(lifecycle, actors, draft):
    lifecycle.submit(draft.contract_id, actors["author"])
    return draft


def test_single_approval_keeps_contract_pending(lifecycle, repo, actors, submitted):
    rows = _rows_by_approver(repo, submitted.contract_id)
    lifecycle.approvals.review(rows[actors["approver1"].user_id].approval_id, actors["approver1"], "Approved")
    assert repo.get_contract(submitted.contract_id).status == ContractStatus.PENDING_APPROVAL


def test_all_approvals_approve_contract(lifecycle, repo, actors, submitted):
    rows = _rows_by_approver(repo, submitted.contract_id)
    lifecycle.approvals.review(rows[actors["approver1"].user_id].approval_id, actors["approver1"], "Approved")
    lifecycle.approvals.review(rows[actors["approver2"].user_id].approval_id, actors["approver2"], "Approved")

    assert repo.get_contract(submitted.contract_id).status == ContractStatus.APPROVED
    actions = [log.action for log in repo.list_activity_by_contract(submitted.contract_id)]
    assert actions[0] == "Approval consensus reached"
    assert actions.count("Contract approved") == 2


@pytest.mark.parametrize("first", ["approver1", "approver2"])
def test_rejection_wins_regardless_of_order(lifecycle, repo, actors, submitted, first):
    second = "approver2" if first == "approver1" else "approver1"
    rows = _rows_by_approver(repo, submitted.contract_id)
    lifecycle.approvals.review(rows[actors[first].user_id].approval_id, actors[first], "Approved")
    lifecycle.approvals.review(
        rows[actors[second].user_id].approval_id, actors[second], "Rejected", "missing clause"
    )
    assert repo.get_contract(submitted.contract_id).status == ContractStatus.REJECTED


def test_second_review_of_same_row_fails(lifecycle, repo, actors, submitted):
    row = _rows_by_approver(repo, submitted.contract_id)[actors["approver1"].user_id]
    lifecycle.approvals.review(row.approval_id, actors["approver1"], "Approved")
    with pytest.raises(InvalidStateError):
        lifecycle.approvals.review(row.approval_id, actors["approver1"], "Rejected", "changed my mind")

    row = repo.get_approval(row.approval_id)
    assert row.status == ApprovalStatus.APPROVED
    assert row.feedback is None


def test_review_guards(lifecycle, repo, actors, submitted):
    rows = _rows_by_approver(repo, submitted.contract_id)
    row = rows[actors["approver1"].user_id]
    with pytest.raises(NotFoundError):
        lifecycle.approvals.review(999, actors["approver1"], "Approved")
    with pytest.raises(ForbiddenError):
        lifecycle.approvals.review(row.approval_id, actors["approver2"], "Approved")
    with pytest.raises(ValidationError):
        lifecycle.approvals.review(row.approval_id, actors["approver1"], "Rejected", "")
    with pytest.raises(ValidationError):
        lifecycle.approvals.review(row.approval_id, actors["approver1"], "Pending")
    assert repo.get_approval(row.approval_id).status == ApprovalStatus.PENDING


def test_review_records_action_date_once(lifecycle, repo, actors, submitted, clock):
    row = _rows_by_approver(repo, submitted.contract_id)[actors["approver1"].user_id]
    clock.advance(hours=2)
    lifecycle.approvals.review(row.approval_id, actors["approver1"], "Approved", "looks good")
    row = repo.get_approval(row.approval_id)
    assert row.action_date == clock.now()
    assert row.feedback == "looks good"


def test_first_of_three_rejecting_finalizes_contract(lifecycle, repo, actors, draft, clock):
    third = user_service.register_user(
        repo, UserCreate(username="approver3@example.com", full_name="Third Approver", role=UserRole.APPROVER), clock
    )
    lifecycle.submit(draft.contract_id, actors["author"])
    rows = _rows_by_approver(repo, draft.contract_id)
    assert len(rows) == 3

    lifecycle.approvals.review(rows[actors["approver1"].user_id].approval_id, actors["approver1"], "Rejected", "no")
    assert repo.get_contract(draft.contract_id).status == ContractStatus.REJECTED

    rows = _rows_by_approver(repo, draft.contract_id)
    assert rows[actors["approver2"].user_id].status == ApprovalStatus.PENDING
    assert rows[third.user_id].status == ApprovalStatus.PENDING
    assert rows[third.user_id].action_date is None

    with pytest.raises(InvalidStateError):
        lifecycle.approvals.review(rows[third.user_id].approval_id, Actor.from_user(third), "Approved")
    assert repo.get_contract(draft.contract_id).status == ContractStatus.REJECTED


def test_close_pending_on_finalize_option(repo, clock, actors, draft, lifecycle):
    coordinator = ApprovalCoordinator(repo, clock, lifecycle.activity, close_pending_on_finalize=True)
    lifecycle.approvals = coordinator
    lifecycle.submit(draft.contract_id, actors["author"])
    rows = _rows_by_approver(repo, draft.contract_id)

    coordinator.review(rows[actors["approver1"].user_id].approval_id, actors["approver1"], "Rejected", "no")

    closed = repo.get_approval(rows[actors["approver2"].user_id].approval_id)
    assert closed.status == ApprovalStatus.CANCELLED
    assert closed.action_date == clock.now()


def test_reject_and_resubmit_scenario(lifecycle, repo, actors, draft):
    lifecycle.submit(draft.contract_id, actors["author"])
    first_round = _rows_by_approver(repo, draft.contract_id)
    assert len(first_round) == 2
    assert repo.get_contract(draft.contract_id).status == ContractStatus.PENDING_APPROVAL

    lifecycle.approvals.review(first_round[actors["approver1"].user_id].approval_id, actors["approver1"], "Approved")
    assert repo.get_contract(draft.contract_id).status == ContractStatus.PENDING_APPROVAL

    lifecycle.approvals.review(
        first_round[actors["approver2"].user_id].approval_id, actors["approver2"], "Rejected", "missing clause"
    )
    assert repo.get_contract(draft.contract_id).status == ContractStatus.REJECTED
    assert repo.get_approval(first_round[actors["approver1"].user_id].approval_id).status == ApprovalStatus.APPROVED

    lifecycle.record_edit(draft.contract_id, actors["author"], "v2 with clause", "add missing clause")
    lifecycle.submit(draft.contract_id, actors["author"])

    contract = repo.get_contract(draft.contract_id)
    assert contract.status == ContractStatus.PENDING_APPROVAL
    assert contract.approval_round == 2
    all_rows = repo.list_approvals(draft.contract_id)
    assert len(all_rows) == 4
    second_round = _rows_by_approver(repo, draft.contract_id)
    assert all(r.status == ApprovalStatus.PENDING for r in second_round.values())

    # 이전 라운드의 반려 행은 새 라운드 합의에 영향을 주지 않는다.
    lifecycle.approvals.review(second_round[actors["approver1"].user_id].approval_id, actors["approver1"], "Approved")
    assert repo.get_contract(draft.contract_id).status == ContractStatus.PENDING_APPROVAL
    lifecycle.approvals.review(second_round[actors["approver2"].user_id].approval_id, actors["approver2"], "Approved")
    assert repo.get_contract(draft.contract_id).status == ContractStatus.APPROVED


def test_list_pending_for_approver_includes_roster(lifecycle, repo, actors, submitted):
    rows = _rows_by_approver(repo, submitted.contract_id)
    lifecycle.approvals.review(rows[actors["approver1"].user_id].approval_id, actors["approver1"], "Approved")

    assert lifecycle.approvals.list_pending_for_approver(actors["approver1"].user_id) == []
    pending = lifecycle.approvals.list_pending_for_approver(actors["approver2"].user_id)
    assert len(pending) == 1
    item = pending[0]
    assert item.contract.contract_id == submitted.contract_id
    assert item.approval.approver_id == actors["approver2"].user_id
    assert sorted(r.status.value for r in item.roster) == ["Approved", "Pending"]


def test_pending_list_keeps_rows_left_open_by_rejection(lifecycle, repo, actors, submitted):
    rows = _rows_by_approver(repo, submitted.contract_id)
    lifecycle.approvals.review(rows[actors["approver1"].user_id].approval_id, actors["approver1"], "Rejected", "no")

    pending = lifecycle.approvals.list_pending_for_approver(actors["approver2"].user_id)
    assert len(pending) == 1
    assert pending[0].contract.status == ContractStatus.REJECTED
    assert pending[0].approval.status == ApprovalStatus.PENDING
    with pytest.raises(InvalidStateError):
        lifecycle.approvals.review(pending[0].approval.approval_id, actors["approver2"], "Approved")


def test_pending_list_is_empty_once_open_rows_are_cancelled(repo, clock, actors, draft, lifecycle):
    lifecycle.approvals = ApprovalCoordinator(repo, clock, lifecycle.activity, close_pending_on_finalize=True)
    lifecycle.submit(draft.contract_id, actors["author"])
    rows = _rows_by_approver(repo, draft.contract_id)
    lifecycle.approvals.review(rows[actors["approver1"].user_id].approval_id, actors["approver1"], "Rejected", "no")

    assert lifecycle.approvals.list_pending_for_approver(actors["approver2"].user_id) == []


def test_pending_list_prefers_current_round_after_resubmit(lifecycle, repo, actors, submitted):
    rows = _rows_by_approver(repo, submitted.contract_id)
    lifecycle.approvals.review(rows[actors["approver1"].user_id].approval_id, actors["approver1"], "Rejected", "no")
    lifecycle.submit(submitted.contract_id, actors["author"])

    pending = lifecycle.approvals.list_pending_for_approver(actors["approver2"].user_id)
    assert len(pending) == 1
    assert pending[0].approval.approval_round == 2
    assert {r.approval_round for r in pending[0].roster} == {2}
    assert len(pending[0].roster) == 2


def _decide_in_other_session(approval_id, status, feedback=None):
    other = TestingSession()
    try:
        row = other.get(ContractApproval, approval_id)
        row.status = status
        row.feedback = feedback
        row.action_date = datetime(2026, 3, 2, 10, 0)
        other.commit()
    finally:
        other.close()


def test_consensus_reads_rows_decided_elsewhere_approved(lifecycle, repo, actors, submitted):
    rows = _rows_by_approver(repo, submitted.contract_id)
    _decide_in_other_session(rows[actors["approver1"].user_id].approval_id, ApprovalStatus.APPROVED)
    # 이 세션의 identity map 에는 approver1 행이 아직 Pending 으로 남아 있다.
    assert rows[actors["approver1"].user_id].status == ApprovalStatus.PENDING

    lifecycle.approvals.review(rows[actors["approver2"].user_id].approval_id, actors["approver2"], "Approved")
    assert repo.get_contract(submitted.contract_id).status == ContractStatus.APPROVED


def test_consensus_reads_rows_decided_elsewhere_rejected(lifecycle, repo, actors, submitted):
    rows = _rows_by_approver(repo, submitted.contract_id)
    _decide_in_other_session(rows[actors["approver1"].user_id].approval_id, ApprovalStatus.REJECTED, "no")
    assert rows[actors["approver1"].user_id].status == ApprovalStatus.PENDING

    lifecycle.approvals.review(rows[actors["approver2"].user_id].approval_id, actors["approver2"], "Approved")
    assert repo.get_contract(submitted.contract_id).status == ContractStatus.REJECTED


def test_list_approvals_keeps_history(lifecycle, repo, actors, submitted):
    assert len(lifecycle.approvals.list_approvals(submitted.contract_id)) == 2
    with pytest.raises(NotFoundError):
        lifecycle.approvals.list_approvals(999)

"""계약 라이프사이클 코어가 호출자에게 전달하는 도메인 예외 계층입니다.

모든 예외는 단일 작업에 대해 종결적이며 코어 내부에서 재시도하지 않는다.
HTTP 계층은 ``status_code`` 를 그대로 응답 코드로 사용한다.
"""


class ContractLifecycleError(Exception):
    """Base exception for the contract lifecycle core."""

    status_code = 400
    default_detail = "요청을 처리할 수 없습니다."

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(ContractLifecycleError):
    """Raised when a referenced entity does not exist."""

    status_code = 404
    default_detail = "대상을 찾을 수 없습니다."


class ForbiddenError(ContractLifecycleError):
    """Raised when the actor lacks the role or relationship the operation needs."""

    status_code = 403
    default_detail = "권한이 없습니다."


class InvalidStateError(ContractLifecycleError):
    """Raised when the entity is not in a status the transition is legal from."""

    status_code = 409
    default_detail = "현재 상태에서는 수행할 수 없는 작업입니다."


class ValidationError(ContractLifecycleError):
    """Raised when caller-supplied data fails a business rule."""

    status_code = 422
    default_detail = "입력값이 올바르지 않습니다."


class PreconditionError(ContractLifecycleError):
    """Raised when a systemic precondition (e.g. no approvers) is unmet."""

    status_code = 400
    default_detail = "작업의 사전 조건이 충족되지 않았습니다."

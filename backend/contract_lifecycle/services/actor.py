"""코어 작업에 명시적으로 전달되는 행위자(사용자 ID + 역할)입니다."""

from dataclasses import dataclass

from contract_lifecycle.models import User, UserRole


@dataclass(frozen=True)
class Actor:
    user_id: int
    role: UserRole

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(user_id=user.user_id, role=UserRole(user.role))

    @property
    def is_approver(self) -> bool:
        return self.role == UserRole.APPROVER

    @property
    def is_author(self) -> bool:
        return self.role == UserRole.AUTHOR

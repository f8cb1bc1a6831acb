from typing import Annotated, Optional
from fastapi import Header, HTTPException

# 인증(로그인/세션)은 외부 세션 제공자가 처리하고,
# 인증된 사용자의 역할을 X-User-Role 헤더로 전달한다.
ROLES = ("ADMIN", "TEACHER", "PARENT")

RoleHeader = Annotated[Optional[str], Header(alias="X-User-Role")]


def require_roles(*allowed: str):
    """허용된 역할만 통과시키는 의존성 생성"""
    allowed_set = frozenset(allowed)

    def _check(x_user_role: RoleHeader = None) -> str:
        if not x_user_role:
            raise HTTPException(status_code=401, detail="Missing X-User-Role header")

        role = x_user_role.strip().upper()
        if role not in ROLES:
            raise HTTPException(status_code=401, detail="Unknown role")
        if role not in allowed_set:
            raise HTTPException(status_code=403, detail="Insufficient role")
        return role

    return _check


# ✅ 자주 쓰는 조합
require_admin = require_roles("ADMIN")
require_staff = require_roles("ADMIN", "TEACHER")
require_any_role = require_roles(*ROLES)

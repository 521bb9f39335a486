import logging

from fastapi import APIRouter, Depends, status

from hany_realty.core.errors import ApiError, StorageError
from hany_realty.dependencies import get_user_store
from hany_realty.schemas.user import UserLogin, UserResponse, UserSignup, UsersResponse
from hany_realty.stores.user_store import (
    DuplicateUserError,
    ReservedNicknameError,
    UserStore,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


# ---------------------------
# 회원가입
# ---------------------------
@router.post("/signup", response_model=UserResponse)
def signup(body: UserSignup, store: UserStore = Depends(get_user_store)):
    if not body.nickname or not body.password:
        raise ApiError("닉네임과 비밀번호를 모두 입력해주세요.")

    try:
        user = store.signup(body.nickname, body.phone, body.password)
    except ReservedNicknameError:
        raise ApiError("admin 닉네임은 사용할 수 없습니다.")
    except DuplicateUserError:
        raise ApiError("이미 등록된 닉네임 또는 전화번호입니다.")
    except StorageError:
        raise ApiError("회원가입 중 오류가 발생했습니다.", status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.info("New user signed up: %s", user.nickname)
    return {"ok": True, "user": user}


# ---------------------------
# 로그인 (세션/토큰 없음, 매 요청마다 확인)
# ---------------------------
@router.post("/login", response_model=UserResponse)
def login(body: UserLogin, store: UserStore = Depends(get_user_store)):
    if not body.nickname or not body.password:
        raise ApiError("닉네임과 비밀번호를 모두 입력해주세요.")

    user = store.authenticate(body.nickname, body.password)
    if user is None:
        logger.info("Login failed for %s", body.nickname)
        raise ApiError("회원 정보가 일치하지 않습니다.")
    return {"ok": True, "user": user}


@router.get("/users", response_model=UsersResponse)
def list_users(store: UserStore = Depends(get_user_store)):
    return {"ok": True, "users": store.list_users()}

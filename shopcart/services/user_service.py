from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shopcart.data.models.user import UserModel
from shopcart.domain.errors import ConflictError, InternalError, UnauthenticatedError
from shopcart.domain.schemas import UserRead
from shopcart.repos.user_repo import UserRepo
from shopcart.services.passwords import hash_password, verify_password
from shopcart.services.session_authority import SessionAuthority
from shopcart.utils.settings import SESSION_SINGLE_ACTIVE
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


class UserService:
    """
    Rejestracja, logowanie i rozwiazywanie tokenu na usera.

    single_active=True: tylko ostatnio wydany token jest wazny,
    ponowne logowanie uniewaznia poprzednie tokeny.
    """

    def __init__(
        self,
        db: Session,
        authority: SessionAuthority,
        single_active: bool | None = None,
    ):
        self.repo = UserRepo(db)
        self.authority = authority
        self.single_active = SESSION_SINGLE_ACTIVE if single_active is None else single_active

    def register(self, username: str, password: str) -> UserRead:
        if self.repo.get_by_username(username):
            raise ConflictError("Username already exists")

        user = UserModel(username=username, password_hash=hash_password(password))
        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            #rownolegla rejestracja tego samego loginu
            self.repo.rollback()
            raise ConflictError("Username already exists")
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Failed to create user: {e}")
            raise InternalError("Failed to create user") from e

        logger.info(f"User {created.id} registered")
        return UserRead.model_validate(created)

    def login(self, username: str, password: str) -> tuple[str, int]:
        user = self.repo.get_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            logger.info("Login rejected: invalid credentials")
            raise UnauthenticatedError("bad_credentials", INVALID_CREDENTIALS)

        return self.issue_session(user), user.id

    def issue_session(self, user: UserModel) -> str:
        token = self.authority.issue(user.id)
        try:
            self.repo.save_token(user, token)
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Failed to store session for user {user.id}: {e}")
            raise InternalError("Failed to start session") from e

        logger.info(f"Session issued for user {user.id}")
        return token

    def authenticate(self, token: str | None) -> int:
        try:
            user_id = self.authority.verify(token)
            user = self.repo.get_user(user_id)
            if not user:
                raise UnauthenticatedError("unknown_user")
            if self.single_active and user.token != token.strip():
                raise UnauthenticatedError("superseded")
        except UnauthenticatedError as e:
            #konkretna przyczyna tylko w logach, na zewnatrz zawsze to samo
            logger.info(f"Authentication failed: {e.reason}")
            raise UnauthenticatedError(e.reason)

        return user_id

    def get_user(self, user_id: int) -> UserRead | None:
        user = self.repo.get_user(user_id)
        return UserRead.model_validate(user) if user else None

    def list_users(self) -> list[UserRead]:
        return [UserRead.model_validate(u) for u in self.repo.list_users()]

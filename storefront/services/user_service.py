from typing import List

from sqlalchemy.orm import Session
from storefront.data.models.user import UserModel
from storefront.repos.user_repo import UserRepo
from storefront.domain.schemas import UserCreate, UserRead
from storefront.services.errors import NotFoundError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def create_user(self, payload: UserCreate) -> UserRead:
        """Public sign-up; always a customer, elevated roles are granted by an admin."""
        existing = self.repo.get_by_email(payload.email)
        if existing:
            return UserRead.model_validate(existing)

        user = UserModel(name=payload.name, email=payload.email, role="customer")
        created = self.repo.create_user(user)
        return UserRead.model_validate(created)

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserRead.model_validate(user)

    def list_users(self) -> List[UserRead]:
        return [UserRead.model_validate(u) for u in self.repo.list_users()]

    def set_role(self, user_id: int, role: str) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        user.role = role
        self.repo.commit()
        self.repo.refresh(user)
        logger.info(f"User {user_id} role set to {role}")
        return UserRead.model_validate(user)

    def ensure_admin(self, email: str, name: str) -> UserRead:
        user = self.repo.get_by_email(email)
        if not user:
            user = self.repo.create_user(UserModel(name=name, email=email, role="admin"))
            logger.info(f"Created admin {email}")
        elif user.role != "admin":
            user.role = "admin"
            self.repo.commit()
            self.repo.refresh(user)
            logger.info(f"Promoted {email} to admin")
        return UserRead.model_validate(user)

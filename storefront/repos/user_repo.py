from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session
from storefront.data.models.user import UserModel

class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.email == email)
        ).scalar_one_or_none()

    def list_users(self) -> List[UserModel]:
        return list(self.db.execute(select(UserModel).order_by(UserModel.id)).scalars())

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def commit(self):
        self.db.commit()

    def refresh(self, obj):
        self.db.refresh(obj)

# storefront/api/deps.py
from fastapi import Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.repos.user_repo import UserRepo
from storefront.services.lock_service import LockService
from storefront.services.media_client import MediaClient
from storefront.services.notification_service import NotificationService


def get_current_user(
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
) -> UserModel:
    user = UserRepo(db).get_user(user_id)
    if not user:
        raise HTTPException(status_code=401, detail="Unknown user")
    return user


def require_role(*roles: str):
    def dependency(user: UserModel = Depends(get_current_user)) -> UserModel:
        if user.role not in roles:
            raise HTTPException(
                status_code=403,
                detail=f"Access denied. {' or '.join(r.capitalize() for r in roles)} privileges required.",
            )
        return user

    return dependency


require_admin = require_role("admin")
require_catalog_editor = require_role("admin", "supplier")


#external collaborators, overridden in tests
def get_lock_service() -> LockService:
    return LockService()


def get_notification_service() -> NotificationService:
    return NotificationService()


def get_media_client() -> MediaClient:
    return MediaClient()

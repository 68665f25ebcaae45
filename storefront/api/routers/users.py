from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from storefront.api.deps import require_admin
from storefront.data.database import get_db
from storefront.services.errors import NotFoundError
from storefront.services.user_service import UserService
from storefront.domain.schemas import UserCreate, UserRead, UserRoleIn

router = APIRouter(prefix="/users", tags=["users"])

@router.post("/", response_model=UserRead, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    service = UserService(db)
    return service.create_user(payload)

@router.get("/", response_model=List[UserRead], dependencies=[Depends(require_admin)])
def list_users(db: Session = Depends(get_db)):
    return UserService(db).list_users()

@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.get_user(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.put("/{member_id}/role", response_model=UserRead, dependencies=[Depends(require_admin)])
def set_user_role(member_id: int, payload: UserRoleIn, db: Session = Depends(get_db)):
    #`user_id` is taken by the caller query param
    try:
        return UserService(db).set_role(member_id, payload.role)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

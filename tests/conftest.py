import os

# must be set before anything from storefront is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"

from datetime import timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

import storefront.data.models  # noqa: F401
from storefront.api import create_app
from storefront.api.deps import get_lock_service, get_media_client, get_notification_service
from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models import (
    ProductImageModel,
    ProductModel,
    PromotionModel,
    UserModel,
)
from storefront.services.promotion_service import today


class FakeLockService:
    def __init__(self):
        self.locks = {}
        self.released = []

    def acquire_checkout_lock(self, user_id, token, ttl):
        if user_id in self.locks:
            return False
        self.locks[user_id] = token
        return True

    def release_checkout_lock(self, user_id, token):
        self.released.append(user_id)
        if self.locks.get(user_id) == token:
            del self.locks[user_id]
            return True
        return False


class FakeNotificationService:
    def __init__(self):
        self.sent = []

    def send_order_notification(self, user_id, order_id, total):
        self.sent.append((user_id, order_id, total))


class FakeMediaClient:
    def __init__(self):
        self.uploads = []

    def upload_image(self, filename, content, content_type=None):
        self.uploads.append((filename, content, content_type))
        return f"https://media.test/kalana-furniture/{filename}"


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def lock_service():
    return FakeLockService()


@pytest.fixture
def notifier():
    return FakeNotificationService()


@pytest.fixture
def media_client():
    return FakeMediaClient()


@pytest.fixture
def client(db, lock_service, notifier, media_client):
    app = create_app()
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_notification_service] = lambda: notifier
    app.dependency_overrides[get_media_client] = lambda: media_client
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role="customer", name=None):
        counter["n"] += 1
        user = UserModel(
            name=name or f"{role} {counter['n']}",
            email=f"{role}{counter['n']}@kalana.test",
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def customer(make_user):
    return make_user("customer")


@pytest.fixture
def admin(make_user):
    return make_user("admin")


@pytest.fixture
def make_product(db):
    counter = {"n": 0}

    def _make(name="Teak Sofa", price="100.00", category="Sofas", stock=5, images=()):
        counter["n"] += 1
        product = ProductModel(
            name=name,
            sku=f"SKU-{counter['n']}",
            category=category,
            price=Decimal(price),
            stock=stock,
        )
        db.add(product)
        db.flush()
        for position, url in enumerate(images):
            db.add(ProductImageModel(product_id=product.id, image_url=url, position=position))
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def make_promotion(db):
    def _make(type="percentage", value="20", applies_to="All Products", code=None,
              is_active=True, start_offset=-1, end_offset=1, description="Sale"):
        promotion = PromotionModel(
            code=code,
            description=description,
            type=type,
            value=Decimal(str(value)),
            start_date=today() + timedelta(days=start_offset),
            end_date=today() + timedelta(days=end_offset),
            applies_to=applies_to,
            is_active=is_active,
        )
        db.add(promotion)
        db.commit()
        db.refresh(promotion)
        return promotion

    return _make

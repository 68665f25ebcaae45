from datetime import timedelta

from storefront.data.models import PromotionModel
from storefront.services.promotion_service import PromotionService, today
from storefront.tasks.promotions import deactivate_expired_promotions_task


def payload(**overrides):
    data = {
        "description": "Spring sale",
        "type": "percentage",
        "value": 15,
        "start_date": str(today() - timedelta(days=1)),
        "end_date": str(today() + timedelta(days=7)),
        "applies_to": "All Products",
        "is_active": True,
    }
    data.update(overrides)
    return data


def test_create_general_promotion(client, admin):
    resp = client.post("/promotions/", params={"user_id": admin.id}, json=payload())

    assert resp.status_code == 201
    body = resp.json()
    assert body["code"] is None
    assert body["type"] == "percentage"
    assert body["is_active"] is True


def test_general_promotion_must_be_percentage(client, admin):
    resp = client.post("/promotions/", params={"user_id": admin.id}, json=payload(type="fixed", value=10))

    assert resp.status_code == 400
    assert resp.json()["detail"] == "General discounts can only be percentage-based"


def test_code_promotion_may_be_fixed(client, admin):
    resp = client.post(
        "/promotions/",
        params={"user_id": admin.id},
        json=payload(type="fixed", value=10, code="TENOFF"),
    )

    assert resp.status_code == 201
    assert resp.json()["code"] == "TENOFF"


def test_blank_and_duplicate_codes_are_rejected(client, admin):
    blank = client.post("/promotions/", params={"user_id": admin.id}, json=payload(code="   "))
    assert blank.status_code == 400
    assert blank.json()["detail"] == "Discount code cannot be empty"

    client.post("/promotions/", params={"user_id": admin.id}, json=payload(code="WINTER"))
    dup = client.post("/promotions/", params={"user_id": admin.id}, json=payload(code="WINTER"))
    assert dup.status_code == 400
    assert dup.json()["detail"] == "Discount code already exists"


def test_payload_validation(client, admin):
    backwards = payload(start_date=str(today()), end_date=str(today() - timedelta(days=1)))
    assert client.post("/promotions/", params={"user_id": admin.id}, json=backwards).status_code == 422

    assert client.post("/promotions/", params={"user_id": admin.id}, json=payload(value=120)).status_code == 422
    assert client.post("/promotions/", params={"user_id": admin.id}, json=payload(type="bogo")).status_code == 422


def test_admin_endpoints_require_admin(client, customer, make_promotion):
    promotion = make_promotion()

    assert client.get("/promotions/", params={"user_id": customer.id}).status_code == 403
    assert client.post("/promotions/", params={"user_id": customer.id}, json=payload()).status_code == 403
    assert client.delete(f"/promotions/{promotion.id}", params={"user_id": customer.id}).status_code == 403
    assert client.get("/promotions/").status_code == 422


def test_active_list_is_public_and_filters_window(client, make_promotion):
    running = make_promotion(description="running")
    make_promotion(description="future", start_offset=2, end_offset=5)
    make_promotion(description="past", start_offset=-5, end_offset=-1)
    make_promotion(description="off", is_active=False)

    resp = client.get("/promotions/active")

    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()] == [running.id]


def test_update_toggle_delete(client, db, admin, make_promotion):
    promotion = make_promotion(value=10)

    updated = client.put(
        f"/promotions/{promotion.id}",
        params={"user_id": admin.id},
        json=payload(value=35, applies_to="Category: Beds"),
    )
    assert updated.status_code == 200
    assert float(updated.json()["value"]) == 35
    assert updated.json()["applies_to"] == "Category: Beds"

    toggled = client.put(f"/promotions/{promotion.id}/toggle", params={"user_id": admin.id})
    assert toggled.json()["is_active"] is False

    fetched = client.get(f"/promotions/{promotion.id}", params={"user_id": admin.id})
    assert fetched.json()["is_active"] is False

    deleted = client.delete(f"/promotions/{promotion.id}", params={"user_id": admin.id})
    assert deleted.status_code == 200
    assert client.get(f"/promotions/{promotion.id}", params={"user_id": admin.id}).status_code == 404


def test_update_keeps_own_code(client, admin, make_promotion):
    promotion = make_promotion(code="KEEPME", type="fixed", value=5)

    resp = client.put(
        f"/promotions/{promotion.id}",
        params={"user_id": admin.id},
        json=payload(code="KEEPME", type="fixed", value=7),
    )

    assert resp.status_code == 200


def test_missing_promotion(client, admin):
    assert client.put("/promotions/404/toggle", params={"user_id": admin.id}).status_code == 404
    assert client.put("/promotions/404", params={"user_id": admin.id}, json=payload()).status_code == 404


def test_deactivate_expired(db, make_promotion):
    expired = make_promotion(start_offset=-10, end_offset=-1)
    ends_today = make_promotion(start_offset=-10, end_offset=0)

    count = PromotionService(db).deactivate_expired()

    assert count == 1
    db.expire_all()
    assert db.get(PromotionModel, expired.id).is_active is False
    assert db.get(PromotionModel, ends_today.id).is_active is True


def test_deactivate_expired_task(db, make_promotion):
    expired = make_promotion(start_offset=-10, end_offset=-2)

    assert deactivate_expired_promotions_task() == 1

    db.expire_all()
    assert db.get(PromotionModel, expired.id).is_active is False

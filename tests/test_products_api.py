import inspect
from decimal import Decimal

from storefront.api.routers import products


def product_payload(**overrides):
    data = {
        "name": "Walnut Bed",
        "sku": "BED-100",
        "category": "Beds",
        "price": "450.00",
        "stock": 3,
        "description": "Queen size",
    }
    data.update(overrides)
    return data


def test_catalog_is_priced_with_live_promotions(client, make_product, make_promotion):
    sofa = make_product("Teak Sofa", "200.00", "Sofas", images=["https://img/a.jpg", "https://img/b.jpg"])
    chair = make_product("Oak Chair", "50.00", "Chairs")
    make_promotion(type="percentage", value=10, applies_to="Category: Sofas")

    body = client.get("/products/").json()
    by_id = {p["id"]: p for p in body}

    assert Decimal(str(by_id[sofa.id]["discountPrice"])) == Decimal("180.00")
    assert by_id[sofa.id]["discountPercentage"] == 10
    assert by_id[sofa.id]["images"] == ["https://img/a.jpg", "https://img/b.jpg"]
    assert "discountPrice" not in by_id[chair.id]
    assert isinstance(by_id[sofa.id]["price"], (int, float))
    assert isinstance(by_id[sofa.id]["discountPrice"], (int, float))


def test_products_by_category(client, make_product):
    make_product("Teak Sofa", "200.00", "Sofas")
    chair = make_product("Oak Chair", "50.00", "Chairs")

    body = client.get("/products/category/Chairs").json()

    assert [p["id"] for p in body] == [chair.id]


def test_get_single_product(client, make_product):
    chair = make_product("Oak Chair", "50.00", "Chairs")

    assert client.get(f"/products/{chair.id}").json()["name"] == "Oak Chair"
    assert client.get("/products/999").status_code == 404


def test_create_update_delete_product(client, make_user):
    supplier = make_user("supplier")

    created = client.post("/products/", params={"user_id": supplier.id}, json=product_payload())
    assert created.status_code == 201
    product_id = created.json()["id"]

    dup = client.post("/products/", params={"user_id": supplier.id}, json=product_payload())
    assert dup.status_code == 400

    updated = client.put(
        f"/products/{product_id}",
        params={"user_id": supplier.id},
        json=product_payload(price="400.00", stock=7),
    )
    assert updated.status_code == 200
    assert Decimal(str(updated.json()["price"])) == Decimal("400.00")
    assert updated.json()["stock"] == 7

    deleted = client.delete(f"/products/{product_id}", params={"user_id": supplier.id})
    assert deleted.status_code == 204
    assert client.get(f"/products/{product_id}").status_code == 404


def test_customers_cannot_edit_catalog(client, customer):
    resp = client.post("/products/", params={"user_id": customer.id}, json=product_payload())

    assert resp.status_code == 403


def test_image_upload_goes_through_media_client(client, admin, make_product, media_client):
    bed = make_product("Walnut Bed", "450.00", "Beds", images=["https://img/existing.jpg"])

    resp = client.post(
        f"/products/{bed.id}/images",
        params={"user_id": admin.id},
        files={"file": ("bed.jpg", b"\xff\xd8\xff", "image/jpeg")},
    )

    assert resp.status_code == 200
    assert resp.json()["images"] == [
        "https://img/existing.jpg",
        "https://media.test/kalana-furniture/bed.jpg",
    ]
    assert media_client.uploads == [("bed.jpg", b"\xff\xd8\xff", "image/jpeg")]


def test_empty_image_upload_is_rejected(client, admin, make_product, media_client):
    bed = make_product()

    resp = client.post(
        f"/products/{bed.id}/images",
        params={"user_id": admin.id},
        files={"file": ("bed.jpg", b"", "image/jpeg")},
    )

    assert resp.status_code == 400
    assert media_client.uploads == []


def test_image_upload_handler_runs_off_the_event_loop():
    assert not inspect.iscoroutinefunction(products.upload_image)

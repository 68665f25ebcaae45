def review(client, user, product, rating=5, comment="Solid teak, arrived on time"):
    return client.post(
        f"/products/{product.id}/reviews",
        params={"user_id": user.id},
        json={"comment": comment, "rating": rating},
    )


def test_create_and_list_reviews_newest_first(client, make_user, make_product):
    nimal = make_user(name="Nimal")
    sofa = make_product()

    first = review(client, nimal, sofa, rating=4, comment="Comfortable")
    second = review(client, nimal, sofa, rating=2, comment="Cushions flattened")

    assert first.status_code == 201
    assert first.json()["user"] == "Nimal"
    assert first.json()["product_id"] == sofa.id

    body = client.get(f"/products/{sofa.id}/reviews").json()
    assert [r["id"] for r in body] == [second.json()["id"], first.json()["id"]]
    assert [r["rating"] for r in body] == [2, 4]


def test_reviews_are_per_product(client, customer, make_product):
    sofa = make_product()
    chair = make_product("Oak Chair", "45.00", "Chairs")
    review(client, customer, sofa)

    assert client.get(f"/products/{chair.id}/reviews").json() == []


def test_review_validation(client, customer, make_product):
    sofa = make_product()

    assert review(client, customer, sofa, rating=0).status_code == 422
    assert review(client, customer, sofa, rating=6).status_code == 422
    assert review(client, customer, sofa, comment="").status_code == 422


def test_review_requires_known_user_and_product(client, customer, make_product):
    sofa = make_product()

    anonymous = client.post(f"/products/{sofa.id}/reviews", json={"comment": "Nice", "rating": 5})
    assert anonymous.status_code == 422

    unknown = client.post(
        f"/products/{sofa.id}/reviews",
        params={"user_id": 9999},
        json={"comment": "Nice", "rating": 5},
    )
    assert unknown.status_code == 401

    missing = client.post(
        "/products/999/reviews",
        params={"user_id": customer.id},
        json={"comment": "Nice", "rating": 5},
    )
    assert missing.status_code == 404
    assert client.get("/products/999/reviews").status_code == 404


def test_only_author_updates_and_deletes(client, make_user, make_product):
    author = make_user()
    other = make_user()
    sofa = make_product()
    review_id = review(client, author, sofa, rating=3).json()["id"]

    hijack = client.put(
        f"/reviews/{review_id}",
        params={"user_id": other.id},
        json={"comment": "Terrible", "rating": 1},
    )
    assert hijack.status_code == 404
    assert hijack.json()["detail"] == "Review not found or not authorized"
    assert client.delete(f"/reviews/{review_id}", params={"user_id": other.id}).status_code == 404

    updated = client.put(
        f"/reviews/{review_id}",
        params={"user_id": author.id},
        json={"comment": "Better after a month", "rating": 5},
    )
    assert updated.status_code == 200
    assert updated.json()["rating"] == 5
    assert updated.json()["comment"] == "Better after a month"

    deleted = client.delete(f"/reviews/{review_id}", params={"user_id": author.id})
    assert deleted.status_code == 200
    assert deleted.json()["message"] == "Review deleted successfully"
    assert client.get(f"/products/{sofa.id}/reviews").json() == []

from unittest.mock import patch

import pytest
from sqlmodel import select

from helpers import cart_payload, seed_coupon, seed_variant
from app.models.delivery_zone import DeliveryZone
from app.models.order import Order
from app.models.order_item import OrderItem


def commit_payload(*items, expected_total, coupon=None, pincode="560001", payment_mode="online"):
    payload = cart_payload(*items, coupon=coupon, pincode=pincode)
    payload["expectedTotal"] = expected_total
    payload["paymentMode"] = payment_mode
    return payload


def add_zone(db_session, charge=49, cod=True):
    db_session.add(DeliveryZone(pincode="560001", delivery_charge=charge, cod_available=cod))
    db_session.commit()


def test_commit_places_order_when_total_matches(client, db_session, user, auth_headers):
    add_zone(db_session)
    v = seed_variant(db_session, 1000)
    seed_coupon(db_session, "TEN", discount_type="percent", discount_value=10)

    preview = client.post(
        "/pricing/breakdown", json=cart_payload((v.id, 2), coupon="TEN", pincode="560001"), headers=auth_headers
    ).json()["breakdown"]
    assert preview["total"] == 2000 - 200 + 49

    r = client.post("/checkout/commit",
                    json=commit_payload((v.id, 2), coupon="TEN", expected_total=preview["total"]),
                    headers=auth_headers)
    assert r.status_code == 200
    data = r.json()
    assert data["breakdown"] == preview

    order = db_session.get(Order, data["orderId"])
    assert order.user_id == user.id
    assert order.total == 1849
    assert order.coupon_code == "TEN"
    assert order.status == "placed"

    items = db_session.exec(select(OrderItem).where(OrderItem.order_id == order.id)).all()
    assert [(i.variant_id, i.quantity, i.line_total) for i in items] == [(v.id, 2, 2000)]


def test_commit_rejects_stale_total(client, db_session, auth_headers):
    add_zone(db_session)
    v = seed_variant(db_session, 1000)

    r = client.post("/checkout/commit", json=commit_payload((v.id, 1), expected_total=900),
                    headers=auth_headers)
    assert r.status_code == 409
    assert r.json()["detail"]["breakdown"]["total"] == 1049
    assert db_session.exec(select(Order)).all() == []


def test_commit_rejects_after_price_change(client, db_session, auth_headers):
    add_zone(db_session)
    v = seed_variant(db_session, 1000)
    shown = client.post("/pricing/breakdown", json=cart_payload((v.id, 1), pincode="560001")).json()["breakdown"]

    v.oprice = 1200
    db_session.add(v)
    db_session.commit()

    r = client.post("/checkout/commit", json=commit_payload((v.id, 1), expected_total=shown["total"]),
                    headers=auth_headers)
    assert r.status_code == 409


def test_commit_blocks_out_of_stock(client, db_session, auth_headers):
    add_zone(db_session)
    v = seed_variant(db_session, 1000, stock=1)

    r = client.post("/checkout/commit", json=commit_payload((v.id, 2), expected_total=2049),
                    headers=auth_headers)
    assert r.status_code == 409
    assert r.json()["detail"]["variant_ids"] == [v.id]


def test_commit_cod_needs_serviceable_pincode(client, db_session, auth_headers):
    add_zone(db_session, cod=False)
    v = seed_variant(db_session, 1000)

    r = client.post("/checkout/commit",
                    json=commit_payload((v.id, 1), expected_total=1049, payment_mode="cod"),
                    headers=auth_headers)
    assert r.status_code == 400


def test_commit_counts_towards_usage_cap(client, db_session, auth_headers):
    add_zone(db_session)
    v = seed_variant(db_session, 1000)
    seed_coupon(db_session, "ONCE", discount_type="flat", discount_value=100, max_usage_per_user=1)

    first = client.post("/checkout/commit",
                        json=commit_payload((v.id, 1), coupon="ONCE", expected_total=949),
                        headers=auth_headers)
    assert first.status_code == 200

    again = client.post("/pricing/breakdown", json=cart_payload((v.id, 1), coupon="ONCE", pincode="560001"),
                        headers=auth_headers).json()["breakdown"]
    assert again["couponError"] == "usage_cap_exceeded"
    assert again["total"] == 1049


def test_commit_requires_login(client, db_session):
    v = seed_variant(db_session, 1000)
    r = client.post("/checkout/commit", json=commit_payload((v.id, 1), expected_total=1099))
    assert r.status_code == 401


def test_commit_rejects_empty_cart(client, auth_headers):
    r = client.post("/checkout/commit", json=commit_payload(expected_total=0), headers=auth_headers)
    assert r.status_code == 422


def test_failed_item_write_leaves_no_order(client, db_session, auth_headers):
    add_zone(db_session)
    v = seed_variant(db_session, 1000)

    with patch("app.services.checkout_service.OrderItem", side_effect=RuntimeError("insert failed")):
        with pytest.raises(RuntimeError):
            client.post("/checkout/commit", json=commit_payload((v.id, 1), expected_total=1049),
                        headers=auth_headers)

    assert db_session.exec(select(Order)).all() == []
    assert db_session.exec(select(OrderItem)).all() == []

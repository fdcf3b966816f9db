from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from storefront.cart.aggregate import MAX_LINE_QUANTITY, CartAggregate
from storefront.cart.line import CartLine, ItemKind
from storefront.cart.money import Money
from storefront.cart.session import load_cart, save_cart
from storefront.config import CART_SESSION_KEY


def _request(session=None):
    return SimpleNamespace(session={} if session is None else session)


def _entry(item_id, kind="product", quantity=1):
    return {"id": item_id, "kind": kind, "quantity": quantity}


def test_session_keeps_only_id_kind_quantity():
    request = _request()
    cart = CartAggregate([
        CartLine("p1", ItemKind.PRODUCT, Money("50"), 2, "Bolo de pote", "https://img.test/p1.png", "Ana"),
        CartLine("s1", ItemKind.SERVICE, Money("30"), 1, "Formatação"),
    ])
    save_cart(request, cart)
    assert request.session[CART_SESSION_KEY] == [_entry("p1", quantity=2), _entry("s1", "service")]


def test_load_cart_rebuilds_lines_from_catalog(catalog):
    request = _request({CART_SESSION_KEY: [_entry("p1", quantity=2), _entry("s1", "service")]})
    cart = load_cart(request)
    assert [line.id for line in cart.lines()] == ["p1", "s1"]
    assert cart.get("p1").display_name == "Bolo de pote"
    assert cart.get("p1").seller_name == "Ana"
    assert cart.total() == Money("130.00")


def test_load_cart_uses_current_catalog_price(catalog, monkeypatch):
    monkeypatch.setitem(catalog["products"], "p2", {**catalog["products"]["p2"], "price": "15.00"})
    cart = load_cart(_request({CART_SESSION_KEY: [_entry("p2", quantity=2)]}))
    assert cart.total() == Money("30.00")


def test_load_cart_skips_corrupt_and_unavailable_entries(catalog):
    session = {CART_SESSION_KEY: [
        _entry("p1", quantity=2),
        {"id": "x"},
        _entry("p3", kind="gift"),
        _entry("p2", quantity="abc"),
        _entry("p2", quantity=0),
        _entry("p2", quantity=MAX_LINE_QUANTITY + 1),
        _entry("p-off"),
        _entry("p-noprice"),
        _entry("p-404"),
        "garbage",
    ]}
    cart = load_cart(_request(session))
    assert [line.id for line in cart.lines()] == ["p1"]
    assert cart.total() == Money("100.00")


def test_load_cart_without_session_data_never_queries_catalog(monkeypatch):
    def should_not_be_called(ids):
        raise AssertionError("le catalogue ne devrait pas être interrogé")
    monkeypatch.setattr("storefront.catalog.repository.get_products_by_ids", should_not_be_called)
    monkeypatch.setattr("storefront.catalog.repository.get_services_by_ids", should_not_be_called)

    assert load_cart(_request()).is_empty()
    assert load_cart(_request({CART_SESSION_KEY: "not a list"})).is_empty()


def test_load_cart_catalog_down(monkeypatch):
    def boom(ids):
        raise RuntimeError("db down")
    monkeypatch.setattr("storefront.catalog.repository.get_products_by_ids", boom)
    with pytest.raises(HTTPException) as exc:
        load_cart(_request({CART_SESSION_KEY: [_entry("p1")]}))
    assert exc.value.status_code == 502


def test_save_empty_cart_removes_key():
    request = _request({CART_SESSION_KEY: [_entry("p1")]})
    save_cart(request, CartAggregate())
    assert CART_SESSION_KEY not in request.session

import random

import pytest

from storefront.cart.aggregate import MAX_LINE_QUANTITY, MAX_LINES, CartAggregate
from storefront.cart.line import CartLine, ItemKind
from storefront.cart.money import Money
from storefront.errors import CartFull, InvalidQuantity


def _line(item_id, price="10.00", qty=1, kind=ItemKind.PRODUCT):
    return CartLine(id=item_id, kind=kind, unit_price=Money(price), quantity=qty, display_name=f"item-{item_id}")


def _recomputed_total(cart):
    return Money.sum(Money(line.unit_price.amount * line.quantity) for line in cart.lines())


def test_same_id_merges_quantities():
    cart = CartAggregate()
    cart.add_item(_line("p1", qty=2))
    cart.add_item(_line("p1", qty=3))
    assert len(cart) == 1
    assert cart.get("p1").quantity == 5


def test_add_keeps_insertion_order():
    cart = CartAggregate()
    for item_id in ("b", "a", "c"):
        cart.add_item(_line(item_id))
    cart.add_item(_line("a", qty=4))
    assert [line.id for line in cart.lines()] == ["b", "a", "c"]


@pytest.mark.parametrize("qty", [0, -2])
def test_add_rejects_quantity_below_one(qty):
    cart = CartAggregate()
    with pytest.raises(InvalidQuantity):
        cart.add_item(_line("p1", qty=qty))
    assert cart.is_empty()


def test_add_does_not_alias_candidate():
    cart = CartAggregate()
    candidate = _line("p1", qty=1)
    cart.add_item(candidate)
    cart.add_item(_line("p1", qty=2))
    assert candidate.quantity == 1
    assert cart.get("p1").quantity == 3


def test_remove_absent_is_noop():
    cart = CartAggregate([_line("p1")])
    cart.remove_item("nope")
    cart.remove_item("p1")
    cart.remove_item("p1")
    assert cart.is_empty()


def test_update_quantity_zero_equals_remove():
    a = CartAggregate([_line("p1", qty=2), _line("p2", qty=1)])
    b = CartAggregate([_line("p1", qty=2), _line("p2", qty=1)])
    a.update_quantity("p1", 0)
    b.remove_item("p1")
    assert a.to_list() == b.to_list()
    assert a.total() == b.total()


def test_update_quantity_negative_removes_and_absent_is_noop():
    cart = CartAggregate([_line("p1", qty=2)])
    cart.update_quantity("ghost", 5)
    assert cart.to_list() == CartAggregate([_line("p1", qty=2)]).to_list()
    cart.update_quantity("p1", -1)
    assert "p1" not in cart


def test_update_quantity_replaces():
    cart = CartAggregate([_line("p1", qty=2)])
    cart.update_quantity("p1", 7)
    assert cart.get("p1").quantity == 7
    assert cart.item_count() == 7


def test_clear():
    cart = CartAggregate([_line("p1"), _line("p2")])
    cart.clear()
    assert cart.is_empty()
    assert cart.total() == Money.zero()
    assert cart.item_count() == 0


def test_totals_example_product_and_service():
    cart = CartAggregate()
    cart.add_item(_line("p1", price="50.00", qty=2))
    cart.add_item(_line("s1", price="30.00", qty=1, kind=ItemKind.SERVICE))
    assert cart.total() == Money("130.00")
    assert cart.item_count() == 3


@pytest.mark.parametrize("seed", range(25))
def test_totals_never_drift_under_random_mutations(seed):
    rng = random.Random(seed)
    ids = ["p1", "p2", "p3", "s1"]
    prices = {i: Money(f"{rng.randint(0, 9999) / 100:.2f}") for i in ids}
    cart = CartAggregate()
    for _ in range(60):
        op = rng.choice(["add", "remove", "update", "clear"] if rng.random() < 0.05 else ["add", "remove", "update"])
        item_id = rng.choice(ids)
        if op == "add":
            cart.add_item(CartLine(item_id, ItemKind.PRODUCT, prices[item_id], rng.randint(1, 5)))
        elif op == "remove":
            cart.remove_item(item_id)
        elif op == "update":
            cart.update_quantity(item_id, rng.randint(-2, 6))
        else:
            cart.clear()

        assert cart.total() == _recomputed_total(cart)
        assert cart.item_count() == sum(line.quantity for line in cart.lines())
        assert all(line.quantity >= 1 for line in cart.lines())
        assert cart.total() >= Money.zero()


def test_line_json_shape():
    line = CartLine("s1", ItemKind.SERVICE, Money("30"), 2, "Formatação", "img.png", "Caio")
    assert line.to_dict() == {
        "id": "s1", "kind": "service", "unit_price": "30.00", "quantity": 2,
        "display_name": "Formatação", "image_ref": "img.png", "seller_name": "Caio",
    }
    assert line.subtotal() == Money("60.00")


def test_quantity_above_max_rejected_on_add():
    cart = CartAggregate()
    with pytest.raises(InvalidQuantity):
        cart.add_item(_line("p1", qty=MAX_LINE_QUANTITY + 1))
    assert cart.is_empty()


def test_merge_beyond_max_rejected_and_line_unchanged():
    cart = CartAggregate([_line("p1", qty=MAX_LINE_QUANTITY - 1)])
    with pytest.raises(InvalidQuantity):
        cart.add_item(_line("p1", qty=2))
    assert cart.get("p1").quantity == MAX_LINE_QUANTITY - 1


def test_update_quantity_huge_value_rejected():
    cart = CartAggregate([_line("p1", price="50.00", qty=1)])
    with pytest.raises(InvalidQuantity):
        cart.update_quantity("p1", 10**26)
    assert cart.get("p1").quantity == 1
    assert cart.total() == Money("50.00")


def test_max_quantity_total_is_exact():
    cart = CartAggregate([_line("p1", price="99999.99", qty=MAX_LINE_QUANTITY)])
    assert cart.total() == Money("999899900.01")


def test_cart_full():
    cart = CartAggregate([_line(f"p{i}") for i in range(MAX_LINES)])
    with pytest.raises(CartFull):
        cart.add_item(_line("one-more"))
    # une ligne existante peut toujours être incrémentée
    cart.add_item(_line("p0", qty=2))
    assert cart.get("p0").quantity == 3
    assert len(cart) == MAX_LINES

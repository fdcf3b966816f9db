import pytest
from unittest.mock import MagicMock

import storefront.admin.repository as repo


class _Resp:
    def __init__(self, data=None, count=None):
        self.data = data
        self.count = count


def _mk_client():
    client = MagicMock()
    table = MagicMock()
    client.table.return_value = table
    return client, table


def test_count_table_rows_with_count(monkeypatch):
    client, table = _mk_client()
    table.select.return_value.execute.return_value = _Resp(count=7)
    monkeypatch.setattr("storefront.admin.repository.get_service_supabase", lambda: client)
    assert repo.count_table_rows("products") == 7
    table.select.assert_called_once_with("id", count="exact")


def test_count_table_rows_without_count_and_filters(monkeypatch):
    client, table = _mk_client()
    select = table.select.return_value
    select.gte.return_value.execute.return_value = _Resp(data=[1, 2, 3])
    monkeypatch.setattr("storefront.admin.repository.get_service_supabase", lambda: client)
    assert repo.count_table_rows("orders", [("gte", "created_at", "2026-01-01")]) == 3
    select.gte.assert_called_once_with("created_at", "2026-01-01")


def test_count_table_rows_exception(monkeypatch):
    monkeypatch.setattr("storefront.admin.repository.get_service_supabase", lambda: (_ for _ in ()).throw(Exception("boom")))
    assert repo.count_table_rows("orders") == 0


def test_list_products_limit(monkeypatch):
    client, table = _mk_client()
    chain = table.select.return_value.order.return_value.limit
    chain.return_value.execute.return_value = _Resp(data=[{"id": "p1"}])
    monkeypatch.setattr("storefront.admin.repository.get_service_supabase", lambda: client)
    assert repo.list_products(limit=5) == [{"id": "p1"}]
    chain.assert_called_once_with(5)


def test_upsert_insert_and_update(monkeypatch):
    client, table = _mk_client()
    table.insert.return_value.execute.return_value = _Resp(data=[{"id": "p1", "name": "Bolo"}])
    table.update.return_value.eq.return_value.execute.return_value = _Resp(data=[{"id": "p1", "name": "Bolo 2"}])
    monkeypatch.setattr("storefront.admin.repository.get_service_supabase", lambda: client)

    assert repo.upsert_product({"name": "Bolo"}) == {"id": "p1", "name": "Bolo"}
    assert repo.upsert_product({"name": "Bolo 2"}, "p1") == {"id": "p1", "name": "Bolo 2"}
    table.update.return_value.eq.assert_called_once_with("id", "p1")


def test_upsert_update_without_match_returns_none(monkeypatch):
    client, table = _mk_client()
    table.update.return_value.eq.return_value.execute.return_value = _Resp(data=[])
    monkeypatch.setattr("storefront.admin.repository.get_service_supabase", lambda: client)
    assert repo.upsert_service({"name": "x"}, "s-404") is None


def test_upsert_insert_without_returned_row(monkeypatch):
    client, table = _mk_client()
    table.insert.return_value.execute.return_value = _Resp(data=None)
    monkeypatch.setattr("storefront.admin.repository.get_service_supabase", lambda: client)
    assert repo.upsert_service({"name": "x"}) == {"status": "ok"}


def test_delete_error_propagates(monkeypatch):
    client, table = _mk_client()
    table.delete.return_value.eq.return_value.execute.side_effect = RuntimeError("fk")
    monkeypatch.setattr("storefront.admin.repository.get_service_supabase", lambda: client)
    with pytest.raises(RuntimeError):
        repo.delete_product("p1")

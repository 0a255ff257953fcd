"""
Inventory rows: creation, code-first-row updates, manual adjustment, alerts
"""
import pytest

from wms.core import InvalidInput, NotFound
from wms.models import Transaction
from wms.services import InventoryService


def add_row(db, code="P-100", location="A-1-1", stock=10, **extra):
    data = {"code": code, "name": f"Part {code}", "stock": stock, "location": location}
    data.update(extra)
    return InventoryService.create(db, data)


def test_same_code_can_live_in_several_locations(db):
    add_row(db, location="A-1-1", stock=3)
    add_row(db, location="B-2-1", stock=4)

    rows = InventoryService.get_rows_for_code(db, "P-100")
    assert [r.location for r in rows] == ["A-1-1", "B-2-1"]
    assert InventoryService.total_stock(db, "P-100") == 7


def test_negative_stock_is_rejected(db):
    with pytest.raises(InvalidInput):
        add_row(db, stock=-1)


def test_update_by_code_touches_first_row_only(db):
    first = add_row(db, location="A-1-1", stock=3)
    second = add_row(db, location="B-2-1", stock=4)

    InventoryService.update_by_code(db, "P-100", {"min_stock": 2})

    db.refresh(first)
    db.refresh(second)
    assert first.min_stock == 2
    assert second.min_stock == 0


def test_merge_inbound_adds_to_first_row(db):
    add_row(db, location="A-1-1", stock=3)

    item, created = InventoryService.merge_inbound(db, {"code": "P-100", "name": "Part", "stock": 5, "location": "C-1-1"})

    assert created is False
    assert item.stock == 8
    assert item.location == "C-1-1"
    assert len(InventoryService.get_rows_for_code(db, "P-100")) == 1


def test_merge_inbound_creates_new_code(db):
    item, created = InventoryService.merge_inbound(db, {"code": "NEW", "name": "New", "stock": 2})
    assert created is True
    assert item.stock == 2


def test_delete_removes_every_row_of_code(db):
    add_row(db, location="A-1-1")
    add_row(db, location="B-1-1")
    add_row(db, code="OTHER")

    assert InventoryService.delete(db, "P-100") is True
    assert InventoryService.get_rows_for_code(db, "P-100") == []
    assert InventoryService.get_by_code(db, "OTHER") is not None


def test_adjust_stock_records_ledger_entry(db):
    item = add_row(db, stock=10)

    result = InventoryService.adjust_stock(db, item.id, 7, "실사", user_id=1)

    assert result == {"message": "Stock adjusted successfully", "old_stock": 10, "new_stock": 7, "difference": -3}
    entry = db.query(Transaction).one()
    assert entry.type == "adjustment"
    assert entry.quantity == 3
    assert entry.reason == "재고 조정 (실사): 10 → 7"
    assert entry.to_location == "A-1-1"


def test_adjust_stock_without_change_writes_nothing(db):
    item = add_row(db, stock=10)
    InventoryService.adjust_stock(db, item.id, 10, "확인")
    assert db.query(Transaction).count() == 0


def test_adjust_stock_unknown_item(db):
    with pytest.raises(NotFound):
        InventoryService.adjust_stock(db, 999, 1, "x")


def test_alerts(db):
    add_row(db, code="OUT", stock=0, min_stock=5)
    add_row(db, code="LOW", stock=2, min_stock=5)
    add_row(db, code="OVER", stock=100, min_stock=5)
    add_row(db, code="FINE", stock=20, min_stock=5)

    alerts = {a["item_code"]: a for a in InventoryService.low_stock_alerts(db)}

    assert alerts["OUT"]["type"] == "out_of_stock"
    assert alerts["OUT"]["severity"] == "critical"
    assert alerts["LOW"]["type"] == "low_stock"
    assert alerts["LOW"]["severity"] == "high"
    assert alerts["OVER"]["type"] == "overstock"
    assert alerts["OVER"]["max_stock"] == 50
    assert "FINE" not in alerts


def test_search_filters_by_code_or_name(db):
    add_row(db, code="CAB-01", name="케이블")
    add_row(db, code="SCR-01", name="나사")

    assert [i.code for i in InventoryService.list_items(db, search="케이블")] == ["CAB-01"]
    assert [i.code for i in InventoryService.list_items(db, search="scr")] == ["SCR-01"]

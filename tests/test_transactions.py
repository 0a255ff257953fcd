"""
Transaction engine: FIFO outbound, returns, moves, adjustments, atomicity
"""
import pytest

from wms.core import InsufficientStock, SourceNotFound, InvalidInput
from wms.models import Transaction, ExchangeQueueItem
from wms.schemas.transaction import TransactionCreate
from wms.services import InventoryService, TransactionService
from wms.services.transaction_service import REASON_RETURN, REASON_EXCHANGE_OUTBOUND


def add_row(db, location, stock, code="P-100"):
    return InventoryService.create(db, {"code": code, "name": "부품", "stock": stock, "location": location})


def post(db, type, quantity, code="P-100", **extra):
    return TransactionService.post_transaction(db, TransactionCreate(
        type=type, item_code=code, item_name="부품", quantity=quantity, **extra
    ))


def stocks(db, code="P-100"):
    return {row.location: row.stock for row in InventoryService.get_rows_for_code(db, code)}


def test_outbound_drains_rows_in_insertion_order(db):
    add_row(db, "A-1-1", 10)
    add_row(db, "B-1-1", 5)

    tx = post(db, "outbound", 12)

    assert stocks(db) == {"A-1-1": 0, "B-1-1": 3}
    assert tx.from_location == "A-1-1, B-1-1"


def test_outbound_skips_empty_rows(db):
    add_row(db, "A-1-1", 0)
    add_row(db, "B-1-1", 3)

    tx = post(db, "outbound", 2)

    assert tx.from_location == "B-1-1"
    assert stocks(db) == {"A-1-1": 0, "B-1-1": 1}


def test_insufficient_outbound_changes_nothing(db):
    add_row(db, "A-1-1", 2)
    add_row(db, "B-1-1", 3)

    with pytest.raises(InsufficientStock):
        post(db, "outbound", 6)

    assert stocks(db) == {"A-1-1": 2, "B-1-1": 3}
    assert db.query(Transaction).count() == 0


def test_inbound_only_records_ledger(db):
    add_row(db, "A-1-1", 2)
    tx = post(db, "inbound", 5, to_location="A-1-1")

    assert tx.id is not None
    assert stocks(db) == {"A-1-1": 2}


def test_return_goes_back_to_first_drained_location(db):
    add_row(db, "A-1-1", 2)
    add_row(db, "B-1-1", 5)
    post(db, "outbound", 4)

    tx = post(db, "outbound", 3, reason=REASON_RETURN)

    assert tx.to_location == "A-1-1"
    assert stocks(db) == {"A-1-1": 3, "B-1-1": 3}


def test_return_recreates_deleted_row(db):
    add_row(db, "A-1-1", 4)
    post(db, "outbound", 4)
    InventoryService.delete(db, "P-100")

    post(db, "outbound", 2, reason=REASON_RETURN)

    assert stocks(db) == {"A-1-1": 2}


def test_return_without_any_location_is_rejected(db):
    with pytest.raises(InvalidInput):
        post(db, "outbound", 1, reason=REASON_RETURN)
    assert db.query(Transaction).count() == 0


def test_partial_move_splits_row(db):
    add_row(db, "A-1-1", 10)

    post(db, "move", 4, from_location="A-1-1", to_location="C-2-1")

    assert stocks(db) == {"A-1-1": 6, "C-2-1": 4}


def test_move_into_existing_row_merges(db):
    add_row(db, "A-1-1", 10)
    add_row(db, "C-2-1", 1)

    post(db, "move", 4, from_location="A-1-1", to_location="C-2-1")

    assert stocks(db) == {"A-1-1": 6, "C-2-1": 5}


def test_whole_row_move_relocates_row(db):
    row = add_row(db, "A-1-1", 5)
    row_id = row.id

    post(db, "move", 5, from_location="A-1-1", to_location="D-1-3")

    db.refresh(row)
    assert (row.id, row.location, row.stock) == (row_id, "D-1-3", 5)
    assert len(InventoryService.get_rows_for_code(db, "P-100")) == 1


def test_move_without_enough_source_stock(db):
    add_row(db, "A-1-1", 3)

    with pytest.raises(SourceNotFound):
        post(db, "move", 4, from_location="A-1-1", to_location="B-1-1")

    assert stocks(db) == {"A-1-1": 3}
    assert db.query(Transaction).count() == 0


def test_adjustment_sets_absolute_stock_of_first_row(db):
    add_row(db, "A-1-1", 3)
    add_row(db, "B-1-1", 9)

    post(db, "adjustment", 7)

    assert stocks(db) == {"A-1-1": 7, "B-1-1": 9}


def test_exchange_outbound_enqueues_entry(db):
    add_row(db, "A-1-1", 5)

    post(db, "outbound", 2, reason=REASON_EXCHANGE_OUTBOUND)

    entry = db.query(ExchangeQueueItem).one()
    assert entry.item_code == "P-100"
    assert entry.quantity == 2
    assert entry.processed is False


def test_failed_exchange_outbound_leaves_no_queue_entry(db):
    add_row(db, "A-1-1", 1)

    with pytest.raises(InsufficientStock):
        post(db, "outbound", 2, reason=REASON_EXCHANGE_OUTBOUND)

    assert db.query(ExchangeQueueItem).count() == 0


def test_ledger_is_listed_newest_first(db):
    add_row(db, "A-1-1", 10)
    first = post(db, "outbound", 1)
    second = post(db, "outbound", 1)

    listed = TransactionService.list_transactions(db, item_code="P-100")

    assert [t.id for t in listed] == [second.id, first.id]

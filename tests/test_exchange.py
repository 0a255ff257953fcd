"""
Defective-item exchange: replacement stock returns to the drained locations
"""
from wms.models import Transaction
from wms.schemas.transaction import TransactionCreate
from wms.services import ExchangeService, InventoryService, TransactionService
from wms.services.transaction_service import REASON_EXCHANGE_OUTBOUND, REASON_EXCHANGE_INBOUND


def exchange_outbound(db, quantity, code="P-200"):
    return TransactionService.post_transaction(db, TransactionCreate(
        type="outbound", item_code=code, item_name="모터", quantity=quantity, reason=REASON_EXCHANGE_OUTBOUND
    ))


def stocks(db, code="P-200"):
    return {row.location: row.stock for row in InventoryService.get_rows_for_code(db, code)}


def test_split_quantity_gives_remainder_to_first_locations():
    assert ExchangeService.split_quantity(7, ["A", "B", "C"]) == [("A", 3), ("B", 2), ("C", 2)]
    assert ExchangeService.split_quantity(1, ["A", "B"]) == [("A", 1), ("B", 0)]


def test_replacement_returns_to_source_location(db):
    InventoryService.create(db, {"code": "P-200", "name": "모터", "stock": 5, "location": "C-1-1"})
    exchange_outbound(db, 5)
    # Emptied row is cleaned up before the replacement arrives
    InventoryService.delete(db, "P-200")

    entry = ExchangeService.list_pending(db)[0]
    assert ExchangeService.process(db, entry.id, user_id=7) is True

    assert stocks(db) == {"C-1-1": 5}
    inbound = db.query(Transaction).filter(Transaction.reason == REASON_EXCHANGE_INBOUND).one()
    assert inbound.type == "inbound"
    assert inbound.quantity == 5
    assert inbound.to_location == "C-1-1"
    assert inbound.memo == f"교환대기목록 ID: {entry.id}에서 처리됨"
    assert ExchangeService.list_pending(db) == []


def test_replacement_is_split_across_drained_locations(db):
    InventoryService.create(db, {"code": "P-200", "name": "모터", "stock": 2, "location": "A-1-1"})
    InventoryService.create(db, {"code": "P-200", "name": "모터", "stock": 3, "location": "B-1-1"})
    exchange_outbound(db, 5)

    entry = ExchangeService.list_pending(db)[0]
    ExchangeService.process(db, entry.id)

    assert stocks(db) == {"A-1-1": 3, "B-1-1": 2}


def test_processing_twice_is_a_no_op(db):
    InventoryService.create(db, {"code": "P-200", "name": "모터", "stock": 4, "location": "A-1-1"})
    exchange_outbound(db, 4)
    entry = ExchangeService.list_pending(db)[0]

    assert ExchangeService.process(db, entry.id) is True
    assert ExchangeService.process(db, entry.id) is False

    assert stocks(db) == {"A-1-1": 4}
    assert db.query(Transaction).filter(Transaction.reason == REASON_EXCHANGE_INBOUND).count() == 1


def test_unknown_entry(db):
    assert ExchangeService.process(db, 12345) is False


def test_entry_without_matching_outbound_goes_to_first_row(db):
    InventoryService.create(db, {"code": "P-200", "name": "모터", "stock": 1, "location": "A-1-1"})
    entry = ExchangeService.enqueue(db, {"item_code": "P-200", "item_name": "모터", "quantity": 3})

    ExchangeService.process(db, entry.id)

    assert stocks(db) == {"A-1-1": 4}
    inbound = db.query(Transaction).filter(Transaction.reason == REASON_EXCHANGE_INBOUND).one()
    assert inbound.to_location == "위치없음"


def test_back_to_back_exchanges_return_to_their_own_locations(db):
    InventoryService.create(db, {"code": "P-200", "name": "모터", "stock": 2, "location": "A-1-1"})
    InventoryService.create(db, {"code": "P-200", "name": "모터", "stock": 2, "location": "B-1-1"})
    exchange_outbound(db, 2)
    exchange_outbound(db, 2)

    first, second = sorted(ExchangeService.list_pending(db), key=lambda e: e.id)
    assert (first.source_locations, second.source_locations) == ("A-1-1", "B-1-1")

    ExchangeService.process(db, second.id)

    inbound = db.query(Transaction).filter(Transaction.reason == REASON_EXCHANGE_INBOUND).one()
    assert inbound.to_location == "B-1-1"
    assert stocks(db) == {"A-1-1": 0, "B-1-1": 2}


def test_entry_without_source_locations_uses_time_window(db):
    InventoryService.create(db, {"code": "P-200", "name": "모터", "stock": 3, "location": "C-1-1"})
    exchange_outbound(db, 3)
    entry = ExchangeService.list_pending(db)[0]
    entry.source_locations = None
    db.commit()

    ExchangeService.process(db, entry.id)

    assert stocks(db) == {"C-1-1": 3}

"""
Per item-code locks: concurrent outbounds against a file-backed database
"""
import os
import threading

import pytest
from sqlalchemy.orm import sessionmaker

from wms.core import Base, InsufficientStock
from wms.core.database import build_engine
from wms.core.locks import ItemLockRegistry
from wms.models import InventoryItem, Transaction
from wms.schemas.transaction import TransactionCreate
from wms.services import TransactionService


@pytest.fixture
def file_sessions(tmp_path):
    """Session factory on a SQLite file so every thread gets its own connection"""
    engine = build_engine(f"sqlite:///{os.path.join(str(tmp_path), 'wms.db')}")
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    try:
        yield factory
    finally:
        engine.dispose()


def test_concurrent_outbounds_never_oversell(file_sessions):
    db = file_sessions()
    db.add_all([
        InventoryItem(code="P-1", name="부품", stock=5, location="A-1-1"),
        InventoryItem(code="P-1", name="부품", stock=5, location="B-1-1"),
    ])
    db.commit()
    db.close()

    workers = 8
    barrier = threading.Barrier(workers)
    results = []
    results_lock = threading.Lock()

    def outbound():
        session = file_sessions()
        try:
            barrier.wait()
            TransactionService.post_transaction(session, TransactionCreate(
                type="outbound", item_code="P-1", item_name="부품", quantity=2
            ))
            outcome = "ok"
        except InsufficientStock:
            outcome = "short"
        finally:
            session.close()
        with results_lock:
            results.append(outcome)

    threads = [threading.Thread(target=outbound) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert sorted(results) == ["ok"] * 5 + ["short"] * 3

    db = file_sessions()
    try:
        stocks = [row.stock for row in db.query(InventoryItem).order_by(InventoryItem.id)]
        assert stocks == [0, 0]
        assert db.query(Transaction).count() == 5
    finally:
        db.close()


def test_hold_acquires_codes_in_sorted_order():
    registry = ItemLockRegistry()
    acquired = []

    class RecordingLock:
        def __init__(self, code):
            self.code = code

        def acquire(self):
            acquired.append(self.code)

        def release(self):
            pass

    registry._locks = {code: RecordingLock(code) for code in ("a", "b", "c")}

    with registry.hold("c", "a", "b", "a"):
        pass

    assert acquired == ["a", "b", "c"]


def test_opposite_orders_do_not_deadlock():
    registry = ItemLockRegistry()
    done = []

    def worker(codes):
        for _ in range(200):
            with registry.hold(*codes):
                pass
        done.append(codes)

    threads = [
        threading.Thread(target=worker, args=(("X", "Y"),)),
        threading.Thread(target=worker, args=(("Y", "X"),)),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert len(done) == 2


def test_hold_is_reentrant_for_the_same_thread():
    registry = ItemLockRegistry()
    with registry.hold("P-1"):
        with registry.hold("P-1", "P-2"):
            entered = True
    assert entered

"""
Exchange Service - defective-item exchange queue
"""
from sqlalchemy.orm import Session
from typing import List, Optional, Dict, Any
from datetime import datetime, timedelta, timezone
import logging

from wms.core import settings, item_locks
from wms.models import ExchangeQueueItem, Transaction
from .inventory_service import InventoryService
from .transaction_service import (
    TransactionService,
    REASON_EXCHANGE_OUTBOUND,
    REASON_EXCHANGE_INBOUND,
)

logger = logging.getLogger(__name__)


class ExchangeService:
    """Outbound defective batches waiting for their replacements"""

    @staticmethod
    def enqueue(db: Session, data: Dict[str, Any], commit: bool = True) -> ExchangeQueueItem:
        entry = ExchangeQueueItem(
            item_code=data["item_code"],
            item_name=data["item_name"],
            quantity=data["quantity"],
            outbound_date=data.get("outbound_date") or datetime.now(timezone.utc),
            source_locations=data.get("source_locations"),
            processed=False
        )
        db.add(entry)
        if commit:
            db.commit()
            db.refresh(entry)
        else:
            db.flush()
        return entry

    @staticmethod
    def get_entry(db: Session, entry_id: int) -> Optional[ExchangeQueueItem]:
        return db.query(ExchangeQueueItem).filter(ExchangeQueueItem.id == entry_id).first()

    @staticmethod
    def list_pending(db: Session) -> List[ExchangeQueueItem]:
        """Unprocessed entries, newest first"""
        return db.query(ExchangeQueueItem).filter(
            ExchangeQueueItem.processed == False
        ).order_by(ExchangeQueueItem.created_at.desc(), ExchangeQueueItem.id.desc()).all()

    @staticmethod
    def find_originating_outbound(db: Session, entry: ExchangeQueueItem) -> Optional[Transaction]:
        """
        The exchange outbound of the same code closest in time to the queue entry.
        Only used for entries that carry no source locations.
        """
        window = timedelta(seconds=settings.EXCHANGE_MATCH_WINDOW_SECONDS)
        candidates = db.query(Transaction).filter(
            Transaction.item_code == entry.item_code,
            Transaction.type == "outbound",
            Transaction.reason == REASON_EXCHANGE_OUTBOUND,
            Transaction.created_at >= entry.created_at - window,
            Transaction.created_at <= entry.created_at + window
        ).order_by(Transaction.id).all()
        if not candidates:
            return None
        return min(candidates, key=lambda t: abs((t.created_at - entry.created_at).total_seconds()))

    @staticmethod
    def split_quantity(quantity: int, locations: List[str]) -> List[tuple]:
        """Even split: floor share each, remainder one by one to the first locations"""
        share, extra = divmod(quantity, len(locations))
        return [(location, share + (1 if i < extra else 0)) for i, location in enumerate(locations)]

    @staticmethod
    def process(db: Session, entry_id: int, user_id: Optional[int] = None) -> bool:
        """
        Bring the replacement stock back to where the defective units were drained from.

        Returns False when the entry does not exist or was already processed.
        """
        entry = ExchangeService.get_entry(db, entry_id)
        if not entry or entry.processed:
            return False

        with item_locks.hold(entry.item_code):
            try:
                db.refresh(entry)
                if entry.processed:
                    return False

                if entry.source_locations is not None:
                    recovered = entry.source_locations
                else:
                    outbound = ExchangeService.find_originating_outbound(db, entry)
                    recovered = outbound.from_location if outbound else None
                locations = [loc.strip() for loc in (recovered or "").split(",") if loc.strip()]
                fallback = {"name": entry.item_name}

                if locations:
                    for location, quantity in ExchangeService.split_quantity(entry.quantity, locations):
                        if quantity > 0:
                            TransactionService.add_at_location(db, entry.item_code, location, quantity, fallback)
                else:
                    first = InventoryService.get_by_code(db, entry.item_code)
                    if first:
                        first.stock += entry.quantity
                        db.flush()
                    else:
                        TransactionService.add_at_location(db, entry.item_code, None, entry.quantity, fallback)

                db.add(Transaction(
                    type="inbound",
                    item_code=entry.item_code,
                    item_name=entry.item_name,
                    quantity=entry.quantity,
                    to_location=", ".join(locations) if locations else "위치없음",
                    reason=REASON_EXCHANGE_INBOUND,
                    memo=f"교환대기목록 ID: {entry.id}에서 처리됨",
                    user_id=user_id
                ))
                entry.processed = True
                db.commit()
            except Exception:
                db.rollback()
                raise

        logger.info(f"Exchange {entry_id} processed: {entry.item_code} x{entry.quantity} -> {locations or '위치없음'}")
        return True

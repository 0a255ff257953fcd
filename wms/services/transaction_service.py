"""
Transaction Service - stock mutations behind every ledger entry
"""
from sqlalchemy.orm import Session
from typing import List, Optional, Dict, Any
import logging

from wms.core import item_locks, InsufficientStock, SourceNotFound, NotFound, InvalidInput
from wms.models import InventoryItem, Transaction
from wms.schemas.transaction import TransactionCreate
from .inventory_service import InventoryService

logger = logging.getLogger(__name__)

REASON_ASSEMBLY_MOVE = "조립장 이동"
REASON_RETURN = "출고 반환"
REASON_EXCHANGE_OUTBOUND = "불량품 교환 출고"
REASON_EXCHANGE_INBOUND = "불량품교환 새제품 입고"

CLONE_FIELDS = ("name", "category", "manufacturer", "min_stock", "unit", "box_size")


class TransactionService:
    """Transaction engine: one request -> one stock mutation + one ledger row, atomically"""

    @staticmethod
    def post_transaction(db: Session, request: TransactionCreate, user_id: Optional[int] = None) -> Transaction:
        """
        Apply the stock mutation for the request and append the ledger row.
        Nothing is written when the mutation is rejected.
        """
        values = request.model_dump()
        if user_id is not None:
            values["user_id"] = user_id

        with item_locks.hold(request.item_code):
            try:
                if request.type == "outbound":
                    TransactionService._apply_outbound(db, values)
                elif request.type == "move":
                    TransactionService._apply_move(db, values)
                elif request.type == "adjustment":
                    TransactionService._apply_adjustment(db, values)
                # inbound: the stock row is registered through the inventory form

                transaction = Transaction(**values)
                db.add(transaction)
                db.commit()
            except Exception as e:
                db.rollback()
                logger.warning(f"Rejected {request.type} for {request.item_code} x{request.quantity}: {e}")
                raise

        db.refresh(transaction)
        logger.info(
            f"Transaction {transaction.id}: {transaction.type} {transaction.item_code} "
            f"x{transaction.quantity} ({transaction.reason or '-'})"
        )
        return transaction

    # ============== Stock helpers ==============

    @staticmethod
    def deduct_fifo(db: Session, code: str, quantity: int) -> List[str]:
        """
        Drain rows of the code with stock > 0 in insertion order.
        Returns the locations touched; raises InsufficientStock before any write.
        """
        rows = InventoryService.get_rows_for_code(db, code, in_stock_only=True, for_update=True)
        available = sum(row.stock for row in rows)
        if available < quantity:
            raise InsufficientStock(f"Insufficient stock for {code}: requested {quantity}, available {available}")

        remaining = quantity
        locations = []
        for row in rows:
            if remaining <= 0:
                break
            take = min(row.stock, remaining)
            row.stock -= take
            remaining -= take
            if row.location:
                locations.append(row.location)
        db.flush()
        return locations

    @staticmethod
    def add_at_location(
        db: Session,
        code: str,
        location: Optional[str],
        quantity: int,
        fallback: Dict[str, Any]
    ) -> InventoryItem:
        """
        Add quantity to the row at code+location, creating it when absent.
        A new row copies its static fields from any row of the code, or from
        the fallback values when none is left.
        """
        target = InventoryService.get_by_code_and_location(db, code, location)
        if target:
            target.stock += quantity
            db.flush()
            return target

        template = InventoryService.get_by_code(db, code)
        if template:
            data = {field: getattr(template, field) for field in CLONE_FIELDS}
        else:
            data = {field: value for field, value in fallback.items() if field in CLONE_FIELDS and value is not None}
        data.update({"code": code, "stock": quantity, "location": location})
        return InventoryService.create(db, data, commit=False)

    # ============== Type handlers ==============

    @staticmethod
    def _apply_outbound(db: Session, values: Dict[str, Any]) -> None:
        reason = values.get("reason")
        if reason == REASON_RETURN:
            TransactionService._apply_return(db, values)
            return

        locations = TransactionService.deduct_fifo(db, values["item_code"], values["quantity"])
        values["from_location"] = ", ".join(locations) or None

        if reason == REASON_EXCHANGE_OUTBOUND:
            from .exchange_service import ExchangeService

            entry = ExchangeService.enqueue(db, {
                "item_code": values["item_code"],
                "item_name": values["item_name"],
                "quantity": values["quantity"],
                "source_locations": values["from_location"] or "",
            }, commit=False)
            logger.info(f"Exchange queue entry {entry.id} created for {values['item_code']} x{values['quantity']}")

    @staticmethod
    def _apply_return(db: Session, values: Dict[str, Any]) -> None:
        """Put returned stock back where the latest outbound took it from"""
        code = values["item_code"]
        last_outbound = db.query(Transaction).filter(
            Transaction.item_code == code,
            Transaction.type == "outbound",
            Transaction.reason.is_distinct_from(REASON_RETURN)
        ).order_by(Transaction.created_at.desc(), Transaction.id.desc()).first()

        location = None
        if last_outbound and last_outbound.from_location:
            # Multi-location deductions return to the first listed location
            location = last_outbound.from_location.split(",")[0].strip() or None
        if not location:
            location = values.get("to_location")
        if not location:
            raise InvalidInput(f"No return location for {code}")

        TransactionService.add_at_location(db, code, location, values["quantity"], {
            "name": values["item_name"],
        })
        values["to_location"] = location

    @staticmethod
    def _apply_move(db: Session, values: Dict[str, Any]) -> None:
        code = values["item_code"]
        quantity = values["quantity"]
        from_location = values.get("from_location")
        to_location = values.get("to_location")
        if not from_location or not to_location:
            raise InvalidInput("Move requires both from_location and to_location")

        source = db.query(InventoryItem).filter(
            InventoryItem.code == code,
            InventoryItem.location == from_location,
            InventoryItem.stock >= quantity
        ).order_by(InventoryItem.id).with_for_update().first()
        if not source:
            raise SourceNotFound("Source item not found or insufficient stock")

        if source.stock == quantity:
            # Whole row moves: same row, new location
            source.location = to_location
            db.flush()
            return

        source.stock -= quantity
        db.flush()
        TransactionService.add_at_location(db, code, to_location, quantity, {
            field: getattr(source, field) for field in CLONE_FIELDS
        })

    @staticmethod
    def _apply_adjustment(db: Session, values: Dict[str, Any]) -> None:
        """Ledger-post adjustment: quantity is the new absolute stock of the first row"""
        item = InventoryService.get_by_code(db, values["item_code"])
        if not item:
            raise NotFound(f"Item not found: {values['item_code']}")
        item.stock = values["quantity"]
        db.flush()

    # ============== Queries ==============

    @staticmethod
    def list_transactions(
        db: Session,
        item_code: Optional[str] = None,
        type: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Transaction]:
        """Ledger, newest first"""
        query = db.query(Transaction)
        if item_code:
            query = query.filter(Transaction.item_code == item_code)
        if type:
            query = query.filter(Transaction.type == type)
        query = query.order_by(Transaction.created_at.desc(), Transaction.id.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def get_transactions_by_item_code(db: Session, item_code: str) -> List[Transaction]:
        return TransactionService.list_transactions(db, item_code=item_code)

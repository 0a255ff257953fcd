"""
Export Service - CSV downloads of inventory, ledger and BOM
"""
from sqlalchemy.orm import Session
from typing import Optional
import csv
import io

from wms.models import InventoryItem, BomGuide
from .transaction_service import TransactionService

TRANSACTION_TYPE_LABELS = {
    "inbound": "입고",
    "outbound": "출고",
    "move": "이동",
    "adjustment": "조정",
}


def _format_time(value) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else ""


def _to_csv(header: list, rows: list) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(header)
    writer.writerows(rows)
    data = output.getvalue()
    output.close()
    return data


class ExportService:

    @staticmethod
    def inventory_csv(db: Session) -> str:
        items = db.query(InventoryItem).order_by(InventoryItem.code, InventoryItem.id).all()
        return _to_csv(
            ["제품코드", "품명", "카테고리", "제조사", "현재고", "최소재고", "단위", "위치", "박스당수량"],
            [[i.code, i.name, i.category, i.manufacturer or "", i.stock, i.min_stock, i.unit, i.location or "", i.box_size]
             for i in items]
        )

    @staticmethod
    def transactions_csv(db: Session, item_code: Optional[str] = None, type: Optional[str] = None) -> str:
        transactions = TransactionService.list_transactions(db, item_code=item_code, type=type)
        return _to_csv(
            ["일시", "유형", "제품코드", "품명", "수량", "출발위치", "도착위치", "사유", "메모", "사용자"],
            [[
                _format_time(t.created_at),
                TRANSACTION_TYPE_LABELS.get(t.type, t.type),
                t.item_code,
                t.item_name,
                t.quantity,
                t.from_location or "",
                t.to_location or "",
                t.reason or "",
                t.memo or "",
                t.user_id or "",
            ] for t in transactions]
        )

    @staticmethod
    def bom_csv(db: Session) -> str:
        guides = db.query(BomGuide).order_by(BomGuide.guide_name, BomGuide.id).all()
        return _to_csv(
            ["설치가이드명", "필요부품코드", "필요수량"],
            [[g.guide_name, g.item_code, g.required_quantity] for g in guides]
        )

"""
Shipment Repository

Per-order label ledger. Order persistence belongs to the storefront's data
store; this ledger only guarantees that an order is issued one label and
that its tracking number is never regenerated within the process.
"""

import asyncio
import logging
from typing import Dict, Optional

from .models import ShipmentLabel

logger = logging.getLogger(__name__)


class InMemoryShipmentRepository:
    """
    Process-local label ledger.

    Implements ShipmentRepositoryProtocol.
    """

    def __init__(self):
        self._labels: Dict[str, ShipmentLabel] = {}
        self._lock = asyncio.Lock()

    async def get_label(self, order_id: str) -> Optional[ShipmentLabel]:
        return self._labels.get(order_id)

    async def save_label(self, label: ShipmentLabel) -> ShipmentLabel:
        """Store a label; an order that already has one keeps it"""
        async with self._lock:
            existing = self._labels.get(label.order_id)
            if existing is not None:
                if existing.tracking_number != label.tracking_number:
                    logger.warning(
                        f"Order {label.order_id} already has label {existing.tracking_number}, "
                        f"discarding {label.tracking_number}"
                    )
                return existing
            self._labels[label.order_id] = label
            return label

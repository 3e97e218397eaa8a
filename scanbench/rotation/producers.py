"""
Turn a rotation item into a displayable history entry.

DataMatrix items are encoded on every generation (fresh serial tail) and
may carry a double-scan secondary code; every other kind shows the payload
stored on the item.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional, Sequence, Tuple

from ..encoders import encode_data_matrix, extract_gtin_as_ean13, DataMatrixResult
from ..errors import ValidationError
from ..models import BarcodeFormat, Item, ItemKind
from ..sources.proposals import recompute_payload
from .session import DoubleScanMode, HistoryEntry, SecondaryCode


logger = logging.getLogger(__name__)


class ItemProducer:
    """Builds HistoryEntry values for rotation and demo display."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        default_template_id: Optional[str] = None,
    ):
        self.rng = rng or random.Random()
        self.default_template_id = default_template_id

    def produce(
        self,
        items: Sequence[Item],
        index: int,
        double_scan: Optional[DoubleScanMode] = None,
    ) -> HistoryEntry:
        item = items[index]
        total = len(items)

        if item.kind is not ItemKind.DATAMATRIX:
            payload = item.payload or recompute_payload(item, self.rng)
            return HistoryEntry(
                payload=payload,
                source_index=index,
                total=total,
                source_value=item.source_value,
                format=item.format,
                kind=item.kind.value,
            )

        template_id = item.template_id or self.default_template_id
        following = items[(index + 1) % total]
        return self._data_matrix_entry(
            gtin=item.source_value,
            template_id=template_id,
            index=index,
            total=total,
            double_scan=double_scan,
            next_gtin=lambda: following.source_value,
        )

    def produce_demo(
        self,
        gtin: str,
        counter: int,
        total: int,
        next_gtin: Callable[[], str],
        template_id: Optional[str] = None,
        double_scan: Optional[DoubleScanMode] = None,
    ) -> HistoryEntry:
        return self._data_matrix_entry(
            gtin=gtin,
            template_id=template_id or self.default_template_id,
            index=counter,
            total=total,
            double_scan=double_scan,
            next_gtin=next_gtin,
        )

    def _data_matrix_entry(
        self,
        gtin: str,
        template_id: Optional[str],
        index: int,
        total: int,
        double_scan: Optional[DoubleScanMode],
        next_gtin: Callable[[], str],
    ) -> HistoryEntry:
        result = encode_data_matrix(gtin, template_id, self.rng)
        secondary, as_ean, primary_ean = self._pair(result, double_scan, next_gtin)
        return HistoryEntry(
            payload=result.payload,
            source_index=index,
            total=total,
            source_value=result.gtin,
            format=BarcodeFormat.DATAMATRIX,
            kind=ItemKind.DATAMATRIX.value,
            template_name=result.template_name,
            double_scan=double_scan,
            primary_display_as_ean=as_ean,
            primary_ean13=primary_ean,
            secondary=secondary,
        )

    def _pair(
        self,
        result: DataMatrixResult,
        mode: Optional[DoubleScanMode],
        next_gtin: Callable[[], str],
    ) -> Tuple[Optional[SecondaryCode], bool, Optional[str]]:
        if mode is None:
            return None, False, None

        if mode is DoubleScanMode.SAME_DM:
            return SecondaryCode(result.payload, BarcodeFormat.DATAMATRIX, result.gtin), False, None

        if mode is DoubleScanMode.DIFFERENT_DM:
            other_gtin = next_gtin()
            try:
                other = encode_data_matrix(other_gtin, result.template_id, self.rng)
            except ValidationError as exc:
                # The primary stays valid; only the pairing is dropped
                logger.warning("No second DataMatrix for %s: %s", result.gtin, exc)
                return None, False, None
            return SecondaryCode(other.payload, BarcodeFormat.DATAMATRIX, other.gtin), False, None

        ean13 = extract_gtin_as_ean13(result.payload)
        if ean13 is None:
            return None, False, None
        secondary = SecondaryCode(ean13, BarcodeFormat.EAN13, result.gtin)
        if mode is DoubleScanMode.SAME_EAN:
            return secondary, True, ean13
        return secondary, False, None

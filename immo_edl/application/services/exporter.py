"""Export services for comparisons and deduction ledgers.

Writes JSON files for archiving and builds pandas DataFrames for the
reporting layer (PDF, spreadsheets).
"""

import json
import os
from datetime import datetime
from typing import Any, Dict, Optional

import pandas as pd

from immo_edl.core.inventory_constants import CATEGORY_LABELS, KEY_TYPES, METER_UNITS
from immo_edl.core.logging import get_logger
from immo_edl.domain.models.comparison import ComparisonResult
from immo_edl.domain.models.ledger import DeductionLedger

log = get_logger(__name__)

DIFFERENCE_COLUMNS = [
    "room",
    "element",
    "category_label",
    "entry_rating",
    "exit_rating",
    "repair_cost",
    "age_months",
    "vetuste_rate",
    "tenant_share",
    "landlord_share",
]

LEDGER_COLUMNS = ["line_id", "description", "is_manual", "repair_cost", "vetuste_rate", "amount", "is_overridden"]


def differences_frame(result: ComparisonResult) -> pd.DataFrame:
    """One row per priced difference. Amounts are floats for display."""
    rows = [
        {**d.model_dump(), "category_label": CATEGORY_LABELS.get(d.category.value, d.category.value)}
        for d in result.differences
    ]
    df = pd.DataFrame(rows, columns=DIFFERENCE_COLUMNS)
    for col in ["repair_cost", "vetuste_rate", "tenant_share", "landlord_share"]:
        df[col] = df[col].astype(float)
    return df


def room_summary_frame(result: ComparisonResult) -> pd.DataFrame:
    """Tenant share and landlord share aggregated per room."""
    df = differences_frame(result)
    if df.empty:
        return pd.DataFrame(columns=["room", "tenant_share", "landlord_share"])
    return (
        df.groupby("room", sort=False)[["tenant_share", "landlord_share"]]
        .sum()
        .round(2)
        .reset_index()
    )


def ledger_frame(ledger: DeductionLedger) -> pd.DataFrame:
    rows = [line.model_dump() for line in ledger.lines]
    df = pd.DataFrame(rows, columns=LEDGER_COLUMNS)
    df["amount"] = df["amount"].astype(float)
    return df


def keys_frame(result: ComparisonResult) -> pd.DataFrame:
    """Key counts at entry and exit, with readable key labels."""
    rows = [
        {
            "key_type": k.key_type,
            "label": KEY_TYPES.get(k.key_type, k.key_type),
            "entry_quantity": k.entry_quantity,
            "exit_quantity": k.exit_quantity,
            "diff": k.diff,
        }
        for k in result.keys
    ]
    return pd.DataFrame(rows, columns=["key_type", "label", "entry_quantity", "exit_quantity", "diff"])


def meters_frame(result: ComparisonResult) -> pd.DataFrame:
    rows = [
        {
            "channel": m.channel.value,
            "entry_value": m.entry_value,
            "exit_value": m.exit_value,
            "consumption": m.consumption,
            "unit": METER_UNITS.get(m.channel.value, ""),
        }
        for m in result.meters
    ]
    return pd.DataFrame(rows, columns=["channel", "entry_value", "exit_value", "consumption", "unit"])


class ResultExporter:
    """Handles exporting of comparisons and ledgers."""

    def __init__(self, output_dir: str = "exports"):
        """Initialize exporter.

        Args:
            output_dir: Directory where files will be saved.
        """
        self.output_dir = output_dir
        self._ensure_dir()

    def _ensure_dir(self):
        if not os.path.exists(self.output_dir):
            os.makedirs(self.output_dir)
            log.info("created_output_directory", path=self.output_dir)

    def _write(self, prefix: str, body: Dict[str, Any], metadata: Optional[Dict[str, Any]]) -> str:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = os.path.join(self.output_dir, f"{prefix}_{timestamp}.json")

        payload = {
            "metadata": {
                "timestamp": datetime.now().isoformat(),
                **(metadata or {}),
            },
            **body,
        }

        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            log.error("export_failed", path=filepath, error=str(e))
            raise

        log.info("export_saved", path=filepath)
        return filepath

    def save_comparison(self, result: ComparisonResult, metadata: Optional[Dict[str, Any]] = None) -> str:
        """Save a comparison as JSON.

        Returns:
            Path to the saved file.
        """
        return self._write(
            f"comparison_{result.exit_inventory_id}",
            {"comparison": result.model_dump(mode="json")},
            metadata,
        )

    def save_ledger(self, ledger: DeductionLedger, metadata: Optional[Dict[str, Any]] = None) -> str:
        return self._write(
            f"deductions_{ledger.exit_inventory_id}",
            {"deductions": ledger.model_dump(mode="json")},
            metadata,
        )

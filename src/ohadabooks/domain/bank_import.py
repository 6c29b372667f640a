"""Bank statement CSV import."""

import csv
import logging
from pathlib import Path
from typing import Any

from ohadabooks.domain.errors import ValidationError
from ohadabooks.domain.reconciliation import import_transactions

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("date", "description", "amount")
OPTIONAL_COLUMNS = ("type", "reference")


class BankStatementImportService:
    """Service for reading bank statement CSV files into pending transactions."""

    def import_csv(self, csv_file_path: str) -> dict[str, Any]:
        """Read bank transactions from a CSV file.

        The header must contain date, description and amount columns (any
        case); type and reference are optional.

        Args:
            csv_file_path: Path to CSV file

        Returns:
            Dict with import results:
            - transactions: list of pending BankTransaction
            - errors: list of per-row error messages

        Raises:
            ValidationError: If required columns are missing
            FileNotFoundError: If CSV file doesn't exist
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        transactions = []
        errors = []

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.DictReader(f, delimiter=delimiter)
            if reader.fieldnames is None:
                raise ValidationError("CSV file has no columns")

            columns = {name.strip().lower(): name for name in reader.fieldnames}
            missing = [col for col in REQUIRED_COLUMNS if col not in columns]
            if missing:
                raise ValidationError(f"CSV file missing required columns: {', '.join(missing)}")

            for row_num, row in enumerate(reader, start=2):  # header is row 1
                values = {
                    col: (row.get(columns[col]) or "").strip()
                    for col in REQUIRED_COLUMNS + OPTIONAL_COLUMNS
                    if col in columns
                }
                try:
                    transactions.extend(import_transactions([values]))
                except ValidationError as e:
                    errors.append(f"Row {row_num}: {e}")

        logger.info(
            "Read %d bank transactions from %s (%d rejected rows)",
            len(transactions),
            csv_path.name,
            len(errors),
        )
        return {"transactions": transactions, "errors": errors}

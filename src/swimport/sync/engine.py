from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Iterable, Optional

import typer

from swimport.csvpipe.loader import UnreadableRow
from swimport.csvpipe.transform import CustomerTransformer
from swimport.csvpipe.types import CustomerRecord, RawRow
from swimport.errors import RemoteError, RemoteNotFound, SwImportError, TransformError
from .state import CREATED, FAILED, UPDATED, ImportOutcome, ImportReport

logger = logging.getLogger(__name__)


class CustomerImporter:
    """
    Reconciles source rows with the shop, one row at a time.

    Per row:
      • transform the row into a customer payload
      • look the customer up by email
      • found     → update it
      • not found → create it, then post the fake order for the new id

    `client` needs find_customer_id_by_email / create_customer /
    update_customer / create_order (see ShopwareApi).
    """

    def __init__(
        self,
        client,
        transformer: CustomerTransformer,
        fake_order: Optional[Dict[str, Any]] = None,
        group_key: Optional[str] = None,
        echo: Callable[[str], None] = typer.echo,
    ) -> None:
        self.client = client
        self.transformer = transformer
        self.fake_order = fake_order or {}
        self.group_key = group_key
        self.echo = echo

    # ---------------------------------------------------------------
    # Remote steps
    # ---------------------------------------------------------------
    def lookup(self, email: str) -> Optional[int]:
        try:
            return self.client.find_customer_id_by_email(email)
        except RemoteNotFound:
            return None

    def create_fake_order(self, customer_id: int) -> Optional[int]:
        payload = {**self.fake_order, "customerId": customer_id}
        try:
            order_id = self.client.create_order(payload)
        except RemoteError as e:
            # the customer exists at this point; a missing order must not undo that
            logger.warning("Failed to create order for customer %s: %s | order=%s", customer_id, e, payload)
            return None
        if order_id is None:
            logger.warning("Failed to create order for customer %s: %s", customer_id, payload)
        return order_id

    def import_customer(self, record: CustomerRecord, row_number: int, row: RawRow) -> ImportOutcome:
        email = record.get("email")
        if not email:
            raise TransformError("record has no email")

        customer_id = self.lookup(email)

        if customer_id is not None:
            self.echo(f"Updating customer {customer_id} {email}")
            self.client.update_customer(customer_id, record)
            return ImportOutcome(row_number, UPDATED, email=email, customer_id=customer_id, row=row)

        self.echo(f"Creating customer {email}")
        customer_id = self.client.create_customer(record)
        if customer_id is None:
            raise RemoteError(f"customer {email} created without an id in the response")

        self.echo(f"Creating fake order for customer {customer_id} {email}")
        order_id = self.create_fake_order(customer_id)
        return ImportOutcome(
            row_number, CREATED, email=email, customer_id=customer_id, order_id=order_id, row=row,
        )

    # ---------------------------------------------------------------
    # Row boundary
    # ---------------------------------------------------------------
    def process_row(self, row: RawRow, row_number: int = 0) -> ImportOutcome:
        """Import one row. Never raises for row-level problems; see ImportOutcome.status."""
        email = None
        try:
            if isinstance(row, UnreadableRow):
                raise TransformError(f"unreadable csv record near line {row.line_num}: {row.error}")
            record = self.transformer.transform(row, group_key=self.group_key)
            email = record.get("email")
            return self.import_customer(record, row_number, row)
        except Exception as e:
            logger.error(
                "Failed to import customer (row %d): %s | record=%s",
                row_number, e, row,
                exc_info=not isinstance(e, SwImportError),
            )
            return ImportOutcome(row_number, FAILED, email=email, error=str(e), row=row)

    def run(self, rows: Iterable[RawRow]) -> ImportReport:
        """Consume `rows` once, in order; row numbers start at 1 after the header."""
        report = ImportReport()
        for row_number, row in enumerate(rows, start=1):
            report.add(self.process_row(row, row_number))
        report.finish()
        return report

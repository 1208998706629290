"""Fixture provisioning for UI and integration scenarios.

UI scenarios need invoices in a given state before the page is driven. This
module creates them through the API so that scenarios never depend on how
invoices are created.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Dict, Optional, Sequence, Tuple, Union

from harness.core.config import HarnessSettings
from harness.core.errors import FixtureSetupError
from harness.core.logging import get_logger
from harness.models.invoice import InvoiceStatus
from harness.models.payment import PaymentStatus
from harness.services.api_client import BillPayClient
from harness.services.test_data import create_invoice_payload, get_successful_payment_amount

logger = get_logger(__name__)


@dataclass(frozen=True)
class InvoiceSpec:
    """Requested fixture invoice: target status and optional amount in minor units."""
    status: Union[InvoiceStatus, str]
    amount: Optional[int] = None


DEFAULT_INVOICE_SPECS: Tuple[InvoiceSpec, ...] = (
    InvoiceSpec(InvoiceStatus.UNPAID),
    InvoiceSpec(InvoiceStatus.PAID),
    InvoiceSpec(InvoiceStatus.VOID),
)

FIXTURE_KEYS = {
    InvoiceStatus.UNPAID: "unpaid_invoice_id",
    InvoiceStatus.PAID: "paid_invoice_id",
    InvoiceStatus.VOID: "void_invoice_id",
}


def fixture_key(status: Union[InvoiceStatus, str]) -> Optional[str]:
    """Logical result key for a status, or None if it cannot be provisioned."""
    try:
        return FIXTURE_KEYS.get(InvoiceStatus(status))
    except ValueError:
        return None


def _fail(message: str, strict: bool, **details) -> None:
    if strict:
        raise FixtureSetupError(message, details=details)
    logger.warning(f"Fixture setup continuing after failure: {message}")


async def setup_test_invoices(
    client: BillPayClient,
    specs: Sequence[InvoiceSpec] = DEFAULT_INVOICE_SPECS,
    *,
    strict: bool = True,
) -> Dict[str, str]:
    """Create invoices in the requested states.

    Unpaid and void invoices are created directly. Paid invoices are created
    unpaid (default amount 12555, which the mock processor accepts) and then
    paid through a payment attempt that is created and confirmed.

    Specs whose status cannot be provisioned (expired, unknown) are skipped.

    Args:
        client: API client for the target environment
        specs: Invoices to create, in order
        strict: Raise FixtureSetupError when an invoice cannot be created or a
            paid fixture is not confirmed. With strict=False failures are only
            logged and the id is still returned.

    Returns:
        Mapping of ``unpaid_invoice_id`` / ``paid_invoice_id`` /
        ``void_invoice_id`` to the created ids (later specs with the same
        status overwrite earlier ones)

    Raises:
        FixtureSetupError: In strict mode, when a fixture did not reach its state
    """
    result: Dict[str, str] = {}

    for spec in specs:
        key = fixture_key(spec.status)
        if key is None:
            logger.warning(f"Skipping fixture with unsupported status {spec.status!r}")
            continue

        status = InvoiceStatus(spec.status)
        if status is InvoiceStatus.PAID:
            amount = spec.amount if spec.amount is not None else get_successful_payment_amount()
            payload = create_invoice_payload(amount_minor=amount, status=InvoiceStatus.UNPAID.value)
        else:
            payload = create_invoice_payload(status=status.value)
            if spec.amount is not None:
                payload["amount_minor"] = spec.amount

        invoice_id = payload["id"]
        created = await client.create_invoice(payload)
        if created.status != 201:
            _fail(
                f"creating {status.value} invoice {invoice_id} returned {created.status}",
                strict,
                invoice_id=invoice_id,
                status=created.status,
            )

        if status is InvoiceStatus.PAID:
            await _pay_invoice(client, invoice_id, strict)

        result[key] = invoice_id
        logger.info(f"{key}: {invoice_id}")

    return result


async def _pay_invoice(client: BillPayClient, invoice_id: str, strict: bool) -> None:
    """Create and confirm a payment attempt for a fixture invoice."""
    payment = await client.create_payment(invoice_id)
    if payment.status != 201:
        _fail(
            f"creating payment for {invoice_id} returned {payment.status}",
            strict,
            invoice_id=invoice_id,
            status=payment.status,
        )
        return

    confirmed = await client.confirm_payment(payment.body.id)
    if not confirmed.ok or confirmed.body.status is not PaymentStatus.CONFIRMED:
        _fail(
            f"confirming payment {payment.body.id} for {invoice_id} returned {confirmed.status}",
            strict,
            invoice_id=invoice_id,
            payment_id=payment.body.id,
            status=confirmed.status,
        )


@asynccontextmanager
async def with_test_invoices(
    settings: HarnessSettings,
    specs: Sequence[InvoiceSpec] = DEFAULT_INVOICE_SPECS,
    *,
    strict: bool = True,
) -> AsyncIterator[Tuple[Dict[str, str], BillPayClient]]:
    """Provision invoices with a dedicated client and yield ``(ids, client)``.

    The client is closed on exit. Remote data is never deleted.

    Usage:
        async with with_test_invoices(settings, [InvoiceSpec(InvoiceStatus.VOID)]) as (ids, client):
            ...
    """
    async with BillPayClient.from_settings(settings) as client:
        ids = await setup_test_invoices(client, specs, strict=strict)
        yield ids, client

"""
Order notification emails sent through Resend.

Sending is fire and forget: failures are logged and never propagate to the
request that triggered them.
"""
import logging
from typing import Any, Dict, Optional

import resend

import config

logger = logging.getLogger(__name__)


def send_email(to: str, subject: str, html: str) -> bool:
    if not config.RESEND_API_KEY:
        logger.info("RESEND_API_KEY not configured, skipping email to %s", to)
        return False

    resend.api_key = config.RESEND_API_KEY
    logger.info("Attempting to send email to: %s", to)
    try:
        response = resend.Emails.send({
            "from": config.MAIL_FROM,
            "to": [to],
            "subject": subject,
            "html": html,
        })
    except Exception:
        logger.exception("Failed to send email to %s", to)
        return False

    if not isinstance(response, dict) or not response.get("id"):
        logger.error("Unexpected response from email provider: %r", response)
        return False

    logger.info("Email successfully sent to: %s", to)
    return True


def render_order_email(order: Dict[str, Any], heading: str) -> str:
    rows = "".join(
        f"<tr><td>{item['name']}</td><td>{item['quantity']}</td>"
        f"<td>BDT {float(item['price']) * int(item['quantity']):,.2f}</td></tr>"
        for item in order.get("products", [])
    )
    shipping = order.get("shipping_charge")
    shipping_row = f"<p>Shipping: BDT {shipping:,.2f}</p>" if shipping is not None else ""
    return f"""
    <div style="font-family: Arial, sans-serif; color: #333; max-width: 600px; margin: 0 auto;">
        <h2>{heading}</h2>
        <p><strong>Order:</strong> {order['id']}</p>
        <p><strong>Date:</strong> {order.get('date', '')}</p>
        <p><strong>Customer:</strong> {order.get('customer', '')} ({order.get('phone', '')})</p>
        <p><strong>Address:</strong> {order.get('address', '')}</p>
        <table width="100%" cellpadding="6">
            <tr><th align="left">Item</th><th align="left">Qty</th><th align="left">Total</th></tr>
            {rows}
        </table>
        {shipping_row}
        <p><strong>Total: BDT {order.get('amount', '')}</strong></p>
        <p>Status: {order.get('status', 'Pending')}</p>
    </div>
    """


def notify_order_placed(order: Dict[str, Any], customer_email: Optional[str] = None) -> None:
    """Email the shop admin and, when known, the customer about a new order."""
    send_email(
        config.ADMIN_NOTIFY_EMAIL,
        f"New Order #{order['id']}",
        render_order_email(order, "New order received"),
    )
    if customer_email:
        send_email(
            customer_email,
            f"Order Confirmation - #{order['id']}",
            render_order_email(order, "Thank you for your order!"),
        )

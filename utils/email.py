# utils/email.py
import logging

import requests

from config import BREVO_API_KEY, RECEIPT_SENDER_NAME, RECEIPT_SENDER_EMAIL

logger = logging.getLogger(__name__)

BREVO_URL = "https://api.brevo.com/v3/smtp/email"


class EmailDeliveryError(RuntimeError):
     """Raised when the e-mail provider rejects or cannot take a message."""


def send_receipt_email(to_email: str, receipt_number: str, amount: str, payment_date: str, balance: str):
     if not BREVO_API_KEY:
          raise EmailDeliveryError("BREVO_API_KEY is not set")

     response = requests.post(
          BREVO_URL,
          headers={
               "api-key": BREVO_API_KEY,
               "Content-Type": "application/json",
          },
          json={
               "sender": {"name": RECEIPT_SENDER_NAME, "email": RECEIPT_SENDER_EMAIL},
               "to": [{"email": to_email}],
               "subject": f"Payment Receipt {receipt_number}",
               "htmlContent": f"""
                    <h2>Payment Receipt</h2>
                    <p>Receipt number: <strong>{receipt_number}</strong></p>
                    <p>Amount paid: {amount}</p>
                    <p>Payment date: {payment_date}</p>
                    <p>Balance remaining: {balance}</p>
               """,
          },
          timeout=10,
     )
     if response.status_code not in (200, 201):
          raise EmailDeliveryError(f"Brevo error: {response.text}")
     logger.info("Receipt %s delivered to %s", receipt_number, to_email)

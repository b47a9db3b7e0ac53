"""SMTP Mailer: delivers visitor messages to profile owners.

Invariants:
    - Subject is "New mail from <sender email>"
    - From header is "<from_name> <from_email>"
    - Sender-supplied text is HTML-escaped before it goes into the HTML part
    - Any SMTP or socket failure raises ExternalServiceError (502)

Design Decisions:
    - smtplib is blocking; send() runs it in a worker thread
    - STARTTLS on the submission port (587), implicit TLS on 465
"""

import asyncio
import html
import logging
import smtplib
from email.message import EmailMessage

from einfo.core.errors import ExternalServiceError

logger = logging.getLogger(__name__)

_HTML_TEMPLATE = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <div style="background-color: #f8f9fa; padding: 20px; border-radius: 8px; margin-bottom: 20px;">
    <h2 style="color: #333; margin-top: 0;">New Mail from E-Info.me</h2>
    <p style="color: #666; font-size: 16px; margin-bottom: 0;">
      <strong>{sender}</strong> has sent you a mail:
    </p>
  </div>
  <div style="background-color: #fff; padding: 20px; border: 1px solid #ddd; border-radius: 8px; margin-bottom: 20px;">
    <p style="color: #333; font-size: 16px; line-height: 1.6; margin: 0;">{body}</p>
  </div>
  <div style="background-color: #f8f9fa; padding: 15px; border-radius: 8px; text-align: center;">
    <p style="color: #666; font-size: 14px; margin: 0;">
      This mail was sent through E-Info.me.
      <a href="{site_url}" style="color: #007bff; text-decoration: none;">Visit E-Info.me</a>
    </p>
  </div>
</div>
"""


def build_profile_message(
    sender_email: str, recipient_email: str, message: str,
    from_email: str, from_name: str, sender_name: str | None = None,
    site_url: str = "https://e-info.me",
) -> EmailMessage:
    """Compose the mail a profile owner receives from a visitor."""
    sender_label = f"{sender_name} ({sender_email})" if sender_name else sender_email
    msg = EmailMessage()
    msg["Subject"] = f"New mail from {sender_email}"
    msg["From"] = f"{from_name} <{from_email}>"
    msg["To"] = recipient_email
    msg["Reply-To"] = sender_email
    msg.set_content(
        f"{sender_label} has sent you a mail:\n\n{message}\n\n"
        "This mail was sent through E-Info.me."
    )
    msg.add_alternative(
        _HTML_TEMPLATE.format(
            sender=html.escape(sender_label),
            body=html.escape(message).replace("\n", "<br>"),
            site_url=html.escape(site_url, quote=True),
        ),
        subtype="html",
    )
    return msg


class SmtpMailer:
    """Send EmailMessage objects through one SMTP account."""

    def __init__(
        self, host: str, port: int, username: str, password: str,
        from_email: str, from_name: str, timeout: int = 30,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_email = from_email or username
        self.from_name = from_name
        self.timeout = timeout

    def _send_blocking(self, msg: EmailMessage) -> None:
        if self.port == 465:
            with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout) as server:
                server.login(self.username, self.password)
                server.send_message(msg)
            return
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            server.starttls()
            server.login(self.username, self.password)
            server.send_message(msg)

    async def send(self, msg: EmailMessage) -> None:
        try:
            await asyncio.to_thread(self._send_blocking, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP delivery to {msg['To']} failed: {e}")
            raise ExternalServiceError("smtp", "Failed to send message")
        logger.info(f"Mail delivered to {msg['To']}")

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid

from app.config import settings

logger = logging.getLogger(__name__)


def send_email(to_email: str, subject: str, message: str, html_content: str | None = None) -> str:
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = settings.FROM_EMAIL
    msg["To"] = to_email
    msg["Message-ID"] = make_msgid()
    msg.attach(MIMEText(message, "plain"))
    msg.attach(MIMEText(html_content or f"<p>{message}</p>", "html"))

    logger.info("Sending email to %s subject=%s", to_email, subject)
    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT) as server:
        server.starttls()
        if settings.SMTP_USER:
            server.login(settings.SMTP_USER, settings.SMTP_PASS)
        server.send_message(msg)

    return msg["Message-ID"]

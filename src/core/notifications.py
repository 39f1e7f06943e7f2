"""
Email notifications for note changes.

Sends run as FastAPI background tasks after the response has been sent.
A failed send is logged and dropped: it never reaches the request that
triggered it, and it is not retried.
"""
import logging
import smtplib
import ssl
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional
from fastapi import BackgroundTasks

from ..config import settings

# Set up logging
logger = logging.getLogger(__name__)

SMTP_TIMEOUT = 30  # seconds

NOTE_ADDED = "Note is Added"
NOTE_EDITED = "Note is Edited"
NOTE_DELETED = "Note is Deleted"

NOTE_MESSAGES = {
    NOTE_ADDED: "A new note is added",
    NOTE_EDITED: "A note about you was edited",
    NOTE_DELETED: "A note about you was deleted",
}

def validate_email_config() -> bool:
    """
    Validates that all required email configuration variables are set.

    Returns:
        bool: True if all required config is present, False otherwise
    """
    required_configs = [
        settings.mail_username,
        settings.mail_password,
        settings.mail_from,
        settings.mail_server
    ]

    missing_configs = [config for config in required_configs if not config]

    if missing_configs:
        logger.warning(f"Missing email configuration: {len(missing_configs)} items")
        return False

    return True

def send_note_notification(to_email: str, subject: str, body: str) -> bool:
    """
    Send a plain-text notification email.

    Args:
        to_email: Recipient address
        subject: Email subject
        body: Plain-text body

    Returns:
        bool: True if the server accepted the message
    """
    if not validate_email_config():
        logger.warning(f"Skipping '{subject}' notification: email is not configured")
        return False

    msg = MIMEMultipart()
    msg["From"] = settings.mail_from
    msg["To"] = to_email
    msg["Subject"] = subject
    msg.attach(MIMEText(body, "plain"))

    try:
        with smtplib.SMTP(settings.mail_server, settings.mail_port, timeout=SMTP_TIMEOUT) as server:
            server.ehlo()
            if settings.mail_starttls:
                server.starttls(context=ssl.create_default_context())
                server.ehlo()
            server.login(settings.mail_username, settings.mail_password)
            server.send_message(msg)
    except smtplib.SMTPAuthenticationError as e:
        logger.error(f"SMTP authentication failed for '{subject}' notification: {str(e)}")
        return False
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send '{subject}' notification: {str(e)}")
        return False

    logger.info(f"'{subject}' notification sent")
    return True

def dispatch_note_notification(
    background_tasks: BackgroundTasks,
    to_email: Optional[str],
    subject: str
) -> None:
    """
    Queue a note notification to run after the response.

    Args:
        background_tasks: Request-scoped background task list
        to_email: Recipient, or None when the patient could not be found
        subject: One of the NOTE_* subjects
    """
    if not to_email:
        logger.warning(f"Skipping '{subject}' notification: no recipient")
        return
    background_tasks.add_task(send_note_notification, to_email, subject, NOTE_MESSAGES[subject])

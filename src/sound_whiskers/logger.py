import logging
import os
from logging.handlers import RotatingFileHandler
from typing import List, Optional

import requests
import colorlog

LOG_COLORS = {
    'DEBUG': 'bold_blue',
    'INFO': 'bold_green',
    'WARNING': 'bold_yellow',
    'ERROR': 'bold_red',
    'CRITICAL': 'bold_purple'
}


def build_console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter("%(log_color)s%(levelname)s:%(name)s:%(message)s", log_colors=LOG_COLORS)
    )
    return handler


def build_file_handler(log_file: str) -> logging.Handler:
    """Rotating file handler sized by LOG_FILE_MAX_BYTES and LOG_FILE_BACKUP_COUNT."""
    max_bytes = int(os.getenv('LOG_FILE_MAX_BYTES', '10485760'))  # 10 MB
    backup_count = int(os.getenv('LOG_FILE_BACKUP_COUNT', '5'))
    handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s - (%(filename)s:%(lineno)d)'
    ))
    return handler


def build_postmark_handler() -> Optional[logging.Handler]:
    """Return an ERROR-level Postmark handler, or None when POSTMARK_* is incomplete."""
    api_token = os.getenv('POSTMARK_API_TOKEN')
    sender_email = os.getenv('POSTMARK_SENDER_EMAIL')
    receiver_emails = os.getenv('POSTMARK_RECEIVER_EMAILS')
    if not (api_token and sender_email and receiver_emails):
        return None

    handler = PostmarkHandler(
        api_token=api_token,
        sender_email=sender_email,
        receiver_emails=receiver_emails.split(','),
        subject=os.getenv('POSTMARK_ALERT_SUBJECT', 'Sound Whiskers Error Alert')
    )
    handler.setLevel(logging.ERROR)
    return handler


def setup_logging(logger: Optional[logging.Logger] = None, verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the Sound Whiskers client.

    Handlers are attached once; calling again only updates the level.

    Args:
        logger: Logger to configure (the root logger if omitted)
        verbose: Force DEBUG regardless of SOUND_WHISKERS_LOG_LEVEL

    Returns:
        The configured logger
    """
    if logger is None:
        logger = logging.getLogger()

    log_level = 'DEBUG' if verbose else os.getenv('SOUND_WHISKERS_LOG_LEVEL', 'INFO').upper()
    logger.setLevel(log_level)

    if logger.handlers:
        return logger

    logger.addHandler(build_console_handler())

    log_file = os.getenv('SOUND_WHISKERS_LOG_FILE')
    if log_file:
        logger.addHandler(build_file_handler(log_file))

    postmark_handler = build_postmark_handler()
    if postmark_handler is not None:
        logger.addHandler(postmark_handler)

    return logger


class PostmarkHandler(logging.Handler):
    """Logging handler that e-mails error records through Postmark."""

    POSTMARK_URL = 'https://api.postmarkapp.com/email'

    def __init__(self, api_token: str, sender_email: str, receiver_emails: List[str], subject: str) -> None:
        """
        Initialize the handler.

        Args:
            api_token: Postmark API token.
            sender_email: Sender email address.
            receiver_emails: List of receiver email addresses.
            subject: Subject line for the alert emails.
        """
        super().__init__()
        self.api_token = api_token
        self.sender_email = sender_email
        self.receiver_emails = [email.strip() for email in receiver_emails if email.strip()]
        self.subject = subject

    def emit(self, record: logging.LogRecord) -> None:
        payload = {
            'From': self.sender_email,
            'To': ','.join(self.receiver_emails),
            'Subject': self.subject,
            'TextBody': self.format(record)
        }
        headers = {
            'X-Postmark-Server-Token': self.api_token,
            'Content-Type': 'application/json'
        }
        try:
            response = requests.post(self.POSTMARK_URL, json=payload, headers=headers, timeout=10)
            response.raise_for_status()
        except requests.RequestException:
            self.handleError(record)

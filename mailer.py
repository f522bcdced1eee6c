"""Contact form relay: validate the submission and mail it to the site owner.

Without mail credentials the relay answers in demo mode and sends nothing.
"""
from collections.abc import Mapping
from dataclasses import dataclass
from email.errors import MessageError
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate
import logging
import smtplib

from markupsafe import escape

from errors import DispatchError, ValidationError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('name', 'email', 'subject', 'message')

THANK_YOU = 'Thank you for your message! I will get back to you soon.'


@dataclass(frozen=True)
class ContactSubmission:
    name: str
    email: str
    subject: str
    message: str

    @classmethod
    def from_mapping(cls, data):
        """Pull the four fields out of a request body, raising ValidationError if any is missing or empty."""
        if not isinstance(data, Mapping):
            raise ValidationError()
        values = {}
        for field in REQUIRED_FIELDS:
            value = data.get(field)
            if not value:
                raise ValidationError()
            values[field] = str(value)
        return cls(**values)


@dataclass(frozen=True)
class ContactResult:
    success: bool
    message: str
    demo: bool = False

    def to_dict(self):
        body = {'success': self.success, 'message': self.message}
        if self.demo:
            body['demo'] = True
        return body


def render_html(submission: ContactSubmission) -> str:
    message = '<br>'.join(str(escape(line)) for line in submission.message.split('\n'))
    return (
        '<h2>New Contact Form Submission</h2>\n'
        f'<p><strong>Name:</strong> {escape(submission.name)}</p>\n'
        f'<p><strong>Email:</strong> {escape(submission.email)}</p>\n'
        f'<p><strong>Subject:</strong> {escape(submission.subject)}</p>\n'
        '<p><strong>Message:</strong></p>\n'
        f'<p>{message}</p>\n'
    )


def one_line(value: str) -> str:
    """Fold CR/LF out of submitter text bound for a mail header."""
    return ' '.join(value.splitlines())


def compose_message(submission: ContactSubmission, config) -> MIMEMultipart:
    msg = MIMEMultipart('alternative')
    msg['From'] = config.mail_user
    msg['To'] = config.owner_mailbox
    msg['Subject'] = f"Portfolio Contact: {one_line(submission.subject)}"
    msg['Reply-To'] = one_line(submission.email)
    msg['Date'] = formatdate(localtime=True)
    msg.attach(MIMEText(render_html(submission), 'html', 'utf-8'))
    return msg


def send_via_smtp(msg, config):
    """Deliver `msg` over SMTP-over-SSL, bounded by config.mail_timeout."""
    with smtplib.SMTP_SSL(config.mail_host, config.mail_port, timeout=config.mail_timeout) as smtp:
        smtp.login(config.mail_user, config.mail_secret)
        smtp.send_message(msg)


def submit_contact(data, config, send=send_via_smtp) -> ContactResult:
    """Relay one contact form submission.

    Raises ValidationError before anything is sent if a field is missing, and
    DispatchError if the mail server fails; the server's error text is only logged.
    """
    submission = ContactSubmission.from_mapping(data)
    logger.info("📧 Contact form submission received: name=%s email=%s subject=%s",
                submission.name, submission.email, submission.subject)

    if config.demo_mode:
        logger.info("Email not configured, simulating success")
        return ContactResult(True, f"{THANK_YOU} (Demo mode)", demo=True)

    msg = compose_message(submission, config)
    try:
        send(msg, config)
    except (smtplib.SMTPException, MessageError, OSError) as e:
        logger.error("❌ Contact form error: %s", e, exc_info=True)
        raise DispatchError() from e

    logger.info("✅ Email sent successfully for: %s", submission.name)
    return ContactResult(True, THANK_YOU)

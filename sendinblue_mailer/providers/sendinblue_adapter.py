"""
Sendinblue Mail Transport Implementation

Concrete implementation of the MailTransport for the Sendinblue (Brevo)
transactional email API.
cf. https://github.com/sendinblue/APIv3-python-library/blob/master/docs/SendSmtpEmail.md
"""

import base64
import re
from typing import Any

from sib_api_v3_sdk import (
    SendSmtpEmail,
    SendSmtpEmailBcc,
    SendSmtpEmailCc,
    SendSmtpEmailReplyTo,
    SendSmtpEmailSender,
    SendSmtpEmailTo,
)

from sendinblue_mailer.providers.mail_adapter import MailMessage, MailTransport
from sendinblue_mailer import logger


TAG_PATTERN = re.compile(r'<!--.*?-->|</?[A-Za-z!][^>]*>', re.DOTALL)

MIME_LINE_LENGTH = 76

# Headers carried by dedicated fields or set by the API itself
STRUCTURED_HEADERS = frozenset([
    'from',
    'sender',
    'to',
    'cc',
    'bcc',
    'reply-to',
    'subject',
    'date',
    'message-id',
    'return-path',
])

# MIME framing, rebuilt by Sendinblue from html_content/text_content
MIME_FRAMING_HEADERS = frozenset([
    'content-type',
    'content-transfer-encoding',
    'content-disposition',
    'mime-version',
])


def strip_tags(html: str) -> str:
    """Remove every markup tag (and HTML comment), keeping the text between them."""
    return TAG_PATTERN.sub('', html)


def chunk_base64(content: bytes) -> str:
    """Base64 encode and wrap at 76 columns, each line ending in CRLF."""
    encoded = base64.b64encode(content).decode('ascii')
    return ''.join(
        encoded[i:i + MIME_LINE_LENGTH] + '\r\n'
        for i in range(0, max(len(encoded), 1), MIME_LINE_LENGTH)
    )


def is_unstructured_header(name: str) -> bool:
    lowered = name.lower()
    return lowered not in STRUCTURED_HEADERS and lowered not in MIME_FRAMING_HEADERS


def build_smtp_email(message: MailMessage) -> SendSmtpEmail:
    """
    Transform a MailMessage into Sendinblue's SendSmtpEmail.

    Args:
        message: MailMessage to translate (left untouched)

    Returns:
        SendSmtpEmail ready for TransactionalEmailsApi.send_transac_email
    """
    smtp_email = SendSmtpEmail()

    if message.sender:
        first = message.sender[0]
        smtp_email.sender = SendSmtpEmailSender(email=first.email, name=first.name)

    if message.to:
        smtp_email.to = [SendSmtpEmailTo(email=a.email, name=a.name) for a in message.to]

    if message.cc:
        smtp_email.cc = [SendSmtpEmailCc(email=a.email, name=a.name) for a in message.cc]

    if message.bcc:
        smtp_email.bcc = [SendSmtpEmailBcc(email=a.email, name=a.name) for a in message.bcc]

    # set content
    html = None
    text = None
    if message.content_type == 'text/plain':
        text = message.body
    else:
        html = message.body

    # last plain text alternative wins
    for child in message.alternatives():
        if child.content_type == 'text/plain':
            text = child.body

    if text is None:
        text = strip_tags(message.body)

    if html is not None:
        smtp_email.html_content = html
    smtp_email.text_content = text
    # end set content

    if message.subject:
        smtp_email.subject = message.subject

    if message.reply_to:
        smtp_email.reply_to = [
            SendSmtpEmailReplyTo(email=a.email, name=a.name) for a in message.reply_to
        ]

    # plain dicts: the SDK model rejects line-wrapped base64 in its setter
    attachments = [
        {'name': child.filename, 'content': chunk_base64(child.content)}
        for child in message.attachments()
    ]
    if attachments:
        smtp_email.attachment = attachments

    headers = {
        name: value
        for name, value in message.headers.items()
        if is_unstructured_header(name)
    }
    if headers:
        smtp_email.headers = headers

    return smtp_email


class SendinblueTransport(MailTransport):
    """Sendinblue implementation of the MailTransport interface."""

    def __init__(self, api: Any):
        """
        Create a new Sendinblue transport.

        Args:
            api: Configured client exposing send_transac_email
                (sib_api_v3_sdk.TransactionalEmailsApi)
        """
        self.api = api

    def get_provider_name(self) -> str:
        return "Sendinblue"

    def send(self, message: MailMessage) -> int:
        """
        Send a message via the Sendinblue API.

        Errors raised by the API client are logged and re-raised unchanged.

        Returns:
            0, the call either delivers to every recipient or raises
        """
        smtp_email = build_smtp_email(message)

        recipients = [a.email for a in message.to]
        logger.debug(f'Sending email via Sendinblue to {recipients}')

        try:
            response = self.api.send_transac_email(smtp_email)
        except Exception as e:
            logger.error(f'Sendinblue email send failed: {str(e)}', err=e, to=recipients)
            raise

        logger.info(
            'Email accepted by Sendinblue',
            message_id=getattr(response, 'message_id', None),
            to=recipients
        )

        return 0

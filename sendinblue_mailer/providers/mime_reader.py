"""
MIME Reader - adapt Python's email.message objects to MailMessage.

Lets code that composes mail with the standard library email package send
it through any MailTransport.
"""

from email.message import Message
from email.utils import getaddresses
from typing import List, Optional

from sendinblue_mailer.providers.mail_adapter import (
    Address,
    AlternativeBody,
    Attachment,
    MailMessage,
    MessagePart,
)


def _addresses(msg: Message, header: str) -> List[Address]:
    values = [str(value) for value in msg.get_all(header, [])]
    return [
        Address(email=email, name=name or None)
        for name, email in getaddresses(values)
        if email
    ]


def _text(part: Message) -> str:
    payload = part.get_payload(decode=True) or b''
    return payload.decode(part.get_content_charset() or 'utf-8', errors='replace')


def _is_attachment(part: Message) -> bool:
    """Explicit attachments, named parts (inline embeds) and any non-text payload."""
    return (
        part.get_content_disposition() == 'attachment'
        or part.get_filename() is not None
        or part.get_content_maintype() != 'text'
    )


def _find_primary(leaves: List[Message]) -> Optional[Message]:
    bodies = [part for part in leaves if not _is_attachment(part)]
    for content_type in ('text/html', 'text/plain'):
        for part in bodies:
            if part.get_content_type() == content_type:
                return part
    return None


def _to_part(part: Message) -> MessagePart:
    content_type = part.get_content_type()

    if _is_attachment(part):
        return Attachment(
            filename=part.get_filename() or 'attachment',
            content=part.get_payload(decode=True) or b'',
            content_type=content_type
        )

    return AlternativeBody(content_type=content_type, body=_text(part))


def message_from_mime(msg: Message) -> MailMessage:
    """
    Convert a standard library email message into a MailMessage.

    For multipart messages the first HTML part (or, failing that, the first
    plain text part) outside attachments becomes the primary body; every
    other leaf part becomes a child in document order.

    Args:
        msg: email.message.Message or EmailMessage

    Returns:
        MailMessage with addresses, subject, body parts and top-level headers
    """
    subject = msg.get('Subject')

    message = MailMessage(
        body='',
        subject=str(subject) if subject is not None else None,
        sender=_addresses(msg, 'From'),
        to=_addresses(msg, 'To'),
        cc=_addresses(msg, 'Cc'),
        bcc=_addresses(msg, 'Bcc'),
        reply_to=_addresses(msg, 'Reply-To'),
        headers={name: str(value) for name, value in msg.items()}
    )

    if not msg.is_multipart():
        if _is_attachment(msg):
            message.children = [_to_part(msg)]
            return message
        message.content_type = msg.get_content_type()
        message.body = _text(msg)
        return message

    leaves = [part for part in msg.walk() if not part.is_multipart()]
    primary = _find_primary(leaves)
    if primary is not None:
        message.content_type = primary.get_content_type()
        message.body = _text(primary)

    message.children = [_to_part(part) for part in leaves if part is not primary]
    return message

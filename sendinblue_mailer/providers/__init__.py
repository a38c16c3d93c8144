from sendinblue_mailer.providers.mail_adapter import (
    Address,
    AlternativeBody,
    Attachment,
    MailMessage,
    MailTransport,
    OtherPart,
)
from sendinblue_mailer.providers.sendinblue_adapter import SendinblueTransport, build_smtp_email

__all__ = [
    'Address',
    'AlternativeBody',
    'Attachment',
    'MailMessage',
    'MailTransport',
    'OtherPart',
    'SendinblueTransport',
    'build_smtp_email',
]

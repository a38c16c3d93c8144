"""
Mail Service - Factory and Facade

This module provides a simple interface for sending mail without knowing
which transport is being used. It runs the before-send hooks the transports
rely on, then hands the prepared message to the transport.
"""

import dataclasses
from email.utils import make_msgid
from typing import Any, Callable, Dict, List, Optional

import sib_api_v3_sdk

from sendinblue_mailer import config as settings
from sendinblue_mailer.providers.mail_adapter import MailMessage, MailTransport
from sendinblue_mailer.providers.sendinblue_adapter import SendinblueTransport
from sendinblue_mailer import logger


BeforeSendHook = Callable[[MailMessage], MailMessage]


def assign_message_id(message: MailMessage) -> MailMessage:
    """Return a copy of the message carrying a Message-ID header."""
    if any(name.lower() == 'message-id' for name in message.headers):
        return message

    headers = dict(message.headers)
    headers['Message-ID'] = make_msgid()
    return dataclasses.replace(message, headers=headers)


class MailService:
    """
    Mail service that runs before-send hooks and delegates to a transport.

    This is the class application code should use to send mail.
    """

    # Registry of available transports
    TRANSPORTS = {
        'sendinblue': SendinblueTransport,
        'brevo': SendinblueTransport
    }

    def __init__(self, transport: MailTransport, before_send: Optional[List[BeforeSendHook]] = None):
        self.transport = transport
        self.before_send = list(before_send or [])

    def send(self, message: MailMessage) -> int:
        """
        Send a message through the configured transport.

        Args:
            message: MailMessage to send

        Returns:
            Number of failed recipients reported by the transport
        """
        for hook in self.before_send:
            message = hook(message)

        logger.info(
            f'Sending email via {self.transport.get_provider_name()}',
            to=[a.email for a in message.to],
            subject=message.subject
        )

        return self.transport.send(message)

    @classmethod
    def register_transport(cls, provider: str, transport_class: type):
        """
        Register a new mail transport.

        Args:
            provider: Provider name (e.g., 'custom_provider')
            transport_class: Class that implements MailTransport
        """
        if not issubclass(transport_class, MailTransport):
            raise TypeError(f'{transport_class} must implement MailTransport')

        cls.TRANSPORTS[provider.lower()] = transport_class
        logger.info(f'Registered mail transport: {provider}')


def create_sendinblue_api(api_key: str, host: Optional[str] = None) -> sib_api_v3_sdk.TransactionalEmailsApi:
    """Build the Sendinblue transactional emails client for an API key."""
    configuration = sib_api_v3_sdk.Configuration()
    # Configuration() hands out shallow copies of a shared default
    configuration.api_key = {'api-key': api_key}
    if host:
        configuration.host = host

    return sib_api_v3_sdk.TransactionalEmailsApi(sib_api_v3_sdk.ApiClient(configuration))


def create_mail_service(config: Optional[Dict[str, Any]] = None) -> MailService:
    """
    Factory function to create MailService from configuration.

    Values in config take priority over environment settings.

    Args:
        config: Optional mapping with 'mail_provider', 'sendinblue_key'
            and 'sendinblue_host'

    Returns:
        MailService with Message-ID assignment installed

    Raises:
        ValueError: If the provider is unknown or no API key is available

    Example:
        >>> service = create_mail_service({'sendinblue_key': 'xkeysib-xxx'})
        >>> service.send(MailMessage(body='Hello', to=[Address('user@example.com')]))
    """
    config = config or {}

    provider = (config.get('mail_provider') or settings.MAIL_PROVIDER).lower()
    transport_class = MailService.TRANSPORTS.get(provider)
    if not transport_class:
        available = ', '.join(MailService.TRANSPORTS.keys())
        raise ValueError(
            f'Unsupported mail provider: {provider}. '
            f'Available providers: {available}'
        )

    api_key = config.get('sendinblue_key') or settings.SENDINBLUE_API_KEY
    if not api_key:
        raise ValueError('Missing Sendinblue API key in config')

    host = config.get('sendinblue_host') or settings.SENDINBLUE_API_HOST
    api = create_sendinblue_api(api_key, host)

    return MailService(transport_class(api), before_send=[assign_message_id])

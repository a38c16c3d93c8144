"""Shared test fixtures for the mail transport test suite."""

from __future__ import annotations

import pytest
import sib_api_v3_sdk

from sendinblue_mailer.providers.mail_adapter import Address, MailMessage
from sendinblue_mailer.providers.sendinblue_adapter import SendinblueTransport


class FakeTransactionalEmailsApi:
    """Records every request instead of calling the Sendinblue API."""

    def __init__(self, error: Exception | None = None):
        self.calls = []
        self.error = error

    def send_transac_email(self, send_smtp_email):
        self.calls.append(send_smtp_email)
        if self.error is not None:
            raise self.error
        return sib_api_v3_sdk.CreateSmtpEmail(message_id="<202610171200.1@smtp-relay.mailin.fr>")


@pytest.fixture
def fake_api() -> FakeTransactionalEmailsApi:
    return FakeTransactionalEmailsApi()


@pytest.fixture
def transport(fake_api: FakeTransactionalEmailsApi) -> SendinblueTransport:
    return SendinblueTransport(fake_api)


# ------------------------------------------------------------------
# Sample outgoing message
# ------------------------------------------------------------------


def make_message(**overrides) -> MailMessage:
    defaults = dict(
        body="Hello",
        content_type="text/plain",
        subject="Hi",
        sender=[Address("a@x.com", "A")],
        to=[Address("b@y.com", "B")],
    )
    defaults.update(overrides)
    return MailMessage(**defaults)

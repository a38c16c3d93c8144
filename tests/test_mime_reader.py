"""Tests for sendinblue_mailer.providers.mime_reader."""

from __future__ import annotations

from email.message import EmailMessage

import pytest

from sendinblue_mailer.providers.mail_adapter import Address, AlternativeBody, Attachment
from sendinblue_mailer.providers.mime_reader import message_from_mime
from sendinblue_mailer.providers.sendinblue_adapter import build_smtp_email, chunk_base64


@pytest.fixture
def mime_message() -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = "Alice <alice@example.com>"
    msg["To"] = "bob@example.com, Carol <carol@example.com>"
    msg["Cc"] = "Dave <dave@example.com>"
    msg["Reply-To"] = "support@example.com"
    msg["Subject"] = "Quarterly report"
    msg["X-Mailer"] = "tests"
    msg.set_content("Hello")
    msg.add_alternative("<p>Hello</p>", subtype="html")
    msg.add_attachment(b"%PDF-1.4 data", maintype="application", subtype="pdf", filename="report.pdf")
    return msg


class TestAddresses:
    def test_parsed_with_names(self, mime_message: EmailMessage):
        message = message_from_mime(mime_message)

        assert message.sender == [Address("alice@example.com", "Alice")]
        assert message.to == [Address("bob@example.com"), Address("carol@example.com", "Carol")]
        assert message.cc == [Address("dave@example.com", "Dave")]
        assert message.bcc == []
        assert message.reply_to == [Address("support@example.com")]
        assert message.subject == "Quarterly report"


class TestBodyParts:
    def test_html_part_is_primary(self, mime_message: EmailMessage):
        message = message_from_mime(mime_message)

        assert message.content_type == "text/html"
        assert message.body.strip() == "<p>Hello</p>"
        assert message.children[0] == AlternativeBody("text/plain", "Hello\n")
        assert message.children[1] == Attachment("report.pdf", b"%PDF-1.4 data", "application/pdf")

    def test_single_part_plain(self):
        msg = EmailMessage()
        msg["To"] = "bob@example.com"
        msg.set_content("Just text")

        message = message_from_mime(msg)
        assert message.content_type == "text/plain"
        assert message.body == "Just text\n"
        assert message.children == []
        assert message.sender == []
        assert message.subject is None

    def test_single_part_binary_becomes_attachment(self):
        msg = EmailMessage()
        msg["To"] = "bob@example.com"
        msg.set_content(b"%PDF-1.4 data", maintype="application", subtype="pdf")

        message = message_from_mime(msg)
        assert message.content_type == "text/plain"
        assert message.body == ""
        assert message.children == [Attachment("attachment", b"%PDF-1.4 data", "application/pdf")]


class TestEmbeddedParts:
    def test_related_inline_images_are_attachments(self):
        msg = EmailMessage()
        msg["To"] = "bob@example.com"
        msg.set_content('<p><img src="cid:logo@example.com"></p>', subtype="html")
        msg.add_related(
            b"\x89PNG logo",
            maintype="image",
            subtype="png",
            cid="<logo@example.com>",
            disposition="inline",
            filename="logo.png",
        )
        msg.add_related(b"\x89PNG badge", maintype="image", subtype="png", cid="<badge@example.com>")

        message = message_from_mime(msg)

        assert message.content_type == "text/html"
        assert message.children == [
            Attachment("logo.png", b"\x89PNG logo", "image/png"),
            Attachment("attachment", b"\x89PNG badge", "image/png"),
        ]
        request = build_smtp_email(message)
        assert [a["name"] for a in request.attachment] == ["logo.png", "attachment"]


class TestTranslation:
    def test_translated_request(self, mime_message: EmailMessage):
        request = build_smtp_email(message_from_mime(mime_message))

        assert request.sender.email == "alice@example.com"
        assert [r.email for r in request.to] == ["bob@example.com", "carol@example.com"]
        assert request.html_content.strip() == "<p>Hello</p>"
        assert request.text_content == "Hello\n"
        assert request.attachment == [{"name": "report.pdf", "content": chunk_base64(b"%PDF-1.4 data")}]
        assert request.headers == {"X-Mailer": "tests"}

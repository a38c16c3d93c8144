#!/usr/bin/env python3
"""Send a test email through Sendinblue using SENDINBLUE_API_KEY from .env.local / .env."""

from sendinblue_mailer.providers.mail_adapter import Address, MailMessage
from sendinblue_mailer.providers.mail_service import create_mail_service

print("🧪 Testing Sendinblue Email Send")
print("=" * 60)

service = create_mail_service()
print(f"Using Provider: {service.transport.get_provider_name()}")
print()

sender_email = input("Sender address (must be verified in Sendinblue): ").strip()
test_email = input("Enter your email address to test: ").strip()

if sender_email and test_email:
    print(f"\nSending test email to {test_email}...")

    message = MailMessage(
        body='<p>Hello! This is a test email sent via the <b>Sendinblue</b> transport.</p>',
        content_type='text/html',
        subject='Test Email from sendinblue-mailer',
        sender=[Address(sender_email, 'sendinblue-mailer')],
        to=[Address(test_email)],
        headers={'X-Mailin-Tag': 'smoke-test'}
    )

    failed = service.send(message)

    print()
    print(f"✅ Email accepted by Sendinblue ({failed} failed recipients)")
else:
    print("No address provided. Skipping test.")

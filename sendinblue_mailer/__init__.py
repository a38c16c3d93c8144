"""Sendinblue (Brevo) transactional mail transport."""

__version__ = '1.0.0'

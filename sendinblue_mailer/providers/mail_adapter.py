"""
Mail Transport Pattern - Message model and transport interface

This module defines the message format handed to transports and the
contract (interface) every mail transport must implement, so the
framework sending mail never depends on a specific vendor.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, List, Union
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Address:
    """A single mailbox: email address plus optional display name."""
    email: str
    name: Optional[str] = None


@dataclass(frozen=True)
class AlternativeBody:
    """Secondary representation of the message body (e.g. plain text next to HTML)."""
    content_type: str
    body: str
    kind: str = field(default='alternative', init=False)


@dataclass(frozen=True)
class Attachment:
    """File attached to the message, kept as raw bytes."""
    filename: str
    content: bytes
    content_type: str = 'application/octet-stream'
    kind: str = field(default='attachment', init=False)


@dataclass(frozen=True)
class OtherPart:
    """Any child part that is neither an attachment nor an alternative body."""
    content_type: str
    body: Union[str, bytes] = ''
    kind: str = field(default='other', init=False)


MessagePart = Union[AlternativeBody, Attachment, OtherPart]


@dataclass
class MailMessage:
    """Standard mail message format handed to every transport."""
    body: str
    content_type: str = 'text/plain'
    subject: Optional[str] = None
    sender: List[Address] = field(default_factory=list)
    to: List[Address] = field(default_factory=list)
    cc: List[Address] = field(default_factory=list)
    bcc: List[Address] = field(default_factory=list)
    reply_to: List[Address] = field(default_factory=list)
    children: List[MessagePart] = field(default_factory=list)
    headers: Dict[str, str] = field(default_factory=dict)

    def alternatives(self) -> List[AlternativeBody]:
        return [child for child in self.children if child.kind == 'alternative']

    def attachments(self) -> List[Attachment]:
        return [child for child in self.children if child.kind == 'attachment']


class MailTransport(ABC):
    """
    Abstract base class (interface) for mail transports.

    A transport receives a fully prepared message (before-send hooks such as
    Message-ID assignment have already run) and delivers it.
    """

    @abstractmethod
    def send(self, message: MailMessage) -> int:
        """
        Deliver a message.

        Args:
            message: MailMessage to deliver

        Returns:
            Number of recipients that failed

        Raises:
            Exception: Whatever the underlying provider client raises,
            unchanged
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the name of this mail provider."""
        pass

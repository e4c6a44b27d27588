"""Transports between the board and its host."""

from .http_channel import ChannelConnectionError, ChannelError, ChannelRejectedError, HttpChannel
from .memory import InMemoryChannel, SentMessage
from .protocol import HostChannel, MessageHandler, SubscriberRegistry

__all__ = [
    "ChannelConnectionError",
    "ChannelError",
    "ChannelRejectedError",
    "HostChannel",
    "HttpChannel",
    "InMemoryChannel",
    "MessageHandler",
    "SentMessage",
    "SubscriberRegistry",
]

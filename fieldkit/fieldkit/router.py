"""
Offline keyword router and the chat reply policy built on it.

Matching is plain substring containment on the lower-cased message, checked
category by category in table order. A keyword like "rio" therefore also
matches inside "frio"; that is the intended behaviour.
"""
from __future__ import annotations

from typing import Callable, Optional

from .offline_db import (
    EMPTY_REPLY_MESSAGE,
    GENERIC_OFFLINE_MESSAGE,
    OFFLINE_PROTOCOL_KEYWORDS,
    OFFLINE_PROTOCOLS,
    TRANSMISSION_ERROR_MESSAGE,
)
from .schema import ChatReply
from .utils.logging import get_logger

logger = get_logger(__name__)

RemoteResponder = Callable[[str], str]


def classify_category(text: str) -> Optional[str]:
    lowered = text.lower()
    for category, keywords in OFFLINE_PROTOCOL_KEYWORDS.items():
        if any(k in lowered for k in keywords):
            return category
    return None


def classify(text: str) -> Optional[str]:
    """Return the canned protocol for the first matching category, or None."""
    category = classify_category(text)
    if category is None:
        return None
    return OFFLINE_PROTOCOLS[category]


def offline_reply(text: str) -> str:
    return classify(text) or GENERIC_OFFLINE_MESSAGE


def _offline(text: str) -> ChatReply:
    category = classify_category(text)
    if category is None:
        return ChatReply(text=GENERIC_OFFLINE_MESSAGE, source="offline-generic")
    return ChatReply(text=OFFLINE_PROTOCOLS[category], source="offline-protocol", category=category)


def respond(text: str, *, online: bool, remote: Optional[RemoteResponder] = None) -> ChatReply:
    """
    Answer one chat message.

    Offline, the keyword router is consulted once and a miss degrades to the
    generic offline message. Online, the keyword router is never used: the
    message goes to the remote responder, an empty answer becomes a fixed
    receipt text and a failed (or missing) responder a fixed transmission error.
    """
    if not online:
        return _offline(text)
    if remote is None:
        logger.warning("online but no remote responder configured")
        return ChatReply(text=TRANSMISSION_ERROR_MESSAGE, source="remote-error")
    try:
        answer = remote(text)
    except Exception:
        logger.warning("remote responder failed", exc_info=True)
        return ChatReply(text=TRANSMISSION_ERROR_MESSAGE, source="remote-error")
    if not answer:
        return ChatReply(text=EMPTY_REPLY_MESSAGE, source="remote-empty")
    return ChatReply(text=answer, source="remote")

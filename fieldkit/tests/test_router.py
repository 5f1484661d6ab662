import logging

import pytest

from fieldkit.offline_db import (
    EMPTY_REPLY_MESSAGE,
    GENERIC_OFFLINE_MESSAGE,
    OFFLINE_PROTOCOL_KEYWORDS,
    OFFLINE_PROTOCOLS,
    TRANSMISSION_ERROR_MESSAGE,
)
from fieldkit.router import classify, classify_category, offline_reply, respond


def test_category_order_is_fixed():
    assert list(OFFLINE_PROTOCOL_KEYWORDS) == ["MEDICAL", "WATER", "SHELTER", "FIRE", "NAVIGATION"]
    assert list(OFFLINE_PROTOCOLS) == list(OFFLINE_PROTOCOL_KEYWORDS)


def test_water_match_returns_literal_protocol():
    text = classify("tengo mucha sed y necesito agua")
    assert text == OFFLINE_PROTOCOLS["WATER"]
    assert text.startswith("[PROTOCOLO OFFLINE - HIDRATACIÓN]")


def test_no_match_returns_none():
    assert classify("estoy aburrido") is None
    assert classify("") is None


def test_earlier_category_wins():
    assert classify("tengo sed y hay fuego") == OFFLINE_PROTOCOLS["WATER"]
    assert classify_category("hay una herida junto al agua") == "MEDICAL"


@pytest.mark.parametrize(
    "message,category",
    [
        ("me corte y tengo una herida", "MEDICAL"),
        ("I have a bad BURN", "MEDICAL"),
        ("AGUA", "WATER"),
        ("necesito un refugio", "SHELTER"),
        ("no tengo mechero", "FIRE"),
        ("estoy perdido", "NAVIGATION"),
    ],
)
def test_each_category(message, category):
    assert classify_category(message) == category


def test_substring_matching_is_not_word_bounded():
    # "rio" (WATER) sits inside "frio", and WATER is checked before SHELTER
    assert classify_category("hace mucho frio") == "WATER"
    assert classify_category("tengo un resfrio") == "WATER"


def test_classify_is_deterministic():
    msg = "dolor de cabeza y sed"
    assert classify(msg) == classify(msg) == OFFLINE_PROTOCOLS["MEDICAL"]


def test_offline_reply_falls_back_to_generic():
    assert offline_reply("estoy aburrido") == GENERIC_OFFLINE_MESSAGE
    assert offline_reply("estoy perdido") == OFFLINE_PROTOCOLS["NAVIGATION"]


def test_respond_offline_never_calls_remote():
    def remote(_):
        raise AssertionError("remote must not be called offline")

    reply = respond("tengo sed", online=False, remote=remote)
    assert reply.source == "offline-protocol"
    assert reply.category == "WATER"

    reply = respond("estoy aburrido", online=False, remote=remote)
    assert reply.source == "offline-generic"
    assert reply.category is None
    assert reply.text == GENERIC_OFFLINE_MESSAGE


def test_respond_online_uses_remote():
    reply = respond("tengo sed", online=True, remote=lambda t: f"remote: {t}")
    assert reply.source == "remote"
    assert reply.text == "remote: tengo sed"


def test_respond_online_without_remote_is_transmission_error():
    reply = respond("fuego", online=True)
    assert reply.source == "remote-error"
    assert reply.text == TRANSMISSION_ERROR_MESSAGE
    assert reply.category is None


def test_respond_online_failure_never_uses_keywords(caplog):
    def remote(_):
        raise ConnectionError("unreachable")

    with caplog.at_level(logging.WARNING, logger="fieldkit.router"):
        reply = respond("estoy perdido", online=True, remote=remote)
    assert reply.source == "remote-error"
    assert reply.text == TRANSMISSION_ERROR_MESSAGE
    assert reply.category is None
    assert "remote responder failed" in caplog.text


def test_respond_online_any_remote_error_is_transmission_error():
    def remote(_):
        raise RuntimeError("quota exceeded")

    assert respond("hola", online=True, remote=remote).source == "remote-error"


@pytest.mark.parametrize("answer", ["", None])
def test_respond_online_empty_answer_gets_receipt(answer):
    reply = respond("hola", online=True, remote=lambda t: answer)
    assert reply.source == "remote-empty"
    assert reply.text == EMPTY_REPLY_MESSAGE

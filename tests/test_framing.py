from __future__ import annotations

import logging
from typing import Any

from ircwire.framing import FrameSplitter


def _splitter(transport, consumer, **kwargs: Any) -> FrameSplitter:
    return FrameSplitter(transport.send_raw, consumer.on_message, **kwargs)


def test_ping_with_token_is_answered_and_forwarded(transport, consumer):
    splitter = _splitter(transport, consumer)
    assert splitter.on_batch("PING :abc123\r\n") == 1
    assert transport.sent == ["PONG :abc123"]
    assert [m.command for m in consumer.messages] == ["PING"]


def test_ping_without_token_gets_no_reply(transport, consumer):
    splitter = _splitter(transport, consumer)
    splitter.on_batch("PING\r\n")
    assert transport.sent == []
    assert len(consumer.messages) == 1
    assert consumer.messages[0].params.middle == []
    assert consumer.messages[0].params.trailing is None


def test_ping_with_middle_only_gets_no_reply(transport, consumer):
    splitter = _splitter(transport, consumer)
    splitter.on_batch("PING tmi.twitch.tv\r\n")
    assert transport.sent == []


def test_bad_line_is_dropped_and_batch_continues(transport, consumer):
    splitter = _splitter(transport, consumer)
    forwarded = splitter.on_batch("A\r\nBADLINE@\r\nB\r\n")
    assert forwarded == 2
    assert [m.command for m in consumer.messages] == ["A", "B"]


def test_lines_are_delivered_in_order(transport, consumer):
    splitter = _splitter(transport, consumer)
    batch = (
        ":tmi.twitch.tv 001 tester :Welcome, GLHF!\r\n"
        "PING :tmi.twitch.tv\r\n"
        "@badge=1 :u!u@h PRIVMSG #room :hello\r\n"
    )
    splitter.on_batch(batch)
    assert [m.command for m in consumer.messages] == ["001", "PING", "PRIVMSG"]
    assert transport.sent == ["PONG :tmi.twitch.tv"]


def test_pong_is_sent_before_ping_is_forwarded(transport):
    events: list[str] = []

    def send_raw(line: str) -> None:
        events.append(f"send:{line}")

    def on_message(message) -> None:  # type: ignore[no-untyped-def]
        events.append(f"msg:{message.command}")

    FrameSplitter(send_raw, on_message).on_batch("PING :x\r\nPING :y")
    assert events == ["send:PONG :x", "msg:PING", "send:PONG :y", "msg:PING"]


def test_batch_without_terminator_is_one_line(transport, consumer):
    splitter = _splitter(transport, consumer)
    assert splitter.on_batch("PING :abc") == 1
    assert transport.sent == ["PONG :abc"]


def test_empty_batch_forwards_nothing(transport, consumer):
    splitter = _splitter(transport, consumer)
    assert splitter.on_batch("") == 0
    assert splitter.on_batch("\r\n\r\n") == 0
    assert consumer.messages == []


def test_bytes_payload_is_decoded_leniently(transport, consumer):
    splitter = _splitter(transport, consumer)
    splitter.on_batch(b"PRIVMSG #c :caf\xc3\xa9 \xff\r\n")
    assert consumer.messages[0].params.trailing == "caf\u00e9 \ufffd"


def test_parse_failure_is_logged_at_debug(transport, consumer, caplog):
    caplog.set_level(logging.DEBUG)
    _splitter(transport, consumer).on_batch("@truncated\r\n")
    assert consumer.messages == []
    assert any("Dropped malformed line (truncated_tags)" in r.message for r in caplog.records)


def test_handler_exception_logged_not_propagated(transport, caplog):
    seen: list[str] = []

    def bad_handler(message) -> None:  # type: ignore[no-untyped-def]
        seen.append(message.command)
        if message.command == "A":
            raise RuntimeError("boom")

    caplog.set_level(logging.ERROR)
    forwarded = FrameSplitter(transport.send_raw, bad_handler).on_batch("A\r\nB\r\n")
    assert forwarded == 2
    assert seen == ["A", "B"]
    assert any("RuntimeError: boom" in r.message for r in caplog.records)


def test_unbuffered_mode_does_not_join_chunks(transport, consumer):
    splitter = _splitter(transport, consumer)
    splitter.on_batch("PRIVMSG #c :hel")
    splitter.on_batch("lo\r\n")
    assert [m.command for m in consumer.messages] == ["PRIVMSG", "lo"]
    assert consumer.messages[0].params.trailing == "hel"


def test_buffered_mode_reassembles_split_lines(transport, consumer):
    splitter = _splitter(transport, consumer, buffered=True)
    assert splitter.on_batch("PRIVMSG #c :hel") == 0
    assert splitter.pending == "PRIVMSG #c :hel"
    assert splitter.on_batch("lo\r\nPING :to") == 1
    assert splitter.on_batch("k\r") == 0
    assert splitter.on_batch("\n") == 1
    assert [m.command for m in consumer.messages] == ["PRIVMSG", "PING"]
    assert consumer.messages[0].params.trailing == "hello"
    assert transport.sent == ["PONG :tok"]
    assert splitter.pending == ""


def test_buffered_mode_discards_oversized_partial_line(transport, consumer, caplog):
    caplog.set_level(logging.WARNING)
    splitter = _splitter(transport, consumer, buffered=True, max_partial_line=8)
    splitter.on_batch("PRIVMSG #c :way too long")
    assert splitter.pending == ""
    assert any("Discarded partial line" in r.message for r in caplog.records)
    splitter.on_batch(" tail\r\nPING :a\r\n")
    assert [m.command for m in consumer.messages] == ["PING"]
    assert transport.sent == ["PONG :a"]


def test_rest_of_oversized_line_is_never_parsed(transport, consumer):
    splitter = _splitter(transport, consumer, buffered=True, max_partial_line=8)
    splitter.on_batch("PRIVMSG #c :hello PING :forged")
    splitter.on_batch(" QUIT now\r\nPING :real\r\n")
    assert [m.command for m in consumer.messages] == ["PING"]
    assert consumer.messages[0].params.trailing == "real"
    assert transport.sent == ["PONG :real"]


def test_oversized_line_spanning_several_chunks_is_dropped(transport, consumer):
    splitter = _splitter(transport, consumer, buffered=True, max_partial_line=8)
    splitter.on_batch("PRIVMSG #c :long")
    splitter.on_batch(" PING :forged again")
    splitter.on_batch(" more\r")
    assert consumer.messages == []
    splitter.on_batch("\nJOIN #c\r\n")
    assert [m.command for m in consumer.messages] == ["JOIN"]
    assert transport.sent == []


def test_flush_ends_discarding(transport, consumer):
    splitter = _splitter(transport, consumer, buffered=True, max_partial_line=8)
    splitter.on_batch("PRIVMSG #c :way too long")
    splitter.flush()
    splitter.on_batch("JOIN #c\r\n")
    assert [m.command for m in consumer.messages] == ["JOIN"]


def test_buffered_mode_decodes_characters_split_across_chunks(transport, consumer):
    data = "PRIVMSG #c :caf\u00e9\r\n".encode()
    cut = data.index(b"\xc3") + 1
    splitter = _splitter(transport, consumer, buffered=True)
    assert splitter.on_batch(data[:cut]) == 0
    assert splitter.on_batch(data[cut:]) == 1
    assert consumer.messages[0].params.trailing == "caf\u00e9"


def test_flush_drops_undecoded_bytes(transport, consumer):
    splitter = _splitter(transport, consumer, buffered=True)
    splitter.on_batch(b"PRIVMSG #c :caf\xc3")
    splitter.flush()
    splitter.on_batch(b"JOIN #c\r\n")
    assert [m.command for m in consumer.messages] == ["JOIN"]
    assert consumer.messages[0].raw == "JOIN #c"


def test_flush_returns_and_clears_partial(transport, consumer):
    splitter = _splitter(transport, consumer, buffered=True)
    splitter.on_batch("JOIN #c")
    assert splitter.flush() == "JOIN #c"
    assert splitter.pending == ""

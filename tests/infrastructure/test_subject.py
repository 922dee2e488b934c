from __future__ import annotations

import logging

import pytest

from live_odds.infrastructure.subject import Subject


def test_delivers_to_all_subscribers_in_order() -> None:
    subject: Subject[int] = Subject("numbers")
    seen_a: list[int] = []
    seen_b: list[int] = []
    subject.subscribe(seen_a.append)
    subject.subscribe(seen_b.append)
    for n in (3, 1, 2):
        subject.send(n)
    assert seen_a == [3, 1, 2]
    assert seen_b == [3, 1, 2]
    assert subject.subscriber_count == 2


def test_cancel_detaches_and_is_idempotent() -> None:
    subject: Subject[str] = Subject()
    seen: list[str] = []
    sub = subject.subscribe(seen.append)
    subject.send("a")
    sub.cancel()
    sub.cancel()
    subject.send("b")
    assert seen == ["a"]
    assert not sub.active
    assert subject.subscriber_count == 0


def test_failing_subscriber_does_not_break_delivery(caplog: pytest.LogCaptureFixture) -> None:
    subject: Subject[int] = Subject("fragile")
    seen: list[int] = []

    def broken(_: int) -> None:
        raise RuntimeError("nope")

    subject.subscribe(broken)
    subject.subscribe(seen.append)
    with caplog.at_level(logging.ERROR):
        subject.send(1)
    assert seen == [1]
    assert any("fragile" in r.getMessage() for r in caplog.records)


def test_subscribe_during_send_applies_to_next_value() -> None:
    subject: Subject[int] = Subject()
    late: list[int] = []

    def first(value: int) -> None:
        if value == 1:
            subject.subscribe(late.append)

    subject.subscribe(first)
    subject.send(1)
    subject.send(2)
    assert late == [2]

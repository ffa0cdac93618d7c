import pytest

from linuxlab.imsession import (
    SESSION_ID,
    SessionTable,
    parse_cookie,
)


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def cookie_for(session):
    return f"{SESSION_ID}={session.id}; im_name={session.name}"


def test_parse_cookie_finds_values():
    header = "im_sid=123; im_name=bob"
    assert parse_cookie(header, "im_name") == "bob"
    assert parse_cookie(header, "im_sid") == "123"


def test_parse_cookie_missing_and_quoted():
    assert parse_cookie("a=1; b=2", "im_sid") is None
    assert parse_cookie('im_sid="42"', "im_sid") == "42"


def test_session_id_comes_from_clock_in_microseconds():
    table = SessionTable(clock=FakeClock(100.0))
    session = table.create_session("alice")
    assert session.id == 100_000_000
    assert session.created == session.last_used == 100.0


def test_created_session_is_found_by_cookie():
    table = SessionTable(clock=FakeClock())
    session = table.create_session("alice")
    assert table.get_session(cookie_for(session)) is session
    assert table.is_login(cookie_for(session))


def test_unknown_or_missing_cookie_is_not_logged_in():
    table = SessionTable(clock=FakeClock())
    table.create_session("alice")
    assert not table.is_login(None)
    assert not table.is_login("im_name=alice")
    assert not table.is_login("im_sid=0")
    assert not table.is_login("im_sid=garbage")


def test_sessions_created_at_same_instant_differ():
    table = SessionTable(clock=FakeClock())
    first = table.create_session("a")
    second = table.create_session("b")
    assert first.id != second.id
    assert len(table) == 2


def test_full_table_raises():
    table = SessionTable(capacity=1, clock=FakeClock())
    table.create_session("a")
    with pytest.raises(RuntimeError):
        table.create_session("b")


def test_destroy_session_forgets_it():
    table = SessionTable(clock=FakeClock())
    session = table.create_session("alice")
    table.destroy_session(session)
    assert table.get_session(cookie_for(session)) is None
    assert len(table) == 0


def test_idle_sessions_expire():
    clock = FakeClock()
    table = SessionTable(ttl=10.0, clock=clock)
    session = table.create_session("alice")
    clock.now += 11.0
    assert table.check_sessions() == 1
    assert not table.is_login(cookie_for(session))


def test_use_keeps_session_alive():
    clock = FakeClock()
    table = SessionTable(ttl=10.0, clock=clock)
    session = table.create_session("alice")
    clock.now += 9.0
    assert table.is_login(cookie_for(session))
    clock.now += 9.0
    assert table.check_sessions() == 0
    assert table.get_session(cookie_for(session)) is session
import threading
from datetime import datetime, timedelta, timezone

from jose import jwt

from app.core.config import settings
from app.core.security import create_session_token, read_session_token
from app.core.sessions import SessionStore


class FakeClock:
    def __init__(self):
        self.now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


# ============ SessionStore ============

def test_store_starts_empty():
    assert len(SessionStore(ttl=timedelta(minutes=1))) == 0


def test_create_and_resolve():
    store = SessionStore(ttl=timedelta(minutes=1))
    record = store.create(7)
    assert store.resolve(record.session_id) == 7
    assert store.resolve("unknown") is None


def test_session_ids_are_random_and_long():
    store = SessionStore(ttl=timedelta(minutes=1))
    ids = {store.create(1).session_id for _ in range(50)}
    assert len(ids) == 50
    assert all(len(sid) >= 43 for sid in ids)  # 32 octets en base64url


def test_expired_session_does_not_resolve():
    clock = FakeClock()
    store = SessionStore(ttl=timedelta(minutes=10), clock=clock)
    record = store.create(1)

    clock.advance(minutes=9)
    assert store.resolve(record.session_id) == 1

    clock.advance(minutes=1)
    assert store.resolve(record.session_id) is None
    assert len(store) == 0


def test_purge_expired():
    clock = FakeClock()
    store = SessionStore(ttl=timedelta(minutes=10), clock=clock)
    store.create(1)
    clock.advance(minutes=5)
    fresh = store.create(2)
    clock.advance(minutes=6)

    assert store.purge_expired() == 1
    assert len(store) == 1
    assert store.resolve(fresh.session_id) == 2


def test_destroy_is_idempotent():
    store = SessionStore(ttl=timedelta(minutes=1))
    record = store.create(1)
    store.destroy(record.session_id)
    store.destroy(record.session_id)
    store.destroy("never-existed")
    assert store.resolve(record.session_id) is None


def test_clear():
    store = SessionStore(ttl=timedelta(minutes=1))
    for user_id in range(5):
        store.create(user_id)
    store.clear()
    assert len(store) == 0


def test_concurrent_access():
    store = SessionStore(ttl=timedelta(minutes=1))
    errors = []

    def worker(user_id):
        try:
            for _ in range(200):
                record = store.create(user_id)
                assert store.resolve(record.session_id) == user_id
                store.destroy(record.session_id)
        except Exception as exc:  # remonté au thread principal
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(store) == 0


# ============ Session cookie token ============

def test_token_round_trip_carries_only_session_id():
    token = create_session_token("abc")
    assert read_session_token(token) == "abc"
    claims = jwt.get_unverified_claims(token)
    assert set(claims) == {"sid", "exp", "type"}


def test_token_rejects_tampering():
    token = create_session_token("abc")
    forged = jwt.encode({"sid": "abc", "type": "session"}, "some-other-secret", algorithm="HS256")
    assert read_session_token(forged) is None
    header, payload, _ = token.split(".")
    assert read_session_token(f"{header}.{payload}.{'A' * 43}") is None
    assert read_session_token("garbage") is None


def test_token_rejects_expired_and_wrong_type():
    assert read_session_token(create_session_token("abc", expires_in=timedelta(seconds=-1))) is None
    other = jwt.encode({"sid": "abc", "type": "access"}, settings.SESSION_SECRET, algorithm="HS256")
    assert read_session_token(other) is None

import pytest
import redis
import requests

from storefront.services import media_client as media_module
from storefront.services.lock_service import LockService
from storefront.services.media_client import MediaClient


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


def test_media_client_returns_secure_url(monkeypatch):
    calls = []

    def fake_post(url, files, data, timeout):
        calls.append((url, files, data, timeout))
        return FakeResponse({"secure_url": "https://media.test/x.jpg"})

    monkeypatch.setattr(media_module.requests, "post", fake_post)

    url = MediaClient(base_url="http://media/", timeout=3).upload_image("x.jpg", b"abc", "image/jpeg")

    assert url == "https://media.test/x.jpg"
    assert calls[0][0] == "http://media/upload"
    assert calls[0][1] == {"file": ("x.jpg", b"abc", "image/jpeg")}
    assert calls[0][3] == 3


def test_media_client_rejects_response_without_url(monkeypatch):
    monkeypatch.setattr(media_module.requests, "post", lambda *a, **kw: FakeResponse({}))

    with pytest.raises(RuntimeError):
        MediaClient(base_url="http://media").upload_image("x.jpg", b"abc")


def test_media_client_does_not_retry_http_errors(monkeypatch):
    calls = []

    def fake_post(*args, **kwargs):
        calls.append(1)
        return FakeResponse({}, status=500)

    monkeypatch.setattr(media_module.requests, "post", fake_post)

    with pytest.raises(requests.HTTPError):
        MediaClient(base_url="http://media").upload_image("x.jpg", b"abc")
    assert len(calls) == 1


class FakeRedis:
    def __init__(self):
        self.store = {}

    def set(self, name, value, nx=False, ex=None):
        if nx and name in self.store:
            return None
        self.store[name] = value
        return True

    def eval(self, script, numkeys, key, token):
        if self.store.get(key) == token:
            del self.store[key]
            return 1
        return 0


def test_checkout_lock_is_exclusive_and_owner_released():
    service = LockService(url="redis://localhost:6379/0")
    service.redis = FakeRedis()

    assert service.acquire_checkout_lock(7, "a", ttl=30) is True
    assert service.acquire_checkout_lock(7, "b", ttl=30) is False

    assert service.release_checkout_lock(7, "b") is False
    assert service.release_checkout_lock(7, "a") is True
    assert service.acquire_checkout_lock(7, "b", ttl=30) is True


class FlakyRedis(FakeRedis):
    def __init__(self, failures):
        super().__init__()
        self.failures = failures
        self.calls = 0

    def set(self, name, value, nx=False, ex=None):
        self.calls += 1
        if self.calls <= self.failures:
            raise redis.exceptions.ConnectionError("connection reset")
        return super().set(name, value, nx=nx, ex=ex)


def test_checkout_lock_retries_transient_redis_errors():
    service = LockService(url="redis://localhost:6379/0")
    service.redis = FlakyRedis(failures=1)

    assert service.acquire_checkout_lock(7, "a", ttl=30) is True
    assert service.redis.calls == 2


def test_checkout_lock_gives_up_after_three_attempts():
    service = LockService(url="redis://localhost:6379/0")
    service.redis = FlakyRedis(failures=5)

    with pytest.raises(redis.exceptions.ConnectionError):
        service.acquire_checkout_lock(7, "a", ttl=30)
    assert service.redis.calls == 3

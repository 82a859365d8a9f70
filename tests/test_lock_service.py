"""
Tests for services/lock_service.py (fakeredis, Lua enabled)

Tests cover:
- SET NX EX acquire, owner-only release
- user_lock context manager
- cart mutations refused while another request holds the user's lock
"""

import fakeredis
import pytest

from shopcart.domain.errors import ConflictError
from shopcart.services.cart_service import CartService
from shopcart.services.lock_service import LockService
from shopcart.services.order_service import OrderService

from conftest import COFFEE_ID


@pytest.fixture
def redis_client():
    client = fakeredis.FakeRedis(decode_responses=True)
    yield client
    client.flushall()


@pytest.fixture
def lock_service(redis_client):
    return LockService(client=redis_client, ttl=10)


class TestUserLock:
    def test_acquire_sets_key_with_ttl(self, lock_service, redis_client):
        assert lock_service.acquire_user_lock(1, "owner-a") is True

        assert redis_client.get("cart:user:1:lock") == "owner-a"
        assert 0 < redis_client.ttl("cart:user:1:lock") <= 10

    def test_second_acquire_fails(self, lock_service):
        assert lock_service.acquire_user_lock(1, "owner-a") is True
        assert lock_service.acquire_user_lock(1, "owner-b") is False

    def test_locks_are_per_user(self, lock_service):
        assert lock_service.acquire_user_lock(1, "owner-a") is True
        assert lock_service.acquire_user_lock(2, "owner-b") is True

    def test_only_owner_releases(self, lock_service, redis_client):
        lock_service.acquire_user_lock(1, "owner-a")

        assert lock_service.release_user_lock(1, "owner-b") is False
        assert redis_client.get("cart:user:1:lock") == "owner-a"

        assert lock_service.release_user_lock(1, "owner-a") is True
        assert redis_client.get("cart:user:1:lock") is None

    def test_context_manager_releases_on_error(self, lock_service, redis_client):
        with pytest.raises(RuntimeError):
            with lock_service.user_lock(1):
                assert redis_client.exists("cart:user:1:lock")
                raise RuntimeError("boom")

        assert not redis_client.exists("cart:user:1:lock")

    def test_context_manager_conflict_when_held(self, lock_service):
        lock_service.acquire_user_lock(1, "someone-else")

        with pytest.raises(ConflictError):
            with lock_service.user_lock(1):
                pass


class TestLockedCartMutations:
    """CartService / OrderService with a lock service wired in"""

    def test_add_item_refused_while_locked(self, db, catalog, lock_service, alice):
        svc = CartService(db=db, catalog=catalog, lock_service=lock_service)
        lock_service.acquire_user_lock(alice.id, "other-request")

        with pytest.raises(ConflictError):
            svc.add_item(alice.id, COFFEE_ID, 1)

        assert lock_service.release_user_lock(alice.id, "other-request") is True

    def test_add_item_releases_lock(self, db, catalog, lock_service, redis_client, alice):
        svc = CartService(db=db, catalog=catalog, lock_service=lock_service)

        svc.add_item(alice.id, COFFEE_ID, 1)
        svc.add_item(alice.id, COFFEE_ID, 1)

        assert svc.get_active_cart(alice.id)["items"][0]["quantity"] == 2
        assert not redis_client.exists(f"cart:user:{alice.id}:lock")

    def test_convert_refused_while_locked(self, db, catalog, notifier, lock_service, alice):
        CartService(db=db, catalog=catalog, lock_service=lock_service).add_item(alice.id, COFFEE_ID, 1)
        orders = OrderService(db=db, catalog=catalog, lock_service=lock_service, notification_service=notifier)
        lock_service.acquire_user_lock(alice.id, "other-request")

        with pytest.raises(ConflictError):
            orders.convert(alice.id)

        notifier.send_order_notification.assert_not_called()

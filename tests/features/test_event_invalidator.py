"""Tests for declarative event triggers."""

import pytest

from neo_policy_cache import (
    CacheManager,
    EventInvalidator,
    InvalidationPattern,
    TriggerStatus,
    create_event_invalidator,
)


@pytest.fixture
def cache():
    """Cache with a few subscription and customer keys."""
    return CacheManager(capacity=10)


@pytest.fixture
def invalidator(cache, dispatcher):
    """Event invalidator bound to the shared dispatcher."""
    return create_event_invalidator(cache, dispatcher)


async def _seed(cache):
    await cache.set("subscription:s1", "active")
    await cache.set("subscription:s2", "active")
    await cache.set("customer:c1:plan", "pro")
    await cache.set("customer:c1:seats", 5)


def _subscription_key(payload):
    return f"subscription:{payload['subscription_id']}"


class TestEventTriggers:
    """Test trigger registration and execution."""

    @pytest.mark.asyncio
    async def test_key_trigger(self, cache, dispatcher, invalidator):
        """Test a key trigger deletes the derived key."""
        await _seed(cache)
        trigger_id = invalidator.register_key_trigger("subscription.cancelled", _subscription_key)

        await dispatcher.publish("subscription.cancelled", {"subscription_id": "s1"})

        assert "subscription:s1" not in cache
        assert "subscription:s2" in cache
        trigger = invalidator.get_trigger(trigger_id)
        assert trigger.trigger_count == 1
        assert trigger.invalidated_count == 1
        assert trigger.last_triggered is not None

    @pytest.mark.asyncio
    async def test_pattern_trigger(self, cache, dispatcher, invalidator):
        """Test a pattern trigger removes every matching key."""
        await _seed(cache)
        invalidator.register_pattern_trigger(
            "customer.closed",
            lambda payload: InvalidationPattern.entity_keys("customer", payload["customer_id"]),
        )

        await dispatcher.publish("customer.closed", {"customer_id": "c1"})

        assert set(cache.keys()) == {"subscription:s1", "subscription:s2"}
        assert invalidator.get_statistics()["total_keys_invalidated"] == 2

    @pytest.mark.asyncio
    async def test_conditions_filter_events(self, cache, dispatcher, invalidator):
        """Test conditions restrict which payloads fire the trigger."""
        await _seed(cache)
        invalidator.register_key_trigger(
            "subscription.cancelled",
            _subscription_key,
            conditions={"reason": {"$in": ["fraud", "chargeback"]}},
        )

        await dispatcher.publish(
            "subscription.cancelled", {"subscription_id": "s1", "reason": "downgrade"}
        )
        await dispatcher.publish("subscription.cancelled", {"subscription_id": "s2"})
        assert "subscription:s1" in cache
        assert "subscription:s2" in cache

        await dispatcher.publish(
            "subscription.cancelled", {"subscription_id": "s1", "reason": "fraud"}
        )
        assert "subscription:s1" not in cache

    @pytest.mark.asyncio
    async def test_regex_and_eq_conditions(self, invalidator):
        """Test the remaining condition operators."""
        trigger_id = invalidator.register_key_trigger(
            "plan.changed",
            lambda payload: payload["plan"],
            conditions={"plan": {"$regex": "^pro"}, "region": {"$eq": "eu"}},
        )
        trigger = invalidator.get_trigger(trigger_id)

        assert trigger.matches_event_data({"plan": "pro-annual", "region": "eu"})
        assert not trigger.matches_event_data({"plan": "basic", "region": "eu"})
        assert not trigger.matches_event_data({"plan": "pro"})

    @pytest.mark.asyncio
    async def test_paused_trigger_does_nothing(self, cache, dispatcher, invalidator):
        """Test paused triggers are skipped until resumed."""
        await _seed(cache)
        trigger_id = invalidator.register_key_trigger("subscription.cancelled", _subscription_key)

        assert invalidator.pause_trigger(trigger_id) is True
        await dispatcher.publish("subscription.cancelled", {"subscription_id": "s1"})
        assert "subscription:s1" in cache

        invalidator.resume_trigger(trigger_id)
        await dispatcher.publish("subscription.cancelled", {"subscription_id": "s1"})
        assert "subscription:s1" not in cache

    @pytest.mark.asyncio
    async def test_failing_trigger_is_reported(self, cache, dispatcher, invalidator):
        """Test a trigger raising is isolated like any handler."""
        await _seed(cache)
        invalidator.register_key_trigger("subscription.cancelled", lambda payload: payload["missing"])
        invalidator.register_key_trigger("subscription.cancelled", _subscription_key)

        errors = await dispatcher.publish("subscription.cancelled", {"subscription_id": "s1"})

        assert len(errors) == 1
        assert isinstance(errors[0].cause, KeyError)
        assert "subscription:s1" not in cache


class TestTriggerManagement:
    """Test listing, statistics and removal."""

    def test_unregister_removes_subscription(self, dispatcher, invalidator):
        """Test unregistering also drops the dispatcher subscription."""
        trigger_id = invalidator.register_key_trigger("subscription.cancelled", _subscription_key)
        assert len(dispatcher.subscriptions("subscription.cancelled")) == 1

        assert invalidator.unregister_trigger(trigger_id) is True
        assert invalidator.unregister_trigger(trigger_id) is False
        assert dispatcher.subscriptions("subscription.cancelled") == []

    def test_list_and_statistics(self, invalidator):
        """Test filtering and aggregate statistics."""
        first = invalidator.register_key_trigger(
            "subscription.cancelled", _subscription_key, description="drop subscription"
        )
        invalidator.register_key_trigger("plan.changed", lambda payload: payload["plan"])
        invalidator.disable_trigger(first)

        listed = invalidator.list_triggers(event_name="subscription.cancelled")
        assert [t["trigger_id"] for t in listed] == [first]
        assert listed[0]["description"] == "drop subscription"
        assert listed[0]["status"] == "disabled"
        assert len(invalidator.list_triggers(status=TriggerStatus.ACTIVE)) == 1

        stats = invalidator.get_statistics()
        assert stats["total_triggers"] == 2
        assert stats["active_triggers"] == 1
        assert stats["unique_event_names"] == 2

    def test_unknown_trigger(self, invalidator):
        """Test management calls on unknown ids report False."""
        assert invalidator.pause_trigger("nope") is False
        assert invalidator.get_trigger("nope") is None

    def test_factory_returns_invalidator(self, cache, dispatcher):
        """Test the factory builds an invalidator."""
        assert isinstance(create_event_invalidator(cache, dispatcher), EventInvalidator)

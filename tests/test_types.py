"""Tests for AbortSignal, AbortController and Headers."""

import pytest

from vertex_query.types import AbortController, AbortError, Headers, RequestOptions


class TestAbortSignal:
    """Tests for abort signal state and listeners."""

    def test_new_signal_is_not_aborted(self):
        """A fresh signal should not be aborted and have no reason."""
        controller = AbortController()
        assert controller.signal.aborted is False
        assert controller.signal.reason is None

    def test_abort_sets_reason(self):
        """abort() should mark the signal aborted with the given reason."""
        controller = AbortController()
        controller.abort("stop")
        assert controller.signal.aborted is True
        assert controller.signal.reason == "stop"

    def test_abort_is_permanent(self):
        """A second abort should not change the first reason."""
        controller = AbortController()
        controller.abort("first")
        controller.abort("second")
        assert controller.signal.aborted is True
        assert controller.signal.reason == "first"

    def test_throw_if_aborted(self):
        """throw_if_aborted() should raise AbortError carrying the reason."""
        controller = AbortController()
        controller.signal.throw_if_aborted()
        controller.abort("gone")
        with pytest.raises(AbortError) as exc_info:
            controller.signal.throw_if_aborted()
        assert exc_info.value.reason == "gone"

    def test_listener_called_on_abort(self):
        """Listeners should run when the signal aborts."""
        controller = AbortController()
        calls = []
        controller.signal.add_listener(lambda: calls.append("fired"))
        controller.abort()
        assert calls == ["fired"]

    def test_once_listener_is_dropped_after_firing(self):
        """A once listener should be removed after it runs."""
        controller = AbortController()
        calls = []
        controller.signal.add_listener(lambda: calls.append(1), once=True)
        assert controller.signal.listener_count == 1
        controller.abort()
        assert calls == [1]
        assert controller.signal.listener_count == 0

    def test_remove_listener(self):
        """A removed listener should not run."""
        controller = AbortController()
        calls = []

        def listener():
            calls.append(1)

        controller.signal.add_listener(listener)
        controller.signal.remove_listener(listener)
        controller.abort()
        assert calls == []

    def test_remove_unknown_listener_is_ignored(self):
        """Removing a callback that was never added should do nothing."""
        controller = AbortController()
        controller.signal.remove_listener(lambda: None)
        assert controller.signal.listener_count == 0

    def test_listener_added_after_abort_runs_immediately(self):
        """Adding a listener to an aborted signal should call it right away."""
        controller = AbortController()
        controller.abort()
        calls = []
        controller.signal.add_listener(lambda: calls.append(1), once=True)
        assert calls == [1]
        assert controller.signal.listener_count == 0

    def test_failing_listener_does_not_block_others(self):
        """An exception in one listener should not stop the others."""
        controller = AbortController()
        calls = []

        def broken():
            raise RuntimeError("boom")

        controller.signal.add_listener(broken)
        controller.signal.add_listener(lambda: calls.append(1))
        controller.abort()
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_wait_returns_after_abort(self):
        """wait() should return once the signal is aborted."""
        controller = AbortController()
        controller.abort()
        await controller.signal.wait()
        assert controller.signal.aborted


class TestHeaders:
    """Tests for the case-insensitive header multimap."""

    def test_init_from_mapping(self):
        """A mapping should populate the headers in order."""
        headers = Headers({"A": "1", "B": "2"})
        assert headers.items() == [("A", "1"), ("B", "2")]

    def test_init_from_pairs_keeps_duplicates(self):
        """A list of pairs may repeat a name."""
        headers = Headers([("X-Tag", "a"), ("X-Tag", "b")])
        assert headers.get_all("x-tag") == ["a", "b"]

    def test_lookup_is_case_insensitive(self):
        """get() and has() should ignore name casing."""
        headers = Headers({"Content-Type": "application/json"})
        assert headers.get("content-type") == "application/json"
        assert headers.has("CONTENT-TYPE")
        assert "content-TYPE" in headers

    def test_get_missing_returns_none(self):
        """get() should return None for an absent name."""
        assert Headers().get("Authorization") is None

    def test_get_joins_multiple_values(self):
        """get() should join repeated values with a comma."""
        headers = Headers()
        headers.append("Accept", "a")
        headers.append("accept", "b")
        assert headers.get("Accept") == "a, b"

    def test_set_replaces_all_values_in_place(self):
        """set() should leave exactly one value at the first position."""
        headers = Headers([("A", "1"), ("B", "2"), ("a", "3")])
        headers.set("A", "new")
        assert headers.items() == [("A", "new"), ("B", "2")]

    def test_set_appends_new_name(self):
        """set() on an absent name should add it at the end."""
        headers = Headers({"A": "1"})
        headers.set("B", "2")
        assert headers.items() == [("A", "1"), ("B", "2")]

    def test_delete(self):
        """delete() should drop every value for a name."""
        headers = Headers([("A", "1"), ("a", "2"), ("B", "3")])
        headers.delete("A")
        assert headers.items() == [("B", "3")]

    def test_copy_is_independent(self):
        """Changes to a copy should not affect the original."""
        original = Headers({"A": "1"})
        copied = original.copy()
        copied.append("B", "2")
        assert len(original) == 1
        assert len(copied) == 2
        assert copied != original


class TestRequestOptions:
    """Tests for RequestOptions defaults."""

    def test_defaults(self):
        """All options should default to None."""
        options = RequestOptions()
        assert options.custom_headers is None
        assert options.api_client is None
        assert options.timeout is None
        assert options.signal is None

    def test_is_frozen(self):
        """Request options should be read-only."""
        options = RequestOptions(timeout=1.0)
        with pytest.raises(AttributeError):
            options.timeout = 2.0

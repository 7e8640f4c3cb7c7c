"""Unit tests for the plugin manager."""

import asyncio
import logging

import pytest

from .lib import HookPoint, PluginError, PluginManager


class RecordingPlugin:
    def __init__(self, log):
        self.log = log

    def before_compile(self, payload):
        self.log.append(("before_compile", payload.get("program")))

    async def after_output(self, payload):
        self.log.append(("after_output", payload.get("file_name")))


class TestRegistration:
    """Tests for registering hooks and plugins."""

    @pytest.mark.unit
    def test_register_plugin_picks_named_methods(self):
        plugins = PluginManager()
        count = plugins.register_plugin(RecordingPlugin([]))
        assert count == 2
        assert len(plugins.hooks(HookPoint.BEFORE_COMPILE)) == 1
        assert len(plugins.hooks("after_output")) == 1
        assert plugins.hooks("on_component") == []

    @pytest.mark.unit
    def test_plugin_without_hooks_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert PluginManager().register_plugin(object()) == 0
        assert "exposes no known hook methods" in caplog.text

    @pytest.mark.unit
    def test_unknown_point_rejected(self):
        with pytest.raises(PluginError, match="Unknown hook point 'onCompile'"):
            PluginManager().register_hook("onCompile", lambda payload: None)

    @pytest.mark.unit
    def test_non_callable_rejected(self):
        with pytest.raises(TypeError):
            PluginManager().register_hook("on_component", "not callable")

    @pytest.mark.unit
    def test_clear(self):
        plugins = PluginManager()
        plugins.register_plugin(RecordingPlugin([]))
        plugins.clear()
        assert plugins.hooks("before_compile") == []


class TestExecution:
    """Tests for sequential hook execution."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_sync_and_async_hooks(self):
        log = []
        plugins = PluginManager()
        plugins.register_plugin(RecordingPlugin(log))
        await plugins.execute_hook("before_compile", {"program": "app"})
        await plugins.execute_hook(HookPoint.AFTER_OUTPUT, {"file_name": "CompiledUI.jsx"})
        assert log == [("before_compile", "app"), ("after_output", "CompiledUI.jsx")]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_registration_order_and_sequencing(self):
        """Each hook completes before the next starts."""
        events = []

        async def slow(payload):
            events.append("slow:start")
            await asyncio.sleep(0.01)
            events.append("slow:end")

        def fast(payload):
            events.append("fast")

        plugins = PluginManager()
        plugins.register_hook("on_component", slow)
        plugins.register_hook("on_component", fast)
        await plugins.execute_hook("on_component")
        assert events == ["slow:start", "slow:end", "fast"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failing_hook_isolated(self, caplog):
        """A raising hook is logged and the rest still run."""
        calls = []

        def broken(payload):
            raise RuntimeError("boom")

        plugins = PluginManager()
        plugins.register_hook("on_validation_error", broken)
        plugins.register_hook("on_validation_error", lambda payload: calls.append(payload["kind"]) or "ok")

        with caplog.at_level(logging.ERROR):
            results = await plugins.execute_hook("on_validation_error", {"kind": "validation_error"})

        assert calls == ["validation_error"]
        assert results == ["ok"]
        assert "Plugin hook 'on_validation_error' failed: boom" in caplog.text

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_hooks(self):
        assert await PluginManager().execute_hook("after_output", {}) == []

"""Tests for the Patcher caller facade and the module-level API."""

from __future__ import annotations

import types

import pytest

import splice
from splice.patcher.facade import Patcher, create
from splice.patcher.registry import PatchRegistry, default_registry
from splice.patcher.types import Phase


def make_module() -> types.ModuleType:
    module = types.ModuleType("messages")

    def send(channel, text):
        return f"{channel}:{text}"

    def edit(channel, text):
        return f"edited {channel}:{text}"

    module.send = send
    module.edit = edit
    return module


@pytest.fixture
def registry() -> PatchRegistry:
    return PatchRegistry()


class TestPatcher:
    def test_binds_caller_identity(self, registry: PatchRegistry) -> None:
        module = make_module()
        patcher = create("shouty", registry)

        handle = patcher.after(module, "send", lambda recv, args, result: result.upper())

        assert handle.record.caller == "shouty"
        assert handle.record.phase is Phase.AFTER
        assert module.send("general", "hi") == "GENERAL:HI"

    def test_all_three_phases(self, registry: PatchRegistry) -> None:
        module = make_module()
        patcher = Patcher("plugin", registry)
        patcher.before(module, "send", lambda recv, args, orig: [args[0], args[1].strip()])
        patcher.instead(module, "send", lambda recv, args, orig: "[" + orig(*args) + "]")
        patcher.after(module, "send", lambda recv, args, result: result + "!")

        assert module.send("c", "  hi  ") == "[c:hi]!"
        assert [d.phase for d in patcher.get_patches()] == [Phase.BEFORE, Phase.INSTEAD, Phase.AFTER]

    def test_unpatch_all_only_touches_own_records(self, registry: PatchRegistry) -> None:
        module = make_module()
        original_edit = module.edit
        mine, theirs = create("mine", registry), create("theirs", registry)

        mine.after(module, "send", lambda recv, args, result: result + " (mine)")
        mine.after(module, "edit", lambda recv, args, result: result + " (mine)")
        theirs.after(module, "send", lambda recv, args, result: result + " (theirs)")

        assert mine.unpatch_all() == 2

        assert mine.get_patches() == []
        assert len(theirs.get_patches()) == 1
        assert module.edit is original_edit
        assert module.send("c", "x") == "c:x (theirs)"

    def test_facades_share_bindings(self, registry: PatchRegistry) -> None:
        module = make_module()
        create("a", registry).before(module, "send", lambda recv, args, orig: None)
        wrapper = module.send
        create("b", registry).before(module, "send", lambda recv, args, orig: None)

        assert module.send is wrapper
        assert len(registry) == 1

    def test_defaults_to_default_registry(self) -> None:
        patcher = create("default-user")
        assert patcher.registry is default_registry
        assert patcher.caller == "default-user"
        assert repr(patcher) == "<Patcher caller='default-user'>"


class TestModuleLevelApi:
    def test_before_instead_after(self) -> None:
        module = make_module()
        original = module.send
        try:
            splice.before("api-test", module, "send", lambda recv, args, orig: [args[0], args[1] * 2])
            splice.instead("api-test", module, "send", lambda recv, args, orig: orig(*args))
            splice.after("api-test", module, "send", lambda recv, args, result: splice.Override(result + "?"))

            assert module.send("c", "ab") == "c:abab?"
            assert len(splice.get_patches_by_caller("api-test")) == 3
        finally:
            splice.unpatch_all("api-test")

        assert module.send is original
        assert splice.get_patches_by_caller("api-test") == []

    def test_unknown_target_surfaces(self) -> None:
        with pytest.raises(splice.UnknownTargetException):
            splice.before("api-test", make_module(), "missing", lambda recv, args, orig: None)

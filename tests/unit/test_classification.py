"""Tests for tool classification and the tool gate."""

from __future__ import annotations

import pytest

from freelo_mcp.exceptions import ConfigurationError
from freelo_mcp.mode import Mode
from freelo_mcp.tools import TOOL_REGISTRY
from freelo_mcp.tools.classification import (
    EDIT_TOOLS,
    EXCLUDED_TOOLS,
    READ_ONLY_TOOLS,
    get_enabled_tools,
    is_tool_enabled,
    validate_classification,
)


class TestClassificationSets:
    def test_sizes(self) -> None:
        assert len(READ_ONLY_TOOLS) == 20
        assert len(EDIT_TOOLS) == 13

    def test_sets_are_disjoint(self) -> None:
        assert not READ_ONLY_TOOLS & EDIT_TOOLS
        assert not READ_ONLY_TOOLS & EXCLUDED_TOOLS
        assert not EDIT_TOOLS & EXCLUDED_TOOLS
        validate_classification()

    def test_overlap_is_rejected(self) -> None:
        classes = {
            "read_only": frozenset({"get_projects"}),
            "edit": frozenset({"get_projects", "create_task"}),
        }
        with pytest.raises(ConfigurationError, match="get_projects"):
            validate_classification(classes)

    def test_catalogue_matches_classification(self) -> None:
        operations = {spec.operation for spec in TOOL_REGISTRY.values()}
        assert operations == READ_ONLY_TOOLS | EDIT_TOOLS

    def test_catalogue_names_carry_prefix(self) -> None:
        assert all(name.startswith("freelo_") for name in TOOL_REGISTRY)


class TestToolGate:
    @pytest.mark.parametrize("mode", [Mode.RESTRICTED, Mode.FULL])
    def test_read_only_always_enabled(self, mode: Mode) -> None:
        for name in READ_ONLY_TOOLS:
            assert is_tool_enabled(name, mode) is True

    def test_edit_tools_only_in_full_mode(self) -> None:
        for name in EDIT_TOOLS:
            assert is_tool_enabled(name, Mode.FULL) is True
            assert is_tool_enabled(name, Mode.RESTRICTED) is False

    @pytest.mark.parametrize("mode", [Mode.RESTRICTED, Mode.FULL])
    def test_excluded_never_enabled(self, mode: Mode) -> None:
        for name in EXCLUDED_TOOLS:
            assert is_tool_enabled(name, mode) is False

    @pytest.mark.parametrize("name", ["not_a_tool", "", "freelo_get_projects", "GET_PROJECTS"])
    def test_unknown_names_fail_closed(self, name: str) -> None:
        assert is_tool_enabled(name, Mode.FULL) is False
        assert is_tool_enabled(name, Mode.RESTRICTED) is False

    def test_enabled_tool_lists(self) -> None:
        assert get_enabled_tools(Mode.RESTRICTED) == sorted(READ_ONLY_TOOLS)
        full = get_enabled_tools(Mode.FULL)
        assert len(full) == 33
        assert set(full) == READ_ONLY_TOOLS | EDIT_TOOLS

"""Tests for dependency resolution.

Covers:
- resolve() with empty / whitespace / comma-separated input
- Dropping tokens that duplicate defaults
- DependencySet ordering (defaults, add-ons, extras) and de-duplication
"""

from __future__ import annotations

import pytest

from nodegen.catalog import FRAMEWORKS, default_dependencies, get_framework
from nodegen.scaffolder.resolver import DependencySet, resolve


pytestmark = pytest.mark.unit


ALL_FRAMEWORKS = [f.value for f in FRAMEWORKS]


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------


class TestResolve:
    @pytest.mark.parametrize("framework", ALL_FRAMEWORKS)
    def test_empty_input_returns_defaults(self, framework):
        result = resolve(framework, "")
        assert result == list(get_framework(framework).default_dependencies)
        assert len(result) == len(set(result))

    @pytest.mark.parametrize("raw", ["   ", "\t\n", ",", " , ,, "])
    def test_blank_input_adds_nothing(self, raw):
        assert resolve("express", raw) == default_dependencies("express")

    def test_appends_user_tokens_in_order(self):
        result = resolve("express", "lodash axios")
        assert result == default_dependencies("express") + ["lodash", "axios"]

    @pytest.mark.parametrize("raw", ["a,b c", "a b c", "a, b, c", "a,b,c", "  a   b,c  "])
    def test_comma_and_space_equivalent(self, raw):
        assert resolve("hapi", raw) == resolve("hapi", "a b c")

    def test_tokens_matching_defaults_dropped(self):
        result = resolve("express", "express cors express lodash")
        assert result.count("express") == 1
        assert result.count("cors") == 1
        assert result[-1] == "lodash"

    def test_user_repeats_kept_by_resolve(self):
        # Only defaults are used for membership; DependencySet removes repeats.
        result = resolve("express", "lodash lodash")
        assert result[-2:] == ["lodash", "lodash"]

    def test_does_not_mutate_catalog(self):
        before = default_dependencies("react")
        resolve("react", "lodash")
        assert default_dependencies("react") == before

    def test_unknown_framework_raises(self):
        with pytest.raises(KeyError):
            resolve("django", "")


# ---------------------------------------------------------------------------
# DependencySet
# ---------------------------------------------------------------------------


class TestDependencySet:
    def test_for_framework_splits_defaults_and_extras(self):
        deps = DependencySet.for_framework("react", "lodash, axios")
        assert deps.as_list()[: len(default_dependencies("react"))] == default_dependencies("react")
        assert deps.extras == ["lodash", "axios"]

    def test_addons_placed_between_defaults_and_extras(self):
        deps = DependencySet.for_framework("react", "lodash, axios")
        deps.add("@mui/material", "@emotion/react", "@emotion/styled")
        assert deps.as_list() == default_dependencies("react") + [
            "@mui/material",
            "@emotion/react",
            "@emotion/styled",
            "lodash",
            "axios",
        ]

    def test_first_occurrence_wins(self):
        deps = DependencySet(defaults=["a", "b"], extras=["c", "a", "c"])
        deps.add("b", "d", "c")
        assert deps.as_list() == ["a", "b", "d", "c"]

    def test_user_repeats_collapsed(self):
        deps = DependencySet.for_framework("express", "lodash lodash")
        assert deps.as_list().count("lodash") == 1

    def test_add_ignores_empty_names(self):
        deps = DependencySet(defaults=["a"])
        deps.add("", "b")
        assert deps.as_list() == ["a", "b"]

    def test_iteration_matches_as_list(self):
        deps = DependencySet.for_framework("nest", "class-validator")
        assert list(deps) == deps.as_list()

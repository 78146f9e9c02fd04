"""Tests for analysis properties."""

from __future__ import annotations

import pytest

from vs_bootstrapper.config import KNOWN_KEYS, OUTPUT_PATH, SKIP, SOLUTION, AnalysisProperties, KeyPair


class TestAnalysisProperties:
    def test_lookup_prefers_new_key(self):
        properties = AnalysisProperties.from_mapping({
            "sonar.visualstudio.solution": "new.sln",
            "sonar.dotnet.visualstudio.solution.file": "old.sln",
        })

        assert properties.lookup(SOLUTION) == "new.sln"

    def test_lookup_falls_back_to_legacy_key(self):
        properties = AnalysisProperties.from_mapping({"sonar.dotnet.assemblies": "drop"})

        assert properties.lookup(OUTPUT_PATH) == "drop"
        assert properties.has_key(OUTPUT_PATH)
        assert not properties.has_key(OUTPUT_PATH.preferred)

    def test_lookup_without_legacy_key(self):
        assert AnalysisProperties().lookup(KeyPair("missing")) is None

    def test_get_bool(self):
        properties = AnalysisProperties.from_mapping({"a": "True", "b": "false", "c": True, "d": " "})

        assert properties.get_bool("a")
        assert not properties.get_bool("b")
        assert properties.get_bool("c")
        assert properties.get_bool("d", default=True)
        assert not properties.get_bool("missing")
        assert not properties.get_bool(SKIP)

    @pytest.mark.parametrize("value", ["yes", "1", "on", "TRUE ", "y"])
    def test_get_bool_accepts_only_true(self, value):
        properties = AnalysisProperties.from_mapping({"flag": value})

        assert properties.get_bool("flag") is (value.strip().lower() == "true")

    def test_unknown_keys(self):
        properties = AnalysisProperties.from_mapping({
            "sonar.visualstudio.solution": "app.sln",
            "sonar.visualstudio.skipedProjects": "A",
            "sonar.dotnet.assemblies": "drop",
            "sonar.exclusions": "x",
        })

        assert properties.unknown_keys() == ["sonar.visualstudio.skipedProjects"]
        assert properties.unknown_keys("sonar.dotnet.") == []

    def test_with_prefix(self):
        properties = AnalysisProperties.from_mapping({
            "MyLib.sonar.exclusions": "x",
            "MyLibrary.sonar.exclusions": "y",
        })

        assert properties.with_prefix("MyLib.") == {"sonar.exclusions": "x"}

    def test_from_pairs(self):
        properties = AnalysisProperties.from_pairs(["sonar.modules=a,b", "empty=", "k=v=w"])

        assert properties.get_string("sonar.modules") == "a,b"
        assert properties.get_string("empty") == ""
        assert properties.get_string("k") == "v=w"

    def test_from_pairs_rejects_missing_separator(self):
        with pytest.raises(ValueError):
            AnalysisProperties.from_pairs(["sonar.modules"])

    def test_known_keys_are_unique(self):
        names = [pair.preferred for pair in KNOWN_KEYS]
        names += [pair.legacy for pair in KNOWN_KEYS if pair.legacy]
        assert len(names) == len(set(names))

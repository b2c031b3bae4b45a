"""Tests for config discovery and loading."""

from __future__ import annotations

import json

import pytest


class TestDefaults:
    """Behaviour without a config file."""

    def test_default_outputs(self, tmp_path):
        from tokensync.config import resolve_config

        config = resolve_config(start=tmp_path)
        assert config.source is None
        assert config.input_path == tmp_path / "tokens.json"
        assert config.output_paths() == {
            "css": tmp_path / "src/styles/tokens.css",
            "tailwind": tmp_path / "tailwind.config.js",
        }
        assert config.watch.poll_interval == 0.5
        assert config.watch.debounce == 0.3

    def test_default_validation_rules(self, tmp_path):
        from tokensync.config import resolve_config

        validation = resolve_config(start=tmp_path).tokens.validation
        assert validation.required == ["colors"]
        assert validation.optional == ["spacing", "typography", "borderRadius"]


class TestFormats:
    """TOML, YAML, JSON and pyproject.toml config files."""

    def test_toml(self, tmp_path):
        from tokensync.config import load_config

        path = tmp_path / "design-tokens.toml"
        path.write_text(
            '[tokens]\ninput = "design/tokens.json"\n\n'
            '[output]\nflutter = "lib/tokens.dart"\n\n'
            "[watch]\npollInterval = 1.0\n",
            encoding="utf-8",
        )

        config = load_config(path)
        assert config.source == path
        assert config.input_path == tmp_path / "design" / "tokens.json"
        assert config.output_paths()["flutter"] == tmp_path / "lib" / "tokens.dart"
        assert config.watch.poll_interval == 1.0

    def test_yaml_can_disable_default_outputs(self, tmp_path):
        from tokensync.config import load_config

        path = tmp_path / "design-tokens.yaml"
        path.write_text(
            "output:\n  css: null\n  tailwind: null\n  reactNative: src/tokens.js\n",
            encoding="utf-8",
        )

        config = load_config(path)
        assert config.output_paths() == {"react_native": tmp_path / "src" / "tokens.js"}

    def test_json_with_validation_rules(self, tmp_path):
        from tokensync.config import load_config

        path = tmp_path / ".design-tokensrc.json"
        path.write_text(
            json.dumps(
                {
                    "tokens": {
                        "validation": {"required": ["colors", "spacing"], "optional": []},
                        "resolveReferences": True,
                    }
                }
            ),
            encoding="utf-8",
        )

        config = load_config(path)
        assert config.tokens.validation.required == ["colors", "spacing"]
        assert config.tokens.resolve_references is True

    def test_pyproject_table(self, tmp_path):
        from tokensync.config import load_config

        path = tmp_path / "pyproject.toml"
        path.write_text(
            '[project]\nname = "app"\n\n'
            '[tool.design-tokens.tokens]\ninput = "tokens/design.json"\n',
            encoding="utf-8",
        )

        config = load_config(path)
        assert config.input_path == tmp_path / "tokens" / "design.json"

    def test_empty_yaml_means_defaults(self, tmp_path):
        from tokensync.config import load_config

        path = tmp_path / "design-tokens.yml"
        path.write_text("", encoding="utf-8")
        assert load_config(path).tokens.input.name == "tokens.json"

    def test_absolute_paths_are_kept(self, tmp_path):
        from tokensync.config import load_config

        target = tmp_path / "elsewhere" / "tokens.css"
        path = tmp_path / "design-tokens.json"
        path.write_text(json.dumps({"output": {"css": str(target)}}), encoding="utf-8")
        assert load_config(path).output_paths()["css"] == target


class TestDiscovery:
    """Config file search order."""

    def test_toml_wins_over_json(self, tmp_path):
        from tokensync.config import find_config

        (tmp_path / "design-tokens.json").write_text("{}", encoding="utf-8")
        (tmp_path / "design-tokens.toml").write_text("", encoding="utf-8")
        assert find_config(tmp_path) == tmp_path / "design-tokens.toml"

    def test_pyproject_without_table_is_ignored(self, tmp_path):
        from tokensync.config import find_config

        (tmp_path / "pyproject.toml").write_text('[project]\nname = "app"\n', encoding="utf-8")
        assert find_config(tmp_path) is None

    def test_pyproject_is_last_resort(self, tmp_path):
        from tokensync.config import find_config

        (tmp_path / "pyproject.toml").write_text(
            "[tool.design-tokens]\n", encoding="utf-8"
        )
        assert find_config(tmp_path) == tmp_path / "pyproject.toml"

        (tmp_path / ".design-tokensrc.json").write_text("{}", encoding="utf-8")
        assert find_config(tmp_path) == tmp_path / ".design-tokensrc.json"

    def test_resolve_config_prefers_explicit(self, tmp_path):
        from tokensync.config import resolve_config

        (tmp_path / "design-tokens.toml").write_text(
            '[tokens]\ninput = "found.json"\n', encoding="utf-8"
        )
        explicit = tmp_path / "custom.json"
        explicit.write_text(json.dumps({"tokens": {"input": "explicit.json"}}), encoding="utf-8")

        assert resolve_config(explicit, start=tmp_path).tokens.input.name == "explicit.json"
        assert resolve_config(start=tmp_path).tokens.input.name == "found.json"


class TestErrors:
    """Invalid configuration raises ConfigError."""

    def test_missing_explicit_file(self, tmp_path):
        from tokensync.config import load_config
        from tokensync.core.errors import ConfigError

        with pytest.raises(ConfigError, match="Config file not found"):
            load_config(tmp_path / "nope.toml")

    def test_unknown_target(self, tmp_path):
        from tokensync.config import load_config
        from tokensync.core.errors import ConfigError

        path = tmp_path / "design-tokens.json"
        path.write_text(json.dumps({"output": {"sketch": "a.sketch"}}), encoding="utf-8")
        with pytest.raises(ConfigError, match="Unknown target 'sketch'"):
            load_config(path)

    def test_invalid_toml(self, tmp_path):
        from tokensync.config import load_config
        from tokensync.core.errors import ConfigError

        path = tmp_path / "design-tokens.toml"
        path.write_text("[tokens\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path)

    def test_non_mapping(self, tmp_path):
        from tokensync.config import load_config
        from tokensync.core.errors import ConfigError

        path = tmp_path / "design-tokens.yaml"
        path.write_text("- css\n- tailwind\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_config(path)

    def test_invalid_watch_interval(self, tmp_path):
        from tokensync.config import load_config
        from tokensync.core.errors import ConfigError

        path = tmp_path / "design-tokens.json"
        path.write_text(json.dumps({"watch": {"pollInterval": 0}}), encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)

    def test_misspelled_validation_key(self, tmp_path):
        from tokensync.config import load_config
        from tokensync.core.errors import ConfigError

        path = tmp_path / "design-tokens.toml"
        path.write_text(
            "[tokens.validation]\nrequried = [\"colors\", \"spacing\"]\n", encoding="utf-8"
        )
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)


class TestPipelineFromConfig:
    """A config builds a ready pipeline."""

    def test_pipeline_uses_resolved_paths(self, tmp_path):
        from tokensync.config import load_config

        path = tmp_path / "design-tokens.toml"
        path.write_text(
            '[tokens]\ninput = "tokens.json"\nresolveReferences = true\n\n'
            '[tokens.validation]\nrequired = []\n',
            encoding="utf-8",
        )

        pipeline = load_config(path).pipeline()
        assert pipeline.input_path == tmp_path / "tokens.json"
        assert pipeline.outputs["css"] == tmp_path / "src" / "styles" / "tokens.css"
        assert pipeline.resolve_references is True
        assert pipeline.validator_config.required == []

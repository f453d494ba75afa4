"""Tests for tabby.config_loader — file config merged with overrides."""

from pathlib import Path

from tabby.config_loader import load_config


class TestLoadConfig:
    """load_config — tabby.yaml / tabby.toml discovery and precedence."""

    def test_no_file_uses_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)
        assert config.root == tmp_path
        assert config.port == 8000
        assert config.debug is False

    def test_yaml_top_level_keys(self, tmp_path: Path) -> None:
        (tmp_path / "tabby.yaml").write_text("port: 9000\ndebug: true\ndist: public\n")
        config = load_config(tmp_path)
        assert config.port == 9000
        assert config.debug is True
        assert config.dist == Path("public")
        assert config.dist_path == tmp_path / "public"

    def test_yml_extension(self, tmp_path: Path) -> None:
        (tmp_path / "tabby.yml").write_text("host: 0.0.0.0\n")
        assert load_config(tmp_path).host == "0.0.0.0"

    def test_tabby_section_wins(self, tmp_path: Path) -> None:
        (tmp_path / "tabby.yaml").write_text(
            "port: 9000\ntabby:\n  port: 9100\n  assets_dir: public\n"
        )
        config = load_config(tmp_path)
        assert config.port == 9100
        assert config.assets_dir == "public"

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "tabby.yaml").write_text("title: My Site\nport: 9000\n")
        assert load_config(tmp_path).port == 9000

    def test_toml(self, tmp_path: Path) -> None:
        (tmp_path / "tabby.toml").write_text(
            '[tabby]\nbundle = "gen/bundle.py"\nport = 7000\n'
        )
        config = load_config(tmp_path)
        assert config.port == 7000
        assert config.bundle_path == tmp_path / "gen" / "bundle.py"

    def test_yaml_preferred_over_toml(self, tmp_path: Path) -> None:
        (tmp_path / "tabby.yaml").write_text("port: 1111\n")
        (tmp_path / "tabby.toml").write_text("port = 2222\n")
        assert load_config(tmp_path).port == 1111

    def test_overrides_take_precedence(self, tmp_path: Path) -> None:
        (tmp_path / "tabby.yaml").write_text("port: 9000\ndebug: false\n")
        config = load_config(tmp_path, port=5000, debug=True)
        assert config.port == 5000
        assert config.debug is True

    def test_string_path_override_converted(self, tmp_path: Path) -> None:
        config = load_config(tmp_path, dist="out/site")
        assert config.dist == Path("out/site")

    def test_malformed_yaml_falls_back(self, tmp_path: Path) -> None:
        (tmp_path / "tabby.yaml").write_text("port: [unclosed\n")
        assert load_config(tmp_path).port == 8000

    def test_non_mapping_yaml_falls_back(self, tmp_path: Path) -> None:
        (tmp_path / "tabby.yaml").write_text("- just\n- a list\n")
        assert load_config(tmp_path).port == 8000

    def test_malformed_toml_falls_back(self, tmp_path: Path) -> None:
        (tmp_path / "tabby.toml").write_text("port = = 1\n")
        assert load_config(tmp_path).port == 8000

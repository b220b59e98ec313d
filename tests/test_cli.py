"""Tests for configuration loading and the command line."""

import json

import pytest

from log2dashboard import (
    DIALECTS,
    BoundaryStyle,
    ConfigError,
    ErrorRule,
    config_from_dict,
    load_config,
    main,
)


class TestConfigFromDict:
    """Tests for config_from_dict."""

    def test_empty_is_marker_dialect(self):
        """Should fall back to the marker dialect."""
        assert config_from_dict({}) == DIALECTS["marker"]

    def test_dialect_preset(self):
        """Should start from the named dialect."""
        config = config_from_dict({"dialect": "asterisk"})

        assert config.boundary_style is BoundaryStyle.ASTERISK_FRAMED
        assert config.testcase_marker is None

    def test_overrides(self):
        """Should override markers and error rules."""
        config = config_from_dict({
            "boundary_style": "marker",
            "keyword_marker": "Running Keyword : ",
            "testcase_marker": None,
            "error_rules": [{"substring": "FATAL", "strip_marker": True}, "Traceback"],
            "unknown_error": "No detail",
        })

        assert config.keyword_marker == "Running Keyword : "
        assert config.testcase_marker is None
        assert config.error_rules == (ErrorRule("FATAL", True), ErrorRule("Traceback"))
        assert config.unknown_error == "No detail"

    @pytest.mark.parametrize("data", [
        [],
        {"dialect": "xml"},
        {"boundary_style": "dashes"},
        {"keyword_marker": ""},
        {"testcase_marker": 3},
        {"error_rules": "Exception"},
        {"error_rules": [{"strip_marker": True}]},
        {"colour": "red"},
    ])
    def test_invalid(self, data):
        """Should reject invalid configuration."""
        with pytest.raises(ConfigError):
            config_from_dict(data)


class TestLoadConfig:
    """Tests for load_config."""

    def test_reads_json(self, tmp_path):
        """Should load a JSON config file."""
        path = tmp_path / "scan.json"
        path.write_text(json.dumps({"keyword_marker": "KW: "}), encoding="utf-8")

        assert load_config(str(path)).keyword_marker == "KW: "

    def test_default_dialect(self, tmp_path):
        """Should use the given dialect when the file names none."""
        path = tmp_path / "scan.json"
        path.write_text("{}", encoding="utf-8")

        assert load_config(str(path), "asterisk") == DIALECTS["asterisk"]

    def test_reads_yaml(self, tmp_path):
        """Should load a YAML config file with bare substrings."""
        path = tmp_path / "scan.yaml"
        path.write_text(
            "dialect: asterisk\n"
            "error_rules:\n"
            "  - substring: 'Error Type:'\n"
            "    strip_marker: true\n"
            "  - Traceback\n",
            encoding="utf-8",
        )
        config = load_config(str(path))

        assert config.boundary_style is BoundaryStyle.ASTERISK_FRAMED
        assert config.error_rules == (ErrorRule("Error Type:", True), ErrorRule("Traceback"))

    def test_empty_file(self, tmp_path):
        """Should treat an empty file as the default dialect."""
        path = tmp_path / "scan.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(str(path)) == DIALECTS["marker"]

    def test_bad_json(self, tmp_path):
        """Should raise ConfigError for malformed JSON."""
        path = tmp_path / "scan.json"
        path.write_text("{nope", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_missing_file(self, tmp_path):
        """Should raise ConfigError for a missing file."""
        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "absent.json"))


class TestMain:
    """Tests for the command line entry point."""

    def test_writes_dashboard(self, tmp_path, write_log, marker_lines, capsys):
        """Should write the dashboard and print a summary."""
        log = write_log(marker_lines)
        out = tmp_path / "dashboard.html"

        assert main([str(log), "-o", str(out), "--title", "Nightly"]) == 0

        assert "<title>Nightly</title>" in out.read_text(encoding="utf-8")
        printed = capsys.readouterr().out
        assert f"[V] Wrote {out}" in printed
        assert "Keywords: 3, Passed: 1, Failed: 2" in printed

    def test_writes_junit(self, tmp_path, write_log, asterisk_lines):
        """Should write a JUnit file when asked."""
        log = write_log(asterisk_lines)
        out = tmp_path / "dashboard.html"
        junit = tmp_path / "keywords.xml"

        assert main([str(log), "-o", str(out), "--dialect", "asterisk", "--junit", str(junit)]) == 0

        text = junit.read_text(encoding="utf-8")
        assert "Open Browser" in text
        assert "NullPointerException at Page.close" in text

    def test_marker_flags(self, tmp_path, write_log, capsys):
        """Should honour marker flags over the dialect."""
        log = write_log(["TC=> Smoke", "KW=> Boot", "Error: no power"])
        out = tmp_path / "dashboard.html"

        main([str(log), "-o", str(out), "--keyword-marker", "KW=>", "--testcase-marker", "TC=>"])

        printed = capsys.readouterr().out
        assert "Test Case: Smoke, Keywords: 1, Passed: 0, Failed: 1" in printed

    def test_config_file(self, tmp_path, write_log, capsys):
        """Should apply rules from a config file."""
        config = tmp_path / "scan.json"
        config.write_text(json.dumps({"error_rules": ["FATAL"]}), encoding="utf-8")
        log = write_log(["Invoking Business Component : A", "Exception ignored", "FATAL stop"])
        out = tmp_path / "dashboard.html"

        main([str(log), "-o", str(out), "--config", str(config)])

        assert "Failed: 1" in capsys.readouterr().out
        assert "FATAL stop" in out.read_text(encoding="utf-8")

    def test_bad_config_exits(self, tmp_path):
        """Should exit with a usage error for an invalid config."""
        config = tmp_path / "scan.json"
        config.write_text(json.dumps({"dialect": "xml"}), encoding="utf-8")

        with pytest.raises(SystemExit) as exc:
            main(["log.txt", "--config", str(config)])
        assert exc.value.code == 2

    def test_missing_log(self, tmp_path, capsys):
        """Should still write an empty dashboard and exit with 1."""
        out = tmp_path / "dashboard.html"

        assert main([str(tmp_path / "nope.txt"), "-o", str(out)]) == 1

        assert out.exists()
        assert "Keywords: 0, Passed: 0, Failed: 0" in capsys.readouterr().out

"""
Tests for the log-redactor command line tool.
"""

import io
import json

from typer.testing import CliRunner

from log_redactor import RedactionEngine, load_text
from log_redactor.cli import app, redact_stream

runner = CliRunner()


class TestCheckCommand:
    """Test suite for `log-redactor check`."""

    def test_valid_rules(self, rules_file):
        res = runner.invoke(app, ["check", str(rules_file)])

        assert res.exit_code == 0
        assert "3 rules OK" in res.output

    def test_invalid_rules(self, write_rules):
        path = write_rules([{"search": "a", "replace": "b"}, {"search": "a"}])

        res = runner.invoke(app, ["check", str(path)])

        assert res.exit_code == 1
        assert "rule 1" in res.output
        assert "'replace' is a required property" in res.output

    def test_rules_from_environment(self, monkeypatch, rules_file):
        monkeypatch.setenv("LOG_REDACTOR_RULES", str(rules_file))
        assert runner.invoke(app, ["check"]).exit_code == 0

    def test_no_rules_is_a_usage_error(self):
        res = runner.invoke(app, ["check"])
        assert res.exit_code == 2

    def test_version(self):
        res = runner.invoke(app, ["--version"])

        assert res.exit_code == 0
        assert "log-redactor" in res.output


class TestRedactCommand:
    """Test suite for `log-redactor redact`."""

    def test_redact_file(self, rules_file, tmp_path):
        source = tmp_path / "app.log"
        target = tmp_path / "app.redacted.log"
        source.write_text("start\nlogin user=alice failed\nPassword=x1\n", encoding="utf-8")

        res = runner.invoke(app, ["redact", str(rules_file), "-i", str(source), "-o", str(target)])

        assert res.exit_code == 0
        assert target.read_text(encoding="utf-8") == (
            "start\nlogin user=REDACTED failed\npassword=XXXXXXXX\n"
        )

    def test_redact_stdin_to_stdout(self, rules_file):
        res = runner.invoke(app, ["redact", str(rules_file)], input="user=bob\nhello\n")

        assert res.exit_code == 0
        assert "user=REDACTED\nhello\n" in res.output

    def test_redact_with_profile(self, tmp_path):
        source = tmp_path / "app.log"
        target = tmp_path / "out.log"
        source.write_text("SSN: 123-45-6789\n", encoding="utf-8")

        res = runner.invoke(
            app, ["redact", "--profile", "us_global", "-i", str(source), "-o", str(target)]
        )

        assert res.exit_code == 0
        assert target.read_text(encoding="utf-8") == "SSN: {{SSN}}\n"

    def test_profile_and_rules_file_are_exclusive(self, rules_file, tmp_path):
        source = tmp_path / "app.log"
        source.write_text("user=bob\n", encoding="utf-8")

        res = runner.invoke(
            app, ["redact", str(rules_file), "--profile", "us_global", "-i", str(source)]
        )

        assert res.exit_code == 2

    def test_unknown_profile(self):
        assert runner.invoke(app, ["redact", "--profile", "nope"]).exit_code == 2

    def test_missing_input_file(self, rules_file, tmp_path):
        res = runner.invoke(app, ["redact", str(rules_file), "-i", str(tmp_path / "nope.log")])

        assert res.exit_code == 1
        assert "error:" in res.output

    def test_unwritable_output_file(self, rules_file, tmp_path):
        source = tmp_path / "app.log"
        source.write_text("user=bob\n", encoding="utf-8")
        target = tmp_path / "missing-dir" / "out.log"

        res = runner.invoke(app, ["redact", str(rules_file), "-i", str(source), "-o", str(target)])

        assert res.exit_code == 1
        assert "error:" in res.output

    def test_redact_stream_counts(self, rules_file):
        engine = RedactionEngine.from_file(rules_file)
        out = io.StringIO()

        total, changed = redact_stream(engine, io.StringIO("a\nuser=bob\nb\n"), out)

        assert (total, changed) == (3, 1)
        assert out.getvalue() == "a\nuser=REDACTED\nb\n"


class TestProfileCommand:
    """Test suite for `log-redactor profile`."""

    def test_profile_is_a_loadable_rules_file(self):
        res = runner.invoke(app, ["profile", "us_global"])

        assert res.exit_code == 0
        rules = load_text(res.output)
        assert len(rules) == len(json.loads(res.output)["rules"])

    def test_unknown_profile(self):
        assert runner.invoke(app, ["profile", "nope"]).exit_code == 2

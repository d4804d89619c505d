"""Tests for the discovery-ec2 command-line interface."""

import json

import pytest
import yaml

from discovery_ec2.cli import REDACTED, create_parser, main

SETTINGS_YAML = """
cloud:
  aws:
    access_key: aws_key
    secret_key: aws_secret
    region: eu-west
    protocol: http
    proxy:
      host: aws_proxy_host
      port: 8080
      username: aws_proxy_username
      password: aws_proxy_password
    ec2:
      region: us-west
"""


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(SETTINGS_YAML)
    return path


class TestParser:
    """Tests for argument parsing."""

    def test_command_required(self):
        """Test that a subcommand must be given."""
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_resolve_defaults(self, settings_file):
        """Test default options of the resolve command."""
        args = create_parser().parse_args(["resolve", str(settings_file)])
        assert args.format == "text"
        assert args.no_redact is False


class TestResolve:
    """Tests for the resolve command."""

    def test_json_output(self, settings_file, capsys):
        """Test the resolved values in JSON form."""
        assert main(["resolve", str(settings_file), "--format", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["credentials"] == {
            "source": "settings",
            "access_key": "aws_key",
            "secret_key": REDACTED,
        }
        assert data["protocol"] == "http"
        assert data["proxy"]["host"] == "aws_proxy_host"
        assert data["proxy"]["port"] == 8080
        assert data["proxy"]["password"] == REDACTED
        assert data["region"] == "us-west-1"
        assert data["endpoint"] == "ec2.us-west-1.amazonaws.com"

    def test_no_redact(self, settings_file, capsys):
        """Test that secrets are shown only on request."""
        assert main(["resolve", str(settings_file), "-f", "json", "--no-redact"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["credentials"]["secret_key"] == "aws_secret"
        assert data["proxy"]["password"] == "aws_proxy_password"

    def test_text_output(self, settings_file, capsys):
        """Test the flat text format."""
        assert main(["resolve", str(settings_file)]) == 0

        out = capsys.readouterr().out
        assert "proxy.host: aws_proxy_host" in out
        assert "signer: null" in out
        assert "aws_secret" not in out

    def test_yaml_output(self, settings_file, capsys):
        """Test the YAML format."""
        assert main(["resolve", str(settings_file), "-f", "yaml"]) == 0

        data = yaml.safe_load(capsys.readouterr().out)
        assert data["endpoint"] == "ec2.us-west-1.amazonaws.com"

    def test_default_chain_source(self, tmp_path, capsys):
        """Test that missing credentials are reported as the default chain."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert main(["resolve", str(path), "-f", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["credentials"] == {"source": "default-chain"}
        assert data["protocol"] == "https"
        assert data["proxy"]["port"] == -1
        assert data["endpoint"] is None

    def test_merged_files(self, settings_file, tmp_path, capsys):
        """Test that later files override earlier ones."""
        override = tmp_path / "override.yaml"
        override.write_text("cloud:\n  aws:\n    ec2:\n      endpoint: ec2.endpoint\n")
        assert main(["resolve", str(settings_file), str(override), "-f", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["endpoint"] == "ec2.endpoint"

    def test_invalid_region(self, tmp_path, capsys):
        """Test that resolution errors exit with status 1."""
        path = tmp_path / "bad.yaml"
        path.write_text("cloud:\n  aws:\n    region: does-not-exist\n")
        assert main(["resolve", str(path)]) == 1
        assert "No automatic endpoint could be derived from region" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        """Test that load failures exit with status 2."""
        assert main(["resolve", str(tmp_path / "missing.yaml")]) == 2
        assert "Failed to load settings" in capsys.readouterr().err

    def test_non_utf8_file(self, tmp_path, capsys):
        """Test that an undecodable settings file exits with status 2."""
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"\xff\xfe")
        assert main(["resolve", str(path)]) == 2
        assert "not valid UTF-8" in capsys.readouterr().err


class TestEndpoint:
    """Tests for the endpoint command."""

    def test_prints_endpoint(self, settings_file, capsys):
        """Test the endpoint derived from the EC2 region."""
        assert main(["endpoint", str(settings_file)]) == 0
        assert capsys.readouterr().out.strip() == "ec2.us-west-1.amazonaws.com"

    def test_prints_null(self, tmp_path, capsys):
        """Test output when the SDK default applies."""
        path = tmp_path / "settings.json"
        path.write_text("{}")
        assert main(["endpoint", str(path)]) == 0
        assert capsys.readouterr().out.strip() == "null"

    def test_non_utf8_file(self, tmp_path, capsys):
        """Test that undecodable files exit with status 2."""
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"\xff\xfe")
        assert main(["endpoint", str(path)]) == 2


class TestCheck:
    """Tests for the check command."""

    def test_valid_file(self, settings_file, capsys):
        """Test a well-formed settings file."""
        assert main(["check", str(settings_file)]) == 0
        assert "setting(s)" in capsys.readouterr().out

    def test_invalid_and_missing_files(self, tmp_path, capsys):
        """Test that any bad file fails the check."""
        bad = tmp_path / "bad.yaml"
        bad.write_text("cloud: [unclosed")
        assert main(["check", str(bad), str(tmp_path / "missing.yaml")]) == 1

        err = capsys.readouterr().err
        assert "Failed to parse settings" in err
        assert "File not found" in err

    def test_directory_argument(self, tmp_path, capsys):
        """Test that a directory is reported instead of crashing."""
        assert main(["check", str(tmp_path)]) == 1
        assert str(tmp_path) in capsys.readouterr().err

    def test_non_utf8_file(self, tmp_path, capsys):
        """Test that an undecodable file is reported instead of crashing."""
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"\xff\xfe")
        assert main(["check", str(path)]) == 1
        assert "not valid UTF-8" in capsys.readouterr().err

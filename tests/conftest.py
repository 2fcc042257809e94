"""Shared test fixtures for the profile switcher."""

from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_CONFIG = """\
[default]
region = us-west-2
foo = bar

[profile work]
region = us-east-1
output = json

[profile personal]
region = eu-west-1
sso_session = my-sso

[sso-session my-sso]
sso_start_url = https://example.awsapps.com/start
sso_region = us-east-1

[badsection]
region = ap-south-1
"""


@pytest.fixture
def aws_config(tmp_path: Path) -> Path:
    """Write a representative AWS config file and return its path."""
    path = tmp_path / "config"
    path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    return path

"""Tests for promoting a profile into [default]."""

from __future__ import annotations

from pathlib import Path

import pytest

from profile_switcher.exceptions import ProfileNotFoundError, StoreWriteError
from profile_switcher.promote import promote
from profile_switcher.store import ConfigDocument, load


class TestPromote:
    def test_default_becomes_exact_copy(self, tmp_path: Path):
        path = tmp_path / "config"
        doc = ConfigDocument.from_string(
            "[default]\nregion = us-west-2\nfoo = bar\n\n"
            "[profile work]\nregion = us-east-1\n"
        )
        promote(doc, "work", path)
        assert doc.items("default") == [("region", "us-east-1")]
        assert load(path).items("default") == [("region", "us-east-1")]

    def test_key_order_follows_profile(self, aws_config: Path):
        doc = load(aws_config)
        promote(doc, "personal", aws_config)
        assert load(aws_config).items("default") == [
            ("region", "eu-west-1"),
            ("sso_session", "my-sso"),
        ]

    def test_creates_missing_default(self, tmp_path: Path):
        path = tmp_path / "config"
        doc = ConfigDocument.from_string("[profile a]\nk = v\n")
        promote(doc, "a", path)
        saved = load(path)
        assert saved.sections() == ["profile a", "default"]
        assert saved.items("default") == [("k", "v")]

    def test_other_sections_untouched(self, aws_config: Path):
        before = load(aws_config)
        promote(load(aws_config), "work", aws_config)
        after = load(aws_config)
        assert after.sections() == before.sections()
        for section in before.sections():
            if section != "default":
                assert after.items(section) == before.items(section)

    def test_comments_and_layout_survive(self, tmp_path: Path):
        path = tmp_path / "config"
        path.write_text(
            "# managed by team\n[profile work]\n# prod account\n"
            "region = us-east-1\n\n[profile dev]\nregion=eu-west-1\n",
            encoding="utf-8",
        )
        promote(load(path), "dev", path)
        assert path.read_text(encoding="utf-8") == (
            "# managed by team\n[profile work]\n# prod account\n"
            "region = us-east-1\n\n[profile dev]\nregion=eu-west-1\n"
            "\n[default]\nregion = eu-west-1\n"
        )

    def test_existing_default_rewritten_in_place(self, tmp_path: Path):
        path = tmp_path / "config"
        path.write_text(
            "[default]\nregion = us-west-2\nfoo=bar\n\n"
            "# work account\n[profile work]\nregion = us-east-1\n",
            encoding="utf-8",
        )
        promote(load(path), "work", path)
        assert path.read_text(encoding="utf-8") == (
            "[default]\nregion = us-east-1\n\n"
            "# work account\n[profile work]\nregion = us-east-1\n"
        )

    def test_second_promotion_leaves_no_stale_keys(self, aws_config: Path):
        promote(load(aws_config), "personal", aws_config)
        promote(load(aws_config), "work", aws_config)
        assert load(aws_config).items("default") == [
            ("region", "us-east-1"),
            ("output", "json"),
        ]

    def test_missing_profile_leaves_document_alone(self, aws_config: Path):
        doc = load(aws_config)
        before = doc.to_string()
        with pytest.raises(ProfileNotFoundError) as exc_info:
            promote(doc, "missing", aws_config)
        assert exc_info.value.name == "missing"
        assert doc.to_string() == before
        assert load(aws_config).items("default") == [
            ("region", "us-west-2"),
            ("foo", "bar"),
        ]

    def test_saves_exactly_once(self, aws_config: Path, monkeypatch):
        calls = []
        monkeypatch.setattr(
            "profile_switcher.promote.save",
            lambda doc, path: calls.append(path),
        )
        promote(load(aws_config), "work", aws_config)
        assert calls == [aws_config]

    def test_write_failure_propagates(self, aws_config: Path, monkeypatch):
        def fail(doc, path):
            raise StoreWriteError("read-only file system")

        monkeypatch.setattr("profile_switcher.promote.save", fail)
        with pytest.raises(StoreWriteError):
            promote(load(aws_config), "work", aws_config)

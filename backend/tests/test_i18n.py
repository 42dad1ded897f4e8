"""Tests for the server-side message catalogue."""

from __future__ import annotations

import pytest

from backend.i18n import DEFAULT_LOCALE, MESSAGES, create_translator, format_message, normalize_locale


class TestNormalizeLocale:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("en", "en"), ("zh-CN", "zh-CN"), (None, "zh-CN"), ("", "zh-CN"), ("en-US", "zh-CN"), ("EN", "zh-CN")],
    )
    def test_only_en_selects_english(self, value, expected):
        assert normalize_locale(value) == expected

    def test_default(self):
        assert DEFAULT_LOCALE == "zh-CN"


class TestFormatMessage:
    def test_substitutes(self):
        assert format_message("{a} of {b}", a=1, b=2) == "1 of 2"

    def test_unknown_placeholder_left_alone(self):
        assert format_message("{a} and {missing}", a="x") == "x and {missing}"

    def test_no_vars(self):
        assert format_message("{a}") == "{a}"


class TestTranslator:
    def test_english(self):
        t = create_translator("en")

        assert t("task.retry") == "Retry"
        assert t("tasks.writingProgress", current=2, total=5) == "Writing chapter 2 of 5"

    def test_chinese(self):
        t = create_translator("zh-CN")

        assert t("task.retry") == "重试"
        assert t("tasks.words", count="1,200") == "1,200 字"

    def test_missing_key_returns_key(self):
        assert create_translator("en")("tasks.nope") == "tasks.nope"

    def test_falls_back_to_english(self, monkeypatch):
        monkeypatch.setitem(MESSAGES, "zh-CN", {k: v for k, v in MESSAGES["zh-CN"].items() if k != "task.stop"})

        assert create_translator("zh-CN")("task.stop") == "Stop"

    def test_catalogues_have_same_keys(self):
        assert set(MESSAGES["en"]) == set(MESSAGES["zh-CN"])

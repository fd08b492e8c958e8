"""Tests for the email special case and the detector registry."""

import logging

import pytest

import datadefender.specialcase  # noqa: F401
from datadefender.metadata import FileMatchMetaData, MatchMetaData
from datadefender.specialcase.base import SpecialCase
from datadefender.specialcase.detectors.email import EmailDetector, is_valid_email
from datadefender.specialcase.registry import (
    detect_first,
    get_detector,
    list_detectors,
    register_detector,
    unregister_detector,
)


@pytest.fixture
def detector():
    return EmailDetector()


@pytest.fixture
def column():
    return MatchMetaData(table="users", column="email")


class TestEmailDetector:
    @pytest.mark.parametrize("text", [
        "john.doe@example.com",
        "jane+news@mail.example.org",
        "first-last@my-company.co.uk",
        "USER_1@EXAMPLE.COM",
        "john.doe-smith@example.com",
        "first.last+tag@gmail.com",
        "a.b-c@example.org",
        "ops@123.example.net",
    ])
    def test_valid_email_matches(self, detector, column, text):
        result = detector.detect(column, text)

        assert result is column
        assert result.model == "email"
        assert result.average_probability == 1.0
        assert result.is_match

    @pytest.mark.parametrize("text", [
        "not-an-email",
        "john.doe.example.com",
        "john@localhost",
        "john@example.c",
        "john@@example.com",
        "john doe@example.com",
        "@example.com",
        "user@-example.com",
        "user@example-.com",
        "user@ex_ample.com",
        "jös@ëxample.com",
        "john.@example.com",
        "john@example..com",
    ])
    def test_invalid_email_does_not_match(self, detector, column, text):
        assert detector.detect(column, text) is None
        assert column.model is None
        assert column.average_probability == 0.0

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_input_is_never_a_match(self, detector, column, text):
        assert detector.detect(column, text) is None

    def test_detection_is_idempotent(self, detector):
        first = detector.detect(MatchMetaData(table="t", column="c"), "a@b.io")
        second = detector.detect(MatchMetaData(table="t", column="c"), "a@b.io")
        assert (first.model, first.average_probability) == (second.model, second.average_probability)
        assert detector.detect(MatchMetaData(), "nope") is None
        assert detector.detect(MatchMetaData(), "nope") is None

    def test_file_carrier_gets_same_classification(self, detector):
        meta = FileMatchMetaData(directory="/tmp", file_name="contacts.txt")
        result = detector.detect(meta, "john.doe@example.com")
        assert result is meta
        assert result.model == "email"
        assert result.average_probability == 1.0

    def test_file_scan_logs_at_info(self, detector, caplog):
        caplog.set_level(logging.INFO)
        detector.detect(FileMatchMetaData(directory="d", file_name="f.txt"), "x@y.org")
        assert "Email detected: x@y.org" in caplog.text

    def test_is_valid_email_is_syntax_only(self):
        assert is_valid_email("someone@nonexistent-domain-for-tests.invalid")


class TestRegistry:
    def test_email_is_auto_registered(self):
        assert "email" in list_detectors()
        assert isinstance(get_detector("email"), EmailDetector)

    def test_unknown_detector_raises(self):
        with pytest.raises(ValueError, match="Unknown special case"):
            get_detector("credit-card")

    def test_duplicate_names_ignored(self):
        before = list_detectors()
        register_detector(EmailDetector())
        assert list_detectors() == before

    def test_detect_first_returns_first_match(self, column):
        result = detect_first(column, "john.doe@example.com")
        assert result is column
        assert result.model == "email"

    def test_detect_first_no_match(self, column):
        assert detect_first(column, "hello") is None

    def test_new_detector_can_be_plugged_in(self, column):
        class DigitsDetector(SpecialCase):
            name = "digits"

            def detect(self, metadata, text):
                if text and text.isdigit():
                    return self._stamp(metadata)
                return None

        register_detector(DigitsDetector())
        try:
            assert detect_first(column, "12345", models=["digits"]).model == "digits"
            assert detect_first(MatchMetaData(), "12345", models=["email"]) is None
        finally:
            unregister_detector("digits")
        assert "digits" not in list_detectors()

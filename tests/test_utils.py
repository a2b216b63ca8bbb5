"""
Tests for formatting helpers.
"""
import pytest

from recruiter_pipeline.utils.details_parser import parse_additional_details
from recruiter_pipeline.utils.scoring import average_score, format_average
from recruiter_pipeline.utils.storage import resolve_storage_url

BASE = "https://api.test"


def test_average_score_of_round():
    """Test the per-round average shown on previous rounds."""
    assert average_score({"communication": 4, "technical": 3, "culture_fit": 5}) == 4.0
    assert average_score({"a": 4, "b": 5, "c": 5}) == 4.7


@pytest.mark.parametrize("scores", [None, {}, {"a": None}])
def test_average_score_without_scores(scores):
    assert average_score(scores) is None
    assert format_average(scores) == "N/A"


def test_format_average():
    assert format_average({"a": 3, "b": 4}) == "3.5/5"


@pytest.mark.parametrize("stored,expected", [
    (None, ""),
    ("", ""),
    ("resumes/ada.pdf", "https://api.test/resumes/ada.pdf"),
    ("/uploads/ada.pdf", "https://api.test/uploads/ada.pdf"),
    ("https://cdn.example.com/ada.pdf", "https://cdn.example.com/ada.pdf"),
    (
        "https://bucket.s3.amazonaws.com/grace.pdf",
        "https://api.test/api/serve-file?url=https%3A%2F%2Fbucket.s3.amazonaws.com%2Fgrace.pdf"
    ),
    (
        "http://bucket.s3-website.us-east-1.amazonaws.com/a.pdf",
        "https://api.test/api/serve-file?url=https%3A%2F%2Fbucket.s3.us-east-1.amazonaws.com%2Fa.pdf"
    ),
])
def test_resolve_storage_url(stored, expected):
    assert resolve_storage_url(stored, BASE + "/") == expected


def test_parse_additional_details_sections():
    """Test that headers open sections and key/value lines are split."""
    text = (
        "Notice period: 30 days\n"
        "\n"
        "EXPERIENCE\n"
        "Company: Navy\n"
        "Led the COBOL committee\n"
        "Skills:\n"
        "Languages: FLOW-MATIC, COBOL\n"
    )

    sections = parse_additional_details(text)

    assert [section.header for section in sections] == [None, "EXPERIENCE", "Skills"]
    assert sections[1].items[0].key == "Company"
    assert sections[1].items[1].key is None
    assert sections[1].items[1].value == "Led the COBOL committee"


@pytest.mark.parametrize("text", [None, "", "   \n  "])
def test_parse_additional_details_blank(text):
    assert parse_additional_details(text) == []

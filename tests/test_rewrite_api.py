"""Tests for the stateless rewrite endpoint."""

from unittest.mock import patch

from fastapi.testclient import TestClient

from brandguide.core.rewrite_scope import RewriteResult, RewriteScope
from brandguide.main import app

client = TestClient(app)


def test_rewrite_section_success():
    with patch("brandguide.api.rewrite.rewrite_with_openai") as mock_rewrite:
        mock_rewrite.return_value = RewriteResult(success=True, content="## Voice\n\nWarm.")

        response = client.post(
            "/v1/rewrite-section",
            json={
                "instruction": " Warmer ",
                "current_content": "## Voice\n\nCold.",
                "brand_name": "Acme",
            },
        )

    assert response.status_code == 200
    assert response.json() == {"success": True, "content": "## Voice\n\nWarm."}
    mock_rewrite.assert_called_once_with(
        "Warmer", "## Voice\n\nCold.", RewriteScope.SECTION, brand_name="Acme"
    )


def test_selection_uses_selected_text():
    with patch("brandguide.api.rewrite.rewrite_with_openai") as mock_rewrite:
        mock_rewrite.return_value = RewriteResult(success=True, content="brief")

        response = client.post(
            "/v1/rewrite-section",
            json={
                "instruction": "Shorter",
                "scope": "selection",
                "selected_text": "a rather long phrase",
            },
        )

    assert response.status_code == 200
    args = mock_rewrite.call_args.args
    assert args[1] == "a rather long phrase"
    assert args[2] == RewriteScope.SELECTION


def test_empty_selection_falls_back_to_section():
    with patch("brandguide.api.rewrite.rewrite_with_openai") as mock_rewrite:
        mock_rewrite.return_value = RewriteResult(success=True, content="## A\n\nb")

        response = client.post(
            "/v1/rewrite-section",
            json={
                "instruction": "Shorter",
                "scope": "selection",
                "selected_text": "  ",
                "current_content": "## A\n\nlong b",
            },
        )

    assert response.status_code == 200
    args = mock_rewrite.call_args.args
    assert args[1] == "## A\n\nlong b"
    assert args[2] == RewriteScope.SECTION


def test_missing_instruction():
    with patch("brandguide.api.rewrite.rewrite_with_openai") as mock_rewrite:
        response = client.post(
            "/v1/rewrite-section", json={"instruction": "  ", "current_content": "x"}
        )
    assert response.status_code == 400
    mock_rewrite.assert_not_called()


def test_missing_content():
    with patch("brandguide.api.rewrite.rewrite_with_openai") as mock_rewrite:
        response = client.post("/v1/rewrite-section", json={"instruction": "Shorter"})
    assert response.status_code == 400
    assert "current_content" in response.json()["detail"]
    mock_rewrite.assert_not_called()


def test_service_failure_is_502():
    with patch("brandguide.api.rewrite.rewrite_with_openai") as mock_rewrite:
        mock_rewrite.return_value = RewriteResult(
            success=False, error="Rewrite service error: boom"
        )
        response = client.post(
            "/v1/rewrite-section",
            json={"instruction": "Shorter", "current_content": "## A\n\nb"},
        )
    assert response.status_code == 502
    assert response.json()["detail"] == "Rewrite service error: boom"

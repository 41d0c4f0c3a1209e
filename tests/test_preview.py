"""
test_preview.py
===============
Dry-run preview command.
"""

import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import json

from typer.testing import CliRunner

from esign_webhook.preview import app

runner = CliRunner()

PAYLOAD = {
    "signingRequests": [
        {
            "patient": {"name": "John Doe", "email": "john@example.com"},
            "treatments": "Rhinoplasty",
            "documents": "consent-form,pre-op-instructions",
            "language": "en",
            "deadline": "2025-10-20",
        }
    ]
}


def test_preview_from_file(tmp_path):
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(PAYLOAD))

    result = runner.invoke(app, [str(path)])

    assert result.exit_code == 0
    assert '"document_type": "consent-form"' in result.output
    assert '"document_type": "pre-op-instructions"' in result.output


def test_preview_from_stdin():
    result = runner.invoke(app, ["-"], input=json.dumps(PAYLOAD))
    assert result.exit_code == 0
    assert "pre-op-instructions" in result.output


def test_preview_invalid_payload(tmp_path):
    path = tmp_path / "payload.json"
    path.write_text(json.dumps({"signingRequests": []}))

    result = runner.invoke(app, [str(path)])

    assert result.exit_code == 1
    assert "signingRequests[] required" in result.output


def test_preview_missing_file(tmp_path):
    result = runner.invoke(app, [str(tmp_path / "missing.json")])
    assert result.exit_code == 1

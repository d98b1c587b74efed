"""Unit tests for the render_resume CLI (commands that need no browser)."""

import importlib.util
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "render_resume.py"

spec = importlib.util.spec_from_file_location("render_resume", SCRIPT_PATH)
render_resume = importlib.util.module_from_spec(spec)
spec.loader.exec_module(render_resume)

runner = CliRunner()


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / "fry.yaml"
    path.write_text(
        "fullName: Philip Fry\n"
        "aiContent:\n"
        "  summary: Delivers   packages\n"
        "  skills: [Piloting, piloting, Navigation]\n"
        "userProfile:\n"
        "  email: fry@planetexpress.com\n"
    )
    return path


@pytest.mark.unit
def test_layout_command():
    result = runner.invoke(render_resume.app, ["layout", "--pages", "1", "--density", "5"])

    assert result.exit_code == 0
    layout = json.loads(result.stdout)
    assert layout["page_margins"] == {"top": 20, "bottom": 25, "left": 35, "right": 35}
    assert layout["profile"] == "standard"


@pytest.mark.unit
def test_markup_command_writes_html(input_file, tmp_path):
    output = tmp_path / "fry.html"
    result = runner.invoke(
        render_resume.app, ["markup", str(input_file), "--template", "classic", "-o", str(output)]
    )

    assert result.exit_code == 0
    html = output.read_text()
    assert "Philip Fry" in html
    assert "Delivers packages" in html
    assert "Piloting, Navigation" in html


@pytest.mark.unit
def test_markup_command_name_override(input_file):
    result = runner.invoke(render_resume.app, ["markup", str(input_file), "--name", "Leela"])

    assert result.exit_code == 0
    assert "Leela" in result.stdout


@pytest.mark.unit
def test_missing_input_file(tmp_path):
    result = runner.invoke(render_resume.app, ["markup", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 1


@pytest.mark.unit
def test_invalid_density_rejected(input_file):
    result = runner.invoke(render_resume.app, ["markup", str(input_file), "--density", "9"])
    assert result.exit_code == 1

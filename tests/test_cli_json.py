import json

import pytest
from typer.testing import CliRunner

from mjforge.main import app

pytestmark = [pytest.mark.cli]

runner = CliRunner()

SOURCE = (
    '<mj-column>\n'
    '  <mj-text mj-class="editable-greeting">Hi</mj-text>\n'
    '  <mj-text mj-class="editable-greeting">Hello</mj-text>\n'
    '  <mj-image mj-class="editable-hero" src="a.png"/>\n'
    '</mj-column>\n'
)


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "template.mjml"
    path.write_text(SOURCE, encoding="utf-8")
    return path


def test_update_json(source_file):
    """update --json rewrites the file and reports ok."""
    result = runner.invoke(
        app,
        ["mutations", "update", str(source_file), "--id", "greeting", "--content", "Hey", "--hint", "Hello", "--json"],
    )
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["status"] == "ok"
    assert payload["operation"] == "update"
    assert payload["written"] is True
    assert source_file.read_text() == SOURCE.replace(">Hello<", ">Hey<")


def test_update_dry_run_leaves_file(source_file):
    """--dry-run reports but does not write."""
    result = runner.invoke(
        app,
        ["mutations", "update", str(source_file), "--id", "greeting", "-c", "Hey", "--dry-run", "--json"],
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout)["written"] is False
    assert source_file.read_text() == SOURCE


def test_update_unknown_id(source_file):
    """Unknown ids exit 1 with COMPONENT_NOT_FOUND."""
    result = runner.invoke(
        app,
        ["mutations", "update", str(source_file), "--id", "nope", "--content", "x", "--json"],
    )
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["status"] == "error"
    assert payload["code"] == "COMPONENT_NOT_FOUND"
    assert payload["input"] == "nope"
    assert source_file.read_text() == SOURCE


def test_update_content_too_long(source_file):
    """Over-limit content exits 1 with VALIDATION_ERROR."""
    result = runner.invoke(
        app,
        ["mutations", "update", str(source_file), "--id", "greeting", "--content", "x" * 5001, "--json"],
    )
    assert result.exit_code == 1
    assert json.loads(result.stdout)["code"] == "VALIDATION_ERROR"


def test_duplicate_reports_new_id(source_file):
    """duplicate prints and writes the clone id."""
    result = runner.invoke(app, ["mutations", "duplicate", str(source_file), "--id", "hero", "--json"])
    assert result.exit_code == 0
    new_id = json.loads(result.stdout)["new_logical_id"]
    assert new_id.startswith("hero-copy-")
    assert f'mj-class="editable-{new_id}"' in source_file.read_text()


def test_delete_and_replace_image(source_file):
    """delete and replace-image both write the file."""
    delete = runner.invoke(app, ["mutations", "delete", str(source_file), "--id", "greeting", "--hint", "Hi"])
    assert delete.exit_code == 0
    replace = runner.invoke(
        app, ["mutations", "replace-image", str(source_file), "-n", "0", "--url", "b.png"]
    )
    assert replace.exit_code == 0

    text = source_file.read_text()
    assert ">Hi<" not in text
    assert 'src="b.png"' in text


def test_mappings_json(source_file):
    """mappings --json lists markers in document order."""
    result = runner.invoke(app, ["markup", "mappings", str(source_file), "--json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert [m["logical_id"] for m in payload] == ["greeting", "greeting", "hero"]
    assert payload[1]["content_snapshot"] == "Hello"


def test_tag_to_output_file(tmp_path):
    """tag -o writes the tagged source to a file."""
    source = tmp_path / "body.mjml"
    source.write_text("<mj-column><mj-text>A</mj-text><mj-button>B</mj-button></mj-column>")
    output = tmp_path / "tagged.mjml"

    result = runner.invoke(app, ["markup", "tag", str(source), "-o", str(output)])
    assert result.exit_code == 0
    assert output.read_text() == (
        '<mj-column><mj-text mj-class="editable-text-1">A</mj-text>'
        '<mj-button mj-class="editable-button-1">B</mj-button></mj-column>'
    )


def test_project_and_components(tmp_path, source_file):
    """project then components round-trips the registry."""
    compiled = tmp_path / "compiled.html"
    compiled.write_text(
        "<!DOCTYPE html><html><body>"
        '<div class="editable-greeting"><p>Hi</p></div>'
        '<div class="editable-greeting"><p>Hello</p></div>'
        "</body></html>"
    )
    annotated = tmp_path / "annotated.html"

    project = runner.invoke(
        app, ["markup", "project", str(compiled), "--source", str(source_file), "-o", str(annotated)]
    )
    assert project.exit_code == 0

    result = runner.invoke(app, ["markup", "components", str(annotated), "--json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert [(c["content"], c["positional_index"]) for c in payload] == [("Hi", 0), ("Hello", 1)]


def test_version():
    """version prints the package version."""
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "0.4.0"

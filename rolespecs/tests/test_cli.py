import json

import pytest
import yaml
from typer.testing import CliRunner

from rolespecs.cli import app

runner = CliRunner()


@pytest.fixture
def project(tmp_path, config, svc_a, svc_b):
    """A config file plus the two service documents it points at."""
    services = tmp_path / "services"
    services.mkdir()
    (services / "a.json").write_text(json.dumps(svc_a))
    (services / "b.json").write_text(json.dumps(svc_b))
    config_path = tmp_path / "rolespecs.yaml"
    config_path.write_text(yaml.safe_dump(config))
    return config_path


def invoke(tmp_path, *args):
    return runner.invoke(app, ["--log-file", str(tmp_path / "log.txt"), *args])


def test_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_build_writes_one_file_per_role(tmp_path, project):
    out = tmp_path / "out"
    result = invoke(tmp_path, "build", str(project), "--out", str(out))
    print(result.output)
    assert result.exit_code == 0
    viewer = yaml.safe_load((out / "viewer.yaml").read_text())
    assert list(viewer["paths"]) == ["/a/items"]
    assert viewer["info"]["title"] == "Viewer"
    assert (out / "admin.yaml").exists()


def test_build_json(tmp_path, project):
    out = tmp_path / "out"
    result = invoke(tmp_path, "build", str(project), "--out", str(out), "--format", "json")
    assert result.exit_code == 0
    admin = json.loads((out / "admin.json").read_text())
    assert set(admin["definitions"]) == {"Foo", "Bar"}


def test_show(tmp_path, project):
    result = invoke(tmp_path, "show", str(project), "viewer", "--format", "json")
    assert result.exit_code == 0
    assert json.loads(result.stdout)["tags"] == [{"name": "t1"}]


def test_operations(tmp_path, project):
    result = invoke(tmp_path, "operations", str(project), "admin")
    assert result.exit_code == 0
    assert result.stdout.split() == ["opA", "deleteItem", "opB"]


def test_dependencies(tmp_path, project):
    result = invoke(tmp_path, "dependencies", str(project), "admin", "--mode", "direct")
    assert result.exit_code == 0
    assert result.stdout.split() == ["deleteItem.opA", "opB.deleteItem"]


def test_roles(tmp_path, project):
    result = invoke(tmp_path, "roles", str(project))
    assert result.exit_code == 0
    assert "viewer" in result.output
    assert "admin" in result.output


def test_unknown_role(tmp_path, project):
    result = invoke(tmp_path, "operations", str(project), "ghost")
    assert result.exit_code == 1


def test_missing_service_document(tmp_path, project):
    (tmp_path / "services" / "b.json").unlink()
    result = invoke(tmp_path, "roles", str(project))
    assert result.exit_code == 1
    assert "Failed to build specs" in (tmp_path / "log.txt").read_text()


def test_missing_config(tmp_path):
    result = invoke(tmp_path, "roles", str(tmp_path / "nope.yaml"))
    assert result.exit_code != 0

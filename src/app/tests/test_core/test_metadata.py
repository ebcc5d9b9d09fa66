from app.utils.metadata import find_pyproject, get_pyproject_value, get_project_name


def test_get_pyproject_value_reads_nested_key(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\nversion = "1.2.3"\n')
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_pyproject(nested) == tmp_path / "pyproject.toml"
    assert get_pyproject_value("project.version", start=nested) == "1.2.3"


def test_missing_key_returns_default(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n')

    assert get_pyproject_value("project.version", start=tmp_path, default="n/a") == "n/a"


def test_invalid_toml_returns_default(tmp_path):
    (tmp_path / "pyproject.toml").write_text("not = [valid")

    assert get_pyproject_value("project.name", start=tmp_path, default="x") == "x"


def test_project_name():
    assert get_project_name() == "user-service"

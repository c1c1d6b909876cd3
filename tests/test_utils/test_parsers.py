import pytest

from metaloom._errors import OverlayFormatError
from metaloom._utils import _ConfigReader


@pytest.mark.parametrize(
    ("filename", "content"),
    [
        ("meta.yml", "blog.Article:\n  properties:\n    rating:\n      read_only: true\n"),
        ("meta.yaml", "blog.Article:\n  properties:\n    rating:\n      read_only: true\n"),
        ("meta.json", '{"blog.Article": {"properties": {"rating": {"read_only": true}}}}'),
        ("meta.toml", '["blog.Article".properties.rating]\nread_only = true\n'),
    ],
)
def test_reads_supported_formats(tmp_path, filename, content):
    path = tmp_path / filename
    path.write_text(content, encoding="utf-8")

    assert _ConfigReader(path).read() == {
        "blog.Article": {"properties": {"rating": {"read_only": True}}}
    }


def test_empty_yaml_is_none(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert _ConfigReader(path).read() is None


def test_unsupported_extension(tmp_path):
    with pytest.raises(OverlayFormatError, match="unsupported extension '.xml'"):
        _ConfigReader(tmp_path / "meta.xml")


def test_invalid_path_type():
    with pytest.raises(TypeError, match="Path must be a string"):
        _ConfigReader(42)


@pytest.mark.parametrize(
    ("filename", "content", "message"),
    [
        ("broken.yml", "a: [1, 2\n", "error decoding YAML"),
        ("broken.json", "{not json", "error decoding JSON"),
        ("broken.toml", "a = = 1", "error decoding TOML"),
    ],
)
def test_malformed_files(tmp_path, filename, content, message):
    path = tmp_path / filename
    path.write_text(content, encoding="utf-8")

    with pytest.raises(OverlayFormatError, match=message) as exc_info:
        _ConfigReader(path).read()
    assert "broken" in str(exc_info.value)


def test_missing_file_raises_os_error(tmp_path):
    with pytest.raises(FileNotFoundError):
        _ConfigReader(tmp_path / "missing.yml").read()

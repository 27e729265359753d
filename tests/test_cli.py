import json

import pytest

from auditfs.main import main


def _write_input(path, records):
    path.write_text("\n".join(json.dumps(r) for r in records) + "\n", encoding="utf-8")


@pytest.fixture
def records():
    return [
        {"event": "updated", "old_values": {"title": "a"}, "new_values": {"title": "b"}},
        {"event": "updated", "old_values": {"title": "b"}, "new_values": {"title": "c"}},
        {"event": "deleted", "old_values": {"title": "c"}, "new_values": {}},
    ]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("AUDITFS_CONFIG", "AUDITFS_DIR", "AUDITFS_FILENAME", "AUDITFS_ROTATION", "AUDITFS_DISK"):
        monkeypatch.delenv(key, raising=False)


@pytest.mark.integration
@pytest.mark.parametrize("batch", [False, True])
def test_cli_appends_records(tmp_path, records, batch):
    source = tmp_path / "in.jsonl"
    _write_input(source, records)

    argv = ["--input", str(source), "--root", str(tmp_path), "--dir", "out"]
    if batch:
        argv.append("--batch")
    assert main(argv) == 0

    lines = (tmp_path / "out" / "audit.csv").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 4
    assert lines[0] == "Event,Old Values,New Values,Created At"


@pytest.mark.integration
def test_cli_bad_rotation_in_config(tmp_path):
    config = tmp_path / "audit.yaml"
    config.write_text("filesystem:\n  rotation: weekly\n")
    assert main(["--config", str(config), "--root", str(tmp_path)]) == 2


@pytest.mark.integration
def test_cli_rejects_non_object_lines(tmp_path):
    source = tmp_path / "in.jsonl"
    source.write_text("[1, 2]\n", encoding="utf-8")
    assert main(["--input", str(source), "--root", str(tmp_path)]) == 1


@pytest.mark.integration
def test_cli_misspelled_setting_is_configuration_error(tmp_path):
    config = tmp_path / "audit.yaml"
    config.write_text("filesystem:\n  rotaton: daily\n")
    assert main(["--config", str(config), "--root", str(tmp_path)]) == 2

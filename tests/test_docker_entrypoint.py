import sys

import docker_entrypoint
from core.settings_manager import BUNDLED_DATA_DIR, ROOT_DIR, load_settings, resolve_data_path


def test_seeds_bundled_roster_into_data_dir(tmp_path, monkeypatch):
    data = tmp_path / "volume"
    monkeypatch.setenv("ROSTER_DATA_DIR", str(data))

    copied = docker_entrypoint.prepare_data_dir()

    assert "characters.json" in copied
    assert (data / "characters.json").read_bytes() == (BUNDLED_DATA_DIR / "characters.json").read_bytes()
    # the app now reads from the seeded directory
    assert resolve_data_path(load_settings()["characters_file"]) == data / "characters.json"


def test_existing_files_are_kept(tmp_path, monkeypatch):
    data = tmp_path / "volume"
    data.mkdir()
    (data / "characters.json").write_text('{"Characters": []}', encoding="utf-8")
    monkeypatch.setenv("ROSTER_DATA_DIR", str(data))

    assert docker_entrypoint.prepare_data_dir() == []
    assert (data / "characters.json").read_text(encoding="utf-8") == '{"Characters": []}'


def test_bundled_dir_is_not_seeded(monkeypatch):
    monkeypatch.delenv("ROSTER_DATA_DIR", raising=False)
    assert docker_entrypoint.prepare_data_dir() == []


def test_build_command(monkeypatch):
    monkeypatch.setenv("STREAMLIT_SERVER_PORT", "9000")
    monkeypatch.delenv("STREAMLIT_SERVER_ADDRESS", raising=False)
    args = docker_entrypoint.build_command(["--server.headless", "true"])
    assert args[:5] == [sys.executable, "-m", "streamlit", "run", str(ROOT_DIR / "app.py")]
    assert args[args.index("--server.port") + 1] == "9000"
    assert args[args.index("--server.address") + 1] == "0.0.0.0"
    assert args[-2:] == ["--server.headless", "true"]

"""Tests for the CLI dispatcher."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from postsync import main as cli
from postsync.core.client import PostmanAPIError
from postsync.models.config import ConfigProvider, ExitCode


def _run(argv: list[str]) -> int:
    with patch.object(sys, "argv", ["postsync", *argv]):
        return cli.main()


@pytest.fixture
def config_files(tmp_path: Path) -> tuple[Path, Path]:
    user_path = tmp_path / "user.yaml"
    project_path = tmp_path / "postsync.yaml"
    ConfigProvider.save_yaml(user_path, {"api_key": "PMAK-test"})
    ConfigProvider.save_yaml(project_path, {"collection_name": "My API"})
    return user_path, project_path


@pytest.fixture(autouse=True)
def no_env_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("POSTMAN_API_KEY", raising=False)
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)


class TestMain:
    """Tests for main()."""

    def test_no_command_is_usage_error(self) -> None:
        assert _run([]) == ExitCode.USAGE

    def test_missing_user_config(self, tmp_path: Path) -> None:
        code = _run([
            "--user-config", str(tmp_path / "none.yaml"),
            "--project-config", str(tmp_path / "none.yaml"),
            "save",
        ])

        assert code == ExitCode.NO_USER_CONFIG

    def test_missing_project_config(self, config_files: tuple[Path, Path], tmp_path: Path) -> None:
        user_path, _ = config_files

        code = _run(["--user-config", str(user_path), "--project-config", str(tmp_path / "none.yaml"), "load"])

        assert code == ExitCode.NO_PROJECT_CONFIG

    def test_missing_api_key(self, config_files: tuple[Path, Path]) -> None:
        user_path, project_path = config_files
        ConfigProvider.save_yaml(user_path, {})

        code = _run(["--user-config", str(user_path), "--project-config", str(project_path), "save"])

        assert code == ExitCode.NO_API_KEY

    def test_malformed_yaml_is_failure(self, config_files: tuple[Path, Path], capsys: pytest.CaptureFixture[str]) -> None:
        user_path, project_path = config_files
        project_path.write_text("collection_name: [unclosed\n")

        code = _run(["--user-config", str(user_path), "--project-config", str(project_path), "save"])

        assert code == ExitCode.FAILURE
        assert "Invalid config file" in capsys.readouterr().err

    def test_non_mapping_yaml_is_failure(self, config_files: tuple[Path, Path]) -> None:
        user_path, project_path = config_files
        user_path.write_text("- just\n- a list\n")

        code = _run(["--user-config", str(user_path), "--project-config", str(project_path), "load"])

        assert code == ExitCode.FAILURE

    def test_missing_remote_repo(self, config_files: tuple[Path, Path]) -> None:
        user_path, project_path = config_files

        code = _run(["--user-config", str(user_path), "--project-config", str(project_path), "load-remote"])

        assert code == ExitCode.NO_REMOTE_REPO

    def test_api_error_is_failure(self, config_files: tuple[Path, Path]) -> None:
        user_path, project_path = config_files

        with patch("postsync.core.client.PostmanClient.list_resources", side_effect=PostmanAPIError("API error 401", 401)):
            code = _run(["--user-config", str(user_path), "--project-config", str(project_path), "save"])

        assert code == ExitCode.FAILURE

    def test_save_not_found_succeeds(self, config_files: tuple[Path, Path], tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        user_path, project_path = config_files
        monkeypatch.chdir(tmp_path)

        with patch("postsync.core.client.PostmanClient.list_resources", return_value=[]):
            code = _run(["--user-config", str(user_path), "--project-config", str(project_path), "save"])

        assert code == ExitCode.OK
        assert not (tmp_path / "postman_collection.json").exists()

    def test_init_writes_config(self, tmp_path: Path) -> None:
        user_path = tmp_path / "user.yaml"
        project_path = tmp_path / "postsync.yaml"
        answers = iter(["PMAK-new", "My API", "", "api.json", ""])

        with patch.object(cli.Prompt, "ask", side_effect=lambda *a, **k: next(answers)):
            code = _run(["--user-config", str(user_path), "--project-config", str(project_path), "init"])

        assert code == ExitCode.OK
        config = ConfigProvider.load(user_path, project_path)
        assert config.get_user("api_key") == "PMAK-new"
        assert config.get_project("collection_name") == "My API"
        assert config.get_project("collection_path") == "api.json"
        assert config.get_project("environment_name") == ""


class TestBuildClient:
    """Tests for build_client()."""

    def test_base_url_from_user_config(self) -> None:
        config = ConfigProvider(user={"api_key": "k", "base_url": "https://postman.example/"})

        client = cli.build_client(config)

        assert client.auth.base_url == "https://postman.example"

    def test_base_url_falls_back_to_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("POSTMAN_BASE_URL", "https://postman.internal")

        client = cli.build_client(ConfigProvider(user={"api_key": "k"}))

        assert client.auth.base_url == "https://postman.internal"

    def test_env_api_key_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("POSTMAN_API_KEY", "PMAK-env")

        client = cli.build_client(ConfigProvider(user={"api_key": "PMAK-file"}))

        assert client.auth.api_key == "PMAK-env"

"""
Tests for path helpers and deployment configuration.
"""
import importlib

import paths


class TestConfiguration:

    def test_canon_makes_relative_paths_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert paths.canon("data/../data/foods.json") == (tmp_path / "data" / "foods.json").resolve()

    def test_dotenv_file_configures_paths(self, tmp_path, monkeypatch):
        env = tmp_path / ".env"
        env.write_text(
            "MATSPAR_SOON_DAYS=5\nMATSPAR_FOODS_PATH=catalog/foods.json\n",
            encoding="utf-8",
        )
        monkeypatch.chdir(tmp_path)
        for name in ("MATSPAR_SOON_DAYS", "MATSPAR_FOODS_PATH"):
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)
        try:
            importlib.reload(paths)
            assert paths.SOON_DAYS == 5
            assert paths.FOODS_PATH == (tmp_path / "catalog" / "foods.json").resolve()
        finally:
            env.unlink()
            monkeypatch.undo()
            importlib.reload(paths)

    def test_environment_wins_over_dotenv(self, tmp_path, monkeypatch):
        env = tmp_path / ".env"
        env.write_text("MATSPAR_SOON_DAYS=5\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("MATSPAR_SOON_DAYS", "7")
        try:
            importlib.reload(paths)
            assert paths.SOON_DAYS == 7
        finally:
            env.unlink()
            monkeypatch.undo()
            importlib.reload(paths)

import json

import pytest

from writing_guard.cli import collect_files, main

CLEAN = "The county engineer flagged corrosion in a report eighteen months earlier.\n"
SLOPPY = "This groundbreaking, innovative framework seamlessly leverages a holistic tapestry.\n"


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "clean.md").write_text(CLEAN, encoding="utf-8")
    (tmp_path / "docs" / "notes.py").write_text("robust = True\n", encoding="utf-8")
    return tmp_path


class TestCollectFiles:
    def test_walks_directories_for_supported_files(self, workspace):
        (workspace / "docs" / "b.txt").write_text(CLEAN, encoding="utf-8")
        (workspace / "docs" / "nested").mkdir()
        (workspace / "docs" / "nested" / "a.RST").write_text(CLEAN, encoding="utf-8")
        files = [p.as_posix() for p in collect_files(["docs", "docs/clean.md"])]
        assert files == ["docs/b.txt", "docs/clean.md", "docs/nested/a.RST"]


class TestMain:
    def test_clean_run(self, workspace, capsys):
        assert main(["docs"]) == 0
        out = capsys.readouterr().out
        assert "docs/clean.md (11 words, density 0.00/100w)" in out
        assert "11 words, 0 diagnostics" in out

    def test_dense_file_fails(self, workspace, capsys):
        (workspace / "docs" / "sloppy.md").write_text(SLOPPY, encoding="utf-8")
        assert main(["docs"]) == 1
        assert "[buzzword]" in capsys.readouterr().out

    def test_json_output(self, workspace, capsys):
        (workspace / "docs" / "sloppy.md").write_text(SLOPPY, encoding="utf-8")
        assert main(["docs", "--json"]) == 1
        payload = json.loads(capsys.readouterr().out)
        assert [f["path"] for f in payload["files"]] == ["docs/clean.md", "docs/sloppy.md"]
        assert payload["total_word_count"] == 20
        assert payload["files"][1]["category_counts"]["buzzword"] == 6
        assert payload["files"][1]["profile"] == "default"

    def test_quiet_prints_nothing(self, workspace, capsys):
        assert main(["docs", "--quiet"]) == 0
        assert capsys.readouterr().out == ""

    def test_strict_uses_warn_threshold(self, workspace):
        (workspace / "docs" / "clean.md").write_text(
            "The county engineer flagged corrosion in a robust report eighteen months before "
            "the bridge finally failed under load.\n",
            encoding="utf-8",
        )
        assert main(["docs"]) == 0
        assert main(["docs", "--strict"]) == 1

    def test_config_and_profiles(self, workspace, capsys):
        (workspace / "writing-guard.yml").write_text(
            "profiles:\n  - name: docs\n    globs: ['docs/**']\n", encoding="utf-8"
        )
        assert main(["docs", "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["files"][0]["profile"] == "docs"

    def test_forced_profile(self, workspace, capsys):
        (workspace / "custom.yml").write_text("profiles:\n  - name: blog\n", encoding="utf-8")
        assert main(["docs", "--config", "custom.yml", "--profile", "blog", "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["files"][0]["profile"] == "blog"

    def test_unknown_profile_is_a_config_error(self, workspace, capsys):
        assert main(["docs", "--profile", "nope"]) == 2
        assert "unknown profile `nope`" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "content",
        ["limits: {", "templates:\n  ban: ['(unclosed']\n", "profiles:\n  - name: default\n"],
    )
    def test_bad_config_exits_2(self, workspace, capsys, content):
        (workspace / "writing-guard.yml").write_text(content, encoding="utf-8")
        assert main(["docs"]) == 2
        assert capsys.readouterr().err.startswith("writing-guard: ")

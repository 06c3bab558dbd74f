import pytest
from ruamel.yaml import YAML

from zshmap.cli.main import ZshMapCLI, main


def test_no_arguments_prints_help(capsys):
    assert ZshMapCLI().run([]) == 0
    assert "usage: zshmap" in capsys.readouterr().out


def test_sections_command(zshrc_file, capsys):
    assert ZshMapCLI().run(["sections", str(zshrc_file)]) == 0
    out = capsys.readouterr().out
    assert "Aliases" in out
    assert "History" in out


def test_entries_filtered_by_kind(zshrc_file, capsys):
    assert ZshMapCLI().run(["entries", str(zshrc_file), "--kind", "plugin"]) == 0
    out = capsys.readouterr().out
    assert "kubectl" in out
    assert "robbyrussell" not in out


def test_entries_search(zshrc_file, capsys):
    assert ZshMapCLI().run(["entries", str(zshrc_file), "--search", "GIT STATUS"]) == 0
    out = capsys.readouterr().out
    assert "gs" in out
    assert "EDITOR" not in out


def test_markers_command(zshrc_file, capsys):
    assert ZshMapCLI().run(["markers", str(zshrc_file)]) == 0
    assert "dashed_start" in capsys.readouterr().out


def test_check_clean_file(zshrc_file, capsys):
    assert ZshMapCLI().run(["check", str(zshrc_file)]) == 0
    assert "CLEAN" in capsys.readouterr().out


def test_check_missing_file(tmp_path, capsys):
    assert ZshMapCLI().run(["check", str(tmp_path / "absent")]) == 1


def test_export_to_file(zshrc_file, tmp_path):
    target = tmp_path / "map.yaml"
    assert ZshMapCLI().run(["export", str(zshrc_file), "-o", str(target)]) == 0
    data = YAML(typ="safe").load(target.read_text(encoding="utf-8"))
    assert data["summary"]["sections"] == 5


def test_export_to_stdout(zshrc_file, capsys):
    assert ZshMapCLI().run(["export", str(zshrc_file), "--no-content"]) == 0
    data = YAML(typ="safe").load(capsys.readouterr().out)
    assert len(data["entries"]) == 13


def test_config_disables_builtin_markers(zshrc_file, tmp_path, capsys):
    config = tmp_path / "zshmap.yaml"
    config.write_text("enableDefaults: false\n", encoding="utf-8")
    assert ZshMapCLI().run(["--config", str(config), "export", str(zshrc_file), "--no-content"]) == 0
    data = YAML(typ="safe").load(capsys.readouterr().out)
    assert [s["label"] for s in data["sections"]] == ["Unlabeled"]


def test_main_reports_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["sections", str(tmp_path / "absent")])
    assert exc.value.code == 1
    assert "Could not find your zshrc" in capsys.readouterr().out


def test_suggest_command(tmp_path, capsys):
    path = tmp_path / ".zshrc"
    path.write_text("\n".join(["echo step"] * 12 + ["## Tools"]) + "\n", encoding="utf-8")
    assert ZshMapCLI().run(["--verbose", "suggest", str(path)]) == 0
    assert "MEDIUM" in capsys.readouterr().out


def test_main_reports_bad_config(zshrc_file, tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--config", str(tmp_path), "sections", str(zshrc_file)])
    assert exc.value.code == 1
    assert "Invalid configuration" in capsys.readouterr().out

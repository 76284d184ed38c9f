"""Unit tests for CLI command handling."""

from __future__ import annotations

from pathlib import Path

import pytest

from cli.main import main
from tests.fixture_paths import fixture_path, make_package_cache


def _write_settings(root: Path) -> None:
    root.mkdir(parents=True, exist_ok=True)
    settings_text = fixture_path("settings/valid_notebook.yaml").read_text(encoding="utf-8")
    (root / "notebook.yaml").write_text(settings_text, encoding="utf-8")


def test_cli_sync_version_without_arguments_uses_environment(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys,
) -> None:
    """Lifecycle hook invocation should pin the installed version."""
    config_path = tmp_path / "packages.typ"
    config_path.write_text('#import "@local/notebookinator:0.1.0": *\n', encoding="utf-8")
    make_package_cache(tmp_path / "cache", ("1.2.3",))
    monkeypatch.setenv("NOTEBOOK_ROOT", str(tmp_path))
    monkeypatch.setenv("NOTEBOOK_PACKAGE_CACHE", str(tmp_path / "cache"))

    exit_code = main(["sync-version"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "version=1.2.3" in output
    assert config_path.read_text(encoding="utf-8") == '#import "@local/notebookinator:1.2.3": *\n'


def test_cli_sync_version_empty_cache_exits_non_zero(tmp_path: Path, capsys) -> None:
    """An empty package directory should exit with a friendly error."""
    (tmp_path / "packages.typ").write_text(
        '#import "@local/notebookinator:0.1.0": *\n', encoding="utf-8"
    )
    package_dir = make_package_cache(tmp_path / "cache", ())

    exit_code = main(
        ["--root", str(tmp_path), "sync-version", "--package-dir", str(package_dir)]
    )
    output = capsys.readouterr().out.strip()

    assert exit_code == 1 and output.startswith("error=")


def test_cli_init_then_check_passes(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys,
) -> None:
    """Init should write a project that passes the composition check."""
    root = tmp_path / "notebook"
    _write_settings(root)
    make_package_cache(tmp_path / "cache", ("1.0.1",))
    monkeypatch.setenv("NOTEBOOK_PACKAGE_CACHE", str(tmp_path / "cache"))

    init_code = main(["--root", str(root), "init"])
    check_code = main(["--root", str(root), "check"])
    output = capsys.readouterr().out

    assert init_code == 0 and check_code == 0
    assert "issues=0" in output


def test_cli_check_reports_missing_documents(tmp_path: Path, capsys) -> None:
    """Check on an empty directory should fail with issues listed."""
    exit_code = main(["--root", str(tmp_path), "check"])
    output = capsys.readouterr().out

    assert exit_code == 1 and "missing-main" in output


def test_cli_render_skips_typst_when_check_fails(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys,
) -> None:
    """Render should not invoke typst for a broken project."""
    monkeypatch.setattr(
        "cli.compose_command.render_notebook",
        lambda root, output_path, typst_bin: pytest.fail("typst should not run"),
    )

    exit_code = main(["--root", str(tmp_path), "render"])
    _ = capsys.readouterr()

    assert exit_code == 1


def test_cli_render_prints_output_path(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys,
) -> None:
    """Render should compile a clean project and print the output path."""
    root = tmp_path / "notebook"
    _write_settings(root)
    make_package_cache(tmp_path / "cache", ("1.0.1",))
    monkeypatch.setenv("NOTEBOOK_PACKAGE_CACHE", str(tmp_path / "cache"))
    monkeypatch.setattr(
        "cli.compose_command.render_notebook",
        lambda root_path, output_path, typst_bin: output_path,
    )
    main(["--root", str(root), "init"])

    exit_code = main(["--root", str(root), "render", "--output", str(tmp_path / "out.pdf")])
    output = capsys.readouterr().out

    assert exit_code == 0 and f"output_path={tmp_path / 'out.pdf'}" in output


def test_cli_new_entry_creates_document(tmp_path: Path, capsys) -> None:
    """new-entry should create the entry and print its path."""
    root = tmp_path / "notebook"
    _write_settings(root)
    main(["--root", str(root), "init"])
    _ = capsys.readouterr()

    exit_code = main(
        [
            "--root",
            str(root),
            "new-entry",
            "--title",
            "Intake Prototype",
            "--type",
            "build",
            "--date",
            "2024-11-02",
            "--author",
            "Avery",
        ]
    )
    output = capsys.readouterr().out.strip()

    entry_path = root / "entries" / "intake_prototype" / "intake_prototype.typ"
    assert exit_code == 0 and output == str(entry_path)
    assert "datetime(year: 2024, month: 11, day: 2)" in entry_path.read_text(encoding="utf-8")


def test_cli_new_entry_without_author_fails(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys,
) -> None:
    """An entry without author or git user name is rejected."""
    monkeypatch.setattr("cli.entry_command.default_author", lambda: "")

    exit_code = main(["--root", str(tmp_path), "new-entry", "--title", "x", "--type", "build"])
    output = capsys.readouterr().out.strip()

    assert exit_code == 1 and output.startswith("error=")


def test_cli_entry_types_lists_theme_types(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys,
) -> None:
    """entry-types should print the types of the theme used in main.typ."""
    root = tmp_path / "notebook"
    _write_settings(root)
    main(["--root", str(root), "init"])
    _ = capsys.readouterr()
    monkeypatch.setattr(
        "entries.entry_types.run_typst",
        lambda typst_bin, arguments, input_text=None: fixture_path(
            "typst/entry_types_query.json"
        ).read_text(encoding="utf-8"),
    )

    exit_code = main(["--root", str(root), "entry-types"])
    output = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    assert output[0] == "theme=radial"
    assert output[1] == "identify\t#ffd966"


def test_cli_sync_version_relative_paths_resolve_under_root(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys,
) -> None:
    """Relative --config and --package-dir are taken from the notebook root."""
    root = tmp_path / "notebook"
    root.mkdir()
    config_path = root / "packages.typ"
    config_path.write_text('#import "@local/notebookinator:0.1.0": *\n', encoding="utf-8")
    make_package_cache(root / "cache", ("2.0.0",))
    monkeypatch.chdir(tmp_path)

    exit_code = main(
        [
            "--root",
            str(root),
            "sync-version",
            "--config",
            "packages.typ",
            "--package-dir",
            "cache/local/notebookinator",
        ]
    )
    _ = capsys.readouterr()

    assert exit_code == 0
    assert "@local/notebookinator:2.0.0" in config_path.read_text(encoding="utf-8")

from __future__ import annotations

import argparse
import io
from pathlib import Path

import git
import pytest
from rich.console import Console

from branch_sweeper import cli
from branch_sweeper.config import SweeperSettings, get_settings
from branch_sweeper.prompts import ScriptedChoiceProvider


def commit(repo: git.Repo, message: str, when: str) -> None:
    path = Path(repo.working_tree_dir) / "notes.txt"
    with path.open("a", encoding="utf-8") as handle:
        handle.write(message + "\n")
    repo.index.add([str(path)])
    repo.index.commit(message, author_date=when, commit_date=when)


@pytest.fixture()
def repo(tmp_path: Path) -> git.Repo:
    repo = git.Repo.init(tmp_path / "work", initial_branch="master")
    with repo.config_writer() as config:
        config.set_value("user", "name", "Sweeper Tests")
        config.set_value("user", "email", "tests@example.com")
    commit(repo, "initial", "2020-01-01T00:00:00")
    repo.create_head("ancient")
    repo.create_head("current").checkout()
    return repo


@pytest.fixture(autouse=True)
def _settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("BRANCH_SWEEPER_POLICY", "BRANCH_SWEEPER_DRY_RUN_NOTICE", "BRANCH_SWEEPER_REQUIRE_REMOTE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_parser_defaults() -> None:
    args = cli.build_parser().parse_args([])

    assert args.repo is None
    assert args.dry_run is False
    assert args.mode is None
    assert args.no_interaction is False


def test_parser_rejects_non_positive_days() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["--days", "0"])


def test_dry_run_keeps_branches(repo: git.Repo, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli.main([repo.working_tree_dir, "--dry-run", "--mode", "local", "--days", "30"])

    out = capsys.readouterr().out
    assert code == 0
    assert '  ==> "ancient" is deleted (last commit at: "2020-01-01 00:00:00").' in out
    assert '  ==> "current" is skipped (current branch).' in out
    assert '  ==> "master" is reserved.' in out
    assert out.splitlines()[0] == "Start..."
    assert out.splitlines()[-1] == "Done."
    assert "ancient" in [head.name for head in repo.heads]


def test_local_sweep_deletes_stale_branch(repo: git.Repo) -> None:
    output = io.StringIO()
    args = cli.build_parser().parse_args([repo.working_tree_dir])

    code = cli.run(
        args,
        SweeperSettings(),
        choices=ScriptedChoiceProvider(["local", 60]),
        console=Console(file=output, width=200),
    )

    assert code == 0
    assert [head.name for head in repo.heads] == ["current", "master"]


def test_repository_defaults_to_working_directory(repo: git.Repo, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.chdir(repo.working_tree_dir)

    code = cli.main(["-n", "--mode", "local", "--dry-run"])

    assert code == 0
    assert '"ancient" is deleted' in capsys.readouterr().out


def test_policy_flag_reserves_extra_branch(repo: git.Repo, tmp_path: Path, capsys) -> None:
    policy = tmp_path / "policy.yml"
    policy.write_text("reserved_branches: [ancient]\n", encoding="utf-8")

    code = cli.main([repo.working_tree_dir, "-n", "--mode", "local", "--policy", str(policy)])

    out = capsys.readouterr().out
    assert code == 0
    assert '  ==> "ancient" is reserved.' in out
    assert '"master" is deleted (last commit at' in out
    assert sorted(head.name for head in repo.heads) == ["ancient", "current"]


def test_invalid_repository_exits_with_error(tmp_path: Path, capsys) -> None:
    code = cli.main([str(tmp_path / "nowhere"), "-n"])

    captured = capsys.readouterr()
    assert code == 1
    assert "is not a git repository" in captured.err
    assert "Start..." not in captured.out


def test_unknown_remote_exits_with_error(repo: git.Repo, capsys) -> None:
    code = cli.main([repo.working_tree_dir, "--remote", "origin", "--days", "30"])

    assert code == 1
    assert "Remote 'origin' is not configured" in capsys.readouterr().err


def test_remote_mode_without_remotes_warns(repo: git.Repo, capsys) -> None:
    code = cli.main([repo.working_tree_dir, "-n", "--mode", "remote", "--days", "30"])

    out = capsys.readouterr().out
    assert code == 0
    assert "This repo has no remote repository." in out
    assert out.rstrip().endswith("Done.")


def test_require_remote_setting_makes_missing_remote_fatal(repo: git.Repo, monkeypatch, capsys) -> None:
    monkeypatch.setenv("BRANCH_SWEEPER_REQUIRE_REMOTE", "true")

    code = cli.main([repo.working_tree_dir, "-n", "--mode", "remote"])

    assert code == 1
    assert "no remote repository" in capsys.readouterr().err


def test_history_failure_exits_with_error(repo: git.Repo, monkeypatch, capsys) -> None:
    from branch_sweeper.git import GitRepository, HistoryLookupError

    def broken(self, ref):
        raise HistoryLookupError(f"Cannot read history of {ref}")

    monkeypatch.setattr(GitRepository, "last_commit_at", broken)

    code = cli.run(
        argparse.Namespace(
            repo=repo.working_tree_dir,
            dry_run=True,
            mode="local",
            remote=None,
            days=30,
            no_interaction=True,
            policy=None,
        ),
        SweeperSettings(),
    )

    captured = capsys.readouterr()
    assert code == 1
    assert "Cannot read history of ancient" in captured.err
    assert "Done." not in captured.out


def test_runs_from_subdirectory_of_working_tree(repo: git.Repo, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    sub = Path(repo.working_tree_dir) / "sub"
    sub.mkdir()
    (sub / "file.txt").write_text("x\n", encoding="utf-8")
    repo.index.add([str(sub / "file.txt")])
    repo.index.commit("add sub", author_date="2020-01-02T00:00:00", commit_date="2020-01-02T00:00:00")
    monkeypatch.chdir(sub)

    code = cli.main(["-n", "--mode", "local", "--dry-run"])

    assert code == 0
    assert '"ancient" is deleted' in capsys.readouterr().out


def test_remote_flag_rejected_in_local_mode(repo: git.Repo, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main([repo.working_tree_dir, "--mode", "local", "--remote", "origin"])

    assert excinfo.value.code == 2
    assert "--remote cannot be combined with --mode local" in capsys.readouterr().err
    assert "ancient" in [head.name for head in repo.heads]

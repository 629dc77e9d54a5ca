from pathlib import Path
import textwrap

import pytest

from branch_sweeper.policy import DEFAULT_POLICY_FILENAME, PolicyLoadError, PolicyLoader, RetentionPolicy, load_policy


def test_missing_repository_policy_uses_defaults(tmp_path: Path) -> None:
    policy = load_policy(tmp_path)

    assert policy == RetentionPolicy()
    assert policy.reserved_branches == ("master", "develop")
    assert policy.threshold_choices == (30, 45, 60)


def test_repository_policy_file_is_loaded(tmp_path: Path) -> None:
    (tmp_path / DEFAULT_POLICY_FILENAME).write_text(
        textwrap.dedent(
            """
            reserved_branches:
              - main
              - release
              - main
            threshold_choices: [14, 90]
            default_threshold_index: 1
            """
        ),
        encoding="utf-8",
    )

    policy = PolicyLoader(tmp_path).load()

    assert policy.reserved_branches == ("main", "release")
    assert policy.threshold_choices == (14, 90)
    assert policy.default_threshold_index == 1


def test_explicit_path_overrides_repository_file(tmp_path: Path) -> None:
    (tmp_path / DEFAULT_POLICY_FILENAME).write_text("reserved_branches: [main]\n", encoding="utf-8")
    explicit = tmp_path / "strict.yml"
    explicit.write_text("reserved_branches: [trunk]\n", encoding="utf-8")

    loader = PolicyLoader(tmp_path, explicit)

    assert loader.path == explicit
    assert loader.load().reserved_branches == ("trunk",)


def test_missing_explicit_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(PolicyLoadError):
        load_policy(tmp_path, tmp_path / "absent.yml")


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / DEFAULT_POLICY_FILENAME).write_text("", encoding="utf-8")
    assert load_policy(tmp_path) == RetentionPolicy()


@pytest.mark.parametrize(
    "content",
    [
        "threshold_choices: [0, 30]\n",
        "threshold_choices: []\n",
        "default_threshold_index: 3\n",
        "reserved_branches: ['  ']\n",
        "unknown_key: true\n",
        "- just\n- a list\n",
        "reserved_branches: [unterminated\n",
    ],
)
def test_invalid_policy_reports_error(tmp_path: Path, content: str) -> None:
    (tmp_path / DEFAULT_POLICY_FILENAME).write_text(content, encoding="utf-8")

    with pytest.raises(PolicyLoadError):
        load_policy(tmp_path)

"""End-to-end tests for the git-shelf command line."""

from __future__ import annotations

import logging
import unittest

from fakes import FakeGit
from typer.testing import CliRunner

from git_shelf import __version__
from git_shelf.cli import app

SHELF = "shelf/dev@example.com/feature"


class ShelfCliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()

    def invoke(self, fake: FakeGit, args: list[str] | None = None, env: dict | None = None):
        environment = {"GIT_SHELF_REMOTE": None}
        environment.update(env or {})
        with fake.patch():
            return self.runner.invoke(app, args or [], env=environment)

    def test_outside_repository_is_silent(self) -> None:
        fake = FakeGit(inside=False)

        result = self.invoke(fake)

        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output, "")
        self.assertEqual(fake.ran("commit"), [])

    def test_missing_git_is_silent(self) -> None:
        fake = FakeGit(installed=False)

        result = self.invoke(fake)

        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output, "")
        self.assertEqual(fake.calls, [])

    def test_unknown_flag_is_reported_and_nothing_runs(self) -> None:
        fake = FakeGit()

        result = self.invoke(fake, ["--bogus"])

        self.assertEqual(result.exit_code, 2)
        self.assertIn("Unknown option: --bogus", result.output)
        self.assertEqual(fake.ran("add"), [])
        self.assertEqual(fake.ran("commit"), [])
        self.assertEqual(fake.ran("push"), [])

    def test_usage_errors_are_collected(self) -> None:
        fake = FakeGit()

        result = self.invoke(fake, ["--bogus", "stray", "-u", "nowhere", "-x"])

        self.assertEqual(result.exit_code, 2)
        self.assertIn("Unknown option: --bogus", result.output)
        self.assertIn("Unknown option: -x", result.output)
        self.assertIn("Unexpected argument: stray", result.output)
        self.assertIn("Remote 'nowhere' could not be resolved", result.output)
        self.assertEqual(fake.ran("push"), [])

    def test_help_prints_usage_and_fails(self) -> None:
        for args in (["-h"], ["--help"], ["help"]):
            with self.subTest(args=args):
                fake = FakeGit()

                result = self.invoke(fake, args)

                self.assertEqual(result.exit_code, 1)
                self.assertIn("Usage:", result.output)
                self.assertIn("--use-remote", result.output)
                self.assertEqual(fake.calls, [])

    def test_version(self) -> None:
        result = self.invoke(FakeGit(), ["--version"])

        self.assertEqual(result.exit_code, 0)
        self.assertIn(f"git-shelf {__version__}", result.output)

    def test_first_shelf(self) -> None:
        fake = FakeGit()

        result = self.invoke(fake)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn(f"Shelved feature at origin/{SHELF}", result.output)
        self.assertEqual(fake.ran("push"), [["push", "origin", f"feature:refs/heads/{SHELF}"]])
        self.assertIn("feature", fake.shelved)

    def test_use_remote_selects_push_target(self) -> None:
        fake = FakeGit(remotes=["origin", "backup"])

        result = self.invoke(fake, ["--use-remote", "backup"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(fake.ran("ls-remote"), [["ls-remote", "--heads", "backup"]])
        self.assertEqual(fake.ran("push"), [["push", "backup", f"feature:refs/heads/{SHELF}"]])

    def test_default_remote_from_environment(self) -> None:
        fake = FakeGit(remotes=["origin", "backup"])

        result = self.invoke(fake, env={"GIT_SHELF_REMOTE": "backup"})

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(fake.ran("ls-remote"), [])
        self.assertEqual(fake.ran("push"), [["push", "backup", f"feature:refs/heads/{SHELF}"]])

    def test_second_shelf_on_other_remote_notes_relocation(self) -> None:
        fake = FakeGit(shelved=["feature"], remotes=["origin", "backup"], remote_refs=[f"backup/{SHELF}"])

        result = self.invoke(fake, ["-u", "origin"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("lives on backup, using it instead of origin", result.output)
        self.assertIn(f"Updated shelf feature at backup/{SHELF}", result.output)
        self.assertEqual(fake.ran("push"), [["push", "--force", "backup", f"feature:refs/heads/{SHELF}"]])

    def test_desync_is_fatal(self) -> None:
        fake = FakeGit(shelved=["feature"])

        result = self.invoke(fake)

        self.assertEqual(result.exit_code, 1)
        self.assertIn("out of sync", result.output)
        self.assertEqual(fake.ran("commit"), [])
        self.assertEqual(fake.ran("push"), [])

    def test_stale_local_state_is_fatal(self) -> None:
        fake = FakeGit(fetched_refs=[f"origin/{SHELF}"])

        result = self.invoke(fake)

        self.assertEqual(result.exit_code, 1)
        self.assertIn("no local shelf marker", result.output)
        self.assertEqual(fake.ran("push"), [])

    def test_missing_email_is_fatal(self) -> None:
        fake = FakeGit(email=None)

        result = self.invoke(fake)

        self.assertEqual(result.exit_code, 1)
        self.assertIn("No user email configured", result.output)
        self.assertEqual(fake.ran("commit"), [])

    def test_nothing_to_shelf_returns_commit_status(self) -> None:
        fake = FakeGit(commit_rc=1)

        result = self.invoke(fake)

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Nothing to shelf.", result.output)
        self.assertEqual(fake.ran("push"), [])
        self.assertEqual(fake.shelved, set())

    def test_push_failure_returns_push_status(self) -> None:
        fake = FakeGit(push_rc=128)

        result = self.invoke(fake)

        self.assertEqual(result.exit_code, 128)
        self.assertIn("feature was not marked as shelved", result.output)
        self.assertEqual(fake.shelved, set())

    def test_fetch_failure_reports_git_error(self) -> None:
        fake = FakeGit(fetch_rc=1)

        result = self.invoke(fake)

        self.assertEqual(result.exit_code, 1)
        self.assertIn("git fetch --all --quiet", result.output)
        self.assertIn("fatal: fetch failed", result.output)
        self.assertEqual(fake.ran("commit"), [])

    def test_dry_run_lists_steps(self) -> None:
        fake = FakeGit(shelved=["feature"], remote_refs=[f"origin/{SHELF}"])

        result = self.invoke(fake, ["--dry-run"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("git commit --amend --no-gpg-sign -m SHELF", result.output)
        self.assertIn(f"git push --force origin feature:refs/heads/{SHELF}", result.output)
        self.assertEqual(fake.ran("commit"), [])
        self.assertEqual(fake.ran("push"), [])

    def test_verbose_logs_git_commands(self) -> None:
        self.addCleanup(logging.basicConfig, level=logging.WARNING, force=True)
        fake = FakeGit(commit_rc=1)

        result = self.invoke(fake, ["-v"])

        self.assertIn("Running command: git rev-parse --is-inside-work-tree", result.output)


if __name__ == "__main__":
    unittest.main()

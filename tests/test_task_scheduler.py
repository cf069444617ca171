"""
Tests for the scheduled backup cleanup task.
"""

import subprocess
import sys
import unittest
from unittest import mock

import task_scheduler

def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=["schtasks"], returncode=returncode, stdout=stdout, stderr=stderr)

class BuildCommandTests(unittest.TestCase):

    def test_command_runs_backup_tool_purge(self):
        command = task_scheduler.build_cleanup_command(14)
        self.assertIn(f'"{sys.executable}"', command)
        self.assertIn("backup_tool.py", command)
        self.assertIn("--purge --older-than 14 --yes", command)

    def test_default_backup_dir_is_resolved_now(self):
        # SYSTEM has its own %LOCALAPPDATA%, the task must not resolve it later
        expected = task_scheduler.config.get_backup_dir()
        command = task_scheduler.build_cleanup_command(14)
        self.assertTrue(command.endswith(f'--backup-dir "{expected}"'))

    def test_command_with_backup_dir(self):
        command = task_scheduler.build_cleanup_command(7, r"D:\Backups")
        self.assertTrue(command.endswith(r'--backup-dir "D:\Backups"'))

@mock.patch("task_scheduler.is_admin", return_value=True)
class AddRemoveTaskTests(unittest.TestCase):

    @mock.patch("task_scheduler.run_command", return_value=completed())
    def test_add_daily_task(self, run_command, is_admin):
        self.assertTrue(task_scheduler.add_cleanup_task(30, "daily", "04:15", task_name="Cleanup"))

        cmd = run_command.call_args[0][0]
        self.assertEqual(cmd[:4], ["schtasks", "/Create", "/TN", "Cleanup"])
        self.assertEqual(cmd[cmd.index("/SC") + 1], "DAILY")
        self.assertEqual(cmd[cmd.index("/ST") + 1], "04:15")
        self.assertEqual(cmd[cmd.index("/RU") + 1], "SYSTEM")
        self.assertIn("/F", cmd)
        self.assertIn("--backup-dir", cmd[cmd.index("/TR") + 1])

    @mock.patch("task_scheduler.run_command", return_value=completed())
    def test_onstart_task_has_no_start_time(self, run_command, is_admin):
        self.assertTrue(task_scheduler.add_cleanup_task(30, "ONSTART"))
        self.assertNotIn("/ST", run_command.call_args[0][0])

    @mock.patch("task_scheduler.run_command")
    def test_invalid_schedule(self, run_command, is_admin):
        self.assertFalse(task_scheduler.add_cleanup_task(30, "HOURLY"))
        run_command.assert_not_called()

    @mock.patch("task_scheduler.run_command", return_value=completed(1, stderr="ERROR: Access is denied."))
    def test_add_failure(self, run_command, is_admin):
        self.assertFalse(task_scheduler.add_cleanup_task(30))

    @mock.patch("task_scheduler.run_command", return_value=None)
    def test_schtasks_missing(self, run_command, is_admin):
        self.assertFalse(task_scheduler.add_cleanup_task(30))
        self.assertFalse(task_scheduler.check_cleanup_task_exists())

    @mock.patch("task_scheduler.run_command", side_effect=[completed(0), completed(0)])
    def test_remove_existing_task(self, run_command, is_admin):
        self.assertTrue(task_scheduler.remove_cleanup_task("Cleanup"))
        self.assertEqual(run_command.call_args_list[0][0][0], ["schtasks", "/Query", "/TN", "Cleanup"])
        self.assertEqual(run_command.call_args_list[1][0][0], ["schtasks", "/Delete", "/TN", "Cleanup", "/F"])

    @mock.patch("task_scheduler.run_command", return_value=completed(1))
    def test_remove_absent_task(self, run_command, is_admin):
        self.assertTrue(task_scheduler.remove_cleanup_task("Cleanup"))
        self.assertEqual(run_command.call_count, 1)

class AdminRequiredTests(unittest.TestCase):

    @mock.patch("task_scheduler.is_admin", return_value=False)
    @mock.patch("task_scheduler.run_command")
    def test_not_admin(self, run_command, is_admin):
        self.assertFalse(task_scheduler.add_cleanup_task(30))
        self.assertFalse(task_scheduler.remove_cleanup_task())
        run_command.assert_not_called()

if __name__ == "__main__":
    unittest.main()

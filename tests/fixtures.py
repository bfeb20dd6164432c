# tests/fixtures.py
import json
import os
import shutil
import sys
import tempfile
import unittest
from typing import Any, Dict, List, Optional

# Get the absolute path to the project root (one level up from tests/)
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

# Insert root into sys.path so we can import 'host' and 'plugins'
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from host.core.server import Server
from host.utils.logger import Logger, LogLevel
from plugins.random_start_date.config import CONFIG_FILE, SAVE_KEY_APPLIED

PLUGIN_ID = "random_start_date"

class FixedRandom:
    """
    A stand-in random source that returns queued values in order and records
    every (low, high) range it was asked for.
    """
    def __init__(self, values: Optional[List[int]] = None):
        self.values = list(values or [])
        self.calls: List[tuple] = []

    def next_int(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        if self.values:
            return self.values.pop(0)
        return low

class LogCaptureMixin:
    """Routes Logger output into self.log_lines for the duration of a test."""

    def start_log_capture(self):
        self.log_lines: List[str] = []
        self._old_level = Logger.get_level()
        Logger.set_level(LogLevel.DEBUG)
        Logger.set_sink(self.log_lines.append)

    def stop_log_capture(self):
        Logger.set_sink(None)
        Logger.set_level(self._old_level)

    def assertLogContains(self, substring: str):
        all_text = "\n".join(self.log_lines)
        self.assertIn(substring, all_text, f"Expected log line containing '{substring}' not found.")

    def assertLogNotContains(self, substring: str):
        all_text = "\n".join(self.log_lines)
        self.assertNotIn(substring, all_text, f"Unexpected log line containing '{substring}'.")

class ServerTestBase(LogCaptureMixin, unittest.TestCase):
    """Base class for tests that boot a headless server in a scratch directory."""

    SAVE_FILE = "test_save.json"

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp(prefix="rsd_test_")
        self.save_dir = os.path.join(self.temp_dir, "saves")
        self.config_dir = os.path.join(self.temp_dir, "modconfig")
        self.start_log_capture()

    def tearDown(self):
        self.stop_log_capture()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    # --- Helpers ---
    def make_server(self, seed: Optional[int] = 1234, plugin_names: Optional[List[str]] = None) -> Server:
        if plugin_names is None:
            plugin_names = [PLUGIN_ID]
        return Server(self.SAVE_FILE, save_dir=self.save_dir, config_dir=self.config_dir,
                      seed=seed, plugin_names=plugin_names)

    def boot(self, **kwargs) -> Server:
        server = self.make_server(**kwargs)
        server.start()
        return server

    def write_mod_config(self, data: Any, filename: str = CONFIG_FILE):
        os.makedirs(self.config_dir, exist_ok=True)
        with open(os.path.join(self.config_dir, filename), 'w') as f:
            if isinstance(data, str):
                f.write(data)
            else:
                json.dump(data, f)

    def read_mod_config(self, filename: str = CONFIG_FILE) -> Dict[str, Any]:
        with open(os.path.join(self.config_dir, filename), 'r') as f:
            return json.load(f)

    def write_save(self, total_hours: float, applied: Optional[bool] = None,
                   hours_per_day: float = 24.0, days_per_month: int = 9):
        mod_data = {}
        if applied is not None:
            mod_data[SAVE_KEY_APPLIED] = applied
        save_data = {
            "save_format_version": 1,
            "save_name": os.path.splitext(self.SAVE_FILE)[0],
            "seed": 99,
            "calendar": {"hours_per_day": hours_per_day, "days_per_month": days_per_month,
                         "total_hours": total_hours},
            "mod_data": mod_data,
        }
        os.makedirs(self.save_dir, exist_ok=True)
        with open(os.path.join(self.save_dir, self.SAVE_FILE), 'w') as f:
            json.dump(save_data, f)

    def read_save(self) -> Dict[str, Any]:
        with open(os.path.join(self.save_dir, self.SAVE_FILE), 'r') as f:
            return json.load(f)

    def fixed_config(self, month: int = 3, day: int = 5, hour: int = 10) -> Dict[str, Any]:
        return {
            "randomize_month": False, "fixed_month": month,
            "randomize_day": False, "fixed_day": day,
            "randomize_hour": False, "fixed_hour": hour,
        }

# tests/test_random_start_date_plugin.py
import os
from unittest.mock import patch

from tests.fixtures import PLUGIN_ID, FixedRandom, ServerTestBase
from host.core.mod_config import ModConfigStore
from host.world.world import World
from plugins.event_system import EventSystem
from plugins.random_start_date import RandomStartDatePlugin
from plugins.random_start_date.config import CONFIG_FILE, DEFAULT_CONFIG, SAVE_KEY_APPLIED
from plugins.random_start_date.date_resolver import DateResolver

NEW_WORLD_HOURS = 4 * 216 + 6  # May 1st, 06:00

class TestRandomStartDateApply(ServerTestBase):

    def test_new_world_moves_to_fixed_date(self):
        """A fresh world is advanced to the configured date in the following year."""
        self.write_mod_config(self.fixed_config(3, 5, 10))
        server = self.boot()

        calendar = server.world.calendar
        self.assertEqual(calendar.total_hours, 2592 + 538)
        self.assertEqual((calendar.year, calendar.month, calendar.day, calendar.hour), (2, 3, 5, 10))
        self.assertTrue(server.world.save_game.get_bool(SAVE_KEY_APPLIED))
        self.assertLogContains("advanced +2260.0h")
        self.assertLogContains("Applied during run_game (pre-join).")

    def test_target_later_in_start_year(self):
        self.write_mod_config(self.fixed_config(6, 1, 0))
        server = self.boot()
        self.assertEqual(server.world.calendar.total_hours, 5 * 216)
        self.assertEqual(server.world.calendar.year, 1)

    def test_randomized_date_uses_world_random(self):
        server = self.make_server()
        rng = FixedRandom([7, 2, 15])
        server.world.rand = rng
        server.start()

        self.assertEqual(server.world.calendar.total_hours, 7 * 216 + 2 * 24 + 15)
        self.assertEqual(rng.calls, [(0, 12), (0, 9), (0, 24)])

    def test_applied_before_players_can_join(self):
        self.write_mod_config(self.fixed_config())
        server = self.make_server()
        observed = []
        real_apply = RandomStartDatePlugin.apply_start_date

        def spy(plugin):
            observed.append((server.run_phase, server.accepting_players))
            return real_apply(plugin)

        with patch.object(RandomStartDatePlugin, "apply_start_date", spy):
            server.start()

        self.assertEqual(observed, [("run_game", False)])
        self.assertTrue(server.accepting_players)

    def test_second_boot_leaves_calendar_alone(self):
        self.write_mod_config(self.fixed_config())
        server = self.boot()
        applied_hours = server.world.calendar.total_hours
        server.shutdown()

        server = self.boot()
        self.assertEqual(server.world.calendar.total_hours, applied_hours)
        self.assertLogContains("Already applied to this save")

    def test_applied_flag_skips_even_a_fresh_calendar(self):
        self.write_mod_config(self.fixed_config())
        self.write_save(total_hours=864.0, applied=True)
        server = self.boot()
        self.assertEqual(server.world.calendar.total_hours, 864.0)
        self.assertLogNotContains("Applied during")

    def test_world_past_fresh_start_is_skipped(self):
        self.write_mod_config(self.fixed_config())
        self.write_save(total_hours=864.0 + 13)
        server = self.boot()

        self.assertEqual(server.world.calendar.total_hours, 877.0)
        self.assertFalse(server.world.save_game.get_bool(SAVE_KEY_APPLIED))
        self.assertLogContains("Skipped: world not at vanilla fresh start.")

    def test_failure_is_logged_and_retried_next_boot(self):
        self.write_mod_config(self.fixed_config())
        server = self.make_server()
        with patch.object(DateResolver, "resolve", side_effect=RuntimeError("boom")):
            server.start()

        self.assertEqual(server.world.calendar.total_hours, NEW_WORLD_HOURS)
        self.assertFalse(server.world.save_game.get_bool(SAVE_KEY_APPLIED))
        self.assertLogContains("run_game apply failed")
        self.assertLogContains("boom")
        self.assertTrue(server.accepting_players)
        server.shutdown()

        server = self.boot()
        self.assertEqual(server.world.calendar.total_hours, 2592 + 538)
        self.assertTrue(server.world.save_game.get_bool(SAVE_KEY_APPLIED))

    def test_flag_survives_save_and_load(self):
        self.write_mod_config(self.fixed_config())
        server = self.boot()
        server.shutdown()
        self.assertIs(self.read_save()["mod_data"][SAVE_KEY_APPLIED], True)

    def test_out_of_range_config_is_clamped_before_resolution(self):
        self.write_mod_config(self.fixed_config(month=15, day=20, hour=10))
        server = self.boot()

        plugin = server.plugin_manager.get_plugin(PLUGIN_ID)
        self.assertEqual(plugin.start_config.fixed_month, 12)
        calendar = server.world.calendar
        self.assertEqual((calendar.month, calendar.day, calendar.hour), (12, 9, 10))

    def test_noop_when_delta_within_tolerance(self):
        plugin, world = self._make_plugin()
        with patch.object(DateResolver, "delta_to", return_value=0.0005):
            plugin.apply_start_date()

        self.assertEqual(world.calendar.total_hours, NEW_WORLD_HOURS)
        self.assertTrue(world.save_game.get_bool(SAVE_KEY_APPLIED))
        self.assertLogContains("No-op: target not ahead.")

    def test_missing_calendar_is_a_silent_skip(self):
        plugin, world = self._make_plugin()
        world.calendar = None
        plugin.apply_start_date()

        self.assertFalse(world.save_game.get_bool(SAVE_KEY_APPLIED))
        self.assertLogNotContains("[ERROR]")
        self.assertLogNotContains("Skipped")

    def test_cleanup_unsubscribes(self):
        plugin, world = self._make_plugin()
        plugin.initialize()
        self.assertIn("save_game_loaded", plugin.event_system.subscribers)
        plugin.cleanup()
        self.assertNotIn("save_game_loaded", plugin.event_system.subscribers)

    def _make_plugin(self):
        world = World(seed=1)
        world.initialize_new_world("direct")
        plugin = RandomStartDatePlugin(world=world, event_system=EventSystem(),
                                       config_store=ModConfigStore(self.config_dir))
        return plugin, world

class TestRandomStartDateConfig(ServerTestBase):

    def test_first_boot_writes_default_config(self):
        self.boot()
        self.assertEqual(self.read_mod_config(), DEFAULT_CONFIG)
        self.assertLogContains("Created default config 'randomstartdate.json'.")

    def test_existing_config_is_not_overwritten(self):
        self.write_mod_config(self.fixed_config(2, 2, 2))
        self.boot()
        self.assertEqual(self.read_mod_config(), self.fixed_config(2, 2, 2))
        self.assertLogNotContains("Created default config")

    def test_unreadable_config_uses_defaults_and_keeps_file(self):
        self.write_mod_config("{ not json")
        server = self.boot()

        plugin = server.plugin_manager.get_plugin(PLUGIN_ID)
        self.assertTrue(plugin.start_config.randomize_month)
        with open(os.path.join(self.config_dir, CONFIG_FILE)) as f:
            self.assertEqual(f.read(), "{ not json")
        self.assertLogContains("Using defaults")
        self.assertTrue(server.world.save_game.get_bool(SAVE_KEY_APPLIED))

    def test_partial_config_merges_with_defaults(self):
        self.write_mod_config({"randomize_month": False, "fixed_month": 9})
        server = self.boot()
        cfg = server.plugin_manager.get_plugin(PLUGIN_ID).start_config
        self.assertFalse(cfg.randomize_month)
        self.assertEqual(cfg.fixed_month, 9)
        self.assertTrue(cfg.randomize_day)
        self.assertEqual(server.world.calendar.month, 9)

    def test_unwritable_config_dir_still_applies_defaults(self):
        with patch.object(ModConfigStore, "store_mod_config", side_effect=OSError("read-only filesystem")):
            server = self.boot()

        plugin = server.plugin_manager.get_plugin(PLUGIN_ID)
        self.assertEqual(plugin.config, DEFAULT_CONFIG)
        self.assertTrue(plugin.start_config.randomize_month)
        self.assertLogContains("Could not write default config 'randomstartdate.json'")
        self.assertFalse(os.path.exists(os.path.join(self.config_dir, CONFIG_FILE)))
        self.assertTrue(server.world.save_game.get_bool(SAVE_KEY_APPLIED))

class TestRandomStartDateWithoutServer(ServerTestBase):

    def test_save_loaded_without_server_is_skipped(self):
        world = World(seed=1)
        world.initialize_new_world("headless")
        events = EventSystem()
        plugin = RandomStartDatePlugin(world=world, event_system=events,
                                       config_store=ModConfigStore(self.config_dir))
        plugin.initialize()

        events.publish("save_game_loaded", {"save_name": "headless", "is_new_world": True})

        self.assertLogContains("Server not available; cannot schedule start date.")
        self.assertEqual(world.calendar.total_hours, NEW_WORLD_HOURS)
        self.assertFalse(world.save_game.get_bool(SAVE_KEY_APPLIED))

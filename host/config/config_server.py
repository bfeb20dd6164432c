# host/config/config_server.py
"""
Configuration for the server process: directories, save files, run phases and logging.
"""
import os

# --- Directories ---
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
DATA_DIR = os.path.join(BASE_DIR, "data")
SAVE_GAME_DIR = os.path.join(DATA_DIR, "saves")
MOD_CONFIG_DIR = os.path.join(DATA_DIR, "modconfig")

# --- Save Games ---
DEFAULT_SAVE_FILE = "default_save.json"
SAVE_FORMAT_VERSION = 1

# --- Run Phases (entered in this order once the save is loaded) ---
RUN_PHASE_INITIALIZATION = "initialization"
RUN_PHASE_WORLD_READY = "world_ready"
RUN_PHASE_RUN_GAME = "run_game"
RUN_PHASES = [RUN_PHASE_INITIALIZATION, RUN_PHASE_WORLD_READY, RUN_PHASE_RUN_GAME]

# --- Events ---
EVENT_SAVE_GAME_LOADED = "save_game_loaded"
EVENT_PLAYER_JOINED = "player_joined"

# --- Logging ---
LOG_LEVEL = "DEBUG"

import argparse
import os

from host.config import DEFAULT_SAVE_FILE, LOG_LEVEL, MOD_CONFIG_DIR, SAVE_GAME_DIR
from host.core.server import Server
from host.utils.logger import Logger, LogLevel

def main(argv=None):
    parser = argparse.ArgumentParser(description='Headless server with the Random Start Date plugin')
    parser.add_argument('--save', '-s', type=str, default=DEFAULT_SAVE_FILE,
                        help='Save game file to load/save (default: default_save.json)')
    parser.add_argument('--save-dir', type=str, default=SAVE_GAME_DIR,
                        help='Directory holding save games')
    parser.add_argument('--config-dir', type=str, default=MOD_CONFIG_DIR,
                        help='Directory holding mod config files')
    parser.add_argument('--seed', type=int, default=None,
                        help='World seed for newly created worlds')
    parser.add_argument('--log-level', type=str, default=LOG_LEVEL,
                        help='Minimum log level (debug, info, warning, error)')
    args = parser.parse_args(argv)

    try:
        Logger.set_level(LogLevel.from_name(args.log_level))
    except ValueError as e:
        parser.error(str(e))

    create_initial_directories(args.save_dir, args.config_dir)
    server = Server(args.save, save_dir=args.save_dir, config_dir=args.config_dir, seed=args.seed)
    server.start()
    print(f"World date: {server.world.calendar.date_str}")
    server.shutdown()
    return 0

def create_initial_directories(save_dir: str, config_dir: str):
    for directory in (save_dir, config_dir):
        if not os.path.exists(directory):
            os.makedirs(directory)
            Logger.debug("Main", f"Created directory '{directory}'")

if __name__ == "__main__":
    raise SystemExit(main())

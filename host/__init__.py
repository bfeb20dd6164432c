"""
Headless game-server host that loads plugins, save games and the world calendar.
"""

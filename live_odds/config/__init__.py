"""Configuration package.

Import from ``live_odds.config.settings`` directly where needed; nothing is
built at package import time.
"""

__all__: list[str] = []

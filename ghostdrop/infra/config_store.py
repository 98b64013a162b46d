import json
import os

from ghostdrop.constants import API_BASE_URL, ASSISTANT_BASE_URL, POLL_INTERVAL_MS, QT_WINDOW_DEFAULT_GEOMETRY
from ghostdrop.paths import CONFIG_DIR, CONFIG_FILE


class Config:
    """Persistent configuration manager."""

    def __init__(self):
        self.load_error = None
        self.data = {
            "api_base_url": API_BASE_URL,
            "assistant_base_url": ASSISTANT_BASE_URL,
            "sound_enabled": True,
            "notifications_enabled": True,
            "poll_interval_ms": POLL_INTERVAL_MS,
            "qt_window_geometry": QT_WINDOW_DEFAULT_GEOMETRY,
        }
        self.load()

    def load(self):
        self.load_error = None
        if os.path.exists(CONFIG_FILE):
            try:
                with open(CONFIG_FILE, "r", encoding="utf-8") as f:
                    saved = json.load(f)
                if not isinstance(saved, dict):
                    raise ValueError("Config payload must be a JSON object.")
                self.data.update(saved)
            except (OSError, json.JSONDecodeError, TypeError, ValueError) as exc:
                self.load_error = str(exc)

    def save(self):
        os.makedirs(CONFIG_DIR, exist_ok=True)
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, value):
        self.data[key] = value
        self.save()

    def poll_interval_ms(self):
        try:
            value = int(self.get("poll_interval_ms", POLL_INTERVAL_MS))
        except (TypeError, ValueError):
            return POLL_INTERVAL_MS
        return value if value > 0 else POLL_INTERVAL_MS

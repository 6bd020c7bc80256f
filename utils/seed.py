from services.settings_store import get_settings


def seed_settings():
    # Creates the default settings row on first start; no-op afterwards
    get_settings()

import os
import logging
import sys

from dotenv import load_dotenv

load_dotenv(os.path.join(os.path.dirname(__file__), '../.env'))


def get_env(key: str, required: bool = True, default: str = None) -> str:
    val = os.getenv(key, default)
    if required and not val:
        raise ValueError(f"CRITICAL ERROR: Environment variable '{key}' is missing.")
    return val


def setup_logging():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


# --- КОНФІГУРАЦІЯ ---

# XML конфігурація мапування та файл діагностики (порожньо = stderr)
SUBJECTMAP_CONFIG = get_env("SUBJECTMAP_CONFIG", required=False, default="config.xml")
SUBJECTMAP_LOG = get_env("SUBJECTMAP_LOG", required=False)

SUBJECTMAP_API_TOKEN = get_env("SUBJECTMAP_API_TOKEN", required=False)

# Інтеграція з Koha необов'язкова, перевіряється при створенні клієнта
KOHA_API_URL = (get_env("KOHA_API_URL", required=False, default="") or "").rstrip('/')
KOHA_USER = get_env("KOHA_API_USER", required=False)
KOHA_PASS = get_env("KOHA_API_PASS", required=False)

TIMEOUT = int(get_env("SUBJECTMAP_TIMEOUT", required=False, default="30"))

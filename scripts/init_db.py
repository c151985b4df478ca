from litmaster.store.db import init_db
from litmaster.config import get_settings
import logging

logging.basicConfig(level=logging.INFO)

if __name__ == "__main__":
    logging.info(f"Initializing key-value store at {get_settings().DB_PATH}...")
    init_db()
    logging.info("Store initialized.")

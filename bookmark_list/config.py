import logging
import os


def configure_logging(level="INFO"):
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s')


class Config:
    # Location of the SQLite file; created on first open if missing
    DATABASE_PATH = os.getenv("BOOKMARKS_DB", "bookmarks.db")
    LOG_LEVEL = os.getenv("BOOKMARKS_LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("BOOKMARKS_CORS_ORIGINS", "*")
    RESTX_MASK_SWAGGER = False

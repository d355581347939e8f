
import warnings
import os
from dotenv import load_dotenv

load_dotenv()

SEED_MODES = ("per_row", "atomic")


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True
    }
    ORDER_SEED_MODE = os.getenv("ORDER_SEED_MODE", "per_row")

    if not SQLALCHEMY_DATABASE_URI:
        warnings.warn(
            "DATABASE_URL is not set. Falling back to local SQLite (sqlite:///local.db).",
            RuntimeWarning
        )
        SQLALCHEMY_DATABASE_URI = "sqlite:///local.db"

    if ORDER_SEED_MODE not in SEED_MODES:
        warnings.warn(
            f"ORDER_SEED_MODE={ORDER_SEED_MODE!r} is not one of {SEED_MODES}. Falling back to 'per_row'.",
            RuntimeWarning
        )
        ORDER_SEED_MODE = "per_row"

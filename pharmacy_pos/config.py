import os
from pathlib import Path

from .constants import DATA_DIR, DB_FILE_NAME

BASE_DIR = Path(__file__).resolve().parent
DATA_PATH = BASE_DIR / DATA_DIR

# PHARMACY_POS_DB points the app at a different database file
DB_PATH = Path(os.environ.get("PHARMACY_POS_DB") or (DATA_PATH / DB_FILE_NAME))

# Optional TTF carrying the rupee glyph (e.g. DejaVuSans.ttf)
PDF_FONT_PATH = os.environ.get("PHARMACY_POS_PDF_FONT") or None

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# === Base project path ===
PROJECT_ROOT = Path(__file__).resolve().parents[1]

# === Common directories ===
CONFIG_DIR = PROJECT_ROOT / "config"
LOG_DIR = Path(os.getenv("ROSTER_LOG_DIR", PROJECT_ROOT))

# === Default log file path ===
LOG_PATH = LOG_DIR / "roster_run.log"

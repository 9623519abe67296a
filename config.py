from pathlib import Path
from dotenv import load_dotenv
import os
import secrets

ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

# JWT Config
JWT_SECRET = os.environ.get('JWT_SECRET') or secrets.token_urlsafe(32)
JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_HOURS = 24

# Single admin login; the password is only ever configured as a bcrypt hash
ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME', 'admin')
ADMIN_PASSWORD_HASH = os.environ.get('ADMIN_PASSWORD_HASH', '')

# Storage
STORAGE_BACKEND = os.environ.get('STORAGE_BACKEND', 'file')  # file | mongo | memory
STORAGE_PREFIX = "sn_"
DATA_DIR = Path(os.environ.get('DATA_DIR', str(ROOT_DIR / "data")))
MONGO_URL = os.environ.get('MONGO_URL', '')
DB_NAME = os.environ.get('DB_NAME', 'sn_site_ledger')

AUTH_FLAG_KEY = f"{STORAGE_PREFIX}auth"
LAST_SYNC_KEY = f"{STORAGE_PREFIX}last_sync"

# Worker business IDs: SNE/<KEY>-<NNN>
WORKER_ID_ORG_TAG = "SNE"
WORKER_ID_SEQ_WIDTH = 3

# Sync indicator (cosmetic)
SYNC_ONLINE = os.environ.get('SYNC_ONLINE', 'true').lower() in ('1', 'true', 'yes')
SYNC_DELAY_SECONDS = float(os.environ.get('SYNC_DELAY_SECONDS', '1.5'))

# AI
OPENAI_ESTIMATOR_MODEL = os.environ.get('OPENAI_ESTIMATOR_MODEL', 'gpt-4o')
OPENAI_CHAT_MODEL = os.environ.get('OPENAI_CHAT_MODEL', 'gpt-4o-mini')

# Exports
EXPORT_DIR = ROOT_DIR / "exports"
EXPORT_DIR.mkdir(parents=True, exist_ok=True)

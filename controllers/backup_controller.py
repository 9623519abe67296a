from fastapi import HTTPException
from fastapi.responses import FileResponse
from datetime import datetime
import logging

from database import store
from config import EXPORT_DIR
from core.backup import BackupFormatError, backup_filename, encode_backup, decode_backup
from core.registry import backup_field
from core.sync import IST

logger = logging.getLogger(__name__)


async def export_backup() -> FileResponse:
    filename = backup_filename(datetime.now(IST))
    filepath = EXPORT_DIR / filename
    filepath.write_text(encode_backup(store.snapshot()), encoding="utf-8")
    return FileResponse(str(filepath), filename=filename, media_type="application/json")


async def import_backup(content: bytes) -> dict:
    try:
        collections = decode_backup(content.decode("utf-8-sig"))
    except UnicodeDecodeError as e:
        logger.error(f"Backup import rejected: {str(e)}")
        raise HTTPException(status_code=400, detail="Backup file is not valid UTF-8 text")
    except BackupFormatError as e:
        logger.error(f"Backup import rejected: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    restored = await store.restore(collections)
    logger.info("Restored %d collections from backup", len(restored))
    return {
        "message": "Data restored successfully",
        "restored": [backup_field(name) for name in restored],
        "counts": {backup_field(name): len(collections[name]) for name in restored},
    }

import json
from datetime import datetime
from typing import Dict, List

from pydantic import ValidationError

from core.registry import COLLECTION_NAMES, backup_field
from models.backup import BackupDocument


class BackupFormatError(ValueError):
    pass


def backup_filename(now: datetime) -> str:
    return f"SN_Enterprise_Backup_{now.strftime('%Y-%m-%d')}_{now.strftime('%H-%M-%S')}.json"


def encode_backup(collections: Dict[str, List[dict]]) -> str:
    document = {backup_field(name): collections[name] for name in COLLECTION_NAMES if name in collections}
    return json.dumps(document, indent=2, ensure_ascii=False)


def decode_backup(text) -> Dict[str, List[dict]]:
    """Parse a backup document into {collection name: records}.

    Only collections present in the document are returned. Anything malformed
    rejects the whole document.
    """
    try:
        raw = json.loads(text)
    except (TypeError, ValueError) as e:
        raise BackupFormatError(f"Backup file is not valid JSON: {str(e)}") from e
    if not isinstance(raw, dict) or not isinstance(raw.get("projects"), list):
        raise BackupFormatError("Invalid backup file format: 'projects' list is missing")
    try:
        document = BackupDocument.model_validate(raw)
    except ValidationError as e:
        raise BackupFormatError(f"Invalid backup file format: {e.error_count()} field error(s)") from e
    return document.collections()

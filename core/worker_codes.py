import re
from typing import Iterable, Optional

from config import WORKER_ID_ORG_TAG, WORKER_ID_SEQ_WIDTH

NAME_STOPWORDS = {
    "city", "ltd", "site", "project", "the", "of", "and", "pvt", "private",
    "limited", "phase", "tower", "building", "apartment", "apartments",
}

WORD_RE = re.compile(r"[A-Za-z0-9]+")


def project_key(name: str, code: Optional[str] = None) -> str:
    """Short upper-case key for a project: its code when set, else derived from the name."""
    prefix = f"{WORKER_ID_ORG_TAG}/"
    if code and code.strip():
        code = code.strip().upper()
        return code[len(prefix):] if code.startswith(prefix) else code

    words = WORD_RE.findall(name or "")
    significant = [w for w in words if w.lower() not in NAME_STOPWORDS]
    if len(significant) >= 2:
        return (significant[0][0] + significant[1][0]).upper()
    if significant:
        return significant[0][:3].upper()
    if words:
        return "".join(w[0] for w in words)[:3].upper()
    return "GEN"


def next_sequence(workers: Iterable[dict], project_id: str) -> int:
    return sum(1 for w in workers if w.get("projectId") == project_id) + 1


def generate_worker_id(project: dict, workers: Iterable[dict]) -> str:
    """Business ID for the next worker of `project`, e.g. SNE/GV-004.

    Only meant for creation time; existing IDs are never recomputed.
    """
    key = project_key(project.get("name", ""), project.get("projectCode"))
    seq = str(next_sequence(workers, project.get("id"))).zfill(WORKER_ID_SEQ_WIDTH)
    return f"{WORKER_ID_ORG_TAG}/{key}-{seq}"

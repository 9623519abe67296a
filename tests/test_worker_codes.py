"""
Worker business IDs: SNE/<KEY>-<NNN>.
"""
import re

import pytest

from core.worker_codes import project_key, next_sequence, generate_worker_id

ID_RE = re.compile(r"^SNE/[A-Z0-9]+-\d{3,}$")


# ═══════════════════════════════════════════════════════════════
# 1. PROJECT KEY
# ═══════════════════════════════════════════════════════════════
class TestProjectKey:

    def test_code_wins(self):
        assert project_key("Green Valley Residency", "gvr") == "GVR"

    def test_code_with_org_prefix_not_doubled(self):
        assert project_key("Anything", "SNE/GVR") == "GVR"

    @pytest.mark.parametrize("name, expected", [
        ("Metro City Mall Site", "MM"),
        ("Green Valley Residency", "GV"),
        ("Riverside", "RIV"),
        ("The Site", "TS"),
        ("", "GEN"),
        ("!!!", "GEN"),
    ])
    def test_derived_from_name(self, name, expected):
        assert project_key(name) == expected

    def test_blank_code_falls_back_to_name(self):
        assert project_key("Riverside Warehouse", "  ") == "RW"


# ═══════════════════════════════════════════════════════════════
# 2. GENERATION
# ═══════════════════════════════════════════════════════════════
class TestGenerateWorkerId:

    WORKERS = [
        {"id": "w1", "projectId": "p1"},
        {"id": "w2", "projectId": "p1"},
        {"id": "w3", "projectId": "p1"},
        {"id": "w4", "projectId": "p2"},
    ]

    def test_sequence_counts_project_workers(self):
        assert next_sequence(self.WORKERS, "p1") == 4
        assert next_sequence(self.WORKERS, "p9") == 1

    def test_uses_project_code(self):
        project = {"id": "p1", "name": "Green Valley Residency", "projectCode": "GVR"}
        assert generate_worker_id(project, self.WORKERS) == "SNE/GVR-004"

    def test_uses_name_when_no_code(self):
        project = {"id": "p2", "name": "Metro City Mall Site", "projectCode": ""}
        assert generate_worker_id(project, self.WORKERS) == "SNE/MM-002"

    def test_shape(self):
        for project in [
            {"id": "p1", "name": "Green Valley Residency"},
            {"id": "p3", "name": "", "projectCode": None},
            {"id": "p4", "name": "Tower 7 Phase 2"},
        ]:
            assert ID_RE.match(generate_worker_id(project, self.WORKERS))

    def test_sequence_grows_past_width(self):
        workers = [{"projectId": "p1"}] * 1000
        assert generate_worker_id({"id": "p1", "name": "X", "projectCode": "AB"}, workers) == "SNE/AB-1001"

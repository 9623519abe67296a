"""
Seed script for SN Site Ledger - resets every collection to the built-in demo data
Run: python seed.py
"""
import asyncio

from core.registry import COLLECTION_NAMES
from core.seed_data import SEED_COLLECTIONS
from database import store, backend


async def seed():
    print("Starting seed...")

    for name in COLLECTION_NAMES:
        records = SEED_COLLECTIONS.get(name, [])
        await store.replace(name, records)
        print(f"  {name}: {len(records)} record(s)")

    print("\n--- Seed complete! ---")
    print("Login:")
    print("  Set ADMIN_USERNAME and ADMIN_PASSWORD_HASH in .env")
    print("  Generate a hash with: python -c \"from core.auth import get_password_hash; print(get_password_hash('<password>'))\"")

    if hasattr(backend, "close"):
        backend.close()


if __name__ == "__main__":
    asyncio.run(seed())

"""
Store the default commission configuration.

Usage:
    python scripts/seed_commission_config.py

Or with custom DATABASE_URL:
    DATABASE_URL="postgresql://..." python scripts/seed_commission_config.py

Pass --force to overwrite a configuration that is already stored.
"""

import asyncio
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.db import engine, get_db_context
from src.services.commission_config import CommissionConfigRepository, default_commission_config


async def seed(force: bool) -> None:
    async with get_db_context() as db:
        repo = CommissionConfigRepository(db)
        if force:
            await repo.save(default_commission_config())
            print("Commission config overwritten with defaults")
        elif await repo.ensure_defaults():
            print("Default commission config created")
        else:
            print("Commission config already stored, nothing to do (use --force)")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed(force="--force" in sys.argv[1:]))

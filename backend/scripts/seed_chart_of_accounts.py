import sys
import os
import argparse
import logging
from dotenv import load_dotenv

load_dotenv()

# Add the parent directory to sys.path to allow imports from backend
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import Base, SessionLocal, engine
import models  # noqa: F401
from crud.chart_of_accounts import initialize_default_accounts
from exceptions import AccountingError

# Setup logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger("seed_chart_of_accounts")


def seed(dry_run: bool = False) -> int:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        created = initialize_default_accounts(db, dry_run=dry_run)
        if dry_run:
            logger.info(f"Dry run: would create {len(created)} accounts: {', '.join(created) or 'none'}")
        else:
            logger.info(f"Created {len(created)} accounts: {', '.join(created) or 'none'}")
        return 0
    except AccountingError as e:
        logger.error(f"Seeding failed: {e.kind}: {e.detail}", exc_info=True)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the default chart of accounts.")
    parser.add_argument("--dry-run", action="store_true", help="List the accounts that would be created without writing")
    args = parser.parse_args()
    sys.exit(seed(dry_run=args.dry_run))

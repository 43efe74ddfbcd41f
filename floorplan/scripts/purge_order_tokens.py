"""
Background job to purge expired QR order tokens

Run periodically (e.g., via cron) so scanned-out tokens do not pile up.
"""

import sys
from datetime import datetime
from typing import Optional

from sqlmodel import Session, select
import structlog

from floorplan.core.database import engine
from floorplan.models.order_token import OrderToken

logger = structlog.get_logger(__name__)


def purge_expired_tokens(session: Session, now: Optional[datetime] = None) -> dict:
    """Delete every order token past its expiry"""
    cutoff = now or datetime.utcnow()
    try:
        expired = session.exec(
            select(OrderToken).where(OrderToken.expires_at <= cutoff)
        ).all()

        if not expired:
            logger.info("No expired order tokens found")
            return {"purged": 0}

        for token in expired:
            session.delete(token)
        session.commit()

        logger.info("Purged expired order tokens", purged=len(expired))
        return {"purged": len(expired)}

    except Exception as e:
        session.rollback()
        logger.error("Error purging order tokens", error=str(e))
        raise


def main():
    """Main entry point for cleanup job"""
    logger.info("Starting order token cleanup job")

    try:
        with Session(engine) as session:
            results = purge_expired_tokens(session)
            logger.info("Order token cleanup complete", results=results)

    except Exception as e:
        logger.error("Fatal error in cleanup job", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()

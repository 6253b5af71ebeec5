import logging
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from . import crud
from .models import Option

logger = logging.getLogger(__name__)

# Canonical reservation options inserted into an empty ``options`` table.
DEFAULT_OPTIONS = [
    {"name": "Grote zaal", "description": "Gebruik van de grote zaal", "price": Decimal("150.00")},
    {"name": "Kleine zaal", "description": "Gebruik van de kleine zaal", "price": Decimal("75.00")},
    {"name": "Keuken", "description": "Gebruik van de keuken", "price": Decimal("50.00")},
]


def seed_default_options(db: Session) -> int:
    """Insert ``DEFAULT_OPTIONS`` when no option exists yet.

    Returns the number of rows inserted; zero when the table already has
    data so repeated calls are harmless.
    """
    if crud.option.count_options(db) > 0:
        return 0
    db.add_all(
        [Option(sort_order=index, active=True, **data) for index, data in enumerate(DEFAULT_OPTIONS, start=1)]
    )
    db.commit()
    logger.info("Seeded default options", extra={"count": len(DEFAULT_OPTIONS)})
    return len(DEFAULT_OPTIONS)


def ping_database(engine: Engine) -> None:
    """Run ``SELECT 1``; raises on connection failure."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))

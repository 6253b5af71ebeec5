from typing import List, Sequence

from sqlalchemy.orm import Session

from ..models import Option
from ..schemas.option import OptionSummary


class CRUDOption:
    def get_options_by_ids(self, db: Session, ids: Sequence[str]) -> List[OptionSummary]:
        """Return ``{id, price}`` for the requested ids that are currently active.

        Unknown and inactive ids are dropped without being reported.
        """
        wanted = list(dict.fromkeys(ids))
        if not wanted:
            return []
        rows = (
            db.query(Option.id, Option.price)
            .filter(Option.id.in_(wanted), Option.active.is_(True))
            .all()
        )
        return [OptionSummary(id=row.id, price=row.price) for row in rows]

    def get_active_options(self, db: Session) -> List[Option]:
        return (
            db.query(Option)
            .filter(Option.active.is_(True))
            .order_by(Option.sort_order.asc(), Option.name.asc())
            .all()
        )

    def count_options(self, db: Session) -> int:
        return db.query(Option).count()


option = CRUDOption()

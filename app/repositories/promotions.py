from datetime import date
import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app import db
from app.exceptions import PromotionConflictError, PromotionStorageError
from app.models.promotions import Promotion, PromotionStatus

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = {
    'name': Promotion.name,
    'start_date': Promotion.start_date,
    'end_date': Promotion.end_date,
}


def _like_pattern(keyword):
    escaped = keyword.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return f"%{escaped}%"


def _is_name_conflict(error):
    text = str(error.orig)
    return 'uq_promotion_name' in text or 'promotion.name' in text


class PromotionRepository:
    """Queries and writes against the ``promotion`` table."""

    def find_all(self):
        return Promotion.query.all()

    def find_by_id(self, id_promotion):
        return db.session.get(Promotion, id_promotion)

    def find_by_status(self, status):
        return Promotion.query.filter_by(status=status).all()

    def find_active(self, current_date: date):
        return Promotion.query.filter(
            Promotion.status == PromotionStatus.ACTIVE,
            Promotion.start_date <= current_date,
            Promotion.end_date >= current_date,
        ).all()

    def find_expiring_soon(self, current_date: date, future_date: date):
        return Promotion.query.filter(
            Promotion.status == PromotionStatus.ACTIVE,
            Promotion.end_date > current_date,
            Promotion.end_date < future_date,
        ).all()

    def find_all_sorted(self, field):
        column = SORTABLE_COLUMNS[field]
        return Promotion.query.order_by(column.asc(), Promotion.id_promotion).all()

    def _search_query(self, keyword):
        pattern = _like_pattern(keyword)
        return Promotion.query.filter(or_(
            Promotion.name.ilike(pattern, escape='\\'),
            Promotion.description.ilike(pattern, escape='\\'),
        ))

    def search(self, keyword):
        return self._search_query(keyword).all()

    def paginate_all(self, page, size):
        return self._paginate(Promotion.query, page, size)

    def paginate_by_status(self, status, page, size):
        return self._paginate(Promotion.query.filter_by(status=status), page, size)

    def paginate_search(self, keyword, page, size):
        return self._paginate(self._search_query(keyword), page, size)

    def _paginate(self, query, page, size):
        """Return ``(items, total)`` for a 0-based page."""
        logger.debug(f"Paginating promotions: page={page}, size={size}")
        total = query.count()
        if page * size >= total:
            return [], total
        # Pagination is 1-based in Flask-SQLAlchemy
        pagination = query.order_by(Promotion.id_promotion).paginate(
            page=page + 1, per_page=size, error_out=False, count=False)
        return pagination.items, total

    def exists_by_name(self, name, exclude_id=None):
        query = Promotion.query.filter(Promotion.name == name)
        if exclude_id is not None:
            query = query.filter(Promotion.id_promotion != exclude_id)
        return query.first() is not None

    def save(self, promotion):
        try:
            db.session.add(promotion)
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            if _is_name_conflict(e):
                raise PromotionConflictError("Tên khuyến mãi đã tồn tại") from e
            logger.error(f"Integrity error saving {promotion}: {str(e)}")
            raise PromotionStorageError(str(e.orig)) from e
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Error saving {promotion}: {str(e)}")
            raise PromotionStorageError(str(e)) from e
        return promotion

    def delete(self, promotion):
        try:
            db.session.delete(promotion)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Error deleting {promotion}: {str(e)}")
            raise PromotionStorageError(str(e)) from e

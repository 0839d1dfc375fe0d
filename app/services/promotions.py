from datetime import date, timedelta
import logging

from app.exceptions import PromotionConflictError, PromotionNotFoundError
from app.models.promotions import Promotion
from app.repositories.promotions import PromotionRepository
from app.schemas.promotions import EXPIRING_SOON_DAYS, PromotionDTO, PromotionPage
from app.validators.promotions import validate_promotion_data

logger = logging.getLogger(__name__)


def _to_dtos(entities):
    return [PromotionDTO.from_entity(entity) for entity in entities]


def _apply(dto, entity):
    entity.name = dto.name
    entity.discount_percent = dto.discount_percent
    entity.start_date = dto.start_date
    entity.end_date = dto.end_date
    entity.description = dto.description
    entity.status = dto.status
    return entity


class PromotionService:
    """Business operations for promotions. Returns PromotionDTO objects, never ORM rows."""

    def __init__(self, repository=None):
        self.repository = repository or PromotionRepository()

    # Listing

    def get_all_promotions(self):
        return _to_dtos(self.repository.find_all())

    def get_promotion_by_id(self, id_promotion):
        entity = self.repository.find_by_id(id_promotion)
        return PromotionDTO.from_entity(entity) if entity else None

    def get_promotions_by_status(self, status):
        return _to_dtos(self.repository.find_by_status(status))

    def get_active_promotions(self):
        return _to_dtos(self.repository.find_active(date.today()))

    def get_promotions_expiring_soon(self):
        current_date = date.today()
        future_date = current_date + timedelta(days=EXPIRING_SOON_DAYS)
        return _to_dtos(self.repository.find_expiring_soon(current_date, future_date))

    # Sorting

    def get_promotions_sorted_by_name(self):
        return _to_dtos(self.repository.find_all_sorted('name'))

    def get_promotions_sorted_by_start_date(self):
        return _to_dtos(self.repository.find_all_sorted('start_date'))

    def get_promotions_sorted_by_end_date(self):
        return _to_dtos(self.repository.find_all_sorted('end_date'))

    # Pagination

    def get_all_promotions_with_pagination(self, page, size):
        items, total = self.repository.paginate_all(page, size)
        return PromotionPage.from_slice(items, total, page, size)

    def get_promotions_by_status_with_pagination(self, status, page, size):
        items, total = self.repository.paginate_by_status(status, page, size)
        return PromotionPage.from_slice(items, total, page, size)

    # Search

    def search_promotions(self, keyword):
        return _to_dtos(self.repository.search(keyword.strip()))

    def search_promotions_with_pagination(self, keyword, page, size):
        items, total = self.repository.paginate_search(keyword.strip(), page, size)
        return PromotionPage.from_slice(items, total, page, size)

    # Mutations

    def add_promotion(self, dto):
        validate_promotion_data(dto)

        if self.repository.exists_by_name(dto.name):
            raise PromotionConflictError("Tên khuyến mãi đã tồn tại")

        saved = self.repository.save(_apply(dto, Promotion()))
        logger.info(f"Promotion created: {saved}")
        return PromotionDTO.from_entity(saved)

    def update_promotion(self, id_promotion, dto):
        entity = self.repository.find_by_id(id_promotion)
        if entity is None:
            raise PromotionNotFoundError("Khuyến mãi không tồn tại")

        validate_promotion_data(dto)

        if self.repository.exists_by_name(dto.name, exclude_id=id_promotion):
            raise PromotionConflictError("Tên khuyến mãi đã tồn tại")

        saved = self.repository.save(_apply(dto, entity))
        logger.info(f"Promotion updated: {saved}")
        return PromotionDTO.from_entity(saved)

    def delete_promotion(self, id_promotion):
        entity = self.repository.find_by_id(id_promotion)
        if entity is None:
            return False
        self.repository.delete(entity)
        logger.info(f"Promotion {id_promotion} deleted")
        return True

import math
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_serializer
from pydantic.alias_generators import to_camel

from app.exceptions import PromotionValidationError
from app.models.promotions import PromotionStatus

EXPIRING_SOON_DAYS = 7


class PromotionDTO(BaseModel):
    """Transfer record for a promotion.

    Every field is optional so that a request body can be parsed first and
    checked for presence afterwards by the validators, which report the
    first violation in a fixed order.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[int] = None
    name: Optional[str] = None
    discount_percent: Optional[Decimal] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None
    status: Optional[PromotionStatus] = None

    @field_serializer('discount_percent')
    def serialize_discount(self, value: Optional[Decimal]):
        return float(value) if value is not None else None

    @classmethod
    def from_entity(cls, entity) -> "PromotionDTO":
        return cls(
            id=entity.id_promotion,
            name=entity.name,
            discount_percent=entity.discount_percent,
            start_date=entity.start_date,
            end_date=entity.end_date,
            description=entity.description,
            status=entity.status,
        )

    def to_json(self) -> dict:
        return self.model_dump(mode='json', by_alias=True)

    def is_valid(self, today: Optional[date] = None) -> bool:
        """True when the promotion is ACTIVE and today lies inside its window."""
        today = today or date.today()
        return (self.status == PromotionStatus.ACTIVE
                and self.start_date <= today
                and self.end_date >= today)

    def is_expiring_soon(self, today: Optional[date] = None) -> bool:
        """True when the promotion is ACTIVE and ends within the next seven days."""
        today = today or date.today()
        return (self.status == PromotionStatus.ACTIVE
                and self.end_date > today
                and self.end_date < today + timedelta(days=EXPIRING_SOON_DAYS))


class PromotionPage(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content: List[PromotionDTO]
    page: int
    size: int
    total_elements: int
    total_pages: int
    number_of_elements: int
    first: bool
    last: bool

    @classmethod
    def from_slice(cls, items, total: int, page: int, size: int) -> "PromotionPage":
        content = [PromotionDTO.from_entity(item) for item in items]
        total_pages = math.ceil(total / size) if total else 0
        return cls(
            content=content,
            page=page,
            size=size,
            total_elements=total,
            total_pages=total_pages,
            number_of_elements=len(content),
            first=page == 0,
            last=page + 1 >= total_pages,
        )

    def to_json(self) -> dict:
        return self.model_dump(mode='json', by_alias=True)


def parse_promotion(payload) -> PromotionDTO:
    """Build a PromotionDTO from a decoded JSON body."""
    if payload is None:
        raise PromotionValidationError("Dữ liệu khuyến mãi không được để trống")
    if not isinstance(payload, dict):
        raise PromotionValidationError("Dữ liệu khuyến mãi không hợp lệ")
    try:
        return PromotionDTO.model_validate(payload)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error['loc'])
        raise PromotionValidationError(f"Giá trị không hợp lệ cho trường '{field}': {error['msg']}") from e

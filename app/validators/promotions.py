"""Field and business-rule checks for promotions.

``first_violation`` walks an ordered list of named checks and stops at the
first one that fails. ``is_valid_business_logic`` is a separate pass that the
API runs before handing a record to the service, so the date ordering rule is
checked in both places.
"""
from datetime import MAXYEAR, date
from decimal import Decimal
from typing import Optional

from app.exceptions import PromotionValidationError

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 255
MAX_DISCOUNT = Decimal("100")
MAX_DURATION_YEARS = 1
MAX_START_YEARS_AHEAD = 2

KEYWORD_MIN_LENGTH = 2
KEYWORD_MAX_LENGTH = 100
MAX_PAGE_SIZE = 100

UNSAFE_FRAGMENTS = ("<", ">", "script")

BUSINESS_RULE_MESSAGE = "Dữ liệu khuyến mãi không hợp lệ theo quy tắc nghiệp vụ"


def add_years(value: date, years: int) -> date:
    if value.year + years > MAXYEAR:
        return date.max
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        # 29 February in a non-leap target year
        return value.replace(year=value.year + years, day=28)


def contains_unsafe_text(text: str) -> bool:
    return any(fragment in text for fragment in UNSAFE_FRAGMENTS)


def _has_two_decimals_at_most(value: Decimal) -> bool:
    return value == value.quantize(Decimal("0.01"))


# (message, predicate) pairs; the predicate returns True when the rule is broken
PROMOTION_CHECKS = [
    ("Dữ liệu khuyến mãi không được null",
     lambda p: p is None),
    ("Tên khuyến mãi không được để trống",
     lambda p: p.name is None or not p.name.strip()),
    ("Tên khuyến mãi phải có ít nhất 2 ký tự",
     lambda p: len(p.name.strip()) < NAME_MIN_LENGTH),
    ("Tên khuyến mãi không được vượt quá 100 ký tự",
     lambda p: len(p.name) > NAME_MAX_LENGTH),
    ("Phần trăm giảm giá không được để trống",
     lambda p: p.discount_percent is None),
    ("Phần trăm giảm giá phải lớn hơn 0",
     lambda p: p.discount_percent <= 0),
    ("Phần trăm giảm giá không được vượt quá 100%",
     lambda p: p.discount_percent > MAX_DISCOUNT),
    ("Phần trăm giảm giá chỉ được có tối đa 2 chữ số thập phân",
     lambda p: not _has_two_decimals_at_most(p.discount_percent)),
    ("Ngày bắt đầu không được để trống",
     lambda p: p.start_date is None),
    ("Ngày kết thúc không được để trống",
     lambda p: p.end_date is None),
    ("Ngày kết thúc phải sau ngày bắt đầu",
     lambda p: p.end_date < p.start_date),
    ("Trạng thái không được để trống",
     lambda p: p.status is None),
    ("Mô tả không được vượt quá 255 ký tự",
     lambda p: p.description is not None and len(p.description) > DESCRIPTION_MAX_LENGTH),
]


def first_violation(promotion) -> Optional[str]:
    """Return the message of the first broken rule, or None when the record passes."""
    for message, is_broken in PROMOTION_CHECKS:
        if is_broken(promotion):
            return message
    return None


def validate_promotion_data(promotion):
    message = first_violation(promotion)
    if message is not None:
        raise PromotionValidationError(message)


def is_valid_business_logic(promotion, today: Optional[date] = None) -> bool:
    today = today or date.today()
    start_date, end_date, name = promotion.start_date, promotion.end_date, promotion.name

    if start_date is not None and end_date is not None:
        if end_date < start_date:
            return False
        if end_date > add_years(start_date, MAX_DURATION_YEARS):
            return False

    if start_date is not None and start_date > add_years(today, MAX_START_YEARS_AHEAD):
        return False

    if name is not None and contains_unsafe_text(name):
        return False

    return True


def validate_search_keyword(keyword) -> str:
    """Check a search keyword and return it trimmed."""
    if keyword is None or not keyword.strip():
        raise PromotionValidationError("Từ khóa tìm kiếm không được để trống")
    trimmed = keyword.strip()
    if len(trimmed) < KEYWORD_MIN_LENGTH:
        raise PromotionValidationError("Từ khóa tìm kiếm phải có ít nhất 2 ký tự")
    if len(trimmed) > KEYWORD_MAX_LENGTH:
        raise PromotionValidationError("Từ khóa tìm kiếm không được vượt quá 100 ký tự")
    if contains_unsafe_text(keyword):
        raise PromotionValidationError("Từ khóa tìm kiếm chứa ký tự không hợp lệ")
    return trimmed


def validate_pagination(page: int, size: int, max_size: int = MAX_PAGE_SIZE):
    if page < 0:
        raise PromotionValidationError("Số trang phải >= 0")
    if size <= 0:
        raise PromotionValidationError("Kích thước trang phải > 0")
    if size > max_size:
        raise PromotionValidationError(f"Kích thước trang không được vượt quá {max_size}")


def validate_promotion_id(id_promotion):
    if id_promotion is None or id_promotion <= 0:
        raise PromotionValidationError("ID khuyến mãi không hợp lệ")

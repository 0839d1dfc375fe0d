from datetime import date, timedelta
from decimal import Decimal

import pytest

from app.exceptions import PromotionValidationError
from app.validators.promotions import (
    add_years,
    first_violation,
    is_valid_business_logic,
    validate_pagination,
    validate_promotion_data,
    validate_promotion_id,
    validate_search_keyword,
)
from tests.factories import build_promotion


class TestFirstViolation:
    def test_valid_record_passes(self):
        assert first_violation(build_promotion()) is None

    def test_absent_record(self):
        assert first_violation(None) == "Dữ liệu khuyến mãi không được null"

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_blank_name(self, name):
        assert first_violation(build_promotion(name=name)) == "Tên khuyến mãi không được để trống"

    def test_name_too_short_after_trim(self):
        assert first_violation(build_promotion(name="  a  ")) == "Tên khuyến mãi phải có ít nhất 2 ký tự"

    def test_name_too_long(self):
        assert first_violation(build_promotion(name="x" * 101)) == "Tên khuyến mãi không được vượt quá 100 ký tự"

    def test_name_width_counts_surrounding_spaces(self):
        assert first_violation(build_promotion(name=" " + "a" * 100)) == "Tên khuyến mãi không được vượt quá 100 ký tự"

    def test_missing_discount(self):
        assert first_violation(build_promotion(discount_percent=None)) == "Phần trăm giảm giá không được để trống"

    @pytest.mark.parametrize("discount", [Decimal("0"), Decimal("-5")])
    def test_discount_not_positive(self, discount):
        assert first_violation(build_promotion(discount_percent=discount)) == "Phần trăm giảm giá phải lớn hơn 0"

    def test_discount_above_hundred(self):
        assert first_violation(build_promotion(discount_percent=Decimal("100.01"))) == \
            "Phần trăm giảm giá không được vượt quá 100%"

    def test_discount_of_exactly_hundred_is_allowed(self):
        assert first_violation(build_promotion(discount_percent=Decimal("100"))) is None

    def test_discount_with_three_decimals(self):
        assert first_violation(build_promotion(discount_percent=Decimal("10.125"))) == \
            "Phần trăm giảm giá chỉ được có tối đa 2 chữ số thập phân"

    def test_trailing_zeros_do_not_count_as_decimals(self):
        assert first_violation(build_promotion(discount_percent=Decimal("10.500"))) is None

    def test_missing_dates(self):
        assert first_violation(build_promotion(start_date=None)) == "Ngày bắt đầu không được để trống"
        assert first_violation(build_promotion(end_date=None)) == "Ngày kết thúc không được để trống"

    def test_end_before_start(self):
        promotion = build_promotion(start_date=date(2024, 1, 1), end_date=date(2023, 12, 31))
        assert first_violation(promotion) == "Ngày kết thúc phải sau ngày bắt đầu"

    def test_missing_status(self):
        assert first_violation(build_promotion(status=None)) == "Trạng thái không được để trống"

    def test_description_too_long(self):
        assert first_violation(build_promotion(description="d" * 256)) == "Mô tả không được vượt quá 255 ký tự"

    def test_reports_first_failure_only(self):
        promotion = build_promotion(name="", discount_percent=None, status=None)
        assert first_violation(promotion) == "Tên khuyến mãi không được để trống"

    def test_validate_promotion_data_raises(self):
        with pytest.raises(PromotionValidationError) as excinfo:
            validate_promotion_data(build_promotion(status=None))
        assert excinfo.value.message == "Trạng thái không được để trống"


class TestBusinessLogic:
    def test_six_month_window_is_valid(self):
        promotion = build_promotion(start_date=date(2024, 1, 1), end_date=date(2024, 6, 1))
        assert is_valid_business_logic(promotion, today=date(2024, 1, 1))

    def test_end_before_start(self):
        promotion = build_promotion(start_date=date(2024, 1, 1), end_date=date(2023, 12, 31))
        assert not is_valid_business_logic(promotion, today=date(2024, 1, 1))

    def test_span_longer_than_one_year(self):
        promotion = build_promotion(start_date=date(2024, 1, 1), end_date=date(2025, 1, 2))
        assert not is_valid_business_logic(promotion, today=date(2024, 1, 1))

    def test_span_of_exactly_one_year(self):
        promotion = build_promotion(start_date=date(2024, 1, 1), end_date=date(2025, 1, 1))
        assert is_valid_business_logic(promotion, today=date(2024, 1, 1))

    def test_start_more_than_two_years_ahead(self):
        today = date(2024, 3, 10)
        promotion = build_promotion(start_date=date(2026, 3, 11), end_date=date(2026, 4, 1))
        assert not is_valid_business_logic(promotion, today=today)

    def test_start_exactly_two_years_ahead(self):
        today = date(2024, 3, 10)
        promotion = build_promotion(start_date=date(2026, 3, 10), end_date=date(2026, 4, 1))
        assert is_valid_business_logic(promotion, today=today)

    @pytest.mark.parametrize("name", ["<b>Sale</b>", "Sale >", "javascript deal"])
    def test_unsafe_name(self, name):
        assert not is_valid_business_logic(build_promotion(name=name))

    def test_missing_fields_are_left_to_the_validator(self):
        promotion = build_promotion(name=None, start_date=None, end_date=None)
        assert is_valid_business_logic(promotion)

    def test_leap_day_is_clamped(self):
        assert add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)
        assert add_years(date(2024, 2, 29), 4) == date(2028, 2, 29)

    def test_year_overflow_is_clamped(self):
        assert add_years(date(9999, 12, 1), 1) == date.max

    def test_start_near_the_last_representable_year(self):
        promotion = build_promotion(start_date=date(9999, 12, 1), end_date=date(9999, 12, 20))
        assert not is_valid_business_logic(promotion, today=date(2024, 1, 1))


class TestBoundaryChecks:
    def test_keyword_is_trimmed(self):
        assert validate_search_keyword("  sal  ") == "sal"

    @pytest.mark.parametrize("keyword,message", [
        (None, "Từ khóa tìm kiếm không được để trống"),
        ("   ", "Từ khóa tìm kiếm không được để trống"),
        (" a ", "Từ khóa tìm kiếm phải có ít nhất 2 ký tự"),
        ("k" * 101, "Từ khóa tìm kiếm không được vượt quá 100 ký tự"),
        ("<script>", "Từ khóa tìm kiếm chứa ký tự không hợp lệ"),
        ("a > b", "Từ khóa tìm kiếm chứa ký tự không hợp lệ"),
    ])
    def test_rejected_keywords(self, keyword, message):
        with pytest.raises(PromotionValidationError) as excinfo:
            validate_search_keyword(keyword)
        assert excinfo.value.message == message

    @pytest.mark.parametrize("page,size", [(0, 1), (3, 10), (0, 100)])
    def test_valid_pagination(self, page, size):
        validate_pagination(page, size)

    @pytest.mark.parametrize("page,size", [(-1, 10), (0, 0), (0, 101)])
    def test_invalid_pagination(self, page, size):
        with pytest.raises(PromotionValidationError):
            validate_pagination(page, size)

    @pytest.mark.parametrize("value", [0, -3, None])
    def test_invalid_ids(self, value):
        with pytest.raises(PromotionValidationError):
            validate_promotion_id(value)

    def test_positive_id(self):
        validate_promotion_id(1)


class TestDerivedPredicates:
    def test_active_window(self):
        today = date(2024, 5, 10)
        promotion = build_promotion(start_date=today - timedelta(days=1), end_date=today + timedelta(days=1))
        assert promotion.is_valid(today)

    def test_ended_yesterday_is_not_active(self):
        today = date(2024, 5, 10)
        promotion = build_promotion(start_date=today - timedelta(days=5), end_date=today - timedelta(days=1))
        assert not promotion.is_valid(today)

    def test_expiring_soon_window_is_exclusive(self):
        today = date(2024, 5, 10)
        assert build_promotion(start_date=today, end_date=today + timedelta(days=6)).is_expiring_soon(today)
        assert not build_promotion(start_date=today, end_date=today + timedelta(days=7)).is_expiring_soon(today)
        assert not build_promotion(start_date=today, end_date=today).is_expiring_soon(today)

from flask import Blueprint, request, jsonify, current_app
import logging

from app.exceptions import (PromotionConflictError, PromotionNotFoundError,
                              PromotionValidationError)
from app.models.promotions import PromotionStatus
from app.schemas.promotions import parse_promotion
from app.services.promotions import PromotionService
from app.validators.promotions import (BUSINESS_RULE_MESSAGE, is_valid_business_logic,
                                         validate_pagination, validate_promotion_id,
                                         validate_search_keyword)

bp = Blueprint('promotions', __name__)

logger = logging.getLogger(__name__)

promotion_service = PromotionService()

def _error(message, status_code):
    return jsonify({'success': False, 'message': message}), status_code

def _server_error(e):
    logger.error(f"Unexpected error in {request.method} {request.path}: {str(e)}")
    return _error(f"Lỗi server: {str(e)}", 500)

def _parse_status(token):
    try:
        return PromotionStatus(token.upper())
    except ValueError:
        raise PromotionValidationError(f"Trạng thái khuyến mãi không hợp lệ: {token}") from None

def _page_args():
    """Read page/size from the query string and check their bounds."""
    try:
        page = int(request.args.get('page', 0))
        size = int(request.args.get('size', current_app.config.get('DEFAULT_PAGE_SIZE', 10)))
    except ValueError:
        raise PromotionValidationError("Tham số phân trang phải là số nguyên") from None
    validate_pagination(page, size, current_app.config.get('MAX_PAGE_SIZE', 100))
    return page, size

def _dump(promotions):
    return jsonify([promotion.to_json() for promotion in promotions])

@bp.route('', methods=['GET'])
def get_all_promotions():
    try:
        return _dump(promotion_service.get_all_promotions())
    except Exception as e:
        return _server_error(e)

@bp.route('/<int(signed=True):id_promotion>', methods=['GET'])
def get_promotion_by_id(id_promotion):
    try:
        validate_promotion_id(id_promotion)
        promotion = promotion_service.get_promotion_by_id(id_promotion)
        if promotion is None:
            return _error("Khuyến mãi không tồn tại", 404)
        return jsonify(promotion.to_json())
    except PromotionValidationError as e:
        return _error(e.message, 400)
    except Exception as e:
        return _server_error(e)

@bp.route('/status/<status>', methods=['GET'])
def get_promotions_by_status(status):
    try:
        return _dump(promotion_service.get_promotions_by_status(_parse_status(status)))
    except PromotionValidationError as e:
        return _error(e.message, 400)
    except Exception as e:
        return _server_error(e)

@bp.route('/active', methods=['GET'])
def get_active_promotions():
    try:
        return _dump(promotion_service.get_active_promotions())
    except Exception as e:
        return _server_error(e)

@bp.route('/expiring-soon', methods=['GET'])
def get_promotions_expiring_soon():
    try:
        return _dump(promotion_service.get_promotions_expiring_soon())
    except Exception as e:
        return _server_error(e)

# Sorting

@bp.route('/sorted/name', methods=['GET'])
def get_promotions_sorted_by_name():
    try:
        return _dump(promotion_service.get_promotions_sorted_by_name())
    except Exception as e:
        return _server_error(e)

@bp.route('/sorted/start-date', methods=['GET'])
def get_promotions_sorted_by_start_date():
    try:
        return _dump(promotion_service.get_promotions_sorted_by_start_date())
    except Exception as e:
        return _server_error(e)

@bp.route('/sorted/end-date', methods=['GET'])
def get_promotions_sorted_by_end_date():
    try:
        return _dump(promotion_service.get_promotions_sorted_by_end_date())
    except Exception as e:
        return _server_error(e)

# Pagination

@bp.route('/paginated', methods=['GET'])
def get_all_promotions_with_pagination():
    try:
        page, size = _page_args()
        return jsonify(promotion_service.get_all_promotions_with_pagination(page, size).to_json())
    except PromotionValidationError as e:
        return _error(e.message, 400)
    except Exception as e:
        return _server_error(e)

@bp.route('/status/<status>/paginated', methods=['GET'])
def get_promotions_by_status_with_pagination(status):
    try:
        promotion_status = _parse_status(status)
        page, size = _page_args()
        result = promotion_service.get_promotions_by_status_with_pagination(promotion_status, page, size)
        return jsonify(result.to_json())
    except PromotionValidationError as e:
        return _error(e.message, 400)
    except Exception as e:
        return _server_error(e)

# Create / update / delete

@bp.route('', methods=['POST'])
def add_promotion():
    try:
        promotion = parse_promotion(request.get_json(silent=True))
        if not is_valid_business_logic(promotion):
            return _error(BUSINESS_RULE_MESSAGE, 400)
        saved = promotion_service.add_promotion(promotion)
        return jsonify(saved.to_json()), 201
    except (PromotionValidationError, PromotionConflictError) as e:
        return _error(e.message, 400)
    except Exception as e:
        return _server_error(e)

@bp.route('/<int(signed=True):id_promotion>', methods=['PUT'])
def update_promotion(id_promotion):
    try:
        validate_promotion_id(id_promotion)
        promotion = parse_promotion(request.get_json(silent=True))
        if not is_valid_business_logic(promotion):
            return _error(BUSINESS_RULE_MESSAGE, 400)
        updated = promotion_service.update_promotion(id_promotion, promotion)
        return jsonify(updated.to_json())
    # A missing id is reported as a bad request here, not 404
    except (PromotionValidationError, PromotionConflictError, PromotionNotFoundError) as e:
        return _error(e.message, 400)
    except Exception as e:
        return _server_error(e)

@bp.route('/<int(signed=True):id_promotion>', methods=['DELETE'])
def delete_promotion(id_promotion):
    try:
        validate_promotion_id(id_promotion)
        if promotion_service.delete_promotion(id_promotion):
            return jsonify({'success': True, 'message': 'Xóa khuyến mãi thành công'})
        return _error("Khuyến mãi không tồn tại", 404)
    except PromotionValidationError as e:
        return _error(e.message, 400)
    except Exception as e:
        return _server_error(e)

# Search

@bp.route('/search', methods=['GET'])
def search_promotions():
    try:
        keyword = validate_search_keyword(request.args.get('keyword'))
        return _dump(promotion_service.search_promotions(keyword))
    except PromotionValidationError as e:
        return _error(e.message, 400)
    except Exception as e:
        return _server_error(e)

@bp.route('/search/paginated', methods=['GET'])
def search_promotions_with_pagination():
    try:
        keyword = validate_search_keyword(request.args.get('keyword'))
        page, size = _page_args()
        return jsonify(promotion_service.search_promotions_with_pagination(keyword, page, size).to_json())
    except PromotionValidationError as e:
        return _error(e.message, 400)
    except Exception as e:
        return _server_error(e)

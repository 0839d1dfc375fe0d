from flask import Blueprint, jsonify, current_app

bp = Blueprint('home', __name__)

@bp.route('/')
def index():
    return jsonify({
        'service': 'salon-promotions',
        'status': 'ok',
        'promotions': current_app.config.get('PROMOTIONS_URL_PREFIX', '/api/promotions'),
    })

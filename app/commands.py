from datetime import date, timedelta
from decimal import Decimal
import logging

import click
from flask.cli import with_appcontext

from app import db
from app.exceptions import PromotionError
from app.models.promotions import PromotionStatus
from app.schemas.promotions import PromotionDTO
from app.services.promotions import PromotionService

logger = logging.getLogger(__name__)

def sample_promotions(today=None):
    """Demo promotions with windows relative to ``today``."""
    today = today or date.today()
    return [
        PromotionDTO(name="Khuyến mãi mùa xuân", discount_percent=Decimal("15.00"),
                     start_date=today - timedelta(days=10), end_date=today + timedelta(days=20),
                     description="Giảm giá cho tất cả dịch vụ cắt tóc", status=PromotionStatus.ACTIVE),
        PromotionDTO(name="Ưu đãi cuối tuần", discount_percent=Decimal("10.00"),
                     start_date=today - timedelta(days=2), end_date=today + timedelta(days=3),
                     description="Áp dụng thứ bảy và chủ nhật", status=PromotionStatus.ACTIVE),
        PromotionDTO(name="Chăm sóc da mặt", discount_percent=Decimal("25.50"),
                     start_date=today + timedelta(days=14), end_date=today + timedelta(days=44),
                     description="Liệu trình chăm sóc da cao cấp", status=PromotionStatus.UPCOMING),
        PromotionDTO(name="Làm móng mùa hè", discount_percent=Decimal("20.00"),
                     start_date=today - timedelta(days=90), end_date=today - timedelta(days=30),
                     description=None, status=PromotionStatus.EXPIRED),
        PromotionDTO(name="Gội đầu dưỡng sinh", discount_percent=Decimal("5.00"),
                     start_date=today, end_date=today + timedelta(days=60),
                     description="Tạm ngưng áp dụng", status=PromotionStatus.INACTIVE),
    ]

def seed_promotions(service=None, today=None):
    """Insert the sample promotions whose names are not taken yet. Returns the number inserted."""
    service = service or PromotionService()
    inserted = 0
    for promotion in sample_promotions(today):
        if service.repository.exists_by_name(promotion.name):
            logger.debug(f"Skipping existing promotion {promotion.name}")
            continue
        service.add_promotion(promotion)
        inserted += 1
    return inserted

@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create the promotion tables."""
    db.create_all()
    click.echo("Database initialised.")

@click.command('seed-promotions')
@with_appcontext
def seed_promotions_command():
    """Insert sample promotions."""
    try:
        inserted = seed_promotions()
    except PromotionError as e:
        raise click.ClickException(e.message) from e
    click.echo(f"Inserted {inserted} promotions.")

def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_promotions_command)

import enum
from sqlalchemy import Enum
from app import db

class PromotionStatus(str, enum.Enum):
    ACTIVE = 'ACTIVE'
    INACTIVE = 'INACTIVE'
    EXPIRED = 'EXPIRED'
    UPCOMING = 'UPCOMING'

class Promotion(db.Model):
    __tablename__ = 'promotion'
    __table_args__ = (db.UniqueConstraint('name', name='uq_promotion_name'),)

    id_promotion = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    discount_percent = db.Column(db.Numeric(5, 2), nullable=False)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    description = db.Column(db.String(255))
    status = db.Column(Enum(PromotionStatus, name='promotion_status_enum'), nullable=False)

    def __repr__(self):
        return f"<Promotion {self.name} id=[{self.id_promotion}]>"

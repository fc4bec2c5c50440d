"""
Default dataset for a fresh store
"""
import logging
from decimal import Decimal
from sqlalchemy.orm import Session

from framebox.models import Category, Service

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    {"name": "Sessões de Foto", "type": "income", "color": "#8B5CF6", "description": "Receitas de sessões fotográficas"},
    {"name": "Storytelling", "type": "income", "color": "#EC4899", "description": "Receitas de serviços de storytelling"},
    {"name": "Equipamentos", "type": "expense", "color": "#EF4444", "description": "Gastos com equipamentos fotográficos"},
    {"name": "Marketing", "type": "expense", "color": "#F97316", "description": "Investimentos em marketing e publicidade"},
    {"name": "Transporte", "type": "expense", "color": "#84CC16", "description": "Custos de deslocamento"},
    {"name": "Alimentação", "type": "expense", "color": "#06B6D4", "description": "Despesas com alimentação em trabalhos"},
]

DEFAULT_SERVICES = [
    {"name": "Ensaio Individual", "description": "Sessão fotográfica individual com 30 fotos editadas", "base_price": Decimal("350.00"), "duration_hours": 2},
    {"name": "Ensaio Casal", "description": "Sessão fotográfica para casal com 40 fotos editadas", "base_price": Decimal("450.00"), "duration_hours": 3},
    {"name": "Ensaio Família", "description": "Sessão fotográfica familiar com 50 fotos editadas", "base_price": Decimal("550.00"), "duration_hours": 3},
    {"name": "Storytelling Empresarial", "description": "Criação de conteúdo visual para empresas", "base_price": Decimal("800.00"), "duration_hours": 4},
    {"name": "Cobertura de Evento", "description": "Cobertura fotográfica completa de eventos", "base_price": Decimal("1200.00"), "duration_hours": 8},
]


def seed_defaults(db: Session):
    """Seed default categories and services into an empty store"""
    if db.query(Category).first() is None:
        for data in DEFAULT_CATEGORIES:
            db.add(Category(**data))
        logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))

    if db.query(Service).first() is None:
        for data in DEFAULT_SERVICES:
            db.add(Service(**data))
        logger.info("Seeded %d default services", len(DEFAULT_SERVICES))

    db.commit()

# API v1 Package
from framebox.api.v1 import auth, dashboard, categories, clients, catalog, transactions, appointments

__all__ = [
    'auth',
    'dashboard',
    'categories',
    'clients',
    'catalog',
    'transactions',
    'appointments',
]

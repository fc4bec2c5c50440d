# Services Package
from framebox.services.catalog_service import CategoryService, ServiceCatalogService
from framebox.services.client_service import ClientService
from framebox.services.transaction_service import TransactionService
from framebox.services.scheduling_service import SchedulingService
from framebox.services.dashboard_service import DashboardService
from framebox.services.seed_service import seed_defaults

__all__ = [
    'CategoryService',
    'ServiceCatalogService',
    'ClientService',
    'TransactionService',
    'SchedulingService',
    'DashboardService',
    'seed_defaults',
]

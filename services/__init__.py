"""
services - Business-logic layer sitting between API and DB.
"""

from services.products_service import ProductsService       # noqa: F401
from services.employees_service import EmployeesService     # noqa: F401
from services.categories_service import CategoriesService   # noqa: F401
from services.auth_service import AuthService               # noqa: F401

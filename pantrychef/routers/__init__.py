# Router modules for PantryChef API
# Import order matters - routers register endpoints on the shared api_router

from . import base
from . import auth
from . import inventory
from . import recipes

__all__ = ['auth', 'inventory', 'recipes']

from flask_cors import CORS

from nestmart.app.clients.auth import AuthClient
from nestmart.app.clients.catalog import CatalogClient

# Singletons (initialized in app factory)
cors = CORS()
catalog = CatalogClient()
auth_api = AuthClient()

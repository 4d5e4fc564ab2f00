from invoicer.app.db.base_class import Base

# Import models to register their tables on Base.metadata for migrations and tests
from invoicer.app.models.user import User  # noqa: F401
from invoicer.app.models.business_settings import BusinessSettings  # noqa: F401
from invoicer.app.models.client import Client  # noqa: F401
from invoicer.app.models.invoice import Invoice  # noqa: F401
from invoicer.app.models.line_item import LineItem  # noqa: F401

# catalog_pipeline/models/__init__.py

# This file makes the model classes directly available from the 'models' package.
# Instead of: from catalog_pipeline.models.catalog import Catalog
# We can now use: from catalog_pipeline.models import Catalog

from .product_record import ProductRecord, RATING_LABELS
from .catalog import Catalog

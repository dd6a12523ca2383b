"""Domain initialization and configuration.

Storefront bounded context: user accounts, product catalogue, shopping
cart and orders.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")

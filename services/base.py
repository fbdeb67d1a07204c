"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager


class NotFoundError(LookupError):
    """Raised when an update or delete targets a row that does not exist."""


class Services:
    """Container for all application services.

    One container is created per process and handed to every command, so
    cart and session state live here rather than in module globals. Tests
    inject an in-memory database manager.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If None, creates
            DatabaseManager from config.
        chat_provider: Optional LLM provider override for testing.
    """

    def __init__(self, config: Config, db_manager=None, chat_provider=None):
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.categories import CategoryService
        from services.products import ProductService
        from services.profiles import ProfileService
        from services.cart import CartService
        from services.chat import ChatService

        self.categories = CategoryService(self.db_manager)
        self.products = ProductService(self.db_manager)
        self.profiles = ProfileService(
            self.db_manager, default_country_code=config.default_country_code
        )
        self.cart = CartService(config.cart_path)
        self.chat = ChatService(config, provider=chat_provider)

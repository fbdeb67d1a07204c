import pytest
import sqlite3
from decimal import Decimal

from services.base import NotFoundError
from services.products import ALL_COLLECTIONS_TITLE, FEATURED_LIMIT, category_title
from tests.helpers import create_product_with_variants


class TestProductService:
    """Tests for ProductService."""

    def test_create_product(self, services):
        """Test creating a product."""
        category = services.categories.create("Bras")

        product = services.products.create(
            "Silk Balconette Bra", "silk-balconette-bra", Decimal("59.00"),
            "Pure silk", category.id,
        )

        assert product.id > 0
        assert product.slug == "silk-balconette-bra"
        assert product.price == Decimal("59.00")
        assert product.category_name == "Bras"
        assert product.variants == []
        assert product.images == []

    def test_create_negative_price_raises(self, services):
        """Test a negative price is rejected."""
        with pytest.raises(ValueError):
            services.products.create("Bad", "bad", Decimal("-1"))

    def test_duplicate_slug_raises(self, services):
        """Test slugs must be unique."""
        services.products.create("A", "same-slug", Decimal("10"))

        with pytest.raises(sqlite3.IntegrityError):
            services.products.create("B", "same-slug", Decimal("10"))

    def test_find_by_slug_includes_variants_and_images(self, services):
        """Test a product fetched by slug carries its variants and images."""
        product = create_product_with_variants(
            services, variants=[("S", "Red", 2), ("M", "Black", 0)]
        )
        services.products.add_image(product.id, "https://img.example/1.jpg", "Front")
        services.products.add_image(product.id, "https://img.example/2.jpg")

        found = services.products.find_by_slug("silk-balconette-bra")

        assert [(v.size, v.color, v.stock_quantity) for v in found.variants] == [
            ("S", "Red", 2),
            ("M", "Black", 0),
        ]
        assert found.primary_image_url == "https://img.example/1.jpg"
        assert found.images[0].alt_text == "Front"

    def test_find_by_slug_not_found(self, services):
        """Test an unknown slug returns None."""
        assert services.products.find_by_slug("nope") is None

    def test_primary_image_url_empty(self, services):
        """Test a product without images has an empty image URL."""
        product = create_product_with_variants(services)

        assert product.primary_image_url == ""

    def test_add_variant_negative_stock_raises(self, services):
        """Test variant stock cannot be negative."""
        product = create_product_with_variants(services)

        with pytest.raises(ValueError):
            services.products.add_variant(product.id, "S", "Red", -1)

    def test_add_variant_unknown_product_raises(self, services):
        """Test a variant must belong to an existing product."""
        with pytest.raises(sqlite3.IntegrityError):
            services.products.add_variant(9999, "S", "Red", 1)

    def test_update_stock(self, services):
        """Test setting a variant's stock level."""
        product = create_product_with_variants(services, variants=[("S", "Red", 2)])
        variant_id = product.variants[0].id

        services.products.update_stock(variant_id, 7)

        assert services.products.find_variants(product.id)[0].stock_quantity == 7

    def test_update_stock_missing_variant(self, services):
        """Test updating stock of a missing variant raises NotFoundError."""
        with pytest.raises(NotFoundError):
            services.products.update_stock(9999, 1)

    def test_delete_cascades(self, services):
        """Test deleting a product removes its variants and images."""
        product = create_product_with_variants(services, variants=[("S", "Red", 2)])
        services.products.add_image(product.id, "https://img.example/1.jpg")

        assert services.products.delete(product.id) is True
        assert services.products.find_variants(product.id) == []
        assert services.products.find_images(product.id) == []


class TestCategoryFiltering:
    """Tests for filtering products by category slug."""

    @pytest.fixture
    def catalog(self, services):
        sleepwear = services.categories.create("Sleepwear")
        pajamas = services.categories.create("Pajama Sets", parent_id=sleepwear.id)
        create_product_with_variants(services, "satin-robe", category_id=sleepwear.id)
        create_product_with_variants(services, "cotton-pajamas", category_id=pajamas.id)
        create_product_with_variants(services, "gift-card")
        return services

    def test_no_slug_returns_everything(self, catalog):
        """Test an empty filter lists all products."""
        assert len(catalog.products.find_by_category_slug(None)) == 3

    def test_hyphenated_slug_matches_spaced_name(self, catalog):
        """Test hyphens in the slug match spaces in the category name."""
        products = catalog.products.find_by_category_slug("pajama-sets")

        assert [p.slug for p in products] == ["cotton-pajamas"]

    def test_slug_is_case_insensitive(self, catalog):
        """Test the slug comparison ignores case."""
        products = catalog.products.find_by_category_slug("SLEEPWEAR")

        assert [p.slug for p in products] == ["satin-robe"]

    def test_unknown_slug(self, catalog):
        """Test an unknown category gives no products."""
        assert catalog.products.find_by_category_slug("swim") == []

    def test_category_title(self):
        """Test listing titles derived from the slug."""
        assert category_title(None) == ALL_COLLECTIONS_TITLE
        assert category_title("") == ALL_COLLECTIONS_TITLE
        assert category_title("pajama-sets") == "Pajama sets"
        assert category_title("bras") == "Bras"


class TestFeaturedProducts:
    """Tests for the home page's featured products."""

    def test_limited_to_first_products(self, services):
        """Test only the first few products are featured, oldest first."""
        slugs = [f"style-{n}" for n in range(FEATURED_LIMIT + 2)]
        for slug in slugs:
            create_product_with_variants(services, slug)

        featured = services.products.find_featured()

        assert [p.slug for p in featured] == slugs[:FEATURED_LIMIT]

    def test_custom_limit(self, services):
        """Test the number of featured products can be changed."""
        for slug in ("a", "b", "c"):
            create_product_with_variants(services, slug)

        assert [p.slug for p in services.products.find_featured(limit=2)] == ["a", "b"]

    def test_includes_category_and_images(self, services):
        """Test featured products carry their category name and images."""
        category = services.categories.create("Robes")
        product = create_product_with_variants(services, "satin-robe", category_id=category.id)
        services.products.add_image(product.id, "https://img.example/robe.jpg")

        [featured] = services.products.find_featured()

        assert featured.category_name == "Robes"
        assert featured.primary_image_url == "https://img.example/robe.jpg"

    def test_empty_catalog(self, services):
        """Test no products means nothing featured."""
        assert services.products.find_featured() == []

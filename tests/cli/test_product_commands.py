import logging
import pytest
from argparse import Namespace

from cli.products import FEATURED_EMPTY_MESSAGE, FEATURED_TITLE, cmd_featured, cmd_show
from logger import LOGGER_NAME
from tests.helpers import create_product_with_variants


@pytest.fixture
def info_log(caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    return caplog


class TestCmdFeatured:
    """Tests for the products featured command."""

    def test_empty_state(self, services, info_log):
        """Test an empty catalog shows the coming-soon message."""
        cmd_featured(Namespace(), services)

        assert FEATURED_TITLE in info_log.text
        assert FEATURED_EMPTY_MESSAGE in info_log.text

    def test_lists_products(self, services, info_log):
        """Test featured products are listed with their links."""
        create_product_with_variants(services, "silk-balconette-bra")

        cmd_featured(Namespace(), services)

        assert "/products/silk-balconette-bra" in info_log.text
        assert FEATURED_EMPTY_MESSAGE not in info_log.text


class TestCmdShow:
    """Tests for the products show command."""

    def test_lists_every_color(self, services, info_log):
        """Test all colors are shown before a size is chosen."""
        create_product_with_variants(
            services, variants=[("S", "Red", 2), ("S", "Blue", 1), ("M", "Ivory", 3)]
        )

        cmd_show(Namespace(slug="silk-balconette-bra"), services)

        assert "Sizes: S, M" in info_log.text
        assert "Colors: Red, Blue, Ivory" in info_log.text

    def test_unknown_product(self, services, caplog):
        """Test an unknown slug exits with an error."""
        with pytest.raises(SystemExit):
            cmd_show(Namespace(slug="missing"), services)

        assert "not found" in caplog.text

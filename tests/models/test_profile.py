from models.profile import (
    COUNTRY_CODES,
    Profile,
    ShippingAddress,
    format_mobile_number,
    is_known_country_code,
    parse_mobile_number,
)


class TestParseMobileNumber:
    """Tests for parse_mobile_number."""

    def test_none(self):
        """Test a missing number gives the default code and an empty number."""
        assert parse_mobile_number(None) == ("+91", "")

    def test_empty(self):
        """Test an empty number gives the default code and an empty number."""
        assert parse_mobile_number("", "+44") == ("+44", "")

    def test_code_and_number(self):
        """Test a stored number is split on the first space."""
        assert parse_mobile_number("+1 5551234567") == ("+1", "5551234567")

    def test_local_part_with_spaces(self):
        """Test spaces inside the local number are kept."""
        assert parse_mobile_number("+44 7700 900 123") == ("+44", "7700 900 123")

    def test_no_code(self):
        """Test a number without a leading code keeps the whole number."""
        assert parse_mobile_number("98765 43210") == ("+91", "98765 43210")

    def test_code_only(self):
        """Test a number saved with an empty local part."""
        assert parse_mobile_number("+33 ") == ("+33", "")

    def test_format_then_parse(self):
        """Test formatting and parsing agree."""
        stored = format_mobile_number("+81", "90 1234 5678")

        assert stored == "+81 90 1234 5678"
        assert parse_mobile_number(stored) == ("+81", "90 1234 5678")


class TestCountryCodes:
    """Tests for the selectable country codes."""

    def test_known_codes(self):
        """Test listed codes are recognised."""
        assert is_known_country_code("+91")
        assert is_known_country_code("+1")
        assert not is_known_country_code("+999")

    def test_shared_code(self):
        """Test the United States and Canada share a code."""
        assert ("United States", "+1") in COUNTRY_CODES
        assert ("Canada", "+1") in COUNTRY_CODES


class TestShippingAddress:
    """Tests for ShippingAddress."""

    def test_round_trip_uses_camel_case(self):
        """Test the stored shape uses postalCode."""
        address = ShippingAddress("1 Main St", "Springfield", "IL", "62701", "USA")

        data = address.to_dict()

        assert data["postalCode"] == "62701"
        assert ShippingAddress.from_dict(data) == address

    def test_from_none(self):
        """Test a missing address becomes an empty one."""
        assert ShippingAddress.from_dict(None) == ShippingAddress()

    def test_from_partial(self):
        """Test missing or null keys become empty strings."""
        address = ShippingAddress.from_dict({"city": "Pune", "state": None})

        assert address.city == "Pune"
        assert address.state == ""
        assert address.street == ""


class TestProfile:
    """Tests for Profile."""

    def test_to_dict(self):
        """Test the dictionary form carries the combined number."""
        profile = Profile(id="u1", full_name="A", country_code="+49", local_number="151 234")

        data = profile.to_dict()

        assert data["mobile_number"] == "+49 151 234"
        assert data["shipping_address"]["postalCode"] == ""
        assert data["updated_at"] is None

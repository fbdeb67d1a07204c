"""Profile service for customer account details."""

import json
from datetime import datetime
from typing import Optional
from models.profile import (
    DEFAULT_COUNTRY_CODE,
    Profile,
    ShippingAddress,
    format_mobile_number,
    parse_mobile_number,
)


class ProfileService:
    """Service for reading and updating account profiles.

    Mobile numbers are stored combined ("+44 7700 900123") and always handed
    out split into country code and local number.
    """

    def __init__(self, db_manager, default_country_code: str = DEFAULT_COUNTRY_CODE):
        """Initialize the profile service.

        Args:
            db_manager: Database manager instance for database operations.
            default_country_code: Code assumed for numbers stored without one.
        """
        self.db_manager = db_manager
        self.default_country_code = default_country_code

    def find(self, user_id: str) -> Optional[Profile]:
        """Get a user's profile.

        Args:
            user_id: ID issued by the auth provider.

        Returns:
            Profile object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT id, full_name, mobile_number, shipping_address, updated_at
                FROM profiles WHERE id = ?
                """,
                (user_id,),
            )
            row = cursor.fetchone()

        if not row:
            return None

        country_code, local_number = parse_mobile_number(
            row[2], self.default_country_code
        )
        return Profile(
            id=row[0],
            full_name=row[1] or "",
            country_code=country_code,
            local_number=local_number,
            shipping_address=ShippingAddress.from_dict(
                json.loads(row[3]) if row[3] else None
            ),
            updated_at=datetime.fromisoformat(row[4]) if row[4] else None,
        )

    def find_or_default(self, user_id: str) -> Profile:
        """Get a user's profile, or an empty one if none was saved yet."""
        return self.find(user_id) or Profile(
            id=user_id, country_code=self.default_country_code
        )

    def update(
        self,
        user_id: str,
        full_name: str,
        country_code: str,
        local_number: str,
        shipping_address: ShippingAddress,
    ) -> Profile:
        """Create or update a user's profile.

        Args:
            user_id: ID issued by the auth provider.
            full_name: Display name.
            country_code: Dialling code, e.g. "+91".
            local_number: Number without the dialling code.
            shipping_address: Nested shipping address.

        Returns:
            The saved Profile.

        Raises:
            ValueError: If country_code does not start with "+".
        """
        country_code = country_code.strip()
        if not country_code.startswith("+"):
            raise ValueError(f"Invalid country code: {country_code!r}")

        local_number = local_number.strip()
        updated_at = datetime.now()

        with self.db_manager.connect() as conn:
            conn.execute(
                """
                INSERT INTO profiles (id, full_name, mobile_number, shipping_address, updated_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    full_name = excluded.full_name,
                    mobile_number = excluded.mobile_number,
                    shipping_address = excluded.shipping_address,
                    updated_at = excluded.updated_at
                """,
                (
                    user_id,
                    full_name,
                    format_mobile_number(country_code, local_number),
                    json.dumps(shipping_address.to_dict()),
                    updated_at.isoformat(),
                ),
            )
            conn.commit()

        return Profile(
            id=user_id,
            full_name=full_name,
            country_code=country_code,
            local_number=local_number,
            shipping_address=shipping_address,
            updated_at=updated_at,
        )

"""Route normalization for turning literal request paths into templates."""

from __future__ import annotations

import re
from datetime import datetime


class RouteNormalizer:
    """Normalize request paths to route templates with placeholders.

    Segments are checked against the matchers in a fixed order and the first
    match decides the placeholder:

    1. all digits (``123``) -> id
    2. UUID (``550e8400-e29b-41d4-a716-446655440000``) -> id
    3. hex string of 6+ chars with at least one letter (``a1b2c3``) -> id
    4. calendar date (``2023-01-15``) -> date
    5. reference code (``ORD-2023-001``, ``INV-42``) -> id
    """

    def __init__(
        self,
        id_placeholder: str = ":id",
        date_placeholder: str = ":date",
    ) -> None:
        """Initialize normalizer with placeholder formats.

        Args:
            id_placeholder: Placeholder for identifier-like segments
            date_placeholder: Placeholder for calendar dates
        """
        self.id_placeholder = id_placeholder
        self.date_placeholder = date_placeholder

        self.numeric_pattern = re.compile(r"^[0-9]+$")
        self.uuid_pattern = re.compile(
            r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
            re.IGNORECASE,
        )
        self.hex_pattern = re.compile(r"^[0-9a-fA-F]{6,}$")
        self.hex_letter_pattern = re.compile(r"[a-fA-F]")
        self.date_pattern = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
        self.reference_pattern = re.compile(
            r"^[A-Z]{3,}-[A-Z0-9]+-[0-9]+$|^[A-Z]{3,}-[0-9]+$"
        )

    def normalize(self, path: str) -> str:
        """Normalize a request path to a route template.

        Args:
            path: Literal request path (e.g., /users/123/orders?page=2)

        Returns:
            Route template without query string (e.g., /users/:id/orders)
        """
        # Query parameters never take part in aggregation
        path = path.split("?", 1)[0]

        segments = path.split("/")
        normalized_segments: list[str] = []

        for segment in segments:
            if not segment:
                normalized_segments.append(segment)
                continue

            normalized_segments.append(self._normalize_segment(segment))

        return "/".join(normalized_segments)

    def _normalize_segment(self, segment: str) -> str:
        """Replace a dynamic segment with its placeholder.

        Args:
            segment: A non-empty path segment

        Returns:
            Placeholder or the original segment
        """
        if self.is_numeric_id(segment):
            return self.id_placeholder

        if self.is_uuid(segment):
            return self.id_placeholder

        if self.is_hex_id(segment):
            return self.id_placeholder

        if self.is_date(segment):
            return self.date_placeholder

        if self.is_reference_code(segment):
            return self.id_placeholder

        return segment

    def is_numeric_id(self, segment: str) -> bool:
        return self.numeric_pattern.fullmatch(segment) is not None

    def is_uuid(self, segment: str) -> bool:
        return self.uuid_pattern.fullmatch(segment) is not None

    def is_hex_id(self, segment: str) -> bool:
        """Hex IDs need a letter so plain numbers stay with the numeric matcher."""
        if self.hex_pattern.fullmatch(segment) is None:
            return False
        return self.hex_letter_pattern.search(segment) is not None

    def is_date(self, segment: str) -> bool:
        """Check for a YYYY-MM-DD segment that is a real calendar date."""
        if self.date_pattern.fullmatch(segment) is None:
            return False
        try:
            datetime.strptime(segment, "%Y-%m-%d")
        except ValueError:
            return False
        return True

    def is_reference_code(self, segment: str) -> bool:
        return self.reference_pattern.fullmatch(segment) is not None

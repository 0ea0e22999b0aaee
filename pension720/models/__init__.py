"""ORM models."""

from pension720.models.draw_row import DrawRow

__all__ = ["DrawRow"]

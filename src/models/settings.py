"""
SystemSetting model for application configuration.
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base, TimestampMixin

COMMISSION_CONFIG_KEY = "commission_config"


class SystemSetting(Base, TimestampMixin):
    """
    Key-value store for system settings.

    Settings are stored as JSON values to support complex types.

    Known keys:
    - commission_config: the full CommissionConfig document
      (SDR rates, closer fixed amounts and goal bonuses, plan table)
    """

    __tablename__ = "system_settings"

    key: Mapped[str] = mapped_column(
        String(100),
        primary_key=True,
    )
    value: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        comment="JSON value - use {'v': ...} wrapper for simple values",
    )

    def __repr__(self) -> str:
        return f"<SystemSetting(key='{self.key}')>"

    def get_value(self):
        """Get the actual value from the JSON wrapper."""
        if isinstance(self.value, dict) and "v" in self.value:
            return self.value["v"]
        return self.value

    def set_value(self, val):
        """Set value with JSON wrapper."""
        self.value = {"v": val}

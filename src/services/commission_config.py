"""
Storage of the commission configuration.

The configuration lives as one JSON document in system_settings under
COMMISSION_CONFIG_KEY. Calculators never read it themselves: callers load a
snapshot through CommissionConfigRepository and pass it in.
"""

import logging
from decimal import Decimal

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.settings import COMMISSION_CONFIG_KEY, SystemSetting
from src.schemas.commission import (
    CloserConfig,
    CommissionConfig,
    GoalBonus,
    PlanConfig,
    PlanTier,
    SdrConfig,
)

logger = logging.getLogger(__name__)


def default_commission_config() -> CommissionConfig:
    """Built-in configuration used until someone saves their own."""
    return CommissionConfig(
        sdr=SdrConfig(
            per_qualified_meeting=Decimal("5"),
            per_meeting_that_closed=Decimal("15"),
            bonus_at_goal_100=Decimal("300"),
        ),
        closer=CloserConfig(
            fixed_amount_by_plan_tier={
                PlanTier.MENSAL: Decimal("15"),
                PlanTier.TRIMESTRAL: Decimal("30"),
                PlanTier.SEMESTRAL: Decimal("60"),
                PlanTier.ANUAL: Decimal("100"),
            },
            goal_bonus=GoalBonus(
                at_100=Decimal("500"),
                at_110=Decimal("800"),
                at_120=Decimal("1000"),
            ),
        ),
        plans={
            PlanTier.MENSAL: PlanConfig(
                base_price=Decimal("99.90"), period_months=1, bonus_factor_percent=Decimal("50")
            ),
            # 299.70 list price with 29.90 off
            PlanTier.TRIMESTRAL: PlanConfig(
                base_price=Decimal("269.80"), period_months=3, bonus_factor_percent=Decimal("75")
            ),
            # 599.40 list price with 119.50 off
            PlanTier.SEMESTRAL: PlanConfig(
                base_price=Decimal("479.90"), period_months=6, bonus_factor_percent=Decimal("100")
            ),
            # 1198.80 list price with 358.90 off
            PlanTier.ANUAL: PlanConfig(
                base_price=Decimal("839.90"), period_months=12, bonus_factor_percent=Decimal("125")
            ),
        },
    )


class CommissionConfigRepository:
    """Load and save the commission configuration in system_settings."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def load(self) -> CommissionConfig:
        """Return the stored configuration.

        Falls back to the defaults when nothing is stored or the stored
        document no longer validates.
        """
        setting = await self.db.get(SystemSetting, COMMISSION_CONFIG_KEY)
        if setting is None:
            return default_commission_config()

        try:
            return CommissionConfig.model_validate(setting.get_value())
        except ValidationError as e:
            logger.warning(
                "Stored commission config is invalid, using defaults: %s",
                e.errors(include_url=False),
            )
            return default_commission_config()

    async def save(self, config: CommissionConfig) -> CommissionConfig:
        """Store the configuration, replacing the previous one.

        Note: commit should happen in the calling context.
        """
        payload = config.model_dump(mode="json")

        setting = await self.db.get(SystemSetting, COMMISSION_CONFIG_KEY)
        if setting:
            setting.set_value(payload)
        else:
            self.db.add(SystemSetting(key=COMMISSION_CONFIG_KEY, value={"v": payload}))

        await self.db.flush()
        logger.info("Commission config saved")
        return config

    async def reset(self) -> CommissionConfig:
        """Drop the stored configuration so the defaults apply again."""
        setting = await self.db.get(SystemSetting, COMMISSION_CONFIG_KEY)
        if setting:
            await self.db.delete(setting)
            await self.db.flush()
            logger.info("Commission config reset to defaults")
        return default_commission_config()

    async def ensure_defaults(self) -> bool:
        """Store the defaults if no configuration exists. Returns True if created."""
        setting = await self.db.get(SystemSetting, COMMISSION_CONFIG_KEY)
        if setting:
            return False
        await self.save(default_commission_config())
        return True

"""
Training rule lookup for resume evaluation.

Rule customization is optional: any storage problem yields a lookup without a
config and the evaluation runs with default criteria.
"""
from typing import List, Optional

from screener.models.training import RuleConfig, TrainingConfigLookup
from screener.services.db import training_configs_coll, training_settings_coll
from screener.utils.logging_config import get_logger

logger = get_logger(__name__)


async def get_global_training_enabled() -> bool:
    """Read the global apply_training_rules switch (False when unset)."""
    settings = await training_settings_coll.find_one({})
    return bool(settings and settings.get("apply_training_rules"))


async def get_config(domain: str) -> Optional[RuleConfig]:
    """Return the active rule config for a domain, or None."""
    doc = await training_configs_coll.find_one({"domain": domain, "is_active": True})
    if not doc:
        return None
    config = RuleConfig.from_document(doc)
    for warning in config.weightage_warnings():
        logger.warning(warning)
    return config


async def list_configs(active_only: bool = False) -> List[RuleConfig]:
    query = {"is_active": True} if active_only else {}
    cursor = training_configs_coll.find(query).sort("domain", 1)
    docs = await cursor.to_list(length=None)
    return [RuleConfig.from_document(doc) for doc in docs]


async def load_training_config(domain: str) -> TrainingConfigLookup:
    """Load the rules to apply for ``domain``. Never raises."""
    try:
        if not await get_global_training_enabled():
            logger.info("Training rules disabled or not found")
            return TrainingConfigLookup(config=None, training_enabled=False)

        config = await get_config(domain)
        if config is None:
            logger.info(f"No training config found for department: {domain}")
            return TrainingConfigLookup(config=None, training_enabled=True)

        logger.info(f"Training config loaded for: {domain}")
        return TrainingConfigLookup(config=config, training_enabled=True)

    except Exception as e:
        logger.warning(f"Error fetching training config for {domain}, using default evaluation: {e}")
        return TrainingConfigLookup(config=None, training_enabled=False, error=str(e))

"""
Training Rules Router - read, preview and update domain evaluation rules
"""
from datetime import datetime
from typing import List

from fastapi import APIRouter, Body, Query

from screener.helpers.prompts import build_training_prompt
from screener.models.training import RuleConfig, TrainingPreview, TrainingSettings
from screener.services import training_config
from screener.services.db import training_configs_coll, training_settings_coll
from screener.utils.exceptions import DatabaseError, NotFoundError, ValidationError
from screener.utils.logging_config import get_logger

router = APIRouter(prefix="/training", tags=["training"])
logger = get_logger(__name__)


# ==================== GLOBAL SWITCH ====================

@router.get("/settings", response_model=TrainingSettings)
async def get_training_settings():
    """Get the global apply_training_rules switch"""
    settings = await training_settings_coll.find_one({})
    if not settings:
        return TrainingSettings()
    return TrainingSettings(
        apply_training_rules=bool(settings.get("apply_training_rules")),
        updated_at=settings.get("updated_at") or datetime.utcnow(),
    )


@router.put("/settings", response_model=TrainingSettings)
async def update_training_settings(apply_training_rules: bool = Body(..., embed=True)):
    """Turn training rules on or off for every domain"""
    settings = TrainingSettings(apply_training_rules=apply_training_rules)
    await training_settings_coll.update_one({}, {"$set": settings.model_dump()}, upsert=True)
    logger.info(f"Training rules {'enabled' if apply_training_rules else 'disabled'}")
    return settings


# ==================== DOMAIN CONFIGS ====================

@router.get("/configs", response_model=List[RuleConfig])
async def list_training_configs(active_only: bool = Query(False, description="Return only active configs")):
    """List rule configs for all domains"""
    try:
        return await training_config.list_configs(active_only=active_only)
    except Exception as e:
        raise DatabaseError(
            "Failed to retrieve training configs",
            operation="list_training_configs",
            collection="ai_training_configs",
            cause=e,
        )


async def _find_config(domain: str) -> RuleConfig:
    doc = await training_configs_coll.find_one({"domain": domain})
    if not doc:
        raise NotFoundError(f"No training config for domain {domain}", resource="ai_training_configs")
    return RuleConfig.from_document(doc)


@router.get("/configs/{domain}", response_model=RuleConfig)
async def get_training_config(domain: str):
    """Get the rule config of one domain"""
    return await _find_config(domain)


@router.put("/configs/{domain}", response_model=RuleConfig)
async def upsert_training_config(domain: str, config: RuleConfig):
    """Create or replace the rule config of one domain"""
    if config.domain != domain:
        raise ValidationError("Domain in body does not match the URL", field="domain", value=config.domain)

    for warning in config.weightage_warnings():
        logger.warning(warning)

    doc = config.to_document()
    doc["updated_at"] = datetime.utcnow()
    await training_configs_coll.update_one({"domain": domain}, {"$set": doc}, upsert=True)
    logger.info(f"Saved training config for domain: {domain}")
    return config


@router.get("/configs/{domain}/preview", response_model=TrainingPreview)
async def preview_training_config(domain: str):
    """Render the prompt block this domain's rules add to evaluations"""
    config = await _find_config(domain)
    return TrainingPreview(
        domain=config.domain,
        is_active=config.is_active,
        weightage_total=config.weightage_total,
        warnings=config.weightage_warnings(),
        prompt=build_training_prompt(config),
    )

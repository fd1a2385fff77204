"""
Training Rule Models for domain-specific evaluation criteria
"""
from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional, Any
from datetime import datetime
from enum import Enum

CRM_DOMAIN = "CRM"

CRM_FIELDS = (
    "crm_tools",
    "ticketing_experience_required",
    "customer_interaction_depth",
    "conflict_handling_importance",
)

WEIGHTAGE_FIELDS = (
    "experience_weightage",
    "skill_weightage",
    "communication_weightage",
    "achievement_weightage",
    "progression_weightage",
    "cultural_fit_weightage",
)


class InteractionDepth(str, Enum):
    """How deep customer interaction goes in the role"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CRMExtension(BaseModel):
    """Criteria that only apply to CRM roles"""
    crm_tools: List[str] = Field(default_factory=list, description="CRM tools the candidate should know")
    ticketing_experience_required: bool = Field(default=False)
    customer_interaction_depth: InteractionDepth = Field(default=InteractionDepth.MEDIUM)
    conflict_handling_importance: int = Field(default=50, ge=0, le=100, description="Importance as a percentage")

    @field_validator('customer_interaction_depth', mode='before')
    @classmethod
    def normalize_depth(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class RuleConfig(BaseModel):
    """Administrator-defined evaluation rules for one domain"""
    domain: str = Field(min_length=1, description="Domain identifier, e.g. Sales or CRM")
    is_active: bool = Field(default=True)
    min_experience_years: int = Field(default=0, ge=0)

    preferred_backgrounds: List[str] = Field(default_factory=list)
    required_skills: List[str] = Field(default_factory=list)
    communication_indicators: List[str] = Field(default_factory=list)
    achievement_indicators: List[str] = Field(default_factory=list)
    preferred_industries: List[str] = Field(default_factory=list)
    preferred_roles: List[str] = Field(default_factory=list)
    red_flags: List[str] = Field(default_factory=list)
    positive_keywords: List[str] = Field(default_factory=list)
    negative_keywords: List[str] = Field(default_factory=list)
    required_behavioral_traits: List[str] = Field(default_factory=list)

    # Not enforced to sum to 100, see weightage_warnings()
    experience_weightage: int = Field(default=20, ge=0, le=100)
    skill_weightage: int = Field(default=20, ge=0, le=100)
    communication_weightage: int = Field(default=15, ge=0, le=100)
    achievement_weightage: int = Field(default=20, ge=0, le=100)
    progression_weightage: int = Field(default=15, ge=0, le=100)
    cultural_fit_weightage: int = Field(default=10, ge=0, le=100)

    evaluation_notes: str = Field(default="")

    crm: Optional[CRMExtension] = Field(default=None, description="Populated for the CRM domain only")

    @field_validator(
        'preferred_backgrounds', 'required_skills', 'communication_indicators',
        'achievement_indicators', 'preferred_industries', 'preferred_roles',
        'red_flags', 'positive_keywords', 'negative_keywords', 'required_behavioral_traits',
        mode='before',
    )
    @classmethod
    def drop_blank_items(cls, v):
        if v is None:
            return []
        return [item.strip() for item in v if isinstance(item, str) and item.strip()]

    @property
    def is_crm(self) -> bool:
        return self.domain == CRM_DOMAIN

    @property
    def weightage_total(self) -> int:
        return sum(getattr(self, name) for name in WEIGHTAGE_FIELDS)

    def weightage_warnings(self) -> List[str]:
        total = self.weightage_total
        if total != 100:
            return [f"Weightages for {self.domain} sum to {total}%, not 100%"]
        return []

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "RuleConfig":
        """Build a RuleConfig from a storage row; nulls fall back to defaults."""
        data = {k: v for k, v in doc.items() if v is not None and k != "_id"}
        crm_data = {k: data.pop(k) for k in CRM_FIELDS if k in data}
        if data.get("domain") == CRM_DOMAIN:
            data["crm"] = CRMExtension(**crm_data)
        return cls(**data)

    def to_document(self) -> Dict[str, Any]:
        """Flatten back into the storage row shape"""
        doc = self.model_dump(exclude={"crm"})
        if self.crm is not None:
            crm = self.crm.model_dump()
            crm["customer_interaction_depth"] = self.crm.customer_interaction_depth.value
            doc.update(crm)
        return doc


class TrainingSettings(BaseModel):
    """Global switch for applying training rules"""
    apply_training_rules: bool = Field(default=False)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class TrainingConfigLookup(BaseModel):
    """Outcome of loading the rules for one evaluation.

    A failed lookup is reported through ``error`` instead of an exception;
    callers evaluate with default rules in that case.
    """
    config: Optional[RuleConfig] = None
    training_enabled: bool = False
    error: Optional[str] = None

    @property
    def applied(self) -> bool:
        return self.config is not None

    @property
    def degraded(self) -> bool:
        return self.error is not None


class TrainingPreview(BaseModel):
    """Rendered training prompt for the admin preview panel"""
    domain: str
    is_active: bool
    weightage_total: int
    warnings: List[str] = Field(default_factory=list)
    prompt: str

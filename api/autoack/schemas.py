from typing import List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .pipeline.decision import RuleSet, validate_address
from .pipeline.rules_input import ListKind


class HealthOut(BaseModel):
    status: str


class ExclusionRules(BaseModel):
    """Exclusion lists, checked in this order: domains, addresses, patterns."""

    domains: List[str] = Field(default_factory=list)
    addresses: List[str] = Field(default_factory=list)
    patterns: List[str] = Field(default_factory=list)

    @field_validator("domains", "addresses", "patterns", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v


class InclusionRules(BaseModel):
    """Inclusion lists; a match forces an acknowledgement."""

    addresses: List[str] = Field(default_factory=list)
    domains: List[str] = Field(default_factory=list)

    @field_validator("addresses", "domains", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v


class RuleSetIn(BaseModel):
    """
    Rule set as exchanged with callers and in exported files.

    Serialized with `by_alias=True` it keeps the exported key names
    (`internalDomain`, `exclusion`, `inclusion`) so older exports stay
    readable. The descriptive names are accepted on input too.
    """

    model_config = ConfigDict(populate_by_name=True)

    organizational_domain: str = Field(
        default="",
        validation_alias=AliasChoices("internalDomain", "organizationalDomain", "organizational_domain"),
        serialization_alias="internalDomain",
    )
    exclusions: ExclusionRules = Field(
        default_factory=ExclusionRules,
        validation_alias=AliasChoices("exclusion", "exclusions"),
        serialization_alias="exclusion",
    )
    inclusions: InclusionRules = Field(
        default_factory=InclusionRules,
        validation_alias=AliasChoices("inclusion", "inclusions"),
        serialization_alias="inclusion",
    )

    @field_validator("organizational_domain", mode="before")
    @classmethod
    def strip_domain(cls, v):
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator("exclusions", "inclusions", mode="before")
    @classmethod
    def none_as_default(cls, v):
        return {} if v is None else v

    def to_rule_set(self) -> RuleSet:
        return RuleSet(
            organizational_domain=self.organizational_domain,
            excluded_domains=tuple(self.exclusions.domains),
            excluded_addresses=tuple(self.exclusions.addresses),
            excluded_patterns=tuple(self.exclusions.patterns),
            included_addresses=tuple(self.inclusions.addresses),
            included_domains=tuple(self.inclusions.domains),
        )

    @classmethod
    def from_rule_set(cls, rules: RuleSet) -> "RuleSetIn":
        return cls.model_validate(rules.to_dict())


class SimulateIn(BaseModel):
    """
    One address to test against a rule set.
    - address: must be `local@domain`
    - config: the rule set; an empty object means no rules
    """

    address: str
    config: RuleSetIn = Field(default_factory=RuleSetIn)

    @field_validator("address")
    @classmethod
    def check_address(cls, v: str) -> str:
        return validate_address(v)


class BatchSimulateIn(BaseModel):
    addresses: List[str]
    config: RuleSetIn = Field(default_factory=RuleSetIn)


class SimulateOut(BaseModel):
    """
    Result of a simulation.
    allowed: whether the acknowledgement is sent
    reason_code: ForcedInclusion | Excluded | Internal | ExternalDefault
    matched_rule: rule that decided, None for the external default
    explanation: escaped HTML text for the UI
    """

    address: str
    allowed: bool
    reason_code: Literal["ForcedInclusion", "Excluded", "Internal", "ExternalDefault"]
    matched_rule: Optional[str] = None
    explanation: str
    summary: str


class BatchItemOut(BaseModel):
    address: str
    result: Optional[SimulateOut] = None
    error: Optional[str] = None


class HistoryItemOut(BaseModel):
    address: str
    allowed: bool
    reason_code: str
    timestamp: str
    relative_time: str


class ConfigExportOut(BaseModel):
    """Export envelope shared with the mail client extension."""

    model_config = ConfigDict(populate_by_name=True)

    extension: str
    version: str
    exported_at: str = Field(alias="exportedAt")
    partial_config: bool = Field(default=True, alias="partialConfig")
    settings: RuleSetIn


class CleanListIn(BaseModel):
    text: str
    kind: ListKind


class CleanedListOut(BaseModel):
    valid: List[str]
    invalid: List[str]
    suggestions: List[str]
    removed_count: int
    text: str

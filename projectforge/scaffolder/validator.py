"""Cross-manifest validation and feature-selection helpers.

Nothing here raises for a bad selection.  Every check returns messages the
generator appends to ``GeneratedProject.warnings``.
"""

from __future__ import annotations

from typing import Literal, Mapping, Optional, Sequence

from pydantic import BaseModel, Field

from projectforge.catalog import ManifestRegistry
from projectforge.models import Complexity
from projectforge.scaffolder.merge import find_path_conflicts

COMPLEXITY_WEIGHTS: dict[Complexity, int] = {
    Complexity.SIMPLE: 1,
    Complexity.MEDIUM: 2,
    Complexity.COMPLEX: 4,
}
HOURS_PER_POINT = 2


class IntegrationCheck(BaseModel):
    valid: bool = True
    missing: list[str] = Field(default_factory=list)


class FeatureValidation(BaseModel):
    """Outcome of :func:`validate_feature_selection`."""
    valid: bool = True
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ComplexityScore(BaseModel):
    score: int = 0
    level: Literal["low", "medium", "high"] = "low"
    estimated_hours: int = 0


# ---------------------------------------------------------------------------
# Integrations
# ---------------------------------------------------------------------------


def check_integration_dependencies(
    integrations: Mapping[str, Optional[str]],
    registry: ManifestRegistry,
) -> IntegrationCheck:
    """Report selected integrations whose required categories are not selected.

    Example message: ``"Stripe requires auth"``.  Unknown providers are
    skipped here; the generator reports them separately.
    """
    missing: list[str] = []
    for category, provider in integrations.items():
        if not provider:
            continue
        manifest = registry.lookup(category, provider)
        if manifest is None:
            continue
        for required in manifest.dependencies.integrations:
            if not integrations.get(required):
                missing.append(f"{manifest.name} requires {required}")
    return IntegrationCheck(valid=not missing, missing=missing)


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------


def unmet_dependencies(
    feature_id: str,
    selected: Sequence[str],
    registry: ManifestRegistry,
) -> list[str]:
    feature = registry.get_feature(feature_id)
    if feature is None:
        return []
    return [dep for dep in feature.requires if dep not in selected]


def validate_feature_selection(
    feature_ids: Sequence[str],
    registry: ManifestRegistry,
) -> FeatureValidation:
    """Check a feature selection for internal consistency.

    Errors: unknown feature ids and features whose declared dependencies
    are not selected.  Warnings: two features writing the same file, and a
    high overall complexity.
    """
    errors: list[str] = []
    warnings: list[str] = []

    for feature_id in feature_ids:
        feature = registry.get_feature(feature_id)
        if feature is None:
            errors.append(f"Unknown feature: {feature_id}")
            continue
        missing = unmet_dependencies(feature_id, feature_ids, registry)
        if missing:
            errors.append(f"{feature.label} requires: {', '.join(missing)}")

    known = [registry.get_feature(fid) for fid in dict.fromkeys(feature_ids)]
    conflicts = find_path_conflicts(
        {f.id: [d.path for d in f.files] for f in known if f is not None}
    )
    for path, owners in conflicts.items():
        warnings.append(f"Multiple features write {path}: {', '.join(owners)}")

    complexity = complexity_score(feature_ids, registry)
    if complexity.level == "high":
        warnings.append(
            f"High complexity selection (score {complexity.score}, "
            f"~{complexity.estimated_hours}h estimated)"
        )

    return FeatureValidation(valid=not errors, errors=errors, warnings=warnings)


def resolve_feature_dependencies(
    feature_ids: Sequence[str],
    registry: ManifestRegistry,
) -> list[str]:
    """Return the dependency-closed feature list, dependencies first.

    Order is deterministic: a depth-first walk over the selection in the
    given order, visiting each feature's ``requires`` in declaration order.
    Unknown ids are kept in place.  A dependency cycle is cut at the
    feature already being visited.
    """
    resolved: list[str] = []
    visiting: set[str] = set()

    def visit(feature_id: str) -> None:
        if feature_id in resolved or feature_id in visiting:
            return
        visiting.add(feature_id)
        feature = registry.get_feature(feature_id)
        if feature is not None:
            for dep in feature.requires:
                visit(dep)
        visiting.discard(feature_id)
        resolved.append(feature_id)

    for feature_id in feature_ids:
        visit(feature_id)
    return resolved


def complexity_score(
    feature_ids: Sequence[str],
    registry: ManifestRegistry,
) -> ComplexityScore:
    """Weight each known feature (simple 1, medium 2, complex 4) and bucket the sum."""
    score = 0
    for feature_id in feature_ids:
        feature = registry.get_feature(feature_id)
        if feature is not None:
            score += COMPLEXITY_WEIGHTS[feature.complexity]

    if score <= 5:
        level = "low"
    elif score <= 12:
        level = "medium"
    else:
        level = "high"
    return ComplexityScore(score=score, level=level, estimated_hours=score * HOURS_PER_POINT)


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------

# (keywords, feature ids) evaluated in order; results keep first-seen order.
RECOMMENDATION_RULES: list[tuple[tuple[str, ...], tuple[str, ...]]] = [
    (("login", "auth", "user"), ("email-registration", "social-login")),
    (("admin", "manage"), ("admin-dashboard",)),
    (("search", "find"), ("full-text-search", "advanced-filters")),
    (
        ("shop", "buy", "cart", "ecommerce"),
        ("shopping-cart", "checkout-flow", "product-variants", "inventory-management"),
    ),
    (("analytics", "track", "metric"), ("page-views", "user-tracking")),
    (
        ("product", "catalog", "inventory"),
        ("product-categories", "stock-availability", "inventory-management"),
    ),
    (
        ("saas", "subscription", "recurring", "billing", "plan"),
        ("subscription-billing", "email-registration"),
    ),
    (
        ("enterprise", "role", "permission", "security"),
        ("rbac", "audit-logging", "rate-limiting"),
    ),
    (
        ("dashboard", "chart", "report", "graph", "visualization"),
        ("charts-visualization", "reports", "admin-dashboard"),
    ),
    (("ship", "delivery", "fulfillment"), ("shipping-integration", "order-history")),
    (("marketplace", "listing", "seller"), ("user-listings", "seller-profiles")),
]


def recommend_features(description: str) -> list[str]:
    """Suggest feature ids from keywords in a free-text project description."""
    text = description.lower()
    recommended: dict[str, None] = {}
    for keywords, feature_ids in RECOMMENDATION_RULES:
        if any(keyword in text for keyword in keywords):
            recommended.update(dict.fromkeys(feature_ids))
    return list(recommended)

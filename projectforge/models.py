"""Pydantic v2 models for the projectforge composition engine.

Defines the complete data model hierarchy: catalog manifests (integrations,
features, base templates), the website analysis record produced by the
analyser, the ``ProjectConfig`` input record, and the ``GeneratedProject``
output record.

Input records accept both the camelCase keys used by the configurator UI
(``projectName``, ``primaryColor``, ``hasLogin``) and the snake_case field
names.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    """Immutable variant used for catalog entries and generation inputs."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Transform(str, Enum):
    """Per-file transform declared by a manifest file descriptor."""
    MUSTACHE = "mustache"


class Complexity(str, Enum):
    """Estimated implementation complexity of a feature."""
    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"


class SectionType(str, Enum):
    """Typed block within an analysed page."""
    HERO = "hero"
    FEATURES = "features"
    PRICING = "pricing"
    TESTIMONIALS = "testimonials"
    CTA = "cta"
    FAQ = "faq"
    ABOUT = "about"
    TEAM = "team"
    CONTACT = "contact"
    GALLERY = "gallery"
    BLOG = "blog"
    STATS = "stats"
    LOGOS = "logos"
    COMPARISON = "comparison"
    TIMELINE = "timeline"
    PROCESS = "process"
    NEWSLETTER = "newsletter"
    FOOTER = "footer"
    UNKNOWN = "unknown"


# ---------------------------------------------------------------------------
# Manifest Models
# ---------------------------------------------------------------------------

class EnvVarSpec(FrozenCamelModel):
    """An environment variable a manifest needs at runtime."""
    name: str = Field(..., description="Variable name, e.g. 'STRIPE_SECRET_KEY'")
    description: str = Field(default="", description="What the variable is for")
    required: bool = Field(default=True, description="Whether the app fails without it")
    example: Optional[str] = Field(default=None, description="Example value")
    public: bool = Field(default=False, description="Exposed to the browser bundle")


class DependencyBlock(FrozenCamelModel):
    """Packages, env vars and cross-integration requirements of a manifest."""
    npm: dict[str, str] = Field(default_factory=dict, description="Runtime packages")
    npm_dev: dict[str, str] = Field(default_factory=dict, description="Dev-only packages")
    env: list[EnvVarSpec] = Field(default_factory=list, description="Environment variables")
    integrations: list[str] = Field(
        default_factory=list,
        description="Other integration categories that must also be selected",
    )


class FileDescriptor(FrozenCamelModel):
    """One file a manifest contributes to the generated tree."""
    path: str = Field(..., description="Destination path inside the project")
    template: str = Field(..., description="Template reference used to load the body")
    transform: Optional[Transform] = Field(
        default=None, description="'mustache' when the body carries branding tokens"
    )
    overwrite: bool = Field(
        default=True, description="Whether this file may replace an earlier file"
    )


class IntegrationManifest(FrozenCamelModel):
    """A pluggable third-party integration (one provider within a category)."""
    id: str
    name: str
    category: str
    version: str = Field(default="1.0.0", pattern=r"^\d+\.\d+\.\d+")
    description: str = ""
    files: list[FileDescriptor] = Field(default_factory=list)
    dependencies: DependencyBlock = Field(default_factory=DependencyBlock)
    post_install: list[str] = Field(default_factory=list)


class FeatureManifest(FrozenCamelModel):
    """An optional product feature selectable in the configurator."""
    id: str
    label: str
    category: str
    version: str = Field(default="1.0.0", pattern=r"^\d+\.\d+\.\d+")
    description: str = ""
    complexity: Complexity = Complexity.MEDIUM
    requires: list[str] = Field(
        default_factory=list, description="Feature ids this feature depends on"
    )
    files: list[FileDescriptor] = Field(default_factory=list)
    dependencies: DependencyBlock = Field(default_factory=DependencyBlock)
    post_install: list[str] = Field(default_factory=list)


class FeatureCategory(FrozenCamelModel):
    """Display metadata for a group of features."""
    id: str
    label: str
    description: str = ""


class DetectedFeatureTemplate(FrozenCamelModel):
    """Scaffolding contributed by one detected analysis flag."""
    files: list[str] = Field(default_factory=list)
    npm: dict[str, str] = Field(default_factory=dict)
    npm_dev: dict[str, str] = Field(default_factory=dict)
    env: list[str] = Field(default_factory=list, description="Env var names")


class BaseTemplateManifest(FrozenCamelModel):
    """A starter template every generated project is built on."""
    id: str
    name: str
    version: str = Field(default="1.0.0", pattern=r"^\d+\.\d+\.\d+")
    description: str = ""
    files: list[FileDescriptor] = Field(default_factory=list)
    dependencies: DependencyBlock = Field(default_factory=DependencyBlock)


# ---------------------------------------------------------------------------
# Website Analysis: detected features
# ---------------------------------------------------------------------------

class SocialAuthProviders(CamelModel):
    google: bool = False
    github: bool = False
    apple: bool = False

    def any_enabled(self) -> bool:
        return self.google or self.github or self.apple


class AuthFeatures(CamelModel):
    has_login: bool = False
    has_signup: bool = False
    has_social_auth: SocialAuthProviders = Field(default_factory=SocialAuthProviders)
    has_password_reset: bool = False
    has_mfa: bool = False

    @field_validator("has_social_auth", mode="before")
    @classmethod
    def _coerce_social_auth(cls, value: Any) -> Any:
        # The feature detector reports a plain boolean.
        if isinstance(value, bool):
            return {"google": value}
        return value


class EcommerceFeatures(CamelModel):
    has_products: bool = False
    has_cart: bool = False
    has_checkout: bool = False
    has_wishlist: bool = False
    has_reviews: bool = False
    has_inventory: bool = False
    has_pricing: bool = False


class SocialFeatures(CamelModel):
    has_profiles: bool = False
    has_comments: bool = False
    has_likes: bool = False
    has_following: bool = False
    has_sharing: bool = False
    has_feed: bool = False
    has_messaging: bool = False


class ContentFeatures(CamelModel):
    has_blog: bool = False
    has_search: bool = False
    has_faq: bool = False
    has_docs: bool = False
    has_gallery: bool = False
    has_media: bool = False


class CommunicationFeatures(CamelModel):
    has_contact_form: bool = False
    has_newsletter: bool = False
    has_chat: bool = False
    has_notifications: bool = False


class BookingFeatures(CamelModel):
    has_appointments: bool = False
    has_calendar: bool = False
    has_reservations: bool = False


class SubscriptionFeatures(CamelModel):
    has_pricing: bool = False
    has_billing: bool = False
    has_trials: bool = False


class DashboardFeatures(CamelModel):
    has_analytics: bool = False
    has_reports: bool = False
    has_stats: bool = False


class AdminFeatures(CamelModel):
    has_user_management: bool = False
    has_content_moderation: bool = False
    has_settings: bool = False


class LocationFeatures(CamelModel):
    has_map: bool = False
    has_store_locator: bool = False
    has_geo_search: bool = False


class IntegrationFeatures(CamelModel):
    has_payments: bool = False
    has_o_auth: bool = Field(default=False, alias="hasOAuth")
    has_webhooks: bool = False


class DetectedFeatures(CamelModel):
    """Feature flags detected on the reference site, grouped by area."""
    auth: AuthFeatures = Field(default_factory=AuthFeatures)
    ecommerce: EcommerceFeatures = Field(default_factory=EcommerceFeatures)
    social: SocialFeatures = Field(default_factory=SocialFeatures)
    content: ContentFeatures = Field(default_factory=ContentFeatures)
    communication: CommunicationFeatures = Field(default_factory=CommunicationFeatures)
    booking: BookingFeatures = Field(default_factory=BookingFeatures)
    subscription: SubscriptionFeatures = Field(default_factory=SubscriptionFeatures)
    dashboard: DashboardFeatures = Field(default_factory=DashboardFeatures)
    admin: AdminFeatures = Field(default_factory=AdminFeatures)
    location: LocationFeatures = Field(default_factory=LocationFeatures)
    integrations: IntegrationFeatures = Field(default_factory=IntegrationFeatures)

    def enabled_flags(self) -> list[str]:
        """Return the dotted camelCase path of every flag that is set.

        Nested provider maps are flattened, so a Google social login yields
        ``auth.hasSocialAuth.google``.  Order follows field declaration order.
        """
        return [path for path, value in _flatten(self.model_dump(by_alias=True)) if value]


def _flatten(data: dict[str, Any], prefix: str = "") -> list[tuple[str, Any]]:
    items: list[tuple[str, Any]] = []
    for key, value in data.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            items.extend(_flatten(value, path))
        else:
            items.append((path, value))
    return items


# ---------------------------------------------------------------------------
# Website Analysis: visual tokens
# ---------------------------------------------------------------------------

class ColorPalette(CamelModel):
    primary: str
    secondary: Optional[str] = None
    accent: Optional[str] = None
    background: str = "#ffffff"
    foreground: str = "#0a0a0a"
    muted: Optional[str] = None
    border: Optional[str] = None
    success: Optional[str] = None
    warning: Optional[str] = None
    error: Optional[str] = None


class Typography(CamelModel):
    heading_font: str = "Inter"
    body_font: str = "Inter"
    base_font_size: Optional[str] = None
    line_height: Optional[str] = None


RadiusSize = Literal["none", "sm", "md", "lg", "xl", "full"]
ShadowSize = Literal["none", "sm", "md", "lg", "xl"]


class ButtonStyle(CamelModel):
    shape: Literal["rounded", "pill", "square"] = "rounded"
    style: Literal["filled", "outline", "ghost"] = "filled"


class CardStyle(CamelModel):
    shadow: ShadowSize = "md"
    rounded: RadiusSize = "md"


class InputStyle(CamelModel):
    style: Literal["filled", "outline", "underline"] = "outline"
    rounded: RadiusSize = "md"


class ComponentStyles(CamelModel):
    buttons: ButtonStyle = Field(default_factory=ButtonStyle)
    cards: CardStyle = Field(default_factory=CardStyle)
    inputs: InputStyle = Field(default_factory=InputStyle)


class Spacing(CamelModel):
    base: int = 4
    scale: Literal["tight", "normal", "relaxed"] = "normal"


class VisualAnalysis(CamelModel):
    """Design tokens extracted from the reference site."""
    colors: ColorPalette
    typography: Typography = Field(default_factory=Typography)
    components: ComponentStyles = Field(default_factory=ComponentStyles)
    spacing: Optional[Spacing] = None
    dark_mode: Optional[bool] = None


# ---------------------------------------------------------------------------
# Website Analysis: page structure
# ---------------------------------------------------------------------------

class PageSection(CamelModel):
    type: SectionType = SectionType.UNKNOWN
    variant: Optional[str] = None
    order: int = 0
    content: Optional[dict[str, Any]] = None

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_unknown_type(cls, value: Any) -> Any:
        if isinstance(value, SectionType):
            return value
        try:
            return SectionType(str(value).lower())
        except ValueError:
            return SectionType.UNKNOWN


class PageMetadata(CamelModel):
    description: Optional[str] = None
    og_image: Optional[str] = None


class PageStructure(CamelModel):
    url: str = "/"
    title: str = ""
    sections: list[PageSection] = Field(default_factory=list)
    metadata: Optional[PageMetadata] = None


class NavigationItem(CamelModel):
    label: str
    href: str
    children: Optional[list[NavigationItem]] = None


class FooterLink(CamelModel):
    label: str
    href: str


class FooterColumn(CamelModel):
    title: str
    links: list[FooterLink] = Field(default_factory=list)


class FooterLayout(CamelModel):
    columns: list[FooterColumn] = Field(default_factory=list)
    bottom_links: Optional[list[FooterLink]] = None


class StructureAnalysis(CamelModel):
    pages: list[PageStructure] = Field(default_factory=list)
    navigation: list[NavigationItem] = Field(default_factory=list)
    footer: Optional[FooterLayout] = None


class SeoInfo(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    og_image: Optional[str] = None


class TechnicalInfo(CamelModel):
    framework: Optional[str] = None
    styling: Optional[str] = None
    state_management: Optional[str] = None
    has_ssr: Optional[bool] = Field(default=None, alias="hasSSR")
    has_ssg: Optional[bool] = Field(default=None, alias="hasSSG")
    has_pwa: Optional[bool] = Field(default=None, alias="hasPWA")


class WebsiteAnalysis(CamelModel):
    """Structured description of a reference site."""
    url: str = ""
    timestamp: Optional[str] = None
    features: DetectedFeatures = Field(default_factory=DetectedFeatures)
    visual: VisualAnalysis
    structure: StructureAnalysis = Field(default_factory=StructureAnalysis)
    seo: Optional[SeoInfo] = None
    technical: Optional[TechnicalInfo] = None


# ---------------------------------------------------------------------------
# Project configuration (input)
# ---------------------------------------------------------------------------

class Branding(FrozenCamelModel):
    """Colours, fonts and name substituted into template tokens."""
    primary_color: str = Field(..., description="Primary brand colour, e.g. '#F97316'")
    secondary_color: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    font_family: Optional[str] = None


class ProjectConfig(FrozenCamelModel):
    """A single generation request, immutable for the duration of generation."""
    project_name: str = Field(..., description="Project name (used in package.json and copy)")
    description: str = Field(default="", description="Short project description")
    template: str = Field(default="saas", description="Base template id")
    integrations: dict[str, Optional[str]] = Field(
        default_factory=dict,
        description="Integration category -> provider id (at most one per category)",
    )
    features: list[str] = Field(default_factory=list, description="Selected feature ids")
    branding: Branding
    website_analysis: Optional[WebsiteAnalysis] = None


# ---------------------------------------------------------------------------
# Generation output
# ---------------------------------------------------------------------------

class GeneratedFile(FrozenCamelModel):
    """One file of the generated tree."""
    path: str
    content: str = ""
    overwrite: bool = True


class GeneratedProject(CamelModel):
    """Terminal result of one generation call."""
    files: list[GeneratedFile] = Field(default_factory=list)
    package_json: dict[str, Any] = Field(default_factory=dict)
    env_template: str = ""
    readme: str = ""
    setup_instructions: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    def file_map(self) -> dict[str, GeneratedFile]:
        """Return ``{path: file}`` for quick lookups."""
        return {f.path: f for f in self.files}

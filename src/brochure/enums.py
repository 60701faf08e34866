"""Enumeration types for Brochure."""

from enum import StrEnum


class ContextKey(StrEnum):
    """Named slots available to templates.

    The set is closed: templates may only reference these keys, and values for
    any other name are rejected by the context store. Member values are the
    names used inside template placeholders (e.g. ``{{projectName}}``).
    """

    # Required common
    PROJECT_NAME = "projectName"
    DESCRIPTION = "description"
    AUTHOR = "author"

    # Optional common
    TAGLINE = "tagline"
    EMAIL = "email"
    GITHUB_URL = "githubUrl"
    TWITTER_HANDLE = "twitterHandle"
    LINKEDIN_URL = "linkedinUrl"
    WEBSITE = "website"

    # Blog
    BLOG_TITLE = "blogTitle"
    BLOG_DESCRIPTION = "blogDescription"
    RSS_ENABLED = "rssEnabled"
    COMMENTS_ENABLED = "commentsEnabled"
    DISQUS_SHORTNAME = "disqusShortname"
    POSTS_PER_PAGE = "postsPerPage"

    # Portfolio
    PORTFOLIO_OWNER = "portfolioOwner"
    RESUME_URL = "resumeUrl"
    SKILLS = "skills"
    EXPERIENCE = "experience"
    EDUCATION = "education"

    # Documentation
    DOCS_TITLE = "docsTitle"
    SEARCH_ENABLED = "searchEnabled"
    API_REFERENCE = "apiReference"
    TUTORIALS_ENABLED = "tutorialsEnabled"

    # E-commerce
    STORE_NAME = "storeName"
    CURRENCY = "currency"
    STRIPE_PUBLIC_KEY = "stripePublicKey"
    SHIPPING_ENABLED = "shippingEnabled"
    TAX_RATE = "taxRate"

    # Features
    ANALYTICS = "analytics"
    ANALYTICS_ID = "analyticsId"
    SEO_ENABLED = "seoEnabled"
    DARK_MODE_ENABLED = "darkModeEnabled"
    MULTILINGUAL_ENABLED = "multilingualEnabled"
    NEWSLETTER_ENABLED = "newsletterEnabled"

    # SEO
    META_TITLE = "metaTitle"
    META_DESCRIPTION = "metaDescription"
    META_KEYWORDS = "metaKeywords"
    OG_IMAGE = "ogImage"
    TWITTER_CARD = "twitterCard"

    # System (always injected by the engine)
    CURRENT_YEAR = "currentYear"
    GENERATED_DATE = "generatedDate"
    GENERATOR_VERSION = "generatorVersion"
    GENERATOR_NAME = "generatorName"

    # Customization
    PRIMARY_COLOR = "primaryColor"
    SECONDARY_COLOR = "secondaryColor"
    FONT_FAMILY = "fontFamily"
    LOGO_URL = "logoUrl"
    FAVICON_URL = "faviconUrl"

    @property
    def display_name(self) -> str:
        """Human-readable name used in error messages."""
        return _DISPLAY_NAMES[self]

    @property
    def is_required(self) -> bool:
        """Whether every template needs this key."""
        return self in _ALWAYS_REQUIRED

    @property
    def is_system(self) -> bool:
        """Whether the engine computes this key itself."""
        return self in SYSTEM_KEYS

    @classmethod
    def from_name(cls, name: str) -> "ContextKey | None":  # noqa: UP037
        """Look up a key by its placeholder name, returning None if unknown."""
        try:
            return cls(name)
        except ValueError:
            return None

    @classmethod
    def required_keys(cls) -> "tuple[ContextKey, ...]":  # noqa: UP037
        """Keys flagged as always required, in declaration order."""
        return tuple(key for key in cls if key.is_required)


_DISPLAY_NAMES: dict[ContextKey, str] = {
    ContextKey.PROJECT_NAME: "Project Name",
    ContextKey.DESCRIPTION: "Description",
    ContextKey.AUTHOR: "Author",
    ContextKey.TAGLINE: "Tagline",
    ContextKey.EMAIL: "Email",
    ContextKey.GITHUB_URL: "GitHub URL",
    ContextKey.TWITTER_HANDLE: "Twitter Handle",
    ContextKey.LINKEDIN_URL: "LinkedIn URL",
    ContextKey.WEBSITE: "Website",
    ContextKey.BLOG_TITLE: "Blog Title",
    ContextKey.BLOG_DESCRIPTION: "Blog Description",
    ContextKey.RSS_ENABLED: "RSS Enabled",
    ContextKey.COMMENTS_ENABLED: "Comments Enabled",
    ContextKey.DISQUS_SHORTNAME: "Disqus Shortname",
    ContextKey.POSTS_PER_PAGE: "Posts Per Page",
    ContextKey.PORTFOLIO_OWNER: "Portfolio Owner",
    ContextKey.RESUME_URL: "Resume URL",
    ContextKey.SKILLS: "Skills",
    ContextKey.EXPERIENCE: "Experience",
    ContextKey.EDUCATION: "Education",
    ContextKey.DOCS_TITLE: "Documentation Title",
    ContextKey.SEARCH_ENABLED: "Search Enabled",
    ContextKey.API_REFERENCE: "API Reference",
    ContextKey.TUTORIALS_ENABLED: "Tutorials Enabled",
    ContextKey.STORE_NAME: "Store Name",
    ContextKey.CURRENCY: "Currency",
    ContextKey.STRIPE_PUBLIC_KEY: "Stripe Public Key",
    ContextKey.SHIPPING_ENABLED: "Shipping Enabled",
    ContextKey.TAX_RATE: "Tax Rate",
    ContextKey.ANALYTICS: "Analytics",
    ContextKey.ANALYTICS_ID: "Analytics ID",
    ContextKey.SEO_ENABLED: "SEO Enabled",
    ContextKey.DARK_MODE_ENABLED: "Dark Mode Enabled",
    ContextKey.MULTILINGUAL_ENABLED: "Multilingual Enabled",
    ContextKey.NEWSLETTER_ENABLED: "Newsletter Enabled",
    ContextKey.META_TITLE: "Meta Title",
    ContextKey.META_DESCRIPTION: "Meta Description",
    ContextKey.META_KEYWORDS: "Meta Keywords",
    ContextKey.OG_IMAGE: "Open Graph Image",
    ContextKey.TWITTER_CARD: "Twitter Card",
    ContextKey.CURRENT_YEAR: "Current Year",
    ContextKey.GENERATED_DATE: "Generated Date",
    ContextKey.GENERATOR_VERSION: "Generator Version",
    ContextKey.GENERATOR_NAME: "Generator Name",
    ContextKey.PRIMARY_COLOR: "Primary Color",
    ContextKey.SECONDARY_COLOR: "Secondary Color",
    ContextKey.FONT_FAMILY: "Font Family",
    ContextKey.LOGO_URL: "Logo URL",
    ContextKey.FAVICON_URL: "Favicon URL",
}

_ALWAYS_REQUIRED = frozenset(
    {ContextKey.PROJECT_NAME, ContextKey.DESCRIPTION, ContextKey.AUTHOR}
)

SYSTEM_KEYS: frozenset[ContextKey] = frozenset(
    {
        ContextKey.CURRENT_YEAR,
        ContextKey.GENERATED_DATE,
        ContextKey.GENERATOR_VERSION,
        ContextKey.GENERATOR_NAME,
    }
)
"""Keys the engine always sets on a context store, overriding caller values."""


class TemplateCategory(StrEnum):
    """Kinds of project a template scaffolds."""

    LANDING_PAGE = "landing-page"
    BLOG = "blog"
    PORTFOLIO = "portfolio"
    DOCUMENTATION = "documentation"
    ECOMMERCE = "ecommerce"

    @property
    def display_name(self) -> str:
        """Human-readable category name."""
        return _CATEGORY_NAMES[self]


_CATEGORY_NAMES: dict[TemplateCategory, str] = {
    TemplateCategory.LANDING_PAGE: "Landing Page",
    TemplateCategory.BLOG: "Blog",
    TemplateCategory.PORTFOLIO: "Portfolio",
    TemplateCategory.DOCUMENTATION: "Documentation",
    TemplateCategory.ECOMMERCE: "E-commerce",
}


class TemplateFeature(StrEnum):
    """Features a template advertises."""

    RESPONSIVE = "responsive"
    SEO = "seo"
    ANALYTICS = "analytics"
    MARKDOWN = "markdown"
    RSS = "rss"
    SEARCH = "search"
    CATEGORIES = "categories"
    GALLERY = "gallery"
    CONTACT_FORM = "contactForm"
    RESUME = "resume"
    DARK_MODE = "darkMode"
    MULTILINGUAL = "multilingual"
    COMMENTS = "comments"
    NEWSLETTER = "newsletter"
    SOCIAL_SHARING = "socialSharing"

"""
Configuration, constants, and generation prompt
Environment-driven settings for the store connection and text generator
"""
import os

# Text generation (OpenAI-compatible endpoint, xAI Grok by default)
GENERATOR_BASE_URL = os.getenv("GENERATOR_BASE_URL", "https://api.x.ai/v1")
GENERATOR_MODEL = os.getenv("GENERATOR_MODEL", "grok-2-latest")
GENERATOR_TIMEOUT = float(os.getenv("GENERATOR_TIMEOUT", "120"))
GENERATOR_TEMPERATURE = float(os.getenv("GENERATOR_TEMPERATURE", "0.7"))
GENERATOR_MAX_TOKENS = int(os.getenv("GENERATOR_MAX_TOKENS", "4000"))

# WooCommerce REST API
WOO_API_VERSION = os.getenv("WOO_API_VERSION", "wc/v3")
WOO_TIMEOUT = float(os.getenv("WOO_TIMEOUT", "30"))
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))

# Prompt guidance per writing tone
TONE_GUIDANCE = {
    "professional": "Formal and business-focused. Confident, precise, no hype.",
    "technical": "Detailed and specification-heavy. Lead with materials, standards and measurable properties.",
    "sales": "Persuasive and conversion-oriented. Benefit-first with clear calls to action.",
    "neutral": "Balanced and informative. Plain language, no superlatives.",
}

# Long description target length (words)
TARGET_WORDS_MIN = 800
TARGET_WORDS_MAX = 1200

# System prompt template, filled per run with tone and business type
SYSTEM_PROMPT = """
Act like a senior e-commerce copywriter writing for a {business_type}. You turn product data and business context into long-form, SEO-optimised product copy in HTML.

OBJECTIVE
Return valid JSON with exactly two keys (no markdown, no comments):
{{ "longDescription": "<h2>…</h2><p>…</p>…", "shortDescription": "<ul><li>…</li>…</ul>" }}

TONE
{tone_guidance}

INPUTS
You will receive one message with product JSON prefixed by "Product data:" and business JSON prefixed by "Business context:". Treat them as the only source of truth.

HTML & CONTENT RULES
A) longDescription ({words_min}-{words_max} words), sections in this order, each under an <h2>:
1) Product Overview
2) Key Features & Benefits (bulleted <ul>)
3) Technical Specifications (<table> built from the product attributes)
4) Use Cases & Applications
5) Why Buy From the company (use the unique selling points when provided)
6) Frequently Asked Questions
7) About the company
B) shortDescription
- One <ul> with 4-6 <li> bullets, each 3-10 words.

GUARDRAILS
- Never invent certifications, prices or stock levels.
- No emojis, no ALL CAPS hype, no <script>, <style> or inline event handlers.
- Output strictly valid JSON with only "longDescription" and "shortDescription".
""".strip()

# CSV Export Configuration
CSV_BOM = "\ufeff"
CSV_DEFAULT_HEADERS = [
    "id", "sku", "name",
    "shortDescription", "longDescription", "wordCount",
    "recentlyUpdated"
]


class Config:
    """Application configuration"""

    # Server
    PORT: int = int(os.getenv("PORT", "8080"))
    API_KEY: str = os.getenv("WOOCOPY_API_KEY", "")

    # Local persisted state
    STORE_PATH: str = os.getenv("WOOCOPY_STORE_PATH", os.path.join("env", "woocopy_store.json"))

    # Generation behaviour
    AUTO_PUSH_DEFAULT: bool = os.getenv("AUTO_PUSH_DEFAULT", "true").lower() == "true"
    GENERATOR_BASE_URL: str = GENERATOR_BASE_URL
    GENERATOR_MODEL: str = GENERATOR_MODEL

    # Catalog
    WOO_API_VERSION: str = WOO_API_VERSION
    DEFAULT_PAGE_SIZE: int = DEFAULT_PAGE_SIZE


config = Config()

# Backwards compatible alias for settings
settings = config

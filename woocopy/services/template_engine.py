"""
Template Description Engine
Deterministic long/short product copy used when remote generation is unavailable
"""
import logging
from typing import Dict, List

from ..models import AttributeValue, BusinessProfile, CatalogItem, GenerationResult

logger = logging.getLogger(__name__)

CELL = 'style="border: 1px solid #ddd; padding: 8px;"'
HEAD_CELL = 'style="border: 1px solid #ddd; padding: 8px; text-align: left;"'

DEFAULT_USPS = [
    ("Quality Assurance", "Every product undergoes rigorous quality control"),
    ("Competitive Pricing", "Direct from manufacturer pricing for maximum value"),
    ("Reliable Supply", "Consistent inventory and fast shipping"),
    ("Expert Support", "Dedicated customer service team"),
]

STORAGE_AND_SAFETY = [
    "Store in a cool, dry place away from direct sunlight",
    "Keep in original packaging until ready to use",
    "Follow all manufacturer guidelines for handling",
    "Ensure proper ventilation in storage areas",
    "Check expiration dates and rotate stock accordingly",
    "Dispose of packaging materials according to local regulations",
    "Refer to Safety Data Sheet (SDS) for detailed safety information",
]

COMPARISON_ROWS = [
    ("Quality", "Premium Grade", "Variable"),
    ("Consistency", "Guaranteed", "Inconsistent"),
    ("Support", "Full Technical Support", "Limited"),
    ("Pricing", "Competitive {business_type} Rates", "Retail Markup"),
    ("Availability", "Reliable Stock", "Often Out of Stock"),
]


def _text(value: str, default: str) -> str:
    """Trimmed value, or the default when blank"""
    value = (value or "").strip()
    return value or default


def _context(item: CatalogItem, profile: BusinessProfile) -> Dict[str, str]:
    """Resolve every interpolated field to a non-empty string"""
    return {
        "title": _text(item.name, "This product"),
        "category": _text(item.primary_category or "", "Product"),
        "business_type": profile.business_type.value,
        "company": _text(profile.company_name, ""),
        "audience": _text(profile.target_audience, ""),
        "business_desc": _text(profile.description, ""),
    }


def _format_attribute(value: AttributeValue) -> str:
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return str(value)


def attribute_rows(attributes: Dict[str, AttributeValue]) -> str:
    """One specification table row per item attribute, in mapping order"""
    return "".join(
        f"<tr><td {CELL}>{key}</td><td {CELL}>{_format_attribute(value)}</td></tr>"
        for key, value in attributes.items()
    )


def features_bullets(title: str, category: str, business_type: str) -> str:
    return f"""<ul>
    <li><strong>Premium Quality Construction</strong>: Manufactured to the highest industry standards, ensuring long-lasting performance and reliability for your business operations.</li>
    <li><strong>Consistent Performance</strong>: Every unit of {title} delivers the same exceptional quality, eliminating variability and ensuring predictable results.</li>
    <li><strong>Cost-Effective Solution</strong>: Direct {business_type} pricing means you get premium quality without the retail markup, maximizing your profit margins.</li>
    <li><strong>Ready for Immediate Use</strong>: Arrives properly packaged and ready to integrate into your product lineup or operations without delay.</li>
    <li><strong>Comprehensive Documentation</strong>: Includes all necessary technical specifications, safety information, and compliance certificates.</li>
    <li><strong>Scalable Ordering</strong>: Whether you need a single unit or bulk quantities, we accommodate orders of all sizes to match your business growth.</li>
    <li><strong>Expert Technical Support</strong>: Our knowledgeable team is available to answer questions and provide guidance on optimal usage and applications.</li>
    <li><strong>Industry Compliance</strong>: Meets or exceeds all relevant industry standards and regulations for {category.lower()} products.</li>
  </ul>"""


def use_case_bullets(category: str, audience: str) -> str:
    return f"""<ul>
    <li><strong>Retail Distribution</strong>: Perfect for retailers looking to stock high-quality {category.lower()} products with reliable supply chains.</li>
    <li><strong>Professional Applications</strong>: Ideal for {audience or 'professional users'} who demand consistent quality and performance.</li>
    <li><strong>Bulk Operations</strong>: Suitable for businesses requiring large quantities with guaranteed availability and competitive pricing.</li>
    <li><strong>Resale Opportunities</strong>: Excellent margins for resellers and distributors looking to expand their product offerings.</li>
    <li><strong>Commercial Use</strong>: Designed to meet the demanding requirements of commercial and industrial applications.</li>
    <li><strong>Private Labeling</strong>: Available for private label programs – contact us for customization options.</li>
  </ul>"""


def usp_bullets(usps: List[str]) -> str:
    """One bullet per configured USP, or the default four"""
    if usps:
        items = "".join(
            f"<li><strong>{usp}</strong>: We deliver on our promises with proven track record and customer satisfaction.</li>"
            for usp in usps
        )
        return f"<ul>{items}</ul>"

    items = "\n".join(f"    <li><strong>{label}</strong>: {text}</li>" for label, text in DEFAULT_USPS)
    return f"<ul>\n{items}\n  </ul>"


def specification_table(ctx: Dict[str, str], attributes: Dict[str, AttributeValue]) -> str:
    fixed = [
        ("Product Name", ctx["title"]),
        ("Category", ctx["category"]),
        ("Application", ctx["audience"] or "Professional & Commercial Use"),
        ("Quality Standard", "Premium Grade"),
        ("Packaging", "Industry Standard"),
        ("Shelf Life", "Extended (See Product Label)"),
        ("Origin", ctx["company"] or "Quality Manufacturer"),
    ]
    rows = "\n".join(f"    <tr><td {CELL}>{label}</td><td {CELL}>{value}</td></tr>" for label, value in fixed)
    return f"""<table class="woocommerce-product-attributes shop_attributes" style="border-collapse: collapse; width: 100%;">
  <tbody>
    <tr><th {HEAD_CELL}>Feature</th><th {HEAD_CELL}>Details</th></tr>
{rows}
    {attribute_rows(attributes)}
  </tbody>
</table>"""


def comparison_table(title: str, business_type: str) -> str:
    rows = "\n".join(
        f"    <tr><td {CELL}>{aspect}</td><td {CELL}>{ours.format(business_type=business_type)}</td><td {CELL}>{theirs}</td></tr>"
        for aspect, ours, theirs in COMPARISON_ROWS
    )
    return f"""<table class="comparison-table" style="border-collapse: collapse; width: 100%;">
  <thead>
    <tr>
      <th {HEAD_CELL}>Aspect</th>
      <th {HEAD_CELL}>{title}</th>
      <th {HEAD_CELL}>Standard Market Options</th>
    </tr>
  </thead>
  <tbody>
{rows}
  </tbody>
</table>"""


def storage_list() -> str:
    items = "\n".join(f"  <li>{line}</li>" for line in STORAGE_AND_SAFETY)
    return f"<ul>\n{items}\n</ul>"


def faq_block(title: str, company: str, business_type: str) -> str:
    return f"""<div class="faq-section">
  <p><strong>Q: What makes {title} different from similar products?</strong><br>
  A: {title} is manufactured to the highest quality standards and backed by {company or 'our company'}'s reputation as a leading {business_type}. We ensure consistent quality, competitive pricing, and reliable availability.</p>

  <p><strong>Q: What is the minimum order quantity?</strong><br>
  A: As a {business_type}, we offer flexible ordering options to meet your business needs. Contact our sales team for current MOQ and volume pricing.</p>

  <p><strong>Q: How quickly can you ship {title}?</strong><br>
  A: We maintain robust inventory levels and typically ship within 1-3 business days. Expedited shipping options are available for urgent orders.</p>

  <p><strong>Q: Do you provide technical specifications or certificates?</strong><br>
  A: Yes, we provide complete technical documentation, certificates of analysis, and any required compliance documentation with each order.</p>

  <p><strong>Q: What is your return policy?</strong><br>
  A: We stand behind our products with a comprehensive satisfaction guarantee. Defective or damaged products can be returned within 30 days for full refund or replacement.</p>

  <p><strong>Q: Can I get samples before placing a bulk order?</strong><br>
  A: Absolutely! We encourage testing our products before committing to larger orders. Contact our sales team to arrange sample shipments.</p>
</div>"""


def render_long_description(item: CatalogItem, profile: BusinessProfile) -> str:
    ctx = _context(item, profile)
    title = ctx["title"]
    category = ctx["category"]
    business_type = ctx["business_type"]
    company = ctx["company"]
    audience = ctx["audience"]
    business_desc = ctx["business_desc"]

    about = business_desc or (
        f"We are a professional {business_type} specializing in high-quality products for "
        f"{audience or 'businesses'}. With years of experience in the industry, we've built our "
        f"reputation on reliability, quality, and exceptional customer service."
    )

    return f"""<h2>Product Overview</h2>

<p>{title} is a premium {category.lower()} designed specifically for {audience or 'professional use'}. As a leading {business_type}, {company or 'our company'} brings you this exceptional product that combines quality, reliability, and performance. {business_desc or 'We specialize in delivering superior products to meet your business needs.'}</p>

<p>This {category.lower()} represents the pinnacle of manufacturing excellence, incorporating advanced materials and precision engineering to deliver outstanding results. Whether you're looking to enhance your product lineup or meet specific customer demands, {title} provides the perfect solution for your business requirements.</p>

<h2>Key Features &amp; Benefits</h2>

{features_bullets(title, category, business_type)}

<h2>Technical Specifications</h2>

{specification_table(ctx, item.attributes)}

<h2>Use Cases &amp; Applications</h2>

{use_case_bullets(category, audience)}

<h2>Why Buy From {company or 'Us'}</h2>

<p>As a trusted {business_type}, we understand the unique needs of businesses like yours. When you choose {title}, you're not just purchasing a product – you're partnering with a company committed to your success.</p>

{usp_bullets(profile.usps)}

<p>Our {business_type} model ensures you receive the best possible pricing without compromising on quality. We work directly with manufacturers and maintain strict quality standards to ensure every unit meets or exceeds industry expectations.</p>

<h2>Comparison: {title} vs. Standard Alternatives</h2>

{comparison_table(title, business_type)}

<h2>Storage, Handling &amp; Safety</h2>

{storage_list()}

<h2>Frequently Asked Questions</h2>

{faq_block(title, company, business_type)}

<h2>About {company or 'Our Company'}</h2>

<p>{about}</p>

<p>Our commitment to excellence means you can trust {title} to meet your exact specifications and deliver consistent performance. We work closely with our clients to understand their unique needs and provide tailored solutions that drive business success.</p>

<hr>

<p><em>For bulk pricing, technical specifications, or custom orders, please contact our sales team. We're here to help your business thrive.</em></p>
"""


def render_short_description(item: CatalogItem, profile: BusinessProfile) -> str:
    category = _text(item.primary_category or "", "product").lower()
    bullets = [
        f"Premium {category} from trusted {profile.business_type.value}",
        "Guaranteed quality and consistent performance",
        "Competitive pricing with bulk discounts available",
        "Fast shipping and reliable inventory",
        "Full technical support and documentation",
        "Industry-compliant and safety-tested",
    ]
    return "<ul>" + "".join(f"<li>{b}</li>" for b in bullets) + "</ul>"


def render(item: CatalogItem, profile: BusinessProfile) -> GenerationResult:
    """
    Render template copy for one catalog item
    Args:
        item: Catalog item snapshot
        profile: Business profile
    Returns:
        GenerationResult with the word count taken from the rendered long description
    """
    long_html = render_long_description(item, profile)
    short_html = render_short_description(item, profile)
    logger.debug(f"Rendered template copy for {item.id} ({item.name or 'unnamed'})")

    return GenerationResult(long_description=long_html, short_description=short_html)

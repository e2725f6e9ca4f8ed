"""
Description Generator
Remote text generation with template fallback. Every call ends in a usable result.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from ..config import SYSTEM_PROMPT, TONE_GUIDANCE, TARGET_WORDS_MIN, TARGET_WORDS_MAX
from ..models import BusinessProfile, CatalogItem, GenerationResult
from ..utils.sanitizers import sanitize_html, strip_code_fence
from . import template_engine
from .completion import OpenAICompletionClient
from .errors import CompletionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Success:
    result: GenerationResult


@dataclass(frozen=True)
class Fallback:
    result: GenerationResult
    reason: str


GenerationOutcome = Union[Success, Fallback]


def build_system_instruction(profile: BusinessProfile) -> str:
    return SYSTEM_PROMPT.format(
        business_type=profile.business_type.value,
        tone_guidance=TONE_GUIDANCE[profile.writing_tone.value],
        words_min=TARGET_WORDS_MIN,
        words_max=TARGET_WORDS_MAX,
    )


def build_user_instruction(item: CatalogItem, profile: BusinessProfile) -> str:
    """
    Build the user prompt from product data and business context
    Args:
        item: Catalog item
        profile: Business profile
    Returns:
        Prompt with "Product data:" and "Business context:" JSON blocks
    """
    product_data: Dict[str, Any] = {
        "name": item.name,
        "categories": [c.name for c in item.categories if c.name],
    }

    # Add optional fields if present
    if item.sku:
        product_data["sku"] = item.sku
    if item.price:
        product_data["price"] = item.price
    if item.attributes:
        product_data["attributes"] = item.attributes

    business_data = {
        "companyName": profile.company_name,
        "targetAudience": profile.target_audience,
        "description": profile.description,
        "businessType": profile.business_type.value,
        "usps": profile.usps,
        "writingTone": profile.writing_tone.value,
    }

    return (
        f"Product data:\n{json.dumps(product_data, indent=2, ensure_ascii=False)}\n\n"
        f"Business context:\n{json.dumps(business_data, indent=2, ensure_ascii=False)}"
    )


def parse_generation_payload(content: str) -> Tuple[str, str]:
    """
    Parse a model response into long and short descriptions
    Args:
        content: Raw model response, optionally wrapped in a code fence
    Returns:
        (long_description, short_description), sanitized
    Raises:
        ValueError: Invalid JSON, not an object, or a missing/non-string/blank field
    """
    body = strip_code_fence(content)
    data = json.loads(body)

    if not isinstance(data, dict):
        raise ValueError("Response JSON is not an object")

    long_html = data.get("longDescription")
    short_html = data.get("shortDescription")

    if not isinstance(long_html, str) or not isinstance(short_html, str):
        raise ValueError("Missing longDescription or shortDescription in response")

    long_html = sanitize_html(long_html)
    short_html = sanitize_html(short_html)

    if not long_html or not short_html:
        raise ValueError("Empty longDescription or shortDescription in response")

    return long_html, short_html


class DescriptionGenerator:
    """Generator adapter between the orchestrators and the text generation service"""

    def __init__(self, completion: Optional[OpenAICompletionClient] = None):
        self.completion = completion or OpenAICompletionClient()

    async def generate_outcome(
        self,
        item: CatalogItem,
        profile: BusinessProfile,
        credential: Optional[str] = None,
    ) -> GenerationOutcome:
        """Generate copy for one item, reporting whether the template was used"""
        if not credential:
            logger.info(f"No generator key set, using template copy for {item.name or item.id}")
            return Fallback(template_engine.render(item, profile), "no credential")

        try:
            content = await self.completion.complete(
                build_system_instruction(profile),
                build_user_instruction(item, profile),
                credential,
            )
            long_html, short_html = parse_generation_payload(content)
        except CompletionError as e:
            reason = f"generation failed: {e}"
        except ValueError as e:
            reason = f"invalid response: {e}"
        except Exception as e:
            logger.error(f"Unexpected generation error for {item.id}: {e}", exc_info=True)
            reason = f"unexpected error: {e}"
        else:
            logger.info(f"Generated copy for {item.name or item.id}")
            return Success(GenerationResult(long_description=long_html, short_description=short_html))

        logger.warning(f"Using fallback generation for {item.name or item.id} ({reason})")
        return Fallback(template_engine.render(item, profile), reason)

    async def generate(
        self,
        item: CatalogItem,
        profile: BusinessProfile,
        credential: Optional[str] = None,
    ) -> GenerationResult:
        outcome = await self.generate_outcome(item, profile, credential)
        return outcome.result
